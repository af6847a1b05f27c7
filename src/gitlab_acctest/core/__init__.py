"""Core infrastructure components for gitlab-acctest."""

from gitlab_acctest.core.provider import GitLabProvider, TokenAuth
from gitlab_acctest.core.state import InstanceState, ModuleState, ResourceState, TerraformState

__all__ = [
    "GitLabProvider",
    "InstanceState",
    "ModuleState",
    "ResourceState",
    "TerraformState",
    "TokenAuth",
]

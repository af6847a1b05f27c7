"""State and API checks run after each Terraform step."""

from gitlab_acctest.checks.base import CheckContext, CheckFunc, compose_checks
from gitlab_acctest.checks.errors import (
    AttributeMismatchError,
    CheckError,
    MissingAttributeError,
    ResourceNotFoundError,
    ResourceStillExistsError,
)
from gitlab_acctest.checks.group_variable import (
    check_group_variable_attributes,
    check_group_variable_destroy,
    check_group_variable_exists,
    fetch_group_variable,
    verify_group_variable,
)

__all__ = [
    "AttributeMismatchError",
    "CheckContext",
    "CheckError",
    "CheckFunc",
    "MissingAttributeError",
    "ResourceNotFoundError",
    "ResourceStillExistsError",
    "check_group_variable_attributes",
    "check_group_variable_destroy",
    "check_group_variable_exists",
    "compose_checks",
    "fetch_group_variable",
    "verify_group_variable",
]

"""GitLab object snapshots and expectations."""

from gitlab_acctest.resources.group_variable import (
    ExpectedAttributes,
    GroupVariable,
    VariableCapture,
)

__all__ = ["ExpectedAttributes", "GroupVariable", "VariableCapture"]

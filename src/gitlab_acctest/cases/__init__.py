"""Acceptance test cases."""

from gitlab_acctest.cases.group_variable import (
    GROUP_VARIABLE_ADDRESS,
    group_variable_basic_case,
)

__all__ = ["GROUP_VARIABLE_ADDRESS", "group_variable_basic_case"]

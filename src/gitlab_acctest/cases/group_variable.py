"""Lifecycle case for ``gitlab_group_variable``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitlab_acctest.checks import (
    check_group_variable_attributes,
    check_group_variable_destroy,
    check_group_variable_exists,
    compose_checks,
)
from gitlab_acctest.config.templates import (
    group_variable_config,
    group_variable_update_config,
    group_variable_update_config_with_environment_scope,
)
from gitlab_acctest.harness.precheck import is_running_in_ce, is_running_in_ee, pre_check
from gitlab_acctest.harness.types import TestCase, TestStep
from gitlab_acctest.resources.group_variable import ExpectedAttributes, VariableCapture

if TYPE_CHECKING:
    from gitlab_acctest.checks.base import CheckFunc

GROUP_VARIABLE_ADDRESS = "gitlab_group_variable.foo"


def _checks(capture: VariableCapture, expected: ExpectedAttributes) -> CheckFunc:
    return compose_checks(
        check_group_variable_exists(GROUP_VARIABLE_ADDRESS, capture),
        check_group_variable_attributes(capture, expected),
    )


def group_variable_basic_case(suffix: str) -> TestCase:
    """Create a variable, flip its options, then flip them back.

    Environment scopes other than ``*`` need a Premium licence, so the
    scoped update only runs on EE and the unscoped one only on CE.
    """
    capture = VariableCapture()
    key = f"key_{suffix}"

    return TestCase(
        name="group_variable_basic",
        pre_check=pre_check,
        check_destroy=check_group_variable_destroy,
        steps=[
            TestStep(
                description="create with default options",
                config=group_variable_config(suffix),
                check=_checks(
                    capture,
                    ExpectedAttributes(
                        key=key,
                        value=f"value-{suffix}",
                        environment_scope="*",
                    ),
                ),
            ),
            TestStep(
                description="update with environment scope",
                config=group_variable_update_config_with_environment_scope(suffix),
                skip=is_running_in_ce,
                check=_checks(
                    capture,
                    ExpectedAttributes(
                        key=key,
                        value=f"value-inverse-{suffix}",
                        protected=True,
                        environment_scope=f"foo{suffix}",
                    ),
                ),
            ),
            TestStep(
                description="update",
                config=group_variable_update_config(suffix),
                skip=is_running_in_ee,
                check=_checks(
                    capture,
                    ExpectedAttributes(
                        key=key,
                        value=f"value-inverse-{suffix}",
                        protected=True,
                        environment_scope="*",
                    ),
                ),
            ),
            TestStep(
                description="revert to default options",
                config=group_variable_config(suffix),
                check=_checks(
                    capture,
                    ExpectedAttributes(
                        key=key,
                        value=f"value-{suffix}",
                        protected=False,
                        environment_scope="*",
                    ),
                ),
            ),
        ],
    )

"""Acceptance test harness."""

from gitlab_acctest.harness.errors import (
    AcceptanceTestError,
    HarnessError,
    PreCheckError,
    StepError,
    WorkdirLockError,
)
from gitlab_acctest.harness.precheck import (
    acceptance_enabled,
    is_running_in_ce,
    is_running_in_ee,
    pre_check,
    rand_string,
)
from gitlab_acctest.harness.runner import AcceptanceRunner
from gitlab_acctest.harness.types import CaseResult, StepResult, StepStatus, TestCase, TestStep

__all__ = [
    "AcceptanceRunner",
    "AcceptanceTestError",
    "CaseResult",
    "HarnessError",
    "PreCheckError",
    "StepError",
    "StepResult",
    "StepStatus",
    "TestCase",
    "TestStep",
    "WorkdirLockError",
    "acceptance_enabled",
    "is_running_in_ce",
    "is_running_in_ee",
    "pre_check",
    "rand_string",
]

"""Harness error types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitlab_acctest.harness.types import CaseResult


class HarnessError(Exception):
    """Base exception for harness errors."""


class PreCheckError(HarnessError):
    """Raised when the environment cannot run acceptance tests."""


class WorkdirLockError(HarnessError):
    """Raised when another run holds the working directory."""


class StepError(HarnessError):
    """Raised when Terraform fails while applying a step."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"Step {index}: {message}")
        self.index = index


class AcceptanceTestError(HarnessError):
    """Raised when a test case fails.

    Carries the partial result so callers can see which steps ran.  The
    original exception is chained via ``__cause__``.
    """

    def __init__(self, *, result: CaseResult, message: str) -> None:
        self.result = result
        super().__init__(f"{result.name}: {message}")

"""Test case, step and result types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from gitlab_acctest.checks.base import CheckContext, CheckFunc
    from gitlab_acctest.config.schema import Config
    from gitlab_acctest.core.state import TerraformState

SkipFunc = Callable[["CheckContext"], bool]
PreCheckFunc = Callable[["Config"], None]
DestroyCheckFunc = Callable[["CheckContext", "TerraformState"], None]


@dataclass(frozen=True)
class TestStep:
    """One ``terraform apply`` followed by an optional check."""

    __test__ = False

    config: str
    check: CheckFunc | None = None
    skip: SkipFunc | None = None
    description: str = ""


@dataclass(frozen=True)
class TestCase:
    """An ordered list of steps sharing one working directory and state."""

    __test__ = False

    name: str
    steps: list[TestStep] = field(default_factory=list)
    pre_check: PreCheckFunc | None = None
    check_destroy: DestroyCheckFunc | None = None


class StepStatus(str, Enum):
    PASSED = "passed"
    SKIPPED = "skipped"
    FAILED = "failed"


class StepResult(BaseModel):
    index: int
    description: str = ""
    status: StepStatus
    message: str = ""


class CaseResult(BaseModel):
    name: str
    steps: list[StepResult] = Field(default_factory=list)
    destroyed: bool = False
    destroy_error: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.destroy_error) or any(
            s.status == StepStatus.FAILED for s in self.steps
        )

    def summary(self) -> dict[str, int]:
        counts = {s.value: 0 for s in StepStatus}
        for s in self.steps:
            counts[s.status.value] += 1
        return counts


ProgressEvent = Literal["start", "done"]
ProgressCallback = Callable[[int, TestStep, ProgressEvent], None]

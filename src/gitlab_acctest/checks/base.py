"""Check function plumbing."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitlab_acctest.core import GitLabProvider
    from gitlab_acctest.core.state import TerraformState


@dataclass(frozen=True)
class CheckContext:
    """Context passed to checks."""

    provider: GitLabProvider


CheckFunc = Callable[[CheckContext, "TerraformState"], None]


def compose_checks(*checks: CheckFunc) -> CheckFunc:
    """Run *checks* in order; the first one to raise fails the step."""

    def _composed(ctx: CheckContext, state: TerraformState) -> None:
        for check in checks:
            check(ctx, state)

    return _composed

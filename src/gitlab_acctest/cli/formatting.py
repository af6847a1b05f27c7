"""Step and case result rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import typer

if TYPE_CHECKING:
    from collections.abc import Callable

    from gitlab_acctest.harness.types import CaseResult, StepResult
    from gitlab_acctest.resources.group_variable import GroupVariable


class _StatusStyle(NamedTuple):
    color: str
    symbol: str


_STATUS_STYLES: dict[str, _StatusStyle] = {
    "passed": _StatusStyle("green", "+"),
    "skipped": _StatusStyle("bright_black", "~"),
    "failed": _StatusStyle("red", "x"),
}


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def format_step(step: StepResult, *, color: bool = True) -> str:
    s = styler(color)
    style = _STATUS_STYLES[step.status.value]
    label = f"step {step.index}"
    if step.description:
        label += f" ({step.description})"
    line = s(f"  {style.symbol} {label}: {step.status.value}", fg=style.color)
    if step.message:
        line += f"\n      {step.message}"
    return line


def format_case(result: CaseResult, *, color: bool = True) -> str:
    """Render every step of *result* plus the teardown outcome."""
    s = styler(color)
    lines = [s(result.name, bold=True)]
    lines.extend(format_step(step, color=color) for step in result.steps)
    if result.destroy_error:
        lines.append(s(f"  x teardown: {result.destroy_error}", fg="red"))
    elif result.destroyed:
        lines.append(s("  - teardown: destroyed", fg="green"))
    return "\n".join(lines)


def format_case_summary(result: CaseResult, *, color: bool = True) -> str:
    s = styler(color)
    counts = result.summary()
    text = (
        f"{counts['passed']} passed, {counts['skipped']} skipped, {counts['failed']} failed."
    )
    if result.failed:
        return s(f"FAIL: {text}", fg="red", bold=True)
    return s(f"PASS: {text}", fg="green", bold=True)


def format_variable(variable: GroupVariable, *, show_value: bool = False) -> str:
    """Key/value listing of a variable; the value is hidden unless asked for."""
    items = variable.model_dump()
    if not show_value:
        items["value"] = "(sensitive)"
    width = max(len(k) for k in items)
    return "\n".join(f"  {k.ljust(width)} = {v}" for k, v in items.items())

"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a clean error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from gitlab.exceptions import GitlabError

    from gitlab_acctest.checks.errors import AttributeMismatchError, CheckError
    from gitlab_acctest.config.loader import ConfigError
    from gitlab_acctest.harness.errors import (
        AcceptanceTestError,
        PreCheckError,
        WorkdirLockError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, PreCheckError):
        _err(f"Pre-check failed: {exc}", fg=fg)
    elif isinstance(exc, WorkdirLockError):
        _err(f"Workdir locked: {exc}", fg=fg)
    elif isinstance(exc, AttributeMismatchError):
        _err(f"Attribute mismatch on {exc.field}: {exc}", fg=fg)
    elif isinstance(exc, CheckError):
        _err(f"Check failed: {exc}", fg=fg)
    elif isinstance(exc, AcceptanceTestError):
        _err(f"Acceptance test failed: {exc}", fg=fg)
        s = exc.result.summary()
        parts = [
            f"{n} {status}"
            for n, status in ((s["passed"], "passed"), (s["skipped"], "skipped"))
            if n
        ]
        if parts:
            _err(f"  Before failure: {', '.join(parts)}.", fg=fg)
    elif isinstance(exc, GitlabError):
        _err(f"GitLab API error ({exc.response_code}): {exc.error_message}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1

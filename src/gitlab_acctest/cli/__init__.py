"""CLI application for gitlab-acctest."""

from __future__ import annotations

import logging
import os

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitlab_acctest import __version__

app = typer.Typer(
    name="gitlab-acctest",
    no_args_is_help=True,
    add_completion=False,
)

LOG_ENV_VAR = "GITLAB_ACCTEST_LOG"

# Each -v adds the loggers of one more layer: the harness, then the terraform
# command lines from tftest, then the HTTP requests python-gitlab sends through
# urllib3.
_VERBOSITY: tuple[dict[str, int], ...] = (
    {},
    {"gitlab_acctest": logging.INFO},
    {"gitlab_acctest": logging.DEBUG, "tftest": logging.DEBUG},
    {"gitlab_acctest": logging.DEBUG, "tftest": logging.DEBUG, "urllib3": logging.DEBUG},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gitlab-acctest {__version__}")
        raise typer.Exit


def _levels(verbose: int) -> dict[str, int]:
    name = os.environ.get(LOG_ENV_VAR, "").upper()
    if not name:
        return _VERBOSITY[min(verbose, len(_VERBOSITY) - 1)]
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        raise typer.BadParameter(
            f"unknown log level {name!r}", param_hint=f"'{LOG_ENV_VAR}'"
        )
    return {"gitlab_acctest": level}


def _configure_logging(verbose: int) -> None:
    """Send harness logs to stderr through a rich handler."""
    levels = _levels(verbose)
    if not levels:
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def route_logs_to(console: Console) -> None:
    """Print log records on *console* so they land above its live display."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, RichHandler):
            handler.console = console


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log step results (-v), terraform commands (-vv), GitLab API calls (-vvv).",
    ),
) -> None:
    """Acceptance tests for the GitLab Terraform provider's group variables."""
    _ = version
    _configure_logging(verbose)


# Register commands after app is created to avoid circular imports.
from gitlab_acctest.cli import commands as _commands  # noqa: E402, F401

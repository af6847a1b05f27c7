"""CLI command implementations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from gitlab_acctest.cli import app, route_logs_to
from gitlab_acctest.cli.errors import handle_error

if TYPE_CHECKING:
    from gitlab_acctest.core import GitLabProvider
    from gitlab_acctest.harness.runner import AcceptanceRunner
    from gitlab_acctest.harness.types import CaseResult, TestCase, TestStep

ConfigPath = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to the configuration file."),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]

Suffix = Annotated[
    str | None,
    typer.Option("--suffix", "-s", help="Name suffix (random when omitted)."),
]


def _use_color(no_color: bool) -> bool:
    """Determine whether to use color output."""
    return not (no_color or os.environ.get("NO_COLOR"))


def _run_with_progress(runner: AcceptanceRunner, case: TestCase, *, color: bool) -> CaseResult:
    """Run a case with a Rich progress bar, one tick per step."""
    from rich.console import Console
    from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

    console = Console(no_color=not color)
    route_logs_to(console)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(case.name, total=len(case.steps))

        def on_progress(index: int, step: TestStep, event: str) -> None:
            if event == "start":
                progress.update(task, description=f"step {index}: {step.description}...")
            elif event == "done":
                progress.update(task, completed=index)

        return runner.run(case, progress=on_progress)


@app.command()
def render(
    step: Annotated[
        str,
        typer.Argument(help="Configuration to render: basic, update or update-env-scope."),
    ] = "basic",
    suffix: Suffix = None,
    header: Annotated[
        bool,
        typer.Option("--header/--no-header", help="Include the provider requirements block."),
    ] = False,
) -> None:
    """Print the HCL configuration used by a test step."""
    from gitlab_acctest.config.templates import TEMPLATES, terraform_header
    from gitlab_acctest.harness.precheck import rand_string

    template = TEMPLATES.get(step)
    if template is None:
        typer.echo(
            f"Unknown step '{step}', expected one of {', '.join(TEMPLATES)}", err=True
        )
        raise typer.Exit(1)

    text = template(suffix or rand_string())
    if header:
        text = terraform_header() + text
    typer.echo(text)


@app.command()
def run(
    config: ConfigPath = Path("gitlab-acctest.yaml"),
    suffix: Suffix = None,
    workdir: Annotated[
        Path | None,
        typer.Option("--workdir", "-w", help="Terraform working directory."),
    ] = None,
    no_color: NoColor = False,
) -> None:
    """Run the group variable lifecycle test against a live GitLab instance."""
    from gitlab_acctest.cases import group_variable_basic_case
    from gitlab_acctest.cli.formatting import format_case, format_case_summary
    from gitlab_acctest.config import load, provider_from_config
    from gitlab_acctest.harness.errors import AcceptanceTestError
    from gitlab_acctest.harness.precheck import pre_check, rand_string
    from gitlab_acctest.harness.runner import AcceptanceRunner

    color = _use_color(no_color)
    try:
        cfg = load(config)
        pre_check(cfg)
        provider = provider_from_config(cfg)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    runner = AcceptanceRunner(
        provider,
        workdir or cfg.resolved_workdir,
        terraform=cfg.terraform,
        config=cfg,
    )
    case = group_variable_basic_case(suffix or rand_string())

    try:
        result = _run_with_progress(runner, case, color=color)
    except AcceptanceTestError as exc:
        typer.echo(format_case(exc.result, color=color))
        typer.echo(format_case_summary(exc.result, color=color))
        raise typer.Exit(handle_error(exc, color=color)) from exc
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(format_case(result, color=color))
    typer.echo()
    typer.echo(format_case_summary(result, color=color))


@app.command()
def verify(
    group: Annotated[str, typer.Option("--group", "-g", help="Group ID or full path.")],
    key: Annotated[str, typer.Option("--key", "-k", help="Variable key.")],
    value: Annotated[str, typer.Option("--value", help="Expected value.")],
    protected: Annotated[bool, typer.Option("--protected", help="Expect protected.")] = False,
    masked: Annotated[bool, typer.Option("--masked", help="Expect masked.")] = False,
    environment_scope: Annotated[
        str,
        typer.Option("--environment-scope", "-e", help="Expected environment scope."),
    ] = "*",
    config: ConfigPath = Path("gitlab-acctest.yaml"),
    show_value: Annotated[
        bool,
        typer.Option("--show-value", help="Print the variable value."),
    ] = False,
    no_color: NoColor = False,
) -> None:
    """Fetch a live group variable and compare it with the expected attributes."""
    from gitlab_acctest.checks import CheckContext, fetch_group_variable, verify_group_variable
    from gitlab_acctest.cli.formatting import format_variable, styler
    from gitlab_acctest.resources.group_variable import ExpectedAttributes

    color = _use_color(no_color)
    try:
        provider = _provider(config)
        variable = fetch_group_variable(CheckContext(provider=provider), group, key)
        typer.echo(format_variable(variable, show_value=show_value))
        verify_group_variable(
            variable,
            ExpectedAttributes(
                key=key,
                value=value,
                protected=protected,
                masked=masked,
                environment_scope=environment_scope,
            ),
        )
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(styler(color)("Variable matches.", fg="green"))


@app.command(name="check-destroy")
def check_destroy(
    state_file: Annotated[Path, typer.Argument(help="State captured before destroy.")],
    config: ConfigPath = Path("gitlab-acctest.yaml"),
    no_color: NoColor = False,
) -> None:
    """Confirm that the groups and variables recorded in a state file are gone."""
    from gitlab_acctest.checks import CheckContext, check_group_variable_destroy
    from gitlab_acctest.cli.formatting import styler
    from gitlab_acctest.core.state import TerraformState

    color = _use_color(no_color)
    try:
        provider = _provider(config)
        state = TerraformState.load(state_file)
        check_group_variable_destroy(CheckContext(provider=provider), state)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(styler(color)("All resources destroyed.", fg="green"))


def _provider(config: Path) -> GitLabProvider:
    from gitlab_acctest.config import load, provider_from_config

    return provider_from_config(load(config))

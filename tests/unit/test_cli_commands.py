from __future__ import annotations

import re
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from gitlab.exceptions import GitlabGetError
from typer.testing import CliRunner

from gitlab_acctest import __version__
from gitlab_acctest.cli import app
from gitlab_acctest.core import GitLabProvider
from gitlab_acctest.harness import AcceptanceTestError, CaseResult, StepResult, StepStatus
from tests.unit.helpers import group_variable_state

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def _live_variable(mock_client: MagicMock, **attrs: object) -> None:
    obj = MagicMock()
    obj.attributes = {
        "key": "key_abc",
        "value": "value-abc",
        "protected": False,
        "masked": False,
        "environment_scope": "*",
        **attrs,
    }
    mock_client.groups.get.return_value.variables.get.return_value = obj


@pytest.fixture
def patched_provider(mock_client: MagicMock):
    provider = GitLabProvider.from_client(mock_client)
    with patch("gitlab_acctest.cli.commands._provider", return_value=provider):
        yield provider


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"gitlab-acctest {__version__}" in result.output


class TestRender:
    def test_basic(self) -> None:
        result = runner.invoke(app, ["render", "basic", "--suffix", "abcde"])

        assert result.exit_code == 0
        assert 'key = "key_abcde"' in result.output
        assert 'variable_type = "file"' in result.output
        assert "required_providers" not in result.output

    def test_with_header(self) -> None:
        result = runner.invoke(app, ["render", "update-env-scope", "-s", "abcde", "--header"])

        assert result.exit_code == 0
        assert "required_providers" in result.output
        assert 'environment_scope = "fooabcde"' in result.output

    def test_random_suffix(self) -> None:
        result = runner.invoke(app, ["render", "update"])

        assert result.exit_code == 0
        assert re.search(r'key = "key_[a-z]{5}"', result.output)

    def test_unknown_step(self) -> None:
        result = runner.invoke(app, ["render", "nope"])

        assert result.exit_code == 1
        assert "Unknown step 'nope'" in result.output


class TestVerify:
    def test_match(self, patched_provider: GitLabProvider, mock_client: MagicMock) -> None:
        _live_variable(mock_client)

        result = runner.invoke(
            app,
            ["verify", "-g", "42", "-k", "key_abc", "--value", "value-abc", "--no-color"],
        )

        assert result.exit_code == 0, result.output
        assert "Variable matches." in result.output
        assert "(sensitive)" in result.output
        assert "value-abc" not in result.output

    def test_show_value(self, patched_provider: GitLabProvider, mock_client: MagicMock) -> None:
        _live_variable(mock_client)

        result = runner.invoke(
            app,
            ["verify", "-g", "42", "-k", "key_abc", "--value", "value-abc", "--show-value"],
        )

        assert result.exit_code == 0
        assert "value-abc" in _strip_ansi(result.output)

    def test_mismatch(self, patched_provider: GitLabProvider, mock_client: MagicMock) -> None:
        _live_variable(mock_client)

        result = runner.invoke(
            app,
            [
                "verify",
                "-g",
                "42",
                "-k",
                "key_abc",
                "--value",
                "value-abc",
                "--protected",
                "--no-color",
            ],
        )

        assert result.exit_code == 1
        assert "Attribute mismatch on protected" in result.output
        assert "got protected false; want true" in result.output

    def test_api_error(self, patched_provider: GitLabProvider, mock_client: MagicMock) -> None:
        mock_client.groups.get.return_value.variables.get.side_effect = GitlabGetError(
            error_message="404 Variable Not Found", response_code=404
        )

        result = runner.invoke(
            app, ["verify", "-g", "42", "-k", "key_abc", "--value", "x", "--no-color"]
        )

        assert result.exit_code == 1
        assert "GitLab API error (404)" in result.output

    def test_missing_token(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(
            app, ["verify", "-g", "42", "-k", "key_abc", "--value", "x", "--no-color"]
        )

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCheckDestroy:
    def test_all_gone(
        self, patched_provider: GitLabProvider, mock_client: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "pre-destroy.tfstate"
        path.write_text(group_variable_state().model_dump_json())
        mock_client.groups.get.side_effect = GitlabGetError(
            error_message="404 Group Not Found", response_code=404
        )

        result = runner.invoke(app, ["check-destroy", str(path), "--no-color"])

        assert result.exit_code == 0, result.output
        assert "All resources destroyed." in result.output

    def test_group_survives(
        self, patched_provider: GitLabProvider, mock_client: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "pre-destroy.tfstate"
        path.write_text(group_variable_state().model_dump_json())
        group = MagicMock()
        group.marked_for_deletion_on = None
        group.variables.get.side_effect = GitlabGetError(
            error_message="404 Variable Not Found", response_code=404
        )
        mock_client.groups.get.return_value = group

        result = runner.invoke(app, ["check-destroy", str(path), "--no-color"])

        assert result.exit_code == 1
        assert "Check failed: gitlab_group.foo still exists (id 42)" in result.output


class TestRun:
    @pytest.fixture(autouse=True)
    def _env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITLAB_TOKEN", "glpat-test")

    def test_success(self, tmp_path: Path) -> None:
        case_result = CaseResult(
            name="group_variable_basic",
            steps=[
                StepResult(index=1, description="create", status=StepStatus.PASSED),
                StepResult(index=2, description="scoped", status=StepStatus.SKIPPED),
            ],
            destroyed=True,
        )
        with patch(
            "gitlab_acctest.harness.runner.AcceptanceRunner.run", return_value=case_result
        ) as run:
            result = runner.invoke(
                app, ["run", "--suffix", "abcde", "--workdir", str(tmp_path / "wd"), "--no-color"]
            )

        assert result.exit_code == 0, result.output
        out = _strip_ansi(result.output)
        assert "step 1 (create): passed" in out
        assert "step 2 (scoped): skipped" in out
        assert "teardown: destroyed" in out
        assert "PASS: 1 passed, 1 skipped, 0 failed." in out
        case = run.call_args.args[0]
        assert case.steps[0].config.count("key_abcde") == 1

    def test_failure(self, tmp_path: Path) -> None:
        case_result = CaseResult(
            name="group_variable_basic",
            steps=[
                StepResult(index=1, status=StepStatus.PASSED),
                StepResult(
                    index=2,
                    status=StepStatus.FAILED,
                    message="got protected false; want true",
                ),
            ],
            destroyed=True,
        )
        error = AcceptanceTestError(result=case_result, message="got protected false; want true")
        with patch("gitlab_acctest.harness.runner.AcceptanceRunner.run", side_effect=error):
            result = runner.invoke(app, ["run", "--no-color"])

        assert result.exit_code == 1
        out = _strip_ansi(result.output)
        assert "step 2: failed" in out
        assert "FAIL: 1 passed, 0 skipped, 1 failed." in out
        assert "Acceptance test failed" in out
        assert "Before failure: 1 passed." in out

    def test_pre_check_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GITLAB_TOKEN")

        result = runner.invoke(app, ["run", "--no-color"])

        assert result.exit_code == 1
        assert "Pre-check failed: GITLAB_TOKEN must be set" in result.output

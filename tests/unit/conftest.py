"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from gitlab_acctest.checks.base import CheckContext
from gitlab_acctest.config import load
from gitlab_acctest.core import GitLabProvider

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from gitlab_acctest.config.schema import Config

_GITLAB_ENV_VARS = (
    "GITLAB_TOKEN",
    "GITLAB_BASE_URL",
    "GITLAB_INSECURE",
    "GITLAB_ACCTEST_LOG",
    "TF_ACC",
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def _clean_gitlab_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GITLAB_* env vars so unit tests don't leak host config."""
    for var in _GITLAB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    """Factory fixture: write YAML + optional .env, return loaded Config."""

    def _make(yaml_str: str, *, dotenv: str | None = None) -> Config:
        (tmp_path / "gitlab-acctest.yaml").write_text(yaml_str)
        if dotenv is not None:
            (tmp_path / ".env").write_text(dotenv)
        return load(tmp_path / "gitlab-acctest.yaml")

    return _make


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.version.return_value = ("16.11.2", "abc123")
    return client


@pytest.fixture
def ctx(mock_client: MagicMock) -> CheckContext:
    return CheckContext(provider=GitLabProvider.from_client(mock_client))

"""Shared fixtures for e2e tests against a live GitLab instance.

These provision real groups and variables.  They only run when ``TF_ACC`` is
set and a token is available, mirroring Terraform's acceptance test gating.
"""

from __future__ import annotations

import contextlib
import logging
import shutil
from typing import TYPE_CHECKING

import gitlab
import pytest

from gitlab_acctest.checks.base import CheckContext
from gitlab_acctest.config import ConfigError, env_config, provider_from_config
from gitlab_acctest.harness.precheck import acceptance_enabled

if TYPE_CHECKING:
    from collections.abc import Generator

    from gitlab_acctest.config.schema import Config
    from gitlab_acctest.core import GitLabProvider

logger = logging.getLogger(__name__)


def _edition(config: Config) -> bool | None:
    """Return True if EE, False if CE, None if undetermined."""
    try:
        provider = provider_from_config(config)
        return "-ee" in provider.version
    except (ConfigError, gitlab.exceptions.GitlabError) as exc:
        logger.info("Could not determine GitLab edition: %s", exc)
        return None


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-skip edition-specific tests on the wrong GitLab edition."""
    marked = [i for i in items if "enterprise" in i.keywords or "community" in i.keywords]
    if not marked or not acceptance_enabled():
        return
    is_ee = _edition(env_config())
    if is_ee is None:
        return
    for item in marked:
        if "enterprise" in item.keywords and not is_ee:
            item.add_marker(pytest.mark.skip(reason="requires GitLab EE"))
        if "community" in item.keywords and is_ee:
            item.add_marker(pytest.mark.skip(reason="requires GitLab CE"))


@pytest.fixture(scope="session")
def gitlab_config() -> Config:
    if not acceptance_enabled():
        pytest.skip("Acceptance tests skipped unless env 'TF_ACC' set")
    config = env_config()
    if not config.provider.token:
        pytest.skip("No token available: set GITLAB_TOKEN env var")
    return config


@pytest.fixture(scope="session")
def gitlab_provider(gitlab_config: Config) -> GitLabProvider:
    provider = provider_from_config(gitlab_config)
    try:
        provider.client.auth()
    except gitlab.exceptions.GitlabError as exc:
        pytest.skip(f"GitLab not reachable at {gitlab_config.provider.base_url}: {exc}")
    return provider


@pytest.fixture(scope="session")
def check_ctx(gitlab_provider: GitLabProvider) -> CheckContext:
    return CheckContext(provider=gitlab_provider)


@pytest.fixture(scope="session")
def terraform_binary(gitlab_config: Config) -> str:
    binary = shutil.which(gitlab_config.terraform.binary)
    if binary is None:
        pytest.skip(f"{gitlab_config.terraform.binary} not found on PATH")
    return binary


@pytest.fixture()
def cleanup_groups(gitlab_provider: GitLabProvider) -> Generator[list[int]]:
    created: list[int] = []
    yield created
    for group_id in reversed(created):
        with contextlib.suppress(gitlab.exceptions.GitlabError):
            gitlab_provider.client.groups.delete(group_id)

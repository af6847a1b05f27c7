"""Environment gating, edition detection and name helpers."""

from __future__ import annotations

import logging
import os
import secrets
import string
from typing import TYPE_CHECKING

from gitlab_acctest.harness.errors import PreCheckError

if TYPE_CHECKING:
    from gitlab_acctest.checks.base import CheckContext
    from gitlab_acctest.config.schema import Config

logger = logging.getLogger(__name__)

ACCEPTANCE_ENV_VAR = "TF_ACC"


def acceptance_enabled() -> bool:
    """Return True when ``TF_ACC`` opts in to provisioning real objects."""
    return bool(os.environ.get(ACCEPTANCE_ENV_VAR))


def pre_check(config: Config) -> None:
    """Fail early when the GitLab connection is not configured."""
    if not config.provider.token:
        raise PreCheckError("GITLAB_TOKEN must be set for acceptance tests")
    if not config.provider.base_url:
        raise PreCheckError("GITLAB_BASE_URL must be set for acceptance tests")


def rand_string(length: int = 5) -> str:
    """Random lowercase suffix for names that must not collide between runs."""
    return "".join(secrets.choice(string.ascii_lowercase) for _ in range(length))


def is_running_in_ee(ctx: CheckContext) -> bool:
    """True when the instance is GitLab Enterprise Edition."""
    ee = "-ee" in ctx.provider.version
    logger.debug("Edition: %s", "EE" if ee else "CE")
    return ee


def is_running_in_ce(ctx: CheckContext) -> bool:
    """True when the instance is GitLab Community Edition."""
    return not is_running_in_ee(ctx)

"""GitLab Provider - Connection configuration for a GitLab instance."""

import logging
from functools import cached_property
from typing import Self

import gitlab
from pydantic import BaseModel, ConfigDict, SecretStr

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://gitlab.com/api/v4/"

_API_ROOT = "/api/v4"


def server_url(base_url: str) -> str:
    """Strip the API root from a provider-style base URL.

    The Terraform provider takes ``https://host/api/v4/`` while python-gitlab
    wants the bare server URL.
    """
    url = base_url.rstrip("/")
    if url.endswith(_API_ROOT):
        url = url[: -len(_API_ROOT)]
    return url


class TokenAuth(BaseModel):
    """Personal access token authentication for GitLab."""

    token: SecretStr


class GitLabProvider(BaseModel):
    """Connection configuration for a GitLab instance.

    The same settings are used twice: to build the python-gitlab client that
    verifies live objects, and as the environment handed to Terraform so the
    provider under test talks to the same instance.

    Examples:
        provider = GitLabProvider(
            base_url="https://gitlab.example.com/api/v4/",
            auth=TokenAuth(token="glpat-..."),
        )

        # Testing with a mock client
        provider = GitLabProvider.from_client(MagicMock())
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str = DEFAULT_BASE_URL
    auth: TokenAuth | None = None
    insecure: bool = False

    # Injected client (for testing)
    _injected_client: gitlab.Gitlab | None = None

    @classmethod
    def from_client(cls, client: gitlab.Gitlab) -> Self:
        """Create a provider with an injected client."""
        provider = cls.model_construct()
        provider._injected_client = client
        return provider

    @cached_property
    def client(self) -> gitlab.Gitlab:
        """Get the GitLab client."""
        if self._injected_client is not None:
            return self._injected_client

        if self.auth is None:
            raise ValueError(
                "Either provide base_url+auth, or use GitLabProvider.from_client() "
                "to inject a client"
            )

        url = server_url(self.base_url)
        logger.debug("Connecting to GitLab at %s", url)
        return gitlab.Gitlab(
            url,
            private_token=self.auth.token.get_secret_value(),
            ssl_verify=not self.insecure,
        )

    @cached_property
    def version(self) -> str:
        """GitLab server version string (e.g. ``16.11.2-ee``)."""
        version, _revision = self.client.version()
        logger.debug("GitLab version: %s", version)
        return version

    def terraform_env(self) -> dict[str, str]:
        """Environment variables configuring the Terraform GitLab provider."""
        env: dict[str, str] = {"GITLAB_BASE_URL": self.base_url}
        if self.auth is not None:
            env["GITLAB_TOKEN"] = self.auth.token.get_secret_value()
        if self.insecure:
            env["GITLAB_INSECURE"] = "true"
        return env

"""Configuration models for acceptance runs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitlab_acctest.core.provider import DEFAULT_BASE_URL


class ProviderConfig(BaseSettings):
    """GitLab connection settings.

    Fields can be set via YAML (constructor kwargs) or environment variables
    with the ``GITLAB_`` prefix, the same variables the Terraform provider
    reads.  Constructor kwargs take precedence.

    ``token`` is typically provided via ``GITLAB_TOKEN`` rather than YAML to
    avoid committing secrets to version control.
    """

    model_config = SettingsConfigDict(env_prefix="GITLAB_")

    token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    insecure: bool = False


class TerraformConfig(BaseModel):
    """How to invoke Terraform and which provider build to test."""

    binary: str = "terraform"
    provider_source: str = "gitlabhq/gitlab"
    provider_version: str | None = None


class Config(BaseModel):
    """Acceptance run configuration."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    terraform: TerraformConfig = Field(default_factory=TerraformConfig)
    workdir: Path = Path(".acctest")
    config_dir: Path = Path()

    @property
    def resolved_workdir(self) -> Path:
        if self.workdir.is_absolute():
            return self.workdir
        return self.config_dir / self.workdir

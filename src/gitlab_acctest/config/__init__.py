"""Configuration loading and HCL templates."""

from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr

from gitlab_acctest.config.loader import DEFAULT_CONFIG_PATH, ConfigError, env_config, load_config
from gitlab_acctest.config.schema import Config, ProviderConfig, TerraformConfig
from gitlab_acctest.core.provider import GitLabProvider, TokenAuth

__all__ = [
    "Config",
    "ConfigError",
    "ProviderConfig",
    "TerraformConfig",
    "env_config",
    "load",
    "load_config",
    "provider_from_config",
]


def load(path: Path | str | None = None) -> Config:
    """Load a YAML configuration file.

    Falls back to environment-only settings when *path* is omitted, or is the
    default path and does not exist.
    """
    if path is None:
        return env_config()
    path = Path(path)
    if path == DEFAULT_CONFIG_PATH and not path.exists():
        return env_config()
    return load_config(path)


def provider_from_config(config: Config) -> GitLabProvider:
    """Build a ``GitLabProvider`` from a ``Config`` instance."""
    if not config.provider.token:
        raise ConfigError("provider.token is required (set GITLAB_TOKEN env var)")
    return GitLabProvider(
        base_url=config.provider.base_url,
        auth=TokenAuth(token=SecretStr(config.provider.token)),
        insecure=config.provider.insecure,
    )

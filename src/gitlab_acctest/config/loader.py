"""YAML configuration file loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor

from gitlab_acctest.config.schema import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("gitlab-acctest.yaml")


class ConfigError(Exception):
    """Raised for configuration loading / validation errors."""


# Field name → environment variable.
_PROVIDER_ENV_MAP: dict[str, str] = {
    "token": "GITLAB_TOKEN",
    "base_url": "GITLAB_BASE_URL",
    "insecure": "GITLAB_INSECURE",
}

_PROVIDER_BOOL_FIELDS: frozenset[str] = frozenset({"insecure"})


def _resolve_provider(raw_provider: dict[str, Any], config_dir: Path) -> dict[str, Any]:
    """Resolve provider fields from YAML, env vars, and ``.env`` file.

    Priority (highest wins): YAML value > env var > ``.env`` file.
    """
    env_file = config_dir / ".env"
    dotenv_vals = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}

    resolved: dict[str, Any] = {}
    for field, env_key in _PROVIDER_ENV_MAP.items():
        val = raw_provider.get(field)
        if val is None:
            val = os.environ.get(env_key)
        if val is None:
            val = dotenv_vals.get(env_key)
        if val is not None:
            if field in _PROVIDER_BOOL_FIELDS and isinstance(val, str):
                if val.lower() not in SafeConstructor.bool_values:
                    raise ConfigError(f"Invalid boolean for {env_key}: {val!r}")
                val = SafeConstructor.bool_values[val.lower()]
            resolved[field] = val

    return resolved


def _build(raw: dict[str, Any], config_dir: Path) -> Config:
    try:
        raw["provider"] = _resolve_provider(raw.get("provider") or {}, config_dir)
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    config.config_dir = config_dir
    return config


def load_config(path: Path | str) -> Config:
    """Load a YAML configuration file and return a ``Config`` object.

    Raises:
        ConfigError: On YAML parse errors or validation failures.
    """
    path = Path(path)

    try:
        raw = YAML(typ="safe").load(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    config = _build(raw, path.parent)
    logger.info("Loaded config from %s", path)
    return config


def env_config(config_dir: Path | None = None) -> Config:
    """Build a ``Config`` from environment variables and ``.env`` only."""
    config = _build({}, config_dir or Path())
    logger.debug("Using environment-only config")
    return config

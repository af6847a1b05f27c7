"""HCL configurations for the group variable acceptance steps."""

from __future__ import annotations


def terraform_header(source: str = "gitlabhq/gitlab", version: str | None = None) -> str:
    """Provider requirements block prepended to every step configuration.

    Credentials are not rendered; the provider reads ``GITLAB_TOKEN`` and
    ``GITLAB_BASE_URL`` from the environment.
    """
    version_line = f'\n      version = "{version}"' if version else ""
    return f"""terraform {{
  required_providers {{
    gitlab = {{
      source = "{source}"{version_line}
    }}
  }}
}}

provider "gitlab" {{}}
"""


def _group_block(suffix: str) -> str:
    return f"""
resource "gitlab_group" "foo" {{
name = "foo{suffix}"
path = "foo{suffix}"
}}
"""


def group_variable_config(suffix: str) -> str:
    """Group plus a file-type variable with default flags."""
    return (
        _group_block(suffix)
        + f"""
resource "gitlab_group_variable" "foo" {{
  group = "${{gitlab_group.foo.id}}"
  key = "key_{suffix}"
  value = "value-{suffix}"
  variable_type = "file"
  masked = false
}}
"""
    )


def group_variable_update_config(suffix: str) -> str:
    """Inverse value and protected flag."""
    return (
        _group_block(suffix)
        + f"""
resource "gitlab_group_variable" "foo" {{
  group = "${{gitlab_group.foo.id}}"
  key = "key_{suffix}"
  value = "value-inverse-{suffix}"
  protected = true
  masked = false
}}
"""
    )


def group_variable_update_config_with_environment_scope(suffix: str) -> str:
    """Like ``group_variable_update_config`` with a non-default environment scope."""
    return (
        _group_block(suffix)
        + f"""
resource "gitlab_group_variable" "foo" {{
  group = "${{gitlab_group.foo.id}}"
  key = "key_{suffix}"
  value = "value-inverse-{suffix}"
  protected = true
  masked = false
  environment_scope = "foo{suffix}"
}}
"""
    )


TEMPLATES = {
    "basic": group_variable_config,
    "update": group_variable_update_config,
    "update-env-scope": group_variable_update_config_with_environment_scope,
}

"""State-file builders shared by unit tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from gitlab_acctest.core import TerraformState

if TYPE_CHECKING:
    from pathlib import Path


def resource(
    resource_type: str,
    name: str,
    attributes: dict[str, Any],
    *,
    module: str | None = None,
) -> dict[str, Any]:
    """A state-file resource entry with a single instance."""
    entry: dict[str, Any] = {
        "mode": "managed",
        "type": resource_type,
        "name": name,
        "provider": 'provider["registry.terraform.io/gitlabhq/gitlab"]',
        "instances": [{"schema_version": 0, "attributes": attributes}],
    }
    if module is not None:
        entry["module"] = module
    return entry


def state_dict(*resources: dict[str, Any], serial: int = 1) -> dict[str, Any]:
    return {
        "version": 4,
        "terraform_version": "1.7.5",
        "serial": serial,
        "lineage": "3f1d8c2e-lineage",
        "outputs": {},
        "resources": list(resources),
    }


def group_variable_state(group: str = "42", key: str = "key_abc") -> TerraformState:
    return TerraformState.model_validate(
        state_dict(
            resource("gitlab_group", "foo", {"id": group, "name": "fooabc", "path": "fooabc"}),
            resource(
                "gitlab_group_variable",
                "foo",
                {"id": f"{group}:{key}", "group": group, "key": key, "value": "value-abc"},
            ),
        )
    )


def write_state(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data))

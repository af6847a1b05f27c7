"""Read-only view of Terraform's local state file."""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ROOT_MODULE = "root"


class InstanceState(BaseModel):
    """One instance of a resource (``count``/``for_each`` produce several)."""

    model_config = ConfigDict(extra="ignore")

    index_key: int | str | None = None
    schema_version: int = 0
    attributes: dict[str, Any] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.attribute("id")

    def attribute(self, name: str) -> str:
        """Return an attribute as a string, or ``""`` when unset.

        Terraform's flat attribute view renders every scalar as a string and
        treats null the same as absent.
        """
        value = self.attributes.get(name)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)


class ResourceState(BaseModel):
    """A resource block as recorded in state.

    Attributes:
        mode: ``managed`` or ``data``
        type: Resource type (e.g., ``gitlab_group_variable``)
        name: Resource name (e.g., ``foo``)
        module: Module address, ``None`` for the root module
        instances: Recorded instances
    """

    model_config = ConfigDict(extra="ignore")

    mode: str = "managed"
    type: str
    name: str
    module: str | None = None
    provider: str = ""
    instances: list[InstanceState] = Field(default_factory=list)

    @property
    def address(self) -> str:
        """Address relative to the owning module (e.g., ``gitlab_group.foo``)."""
        prefix = "data." if self.mode == "data" else ""
        return f"{prefix}{self.type}.{self.name}"

    @property
    def primary(self) -> InstanceState | None:
        """The un-indexed instance, falling back to the first one."""
        for inst in self.instances:
            if inst.index_key is None:
                return inst
        return self.instances[0] if self.instances else None


class ModuleState(BaseModel):
    """Resources belonging to a single module, keyed by address."""

    path: str = ROOT_MODULE
    resources: dict[str, ResourceState] = Field(default_factory=dict)


class TerraformState(BaseModel):
    """Terraform state (format version 4) as written by the local backend.

    Attributes:
        version: State file format version
        terraform_version: Terraform release that wrote the file
        serial: Incremented by Terraform on every write
        lineage: Unique id of this state's history
        resources: All resources across modules
        outputs: Root module outputs
    """

    model_config = ConfigDict(extra="ignore")

    version: int = 4
    terraform_version: str = ""
    serial: int = 0
    lineage: str = ""
    resources: list[ResourceState] = Field(default_factory=list)
    outputs: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "TerraformState":
        """Load state from a JSON file."""
        state = cls.model_validate_json(path.read_text(encoding="utf-8"))
        logger.debug(
            "State loaded from %s: serial=%d resources=%d",
            path,
            state.serial,
            len(state.resources),
        )
        return state

    @classmethod
    def load_or_empty(cls, path: Path) -> "TerraformState":
        """Load state, or return an empty one if Terraform never wrote it."""
        if path.exists():
            return cls.load(path)
        return cls()

    def module(self, path: str = ROOT_MODULE) -> ModuleState:
        module_key = None if path == ROOT_MODULE else path
        return ModuleState(
            path=path,
            resources={r.address: r for r in self.resources if r.module == module_key},
        )

    def root_module(self) -> ModuleState:
        return self.module(ROOT_MODULE)

    def resources_of_type(self, resource_type: str) -> list[ResourceState]:
        """Managed resources of *resource_type* in any module."""
        return [r for r in self.resources if r.mode == "managed" and r.type == resource_type]

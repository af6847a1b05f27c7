"""Group variable models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict

VariableType = Literal["env_var", "file"]


def _none_to_empty(v: Any) -> Any:
    return "" if v is None else v


class GroupVariable(BaseModel):
    """Snapshot of a GitLab group CI/CD variable as returned by the API."""

    model_config = ConfigDict(extra="ignore")

    key: str
    # Hidden variables come back with a null value.
    value: Annotated[str, BeforeValidator(_none_to_empty)] = ""
    variable_type: VariableType = "env_var"
    protected: bool = False
    masked: bool = False
    environment_scope: str = "*"

    @classmethod
    def from_api(cls, obj: Any) -> GroupVariable:
        """Build a snapshot from a python-gitlab ``GroupVariable`` object."""
        return cls.model_validate(obj.attributes)


class ExpectedAttributes(BaseModel):
    """Expected values for a group variable in one test step."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    value: str
    protected: bool = False
    masked: bool = False
    environment_scope: str


@dataclass
class VariableCapture:
    """Output slot the existence check writes the fetched variable into."""

    variable: GroupVariable | None = None

"""Check failure types."""

from __future__ import annotations

import json
from typing import Any


class CheckError(Exception):
    """Base exception for failed state or API checks."""


class ResourceNotFoundError(CheckError):
    """Raised when an address is not recorded in Terraform state."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Not Found: {address}")
        self.address = address


class MissingAttributeError(CheckError):
    """Raised when a required attribute is empty in state."""

    def __init__(self, address: str, attribute: str, message: str) -> None:
        super().__init__(message)
        self.address = address
        self.attribute = attribute


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, ensure_ascii=False)


class AttributeMismatchError(CheckError):
    """Raised when a live attribute differs from the expected value."""

    def __init__(self, field: str, got: Any, want: Any) -> None:
        super().__init__(f"got {field} {_render(got)}; want {_render(want)}")
        self.field = field
        self.got = got
        self.want = want


class ResourceStillExistsError(CheckError):
    """Raised when an object is still present after destroy."""

    def __init__(self, address: str, remote_id: str) -> None:
        super().__init__(f"{address} still exists (id {remote_id})")
        self.address = address
        self.remote_id = remote_id

"""Checks for ``gitlab_group_variable`` resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitlab.exceptions import GitlabGetError

from gitlab_acctest.checks.errors import (
    AttributeMismatchError,
    CheckError,
    MissingAttributeError,
    ResourceNotFoundError,
    ResourceStillExistsError,
)
from gitlab_acctest.resources.group_variable import GroupVariable

if TYPE_CHECKING:
    from gitlab_acctest.checks.base import CheckContext, CheckFunc
    from gitlab_acctest.core.state import ResourceState, TerraformState
    from gitlab_acctest.resources.group_variable import ExpectedAttributes, VariableCapture

logger = logging.getLogger(__name__)

GROUP_TYPE = "gitlab_group"
GROUP_VARIABLE_TYPE = "gitlab_group_variable"

# Comparison order; the first differing field is reported.
_COMPARED_FIELDS = ("key", "value", "protected", "masked", "environment_scope")


def fetch_group_variable(ctx: CheckContext, group: str, key: str) -> GroupVariable:
    """Fetch a group variable by key. API errors propagate unchanged."""
    gl_group = ctx.provider.client.groups.get(group, lazy=True)
    return GroupVariable.from_api(gl_group.variables.get(key))


def verify_group_variable(actual: GroupVariable, expected: ExpectedAttributes) -> None:
    """Raise ``AttributeMismatchError`` for the first field that differs."""
    for field in _COMPARED_FIELDS:
        got = getattr(actual, field)
        want = getattr(expected, field)
        if got != want:
            raise AttributeMismatchError(field, got, want)


def check_group_variable_exists(address: str, capture: VariableCapture) -> CheckFunc:
    """Check that *address* is in state and its variable exists in GitLab.

    The fetched variable is stored in *capture* for later attribute checks.
    """

    def _check(ctx: CheckContext, state: TerraformState) -> None:
        rs = state.root_module().resources.get(address)
        primary = rs.primary if rs is not None else None
        if primary is None:
            raise ResourceNotFoundError(address)

        group = primary.attribute("group")
        if not group:
            raise MissingAttributeError(address, "group", "No group ID is set")
        key = primary.attribute("key")
        if not key:
            raise MissingAttributeError(address, "key", "No variable key is set")

        capture.variable = fetch_group_variable(ctx, group, key)
        logger.debug("Fetched group variable %s from group %s", key, group)

    return _check


def check_group_variable_attributes(
    capture: VariableCapture, expected: ExpectedAttributes
) -> CheckFunc:
    """Check the captured variable against *expected*."""

    def _check(ctx: CheckContext, state: TerraformState) -> None:
        _ = ctx, state
        if capture.variable is None:
            raise CheckError("No group variable has been fetched")
        verify_group_variable(capture.variable, expected)

    return _check


def _is_not_found(exc: GitlabGetError) -> bool:
    return exc.response_code == 404


def _check_group_gone(ctx: CheckContext, rs: ResourceState) -> None:
    for inst in rs.instances:
        if not inst.id:
            continue
        try:
            group = ctx.provider.client.groups.get(inst.id)
        except GitlabGetError as exc:
            if _is_not_found(exc):
                continue
            raise
        # Delayed deletion keeps the group readable until the grace period ends.
        if getattr(group, "marked_for_deletion_on", None):
            logger.debug("Group %s is marked for deletion", inst.id)
            continue
        raise ResourceStillExistsError(rs.address, inst.id)


def _check_variable_gone(ctx: CheckContext, rs: ResourceState) -> None:
    for inst in rs.instances:
        group = inst.attribute("group")
        key = inst.attribute("key")
        if not group or not key:
            continue
        try:
            fetch_group_variable(ctx, group, key)
        except GitlabGetError as exc:
            if _is_not_found(exc):
                continue
            raise
        raise ResourceStillExistsError(rs.address, f"{group}:{key}")


def check_group_variable_destroy(ctx: CheckContext, state: TerraformState) -> None:
    """Confirm every group and group variable recorded in *state* is gone.

    *state* is the state captured before ``terraform destroy`` ran.
    """
    for rs in state.resources_of_type(GROUP_VARIABLE_TYPE):
        _check_variable_gone(ctx, rs)
    for rs in state.resources_of_type(GROUP_TYPE):
        _check_group_gone(ctx, rs)
    logger.debug("Destroy check passed")

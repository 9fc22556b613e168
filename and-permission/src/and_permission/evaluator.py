"""Permission evaluation over any permission source.

Two combination policies:

  * grant status is a conjunction: every name (and every group) must be granted.
  * "always denied" is a disjunction: one name with no rationale is enough.

Every call asks the oracles again; nothing is cached between calls. All loops
return on the first deciding name, so later names are never queried.

Note: "always denied" only looks at the rationale oracle. A permission that was
never requested also reports no rationale, so callers should pass names already
known to be denied.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Iterable, List, Optional, Tuple

from and_permission.errors import EmptyPermissionsError
from and_permission.oracle import PermissionOracle
from and_permission.source import as_source

logger = logging.getLogger(__name__)

PermissionGroup = Sequence[str]


def _names(permissions: Iterable[str], *, what: str = "permissions") -> Tuple[str, ...]:
    if isinstance(permissions, str):
        raise TypeError(f"{what} must be a sequence of names, not a single string")
    names = tuple(permissions)
    if not names:
        raise EmptyPermissionsError(f"{what} must not be empty")
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"permission names must be strings, got {type(name).__name__}")
    return names


def _groups(groups: Iterable[PermissionGroup]) -> List[Tuple[str, ...]]:
    out: List[Tuple[str, ...]] = []
    for i, group in enumerate(groups):
        if isinstance(group, str) or not isinstance(group, Sequence):
            raise TypeError(f"permission group {i} must be a sequence of names")
        out.append(_names(group, what=f"permission group {i}"))
    if not out:
        raise EmptyPermissionsError("permission groups must not be empty")
    return out


def has_all_permissions(
    target: Any,
    permissions: Iterable[str],
    *,
    oracle: Optional[PermissionOracle] = None,
) -> bool:
    """Return True iff every permission is currently granted."""

    names = _names(permissions)
    source = as_source(target, oracle=oracle)
    host = source.resolve_host()
    for name in names:
        if not source.oracle.has_granted(host, name):
            logger.debug("permission not granted: %s", name)
            return False
    return True


def has_permission_groups(
    target: Any,
    groups: Iterable[PermissionGroup],
    *,
    oracle: Optional[PermissionOracle] = None,
) -> bool:
    """Return True iff every group is fully granted (AND of ANDs)."""

    checked = _groups(groups)
    source = as_source(target, oracle=oracle)
    for group in checked:
        if not has_all_permissions(source, group):
            return False
    return True


def has_permission(
    target: Any,
    *permissions: str | PermissionGroup,
    oracle: Optional[PermissionOracle] = None,
) -> bool:
    """Check flat names or permission groups.

        has_permission(host, "android.permission.CAMERA")
        has_permission(host, Group.STORAGE, Group.CAMERA)

    Names and groups cannot be mixed in one call.
    """

    if not permissions:
        raise EmptyPermissionsError("permissions must not be empty")

    flat = [isinstance(p, str) for p in permissions]
    if all(flat):
        return has_all_permissions(target, permissions, oracle=oracle)  # type: ignore[arg-type]
    if any(flat):
        raise TypeError("cannot mix permission names and permission groups")
    return has_permission_groups(target, permissions, oracle=oracle)  # type: ignore[arg-type]


def has_always_denied_permission(
    target: Any,
    *permissions: str | Sequence[str],
    oracle: Optional[PermissionOracle] = None,
) -> bool:
    """Return True iff at least one permission is always denied.

    Accepts names as varargs or a single sequence of names.
    """

    raw: Iterable[Any] = permissions
    if len(permissions) == 1 and not isinstance(permissions[0], str):
        raw = permissions[0]
    names = _names(raw)

    source = as_source(target, oracle=oracle)
    for name in names:
        if not source.is_show_rationale_permission(name):
            logger.debug("permission always denied: %s", name)
            return True
    return False

"""and-permission: runtime permission checks behind one permission source.

Provides:
- `PermissionSource` over a host context, a native fragment or a support fragment
- grant checks over names and permission groups
- "always denied" detection for denied permissions
- an adb-backed host for real devices (`and_permission.runtime.android`)
"""

from __future__ import annotations

from and_permission.errors import (
    AndPermissionError,
    EmptyPermissionsError,
    HostNotAttachedError,
    PermissionQueryError,
)
from and_permission.evaluator import (
    has_all_permissions,
    has_always_denied_permission,
    has_permission,
    has_permission_groups,
)
from and_permission.file_uri import get_file_uri
from and_permission.groups import Group
from and_permission.oracle import HOST_ORACLE, HostContext, PermissionOracle
from and_permission.source import HostKind, PermissionSource, as_source

__all__ = [
    "AndPermissionError",
    "EmptyPermissionsError",
    "Group",
    "HOST_ORACLE",
    "HostContext",
    "HostKind",
    "HostNotAttachedError",
    "PermissionOracle",
    "PermissionQueryError",
    "PermissionSource",
    "as_source",
    "get_file_uri",
    "has_all_permissions",
    "has_always_denied_permission",
    "has_permission",
    "has_permission_groups",
]

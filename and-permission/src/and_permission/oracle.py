"""OS permission oracles.

The grant check and the "should show rationale" check are owned by the host
platform. This module only describes how they are reached:

  * `HostContext` is the duck-typed shape an in-process host exposes.
  * `PermissionOracle` pairs the two point-in-time checks as plain callables
    taking `(host, permission)`, so tests and alternative platforms can plug in
    their own.

Results are never cached: the OS is the source of truth and the user may
revoke a permission from system settings between two calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

OracleFn = Callable[[Any, str], bool]


@runtime_checkable
class HostContext(Protocol):
    def check_self_permission(self, permission: str) -> bool: ...

    def should_show_request_permission_rationale(self, permission: str) -> bool: ...


def host_has_granted(host: Any, permission: str) -> bool:
    return bool(host.check_self_permission(permission))


def host_shows_rationale(host: Any, permission: str) -> bool:
    return bool(host.should_show_request_permission_rationale(permission))


@dataclass(frozen=True)
class PermissionOracle:
    has_granted: OracleFn = host_has_granted
    shows_rationale: OracleFn = host_shows_rationale


HOST_ORACLE = PermissionOracle()

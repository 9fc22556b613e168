from __future__ import annotations

import logging
import shlex
from typing import Any, Dict

from and_permission.errors import PermissionQueryError
from and_permission.runtime.android.dumpsys import (
    PermissionState,
    dumpsys_output_ok,
    package_missing,
    parse_dumpsys_package_permissions,
    permission_state,
    rationale_from_state,
)

logger = logging.getLogger(__name__)


class DeviceHost:
    """Host context for an installed app, answered over adb.

    `controller` is anything with an `adb_shell(cmd, timeout_ms=..., check=...)`
    method (normally `AndroidController`). Each query re-reads
    `dumpsys package`, so revocations made in system settings are seen on the
    next call.
    """

    def __init__(
        self,
        controller: Any,
        package: str,
        *,
        user_id: int = 0,
        timeout_ms: int = 8000,
    ) -> None:
        self._controller = controller
        self._package = str(package or "").strip()
        if not self._package:
            raise ValueError("DeviceHost requires non-empty package")
        self._user_id = int(user_id)
        self._timeout_ms = int(timeout_ms)

    @property
    def package_name(self) -> str:
        return self._package

    @property
    def user_id(self) -> int:
        return self._user_id

    @property
    def api_level(self) -> int:
        return int(self._controller.get_api_level(timeout_ms=self._timeout_ms))

    def _read_permissions(self) -> Dict[str, Any]:
        cmd = f"dumpsys package {shlex.quote(self._package)}"
        res = self._controller.adb_shell(cmd, timeout_ms=self._timeout_ms, check=False)
        stdout = str(getattr(res, "stdout", "") or "")
        stderr = str(getattr(res, "stderr", "") or "")
        rc = getattr(res, "returncode", 0)

        if (isinstance(rc, int) and rc != 0) or not dumpsys_output_ok(stdout, stderr):
            raise PermissionQueryError(f"dumpsys package failed for {self._package} (rc={rc})")
        if package_missing(stdout):
            raise PermissionQueryError(f"package not found: {self._package}")

        parsed = parse_dumpsys_package_permissions(stdout, user_id=self._user_id)
        if not parsed["ok"]:
            raise PermissionQueryError(
                f"failed to parse permission sections for {self._package}"
            )
        return parsed

    def permission_state(self, permission: str) -> PermissionState:
        state = permission_state(self._read_permissions(), permission)
        logger.debug(
            "%s %s: granted=%s source=%s flags=%s",
            self._package,
            permission,
            state.granted,
            state.source,
            sorted(state.flags),
        )
        return state

    def check_self_permission(self, permission: str) -> bool:
        return self.permission_state(permission).granted

    def should_show_request_permission_rationale(self, permission: str) -> bool:
        return rationale_from_state(self.permission_state(permission))

    def __repr__(self) -> str:
        return f"DeviceHost(package={self._package!r}, user_id={self._user_id})"

"""Android controller utilities.

A thin wrapper around adb so permission state can be read from a real
device or emulator:

  * `dumpsys package <pkg>` for grant state and permission flags
  * `getprop ro.build.version.sdk` for the platform API level

Every call shells out again; nothing is cached.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


class AndroidControllerError(RuntimeError):
    """Raised when an adb operation fails."""


@dataclass(frozen=True)
class AdbResult:
    args: list[str]
    stdout: str
    stderr: str
    returncode: int

    def ok(self) -> bool:
        return self.returncode == 0


class AndroidController:
    def __init__(
        self,
        *,
        adb_path: str = "adb",
        serial: Optional[str] = None,
        timeout_s: float = 30.0,
    ) -> None:
        self._adb_path = adb_path
        self._serial = serial
        self._timeout_s = timeout_s

    @property
    def serial(self) -> Optional[str]:
        return self._serial

    def _base_cmd(self) -> list[str]:
        cmd = [self._adb_path]
        if self._serial:
            cmd += ["-s", self._serial]
        return cmd

    def adb(self, *args: str, timeout_s: float | None = None, check: bool = True) -> AdbResult:
        """Run an adb command and return stdout/stderr/returncode."""

        cmd = self._base_cmd() + list(args)
        logger.debug("adb: %s", " ".join(cmd))
        timeout = self._timeout_s if timeout_s is None else float(timeout_s)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise AndroidControllerError(
                f"adb command timed out after {timeout}s: {' '.join(cmd)}"
            ) from e
        except OSError as e:
            raise AndroidControllerError(f"failed to run adb ({self._adb_path}): {e}") from e
        result = AdbResult(
            args=cmd,
            stdout=proc.stdout,
            stderr=proc.stderr,
            returncode=proc.returncode,
        )
        if check and not result.ok():
            raise AndroidControllerError(
                f"adb command failed (rc={result.returncode}): {' '.join(cmd)}\n"
                f"stdout: {result.stdout}\n"
                f"stderr: {result.stderr}"
            )
        return result

    def adb_shell(
        self,
        command: str,
        *,
        timeout_s: float | None = None,
        timeout_ms: int | None = None,
        check: bool = True,
    ) -> AdbResult:
        if timeout_ms is not None:
            timeout_s = float(timeout_ms) / 1000.0
        return self.adb("shell", command, timeout_s=timeout_s, check=check)

    def dumpsys_package(
        self, package: str, *, timeout_ms: int | None = None, check: bool = True
    ) -> AdbResult:
        return self.adb_shell(
            f"dumpsys package {shlex.quote(package)}", timeout_ms=timeout_ms, check=check
        )

    def get_api_level(self, *, timeout_ms: int | None = None) -> int:
        res = self.adb_shell("getprop ro.build.version.sdk", timeout_ms=timeout_ms, check=False)
        raw = (res.stdout or "").strip()
        if not res.ok() or not raw:
            raise AndroidControllerError(f"failed to read api level (rc={res.returncode})")
        try:
            return int(raw)
        except ValueError as e:
            raise AndroidControllerError(f"unexpected api level: {raw[:30]!r}") from e

    def list_devices(self) -> List[str]:
        """Serials of attached devices in the `device` state."""

        res = self.adb("devices", check=False)
        serials: List[str] = []
        for line in (res.stdout or "").splitlines()[1:]:
            parts = line.split()
            if len(parts) >= 2 and parts[1] == "device":
                serials.append(parts[0])
        return serials

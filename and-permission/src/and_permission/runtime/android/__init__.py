"""Android runtime helpers.

Thin adb wrappers so a `DeviceHost` can answer grant and rationale queries
from a real device or emulator. Unit tests use fake controllers; no emulator
is required.
"""

from __future__ import annotations

from and_permission.runtime.android.controller import (
    AdbResult,
    AndroidController,
    AndroidControllerError,
)
from and_permission.runtime.android.host import DeviceHost

__all__ = [
    "AdbResult",
    "AndroidController",
    "AndroidControllerError",
    "DeviceHost",
]

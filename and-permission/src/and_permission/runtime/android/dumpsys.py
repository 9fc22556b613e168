"""Permission state from `dumpsys package <pkg>`.

Modern builds print per-user runtime permissions with their flags:

    User 0: ceDataInode=...
      runtime permissions:
        android.permission.CAMERA: granted=false, flags=[ USER_SET|USER_SENSITIVE_WHEN_GRANTED ]

Legacy builds (pre-M) only print a flat `grantedPermissions:` list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

_SECTION_RE = re.compile(
    r"^\s*(?P<section>requested permissions|install permissions|runtime permissions|"
    r"granted\s*permissions)\s*:\s*$",
    flags=re.IGNORECASE,
)
_USER_RE = re.compile(r"^\s*User\s+(?P<user_id>\d+)\s*:", flags=re.IGNORECASE)
_PERM_GRANTED_RE = re.compile(
    r"^\s*(?P<perm>[A-Za-z0-9_.]+)\s*:\s*granted=(?P<granted>true|false)\b"
    r"(?:.*?\bflags=\[(?P<flags>[^\]]*)\])?",
    flags=re.IGNORECASE,
)

# Flags that keep the platform from ever showing a rationale again.
FIXED_FLAGS: FrozenSet[str] = frozenset({"SYSTEM_FIXED", "POLICY_FIXED", "USER_FIXED"})
USER_SET = "USER_SET"


def _parse_flags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [f.strip().upper() for f in raw.split("|") if f.strip()]


def package_missing(stdout: str) -> bool:
    lowered = str(stdout or "").lower()
    return "unable to find package" in lowered or lowered.strip().startswith("error: package")


def dumpsys_output_ok(stdout: str, stderr: str = "") -> bool:
    combined = (str(stdout or "") + "\n" + str(stderr or "")).lower()
    if "permission denial" in combined or "securityexception" in combined:
        return False
    return not combined.strip().startswith("error:")


def parse_dumpsys_package_permissions(text: str, *, user_id: int = 0) -> Dict[str, Any]:
    """Parse permission state (best-effort) from `dumpsys package <pkg>` output."""

    requested: set[str] = set()
    granted_list: set[str] = set()
    install: Dict[str, bool] = {}
    runtime: Dict[str, bool] = {}
    runtime_flags: Dict[str, List[str]] = {}

    sections_seen = {
        "requested": False,
        "granted_permissions": False,
        "install": False,
        "runtime": False,
    }

    current_section: Optional[str] = None
    current_user: Optional[int] = None

    txt = str(text or "").replace("\r", "")
    for line in txt.splitlines():
        user_match = _USER_RE.match(line)
        if user_match:
            current_user = int(user_match.group("user_id"))

        section_match = _SECTION_RE.match(line)
        if section_match:
            section_norm = re.sub(r"\s+", " ", section_match.group("section").strip().lower())
            if section_norm == "requested permissions":
                current_section = "requested"
            elif section_norm == "install permissions":
                current_section = "install"
            elif section_norm == "runtime permissions":
                current_section = "runtime"
            else:
                current_section = "granted_permissions"
            sections_seen[current_section] = True
            continue

        if current_section in {"install", "runtime"}:
            m = _PERM_GRANTED_RE.match(line)
            if not m:
                continue
            perm = m.group("perm").strip()
            granted = m.group("granted").lower() == "true"
            if current_section == "install":
                install[perm] = granted
            elif current_user == int(user_id):
                # Runtime permissions are per-user.
                runtime[perm] = granted
                runtime_flags[perm] = _parse_flags(m.group("flags"))
            continue

        if current_section in {"requested", "granted_permissions"}:
            perm = str(line).strip()
            if not perm or " " in perm or perm.endswith(":"):
                continue
            if perm.lower().startswith("android.permission-group."):
                continue
            if current_section == "requested":
                requested.add(perm)
            else:
                granted_list.add(perm)

    ok = any(sections_seen.values())
    return {
        "ok": ok,
        "errors": [] if ok else ["no permission sections found"],
        "user_id": int(user_id),
        "sections_seen": dict(sections_seen),
        "requested_permissions": sorted(requested),
        "granted_permissions": sorted(granted_list),
        "install_permissions": dict(install),
        "runtime_permissions": dict(runtime),
        "runtime_flags": {k: list(v) for k, v in runtime_flags.items()},
    }


@dataclass(frozen=True)
class PermissionState:
    permission: str
    granted: bool
    source: str
    flags: FrozenSet[str] = field(default_factory=frozenset)


def permission_state(parsed: Mapping[str, Any], permission: str) -> PermissionState:
    """Effective state of one permission; unknown permissions are not granted."""

    runtime = parsed.get("runtime_permissions") or {}
    if permission in runtime:
        flags = frozenset((parsed.get("runtime_flags") or {}).get(permission) or ())
        return PermissionState(permission, bool(runtime[permission]), "runtime", flags)

    install = parsed.get("install_permissions") or {}
    if permission in install:
        return PermissionState(permission, bool(install[permission]), "install")

    sections_seen = parsed.get("sections_seen") or {}
    if sections_seen.get("granted_permissions"):
        granted = permission in set(parsed.get("granted_permissions") or ())
        return PermissionState(permission, granted, "grantedPermissions")

    if permission not in set(parsed.get("requested_permissions") or ()):
        return PermissionState(permission, False, "not_requested")
    return PermissionState(permission, False, "unknown")


def rationale_from_state(state: PermissionState) -> bool:
    """Whether the platform would show a rationale before re-requesting.

    Mirrors the framework rule: never for a granted or fixed permission,
    otherwise only once the user has answered a request (`USER_SET`).
    """

    if state.granted:
        return False
    if state.flags & FIXED_FLAGS:
        return False
    return USER_SET in state.flags

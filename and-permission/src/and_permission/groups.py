"""Dangerous permission names and the groups they are requested in."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

READ_CALENDAR = "android.permission.READ_CALENDAR"
WRITE_CALENDAR = "android.permission.WRITE_CALENDAR"

CAMERA = "android.permission.CAMERA"

READ_CONTACTS = "android.permission.READ_CONTACTS"
WRITE_CONTACTS = "android.permission.WRITE_CONTACTS"
GET_ACCOUNTS = "android.permission.GET_ACCOUNTS"

ACCESS_FINE_LOCATION = "android.permission.ACCESS_FINE_LOCATION"
ACCESS_COARSE_LOCATION = "android.permission.ACCESS_COARSE_LOCATION"

RECORD_AUDIO = "android.permission.RECORD_AUDIO"

READ_PHONE_STATE = "android.permission.READ_PHONE_STATE"
CALL_PHONE = "android.permission.CALL_PHONE"
READ_CALL_LOG = "android.permission.READ_CALL_LOG"
WRITE_CALL_LOG = "android.permission.WRITE_CALL_LOG"
ADD_VOICEMAIL = "com.android.voicemail.permission.ADD_VOICEMAIL"
USE_SIP = "android.permission.USE_SIP"
PROCESS_OUTGOING_CALLS = "android.permission.PROCESS_OUTGOING_CALLS"

BODY_SENSORS = "android.permission.BODY_SENSORS"

SEND_SMS = "android.permission.SEND_SMS"
RECEIVE_SMS = "android.permission.RECEIVE_SMS"
READ_SMS = "android.permission.READ_SMS"
RECEIVE_WAP_PUSH = "android.permission.RECEIVE_WAP_PUSH"
RECEIVE_MMS = "android.permission.RECEIVE_MMS"

READ_EXTERNAL_STORAGE = "android.permission.READ_EXTERNAL_STORAGE"
WRITE_EXTERNAL_STORAGE = "android.permission.WRITE_EXTERNAL_STORAGE"


class Group:
    CALENDAR: Tuple[str, ...] = (READ_CALENDAR, WRITE_CALENDAR)
    CAMERA: Tuple[str, ...] = (CAMERA,)
    CONTACTS: Tuple[str, ...] = (READ_CONTACTS, WRITE_CONTACTS, GET_ACCOUNTS)
    LOCATION: Tuple[str, ...] = (ACCESS_FINE_LOCATION, ACCESS_COARSE_LOCATION)
    MICROPHONE: Tuple[str, ...] = (RECORD_AUDIO,)
    PHONE: Tuple[str, ...] = (
        READ_PHONE_STATE,
        CALL_PHONE,
        READ_CALL_LOG,
        WRITE_CALL_LOG,
        ADD_VOICEMAIL,
        USE_SIP,
        PROCESS_OUTGOING_CALLS,
    )
    SENSORS: Tuple[str, ...] = (BODY_SENSORS,)
    SMS: Tuple[str, ...] = (SEND_SMS, RECEIVE_SMS, READ_SMS, RECEIVE_WAP_PUSH, RECEIVE_MMS)
    STORAGE: Tuple[str, ...] = (READ_EXTERNAL_STORAGE, WRITE_EXTERNAL_STORAGE)


GROUPS: Dict[str, Tuple[str, ...]] = {
    name.lower(): value
    for name, value in vars(Group).items()
    if not name.startswith("_") and isinstance(value, tuple)
}


def resolve_group(
    name: str, *, extra: Optional[Mapping[str, Tuple[str, ...]]] = None
) -> Tuple[str, ...]:
    """Look up a group by case-insensitive name; `extra` groups win over built-ins."""

    key = str(name or "").strip().lower()
    if extra:
        for extra_name, perms in extra.items():
            if str(extra_name).strip().lower() == key:
                return tuple(perms)
    if key not in GROUPS:
        raise KeyError(f"unknown permission group: {name}")
    return GROUPS[key]

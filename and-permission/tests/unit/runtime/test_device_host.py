from __future__ import annotations

import pytest
from fakes import LEGACY_FIXTURE, MODERN_FIXTURE, FakeController, FakeFragment, read_fixture

from and_permission.errors import PermissionQueryError
from and_permission.evaluator import (
    has_always_denied_permission,
    has_permission,
    has_permission_groups,
)
from and_permission.file_uri import get_file_uri
from and_permission.groups import Group
from and_permission.oracle import HostContext
from and_permission.runtime.android.host import DeviceHost
from and_permission.source import PermissionSource


def _host(*outputs: str, **kwargs) -> tuple[DeviceHost, FakeController]:
    controller = FakeController(dumpsys_outputs=list(outputs), **kwargs)
    return DeviceHost(controller, "com.example.app"), controller


def test_device_host_is_a_host_context() -> None:
    host, _ = _host(read_fixture(MODERN_FIXTURE))
    assert isinstance(host, HostContext)


def test_grant_checks_against_modern_device() -> None:
    host, controller = _host(read_fixture(MODERN_FIXTURE))
    assert has_permission(host, "android.permission.CAMERA") is True
    assert has_permission(host, Group.CAMERA, Group.STORAGE) is False
    assert has_permission_groups(host, [Group.CAMERA, ["android.permission.INTERNET"]]) is True
    assert all(cmd == "dumpsys package com.example.app" for cmd in controller.commands)


def test_always_denied_against_modern_device() -> None:
    host, _ = _host(read_fixture(MODERN_FIXTURE))
    assert has_always_denied_permission(host, "android.permission.RECORD_AUDIO") is False
    assert (
        has_always_denied_permission(
            host,
            ["android.permission.RECORD_AUDIO", "android.permission.ACCESS_FINE_LOCATION"],
        )
        is True
    )


def test_each_query_reads_fresh_state() -> None:
    before = read_fixture(MODERN_FIXTURE)
    after = before.replace(
        "android.permission.CAMERA: granted=true, flags=[ USER_SET|",
        "android.permission.CAMERA: granted=false, flags=[ USER_SET|",
    )
    host, controller = _host(before, after)
    source = PermissionSource.from_fragment(FakeFragment(activity=host))

    assert has_permission(source, "android.permission.CAMERA") is True
    assert has_permission(source, "android.permission.CAMERA") is False
    assert controller.dumpsys_calls == 2


def test_legacy_device_has_no_rationale() -> None:
    host, _ = _host(read_fixture(LEGACY_FIXTURE))
    assert host.check_self_permission("android.permission.CAMERA") is True
    assert host.should_show_request_permission_rationale("android.permission.READ_CONTACTS") is False


def test_user_id_selects_runtime_permissions() -> None:
    controller = FakeController(dumpsys_outputs=[read_fixture(MODERN_FIXTURE)])
    host = DeviceHost(controller, "com.example.app", user_id=10)
    assert host.check_self_permission("android.permission.CAMERA") is False
    assert host.check_self_permission("android.permission.RECORD_AUDIO") is True


@pytest.mark.parametrize(
    "stdout,returncode",
    [
        ("Unable to find package: com.example.app\n", 0),
        ("java.lang.SecurityException: Permission Denial\n", 0),
        ("", 1),
        ("Packages:\n  nothing\n", 0),
    ],
)
def test_unreadable_state_raises(stdout: str, returncode: int) -> None:
    host, _ = _host(stdout, dumpsys_returncode=returncode)
    with pytest.raises(PermissionQueryError):
        has_permission(host, "android.permission.CAMERA")


def test_package_is_required() -> None:
    with pytest.raises(ValueError):
        DeviceHost(FakeController(dumpsys_outputs=[]), "  ")


def test_file_uri_uses_device_api_level() -> None:
    host, _ = _host(read_fixture(MODERN_FIXTURE), api_level=22)
    assert get_file_uri(host, "/sdcard/a.apk") == "file:///sdcard/a.apk"

    host, _ = _host(read_fixture(MODERN_FIXTURE), api_level=34)
    assert get_file_uri(host, "/sdcard/a.apk") == (
        "content://com.example.app.file.path.share/root/sdcard/a.apk"
    )


def test_package_name_is_shell_quoted() -> None:
    controller = FakeController(dumpsys_outputs=[read_fixture(MODERN_FIXTURE)])
    host = DeviceHost(controller, "com.example.app; rm -rf /sdcard/x")
    host.check_self_permission("android.permission.CAMERA")
    assert controller.commands == ["dumpsys package 'com.example.app; rm -rf /sdcard/x'"]

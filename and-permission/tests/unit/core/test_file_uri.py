from __future__ import annotations

import pytest
from fakes import FakeFragment, FakeHost

from and_permission.file_uri import file_provider_authority, get_file_uri
from and_permission.source import PermissionSource


def test_content_uri_on_n_and_later() -> None:
    host = FakeHost(package_name="com.example.app", api_level=24)
    uri = get_file_uri(host, "/sdcard/Download/update.apk")
    assert uri == "content://com.example.app.file.path.share/root/sdcard/Download/update.apk"


def test_file_uri_before_n() -> None:
    host = FakeHost(api_level=23)
    assert get_file_uri(host, "/sdcard/Download/update.apk") == (
        "file:///sdcard/Download/update.apk"
    )


def test_explicit_api_level_wins_over_host() -> None:
    host = FakeHost(api_level=33)
    assert get_file_uri(host, "/sdcard/a.apk", api_level=21) == "file:///sdcard/a.apk"


def test_longest_root_is_used_and_path_is_encoded() -> None:
    host = FakeHost(package_name="com.example.app", api_level=30)
    roots = [("root", "/"), ("external", "/sdcard"), ("downloads", "/sdcard/Download")]
    uri = get_file_uri(host, "/sdcard/Download/my file.apk", roots=roots)
    assert uri == "content://com.example.app.file.path.share/downloads/my%20file.apk"


def test_path_outside_every_root_is_rejected() -> None:
    host = FakeHost(api_level=30)
    with pytest.raises(ValueError):
        get_file_uri(host, "/data/local/tmp/a.apk", roots=[("external", "/sdcard")])


def test_same_file_and_platform_give_same_uri_from_any_source() -> None:
    host = FakeHost(api_level=29)
    via_context = get_file_uri(PermissionSource.from_context(host), "/sdcard/x/../a.apk")
    via_fragment = get_file_uri(
        PermissionSource.from_fragment(FakeFragment(activity=host)), "/sdcard/a.apk"
    )
    assert via_context == via_fragment


def test_authority_suffix() -> None:
    assert file_provider_authority("org.demo") == "org.demo.file.path.share"

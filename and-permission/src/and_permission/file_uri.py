"""Shareable file URIs.

From API 24 (Android N) a `file://` URI handed to another app fails with
`FileUriExposedException`, so files are shared through a file provider:

    content://<package>.file.path.share/<root name>/<path relative to root>

Older platforms get a plain `file://` URI.
"""

from __future__ import annotations

import posixpath
from typing import Any, Optional, Sequence, Tuple
from urllib.parse import quote

from and_permission.source import as_source

FILE_PROVIDER_AUTHORITY_SUFFIX = ".file.path.share"
FILE_PROVIDER_MIN_API_LEVEL = 24

DEFAULT_ROOTS: Tuple[Tuple[str, str], ...] = (("root", "/"),)


def file_provider_authority(package_name: str) -> str:
    return f"{package_name}{FILE_PROVIDER_AUTHORITY_SUFFIX}"


def _match_root(path: str, roots: Sequence[Tuple[str, str]]) -> Tuple[str, str]:
    best: Optional[Tuple[str, str]] = None
    for name, root in roots:
        root_norm = posixpath.normpath(root)
        if path != root_norm and not path.startswith(root_norm.rstrip("/") + "/"):
            continue
        if best is None or len(root_norm) > len(best[1]):
            best = (name, root_norm)
    if best is None:
        raise ValueError(f"failed to find a configured root that contains {path}")

    name, root_norm = best
    rel = path[len(root_norm) :].lstrip("/") if root_norm != "/" else path.lstrip("/")
    return name, rel


def get_file_uri(
    target: Any,
    path: str,
    *,
    api_level: Optional[int] = None,
    roots: Sequence[Tuple[str, str]] = DEFAULT_ROOTS,
) -> str:
    """Return a URI other apps can open for `path` (a device-side path)."""

    host = as_source(target).resolve_host()
    level = int(api_level if api_level is not None else host.api_level)
    abs_path = posixpath.normpath(posixpath.join("/", str(path)))

    if level < FILE_PROVIDER_MIN_API_LEVEL:
        return "file://" + quote(abs_path, safe="/")

    name, rel = _match_root(abs_path, roots)
    authority = file_provider_authority(str(host.package_name))
    return f"content://{authority}/{quote(name, safe='')}/{quote(rel, safe='/')}"

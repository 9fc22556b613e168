from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from and_permission.config import load_check_config
from and_permission.errors import AndPermissionError
from and_permission.evaluator import has_always_denied_permission, has_permission_groups
from and_permission.groups import resolve_group
from and_permission.runtime.android.controller import AndroidController, AndroidControllerError
from and_permission.runtime.android.host import DeviceHost
from and_permission.source import PermissionSource

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check runtime permission state of an installed app over adb."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/JSON config (adb_path, serial, package, user_id, groups).",
    )
    parser.add_argument("--package", type=str, default=None, help="Application package name.")
    parser.add_argument("--serial", type=str, default=None, help="adb device serial.")
    parser.add_argument("--adb_path", type=str, default=None, help="Path to the adb binary.")
    parser.add_argument("--user_id", type=int, default=None, help="Android user id (default 0).")
    parser.add_argument(
        "-p",
        "--permission",
        action="append",
        default=[],
        help="Permission name (repeatable). Each name is its own group.",
    )
    parser.add_argument(
        "-g",
        "--group",
        action="append",
        default=[],
        help="Permission group name, built-in (e.g. storage) or from --config (repeatable).",
    )
    parser.add_argument(
        "--always_denied",
        action="store_true",
        help="Report whether any given permission is always denied instead of granted.",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        cfg = load_check_config(args.config)
    except (OSError, ValueError, AndPermissionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    package = args.package or cfg.package
    if not package:
        parser.error("--package is required (or set 'package' in --config)")

    groups: List[tuple[str, ...]] = [(p,) for p in args.permission]
    for name in args.group:
        try:
            groups.append(resolve_group(name, extra=cfg.groups))
        except KeyError as e:
            print(f"ERROR: {e.args[0]}", file=sys.stderr)
            return 2
    if not groups:
        parser.error("at least one --permission or --group is required")

    controller = AndroidController(
        adb_path=args.adb_path or cfg.adb_path,
        serial=args.serial or cfg.serial,
    )
    host = DeviceHost(
        controller,
        package,
        user_id=args.user_id if args.user_id is not None else cfg.user_id,
        timeout_ms=cfg.timeout_ms,
    )
    source = PermissionSource.from_context(host)

    try:
        if args.always_denied:
            names = [p for group in groups for p in group]
            result = has_always_denied_permission(source, names)
            query = "always_denied"
        else:
            result = has_permission_groups(source, groups)
            query = "granted"
    except (AndPermissionError, AndroidControllerError) as e:
        logger.error("permission query failed: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.json:
        payload = {
            "package": package,
            "query": query,
            "permissions": [list(g) for g in groups],
            "result": result,
        }
        print(json.dumps(payload, ensure_ascii=False, sort_keys=True))
    else:
        print(f"{query}: {'yes' if result else 'no'}")
    return 0 if result else 1


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from and_permission.errors import ConfigValidationError

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "check_config.schema.json"

ENV_ADB_PATH = "ANDPERM_ADB_PATH"
ENV_SERIAL = "ANDPERM_SERIAL"

_LOADERS = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON config file; an empty file is an empty config."""

    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ValueError(f"unsupported config file extension: {path}")

    data = loader(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path}: top-level config must be a mapping")
    return data


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def config_errors(data: Mapping[str, Any], *, where: str = "config") -> List[str]:
    """Schema violations of a raw config mapping, ordered by location."""

    errors = sorted(_validator().iter_errors(data), key=lambda e: e.json_path)
    return [f"{where}{e.json_path[1:]}: {e.message}" for e in errors]


@dataclass(frozen=True)
class CheckConfig:
    adb_path: str = "adb"
    serial: Optional[str] = None
    package: Optional[str] = None
    user_id: int = 0
    timeout_ms: int = 8000
    groups: Dict[str, Tuple[str, ...]] = field(default_factory=dict)


def config_from_mapping(
    data: Mapping[str, Any],
    *,
    where: str = "config",
    environ: Optional[Mapping[str, str]] = None,
) -> CheckConfig:
    """Validate a raw mapping and apply environment overrides.

    Environment variables only fill values the mapping leaves unset.
    """

    errors = config_errors(data, where=where)
    if errors:
        raise ConfigValidationError("\n".join(errors))
    env = os.environ if environ is None else environ

    adb_path = data.get("adb_path") or env.get(ENV_ADB_PATH) or "adb"
    serial = data.get("serial") or env.get(ENV_SERIAL) or None
    groups = {
        str(name): tuple(str(p) for p in perms)
        for name, perms in (data.get("groups") or {}).items()
    }
    return CheckConfig(
        adb_path=str(adb_path),
        serial=serial,
        package=data.get("package"),
        user_id=int(data.get("user_id", 0)),
        timeout_ms=int(data.get("timeout_ms", 8000)),
        groups=groups,
    )


def load_check_config(
    path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None
) -> CheckConfig:
    if path is None:
        return config_from_mapping({}, environ=environ)
    return config_from_mapping(read_config_file(path), where=str(path), environ=environ)

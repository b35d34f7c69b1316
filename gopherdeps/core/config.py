"""Project config (.gopherdeps/config.json): build tags, target platform, pins."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gopherdeps.core._internal.text_utils import get_project_root
from gopherdeps.core.fallbacks import log_best_effort_failure
from gopherdeps.file_discovery import safe_write_text
from gopherdeps.golang.tags import (
    DEFAULT_GO_VERSION,
    DEFAULT_GOARCH,
    DEFAULT_GOOS,
    release_tags,
    split_tag_list,
)

CONFIG_DIRNAME = ".gopherdeps"
CONFIG_FILENAME = "config.json"
logger = logging.getLogger(__name__)
MAX_SCAN_WORKERS = 64


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "build_tags": ConfigKey(list, [], "Extra build tags treated as set (like go build -tags)"),
    "goos": ConfigKey(str, DEFAULT_GOOS, "Target operating system tag"),
    "goarch": ConfigKey(str, DEFAULT_GOARCH, "Target architecture tag"),
    "go_version": ConfigKey(
        str, DEFAULT_GO_VERSION, "Go release whose go1.N tags are satisfied"
    ),
    "cgo_enabled": ConfigKey(bool, True, "Whether the cgo tag is satisfied"),
    "include_tests": ConfigKey(bool, False, "Scan _test.go files as well"),
    "exclude": ConfigKey(list, [], "Path patterns to exclude from scanning"),
    "module_path": ConfigKey(
        str, "", "Module import path of the project (empty = read go.mod)"
    ),
    "dependencies": ConfigKey(
        dict, {}, "Pinned dependencies {root: {url, commit, tag, branch}}"
    ),
    "scan_workers": ConfigKey(int, 8, "Worker threads used to scan files (1 = serial)"),
}


def config_path(root: Path | None = None) -> Path:
    return (root or get_project_root()) / CONFIG_DIRNAME / CONFIG_FILENAME


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def _value_matches_schema(key: str, value: object) -> bool:
    expected = CONFIG_SCHEMA[key].type
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing or mistyped keys with defaults.

    Unknown keys are kept as-is so newer config files survive a round trip.
    """
    p = path or config_path()
    config: dict[str, Any] = {}
    if p.exists():
        try:
            payload = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Config file %s unreadable (%s). Using defaults.", p, exc)
            payload = {}
        if isinstance(payload, dict):
            config = payload
        else:
            logger.warning("Config file %s root is not a JSON object. Using defaults.", p)

    changed = False
    for key, schema in CONFIG_SCHEMA.items():
        if key not in config or not _value_matches_schema(key, config[key]):
            config[key] = copy.deepcopy(schema.default)
            changed = True

    if changed and p.exists():
        try:
            save_config(config, p)
        except OSError as exc:
            log_best_effort_failure(logger, f"persist normalized config to {p}", exc)

    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or config_path()
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def add_exclude_pattern(config: dict, pattern: str) -> None:
    """Append a pattern to the exclude list (deduplicates)."""
    excludes = config.setdefault("exclude", [])
    if pattern not in excludes:
        excludes.append(pattern)


def _set_int_config_value(config: dict, key: str, raw: str) -> None:
    value = int(raw)
    if key == "scan_workers" and not 1 <= value <= MAX_SCAN_WORKERS:
        raise ValueError(f"Expected integer 1-{MAX_SCAN_WORKERS} for {key}, got: {raw}")
    config[key] = value


def _set_bool_config_value(config: dict, key: str, raw: str) -> None:
    normalized = raw.lower()
    if normalized in ("true", "1", "yes", "on"):
        config[key] = True
        return
    if normalized in ("false", "0", "no", "off"):
        config[key] = False
        return
    raise ValueError(f"Expected true/false for {key}, got: {raw}")


def _set_str_config_value(config: dict, key: str, raw: str) -> None:
    value = raw.strip()
    if key == "go_version":
        release_tags(value)  # raises ValueError for junk
    elif key in ("goos", "goarch") and not value:
        raise ValueError(f"{key} cannot be empty")
    config[key] = value


def _set_list_config_value(config: dict, key: str, raw: str) -> None:
    items = split_tag_list(raw) if key == "build_tags" else [raw]
    current = config.setdefault(key, [])
    for item in items:
        if item not in current:
            current.append(item)


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw CLI string.

    Lists append (``build_tags`` accepts ``a,b c``); dicts must be edited in
    the JSON file directly.
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is int:
        _set_int_config_value(config, key, raw)
        return
    if schema.type is bool:
        _set_bool_config_value(config, key, raw)
        return
    if schema.type is str:
        _set_str_config_value(config, key, raw)
        return
    if schema.type is list:
        _set_list_config_value(config, key, raw)
        return
    raise ValueError(f"Cannot set dict key '{key}' via CLI; edit {CONFIG_DIRNAME}/{CONFIG_FILENAME}")


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


__all__ = [
    "CONFIG_SCHEMA",
    "ConfigKey",
    "add_exclude_pattern",
    "config_path",
    "default_config",
    "load_config",
    "save_config",
    "set_config_value",
    "unset_config_value",
]

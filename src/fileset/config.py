"""
TOML-based config file loading for fileset.

Searches for `.fileset.toml`, `fileset.toml`, or `pyproject.toml [tool.fileset]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

from fileset.settings import FileSetSettings


@dataclass
class FileSetConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    includes: list[str] | None = None
    excludes: list[str] | None = None
    case_sensitive: bool | None = None
    base_path: Path | None = None
    respect_gitignore: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".fileset.toml", "fileset.toml", "pyproject.toml"]


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the nearest config file at or above `start_dir`, or `None`. Within a
    directory `.fileset.toml` wins over `fileset.toml`, which wins over a
    `pyproject.toml` that has a `[tool.fileset]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in _CONFIG_FILENAMES:
            if _is_config_file(directory / filename):
                return directory / filename
    return None


def _is_config_file(path: Path) -> bool:
    if not path.is_file():
        return False
    if path.name != "pyproject.toml":
        return True
    # A pyproject.toml only counts when it configures fileset.
    try:
        data = tomllib.loads(path.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return "fileset" in data.get("tool", {})


def load_config(config_path: Path) -> FileSetConfig:
    """
    Load a `FileSetConfig` from a TOML file. Supports both standalone
    `fileset.toml` / `.fileset.toml` and `pyproject.toml` (extracts
    `[tool.fileset]`). A relative `base-path` is taken relative to the
    directory holding the config file.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("fileset", {})

    config = _parse_config_data(data)
    if config.base_path is not None and not config.base_path.is_absolute():
        config.base_path = config_path.resolve().parent / config.base_path
    return config


def _string_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in cast(list[Any], value)):
        return cast(list[str], value)
    raise ValueError(f"Config key `{key}` must be a string or a list of strings")


def _flag(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Config key `{key}` must be true or false")
    return value


def _directory(key: str, value: Any) -> Path:
    if not isinstance(value, str):
        raise ValueError(f"Config key `{key}` must be a path string")
    return Path(value)


# Field name -> converter that validates a raw TOML value for it
_CONVERTERS: dict[str, Callable[[str, Any], Any]] = {
    "includes": _string_list,
    "excludes": _string_list,
    "case_sensitive": _flag,
    "base_path": _directory,
    "respect_gitignore": _flag,
}


def _parse_config_data(data: dict[str, Any]) -> FileSetConfig:
    """
    Build a FileSetConfig from TOML data. Keys may sit at the top level or in
    sub-tables such as `[fileset]`. Unknown keys are ignored; known keys with
    the wrong type raise `ValueError`.
    """
    config = FileSetConfig()
    pending = list(data.items())
    while pending:
        key, value = pending.pop(0)
        if isinstance(value, dict):
            pending.extend(cast(dict[str, Any], value).items())
            continue
        name = key.replace("-", "_")
        converter = _CONVERTERS.get(name)
        if converter is not None:
            setattr(config, name, converter(key, value))
    return config


def merge_config_with_settings(
    settings: FileSetSettings,
    config: FileSetConfig | None,
    explicit_flags: set[str],
) -> FileSetSettings:
    """
    Merge config file values into settings built from CLI options.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return settings

    for cfg_field in fields(FileSetConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        setattr(settings, cfg_field.name, cfg_value)

    return settings

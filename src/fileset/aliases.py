"""
Entry points for build scripts.

These validate their arguments, default the base path to the current working
directory, and delegate to `fileset.resolver`. Globbing follows these rules:

- `*` matches anything within one path segment (a directory or file name).
- `?` matches exactly one character within a segment.
- `**` matches any number of directory levels, including none.

Examples::

    get_file_set_by_includes(["src/**/*.py"], excludes=["src/**/test_*.py"])
    get_file_set_by_patterns(["src/**/*.py", "!src/**/test_*.py"])
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from pathlib import Path

from fileset.resolver import find, find_include, find_patterns, find_settings
from fileset.settings import FileSetSettings


def _base_or_cwd(base_path: str | Path | None) -> Path:
    return Path(base_path) if base_path is not None else Path.cwd()


def get_file_set(settings: FileSetSettings | None) -> list[Path]:
    """
    Resolve a `FileSetSettings` bundle. A settings object without a base path
    uses the current working directory; the caller's object is not modified.
    """
    if settings is None:
        raise ValueError("settings must not be None")
    if settings.base_path is None:
        settings = dataclasses.replace(settings, base_path=Path.cwd())
    return find_settings(settings)


def get_file_set_by_includes(
    includes: Iterable[str | None] | None,
    excludes: Iterable[str | None] | None = None,
    case_sensitive: bool = False,
    base_path: str | Path | None = None,
    respect_gitignore: bool = False,
) -> list[Path]:
    """Resolve include patterns, minus optional exclude patterns."""
    if includes is None:
        raise ValueError("includes must not be None")
    return find(_base_or_cwd(base_path), includes, excludes, case_sensitive, respect_gitignore)


def get_file_set_by_include(
    include: str | None,
    excludes: Iterable[str | None] | None = None,
    case_sensitive: bool = False,
    base_path: str | Path | None = None,
    respect_gitignore: bool = False,
) -> list[Path]:
    """Resolve a single include pattern, minus optional exclude patterns."""
    if include is None or not include.strip():
        raise ValueError("include must be a non-blank pattern")
    return find_include(
        _base_or_cwd(base_path), include, excludes, case_sensitive, respect_gitignore
    )


def get_file_set_by_patterns(
    patterns: Iterable[str | None] | None,
    case_sensitive: bool = False,
    base_path: str | Path | None = None,
    respect_gitignore: bool = False,
) -> list[Path]:
    """Resolve combined patterns; entries starting with `!` are excludes."""
    if patterns is None:
        raise ValueError("patterns must not be None")
    return find_patterns(_base_or_cwd(base_path), patterns, case_sensitive, respect_gitignore)

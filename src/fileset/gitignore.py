"""Gitignore handling for file sets, using pathspec."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

log = logging.getLogger(__name__)


def _read_ignore_file(path: Path) -> pathspec.PathSpec | None:
    """
    Read an ignore file and return a compiled `PathSpec`, or `None` if the
    file is missing, unreadable, not UTF-8, or has no patterns.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        if path.exists():
            log.debug("Ignoring unreadable ignore file %s: %s", path, e)
        return None
    lines = [line for line in text.splitlines() if line.strip()]
    lines = [line for line in lines if not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """Read `.gitignore` in the given directory, if there is one."""
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    return _read_ignore_file(gitignore)


class GitignoreFilter:
    """
    Drops relative paths ignored by any `.gitignore` from the base directory
    down to the path's own directory. Each spec is matched against the path
    relative to the directory holding that `.gitignore`.

    Ignore files are read at most once per filter instance.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir: Path = base_dir
        self._cache: dict[Path, pathspec.PathSpec | None] = {}

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        if directory not in self._cache:
            self._cache[directory] = load_gitignore(directory)
        return self._cache[directory]

    def is_ignored(self, rel_path: str) -> bool:
        parts: Sequence[str] = rel_path.split("/")
        directory = self._base_dir
        for depth in range(len(parts)):
            if depth > 0:
                directory = directory / parts[depth - 1]
            spec = self._get_gitignore(directory)
            if spec is not None and spec.match_file("/".join(parts[depth:])):
                return True
        return False

    def filter(self, rel_paths: Iterable[str]) -> set[str]:
        return {p for p in rel_paths if not self.is_ignored(p)}

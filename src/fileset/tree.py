"""
Directory tree data sources for the matcher.

The matcher only needs to list a directory's children, tell files from
directories, and read a node's name and full path. `FsNode` provides this for
the real filesystem; `MemoryDirectory` and `MemoryFile` provide it for an
in-memory tree (handy for deterministic tests and dry runs).
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol


class TreeNode(Protocol):
    """A file or directory in a tree being matched. Implementations are read-only."""

    @property
    def name(self) -> str: ...

    @property
    def full_path(self) -> str: ...

    def is_dir(self) -> bool: ...

    def children(self) -> Iterable[TreeNode]:
        """
        Immediate children of a directory. Files have none. May raise `OSError`
        when a directory cannot be listed.
        """
        ...


class FsNode:
    """A filesystem-backed tree node. Symlinked directories are not descended into."""

    def __init__(self, path: str | Path, is_dir: bool | None = None) -> None:
        self._path: Path = Path(path)
        self._is_dir: bool | None = is_dir

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def full_path(self) -> str:
        return str(self._path)

    def is_dir(self) -> bool:
        if self._is_dir is None:
            self._is_dir = self._path.is_dir()
        return self._is_dir

    def children(self) -> Iterator[FsNode]:
        if not self.is_dir():
            return
        with os.scandir(self._path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    yield FsNode(entry.path, is_dir=True)
                elif entry.is_file():
                    yield FsNode(entry.path, is_dir=False)

    def __repr__(self) -> str:
        return f"FsNode({self.full_path!r})"


class MemoryFile:
    """A file leaf in an in-memory tree."""

    def __init__(self, name: str, full_path: str) -> None:
        self._name: str = name
        self._full_path: str = full_path

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_path(self) -> str:
        return self._full_path

    def is_dir(self) -> bool:
        return False

    def children(self) -> Iterable[TreeNode]:
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoryFile):
            return NotImplemented
        return self._full_path == other._full_path and self._name == other._name

    def __hash__(self) -> int:
        return hash((self._full_path, self._name))

    def __repr__(self) -> str:
        return f"MemoryFile({self._full_path!r})"


class MemoryDirectory:
    """
    A directory in an in-memory tree. Build one with `root()` and chained
    `add()` calls::

        tree = MemoryDirectory.root("project", "/work/project").add("src/a.py").add("README.md")

    Every `add()` path is `/`-separated; its last segment is a file and the
    segments before it are directories, created as needed.
    """

    def __init__(self, name: str, full_path: str) -> None:
        self._name: str = name
        self._full_path: str = full_path
        self._directories: dict[str, MemoryDirectory] = {}
        self._files: dict[str, MemoryFile] = {}

    @classmethod
    def root(cls, name: str, full_path: str) -> MemoryDirectory:
        return cls(name, full_path.rstrip("/"))

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_path(self) -> str:
        return self._full_path

    def is_dir(self) -> bool:
        return True

    def add(self, path: str) -> MemoryDirectory:
        """Add a file (and any missing parent directories). Returns `self` for chaining."""
        parts = [part for part in path.split("/") if part]
        if parts:
            self._add(parts)
        return self

    def _add(self, parts: list[str]) -> None:
        head = parts[0]
        child_path = f"{self._full_path}/{head}"
        if len(parts) == 1:
            if head not in self._files:
                self._files[head] = MemoryFile(head, child_path)
            return
        if head not in self._directories:
            self._directories[head] = MemoryDirectory(head, child_path)
        self._directories[head]._add(parts[1:])

    def children(self) -> Iterable[TreeNode]:
        nodes: list[TreeNode] = []
        nodes.extend(self._directories.values())
        nodes.extend(self._files.values())
        return nodes

    def __repr__(self) -> str:
        return f"MemoryDirectory({self._full_path!r})"

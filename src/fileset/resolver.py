"""
FileSet: resolves include/exclude glob patterns against a base directory.

Patterns are compiled fresh for every lookup and the tree is walked once. The
functions here take an explicit base path; the `fileset.aliases` entry points
add argument validation and the working-directory default on top.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from fileset.gitignore import GitignoreFilter
from fileset.matcher import match_tree
from fileset.patterns import compile_patterns, split_patterns
from fileset.settings import FileSetSettings
from fileset.tree import FsNode, TreeNode

log = logging.getLogger(__name__)


class FileSet:
    """
    Finds the files under `root` matching any include and no exclude.

    `root` is any `TreeNode`: an `FsNode` for the real filesystem or a
    `MemoryDirectory` for an in-memory tree. `gitignore` optionally filters
    the matches afterwards.
    """

    def __init__(
        self,
        root: TreeNode,
        includes: Iterable[str | None],
        excludes: Iterable[str | None] = (),
        case_sensitive: bool = False,
        gitignore: GitignoreFilter | None = None,
    ) -> None:
        self._root: TreeNode = root
        self._includes: list[str] = [p for p in includes if p is not None]
        self._excludes: list[str] = [p for p in excludes if p is not None]
        self._case_sensitive: bool = case_sensitive
        self._gitignore: GitignoreFilter | None = gitignore

    def get_relative_paths(self) -> set[str]:
        """The matched files as `/`-separated paths relative to the root."""
        if not self._includes:
            return set()
        include_patterns = compile_patterns(self._includes, self._case_sensitive)
        exclude_patterns = compile_patterns(self._excludes, self._case_sensitive)
        matched = match_tree(self._root, include_patterns, exclude_patterns)
        if self._gitignore is not None:
            matched = self._gitignore.filter(matched)
        return matched

    def get_files(self) -> list[Path]:
        """
        The matched files joined with the root's full path, sorted. Callers
        should not rely on the order beyond it being stable.
        """
        base = Path(self._root.full_path)
        return sorted(base / rel for rel in self.get_relative_paths())


def find(
    base_path: str | Path,
    includes: Iterable[str | None] | None,
    excludes: Iterable[str | None] | None = None,
    case_sensitive: bool = False,
    respect_gitignore: bool = False,
) -> list[Path]:
    """
    Resolve `includes` minus `excludes` under `base_path`. Missing pattern
    collections count as empty; a missing base directory gives no files.
    """
    base = Path(base_path).resolve()
    gitignore = GitignoreFilter(base) if respect_gitignore else None
    file_set = FileSet(FsNode(base), includes or (), excludes or (), case_sensitive, gitignore)
    return file_set.get_files()


def find_patterns(
    base_path: str | Path,
    patterns: Iterable[str | None] | None,
    case_sensitive: bool = False,
    respect_gitignore: bool = False,
) -> list[Path]:
    """Resolve combined patterns, where a leading `!` marks an exclude."""
    includes, excludes = split_patterns(patterns or ())
    return find(base_path, includes, excludes, case_sensitive, respect_gitignore)


def find_include(
    base_path: str | Path,
    include: str,
    excludes: Iterable[str | None] | None = None,
    case_sensitive: bool = False,
    respect_gitignore: bool = False,
) -> list[Path]:
    """Resolve a single include pattern."""
    return find(base_path, [include], excludes, case_sensitive, respect_gitignore)


def find_settings(settings: FileSetSettings) -> list[Path]:
    """Resolve a settings bundle. `settings.base_path` must already be set."""
    if settings.base_path is None:
        raise ValueError("settings.base_path must be set")
    log.debug("Resolving file set:\n%s", settings)
    return find(
        settings.base_path,
        settings.includes,
        settings.excludes,
        settings.case_sensitive,
        settings.respect_gitignore,
    )

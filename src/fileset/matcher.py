"""Directory tree matcher: walks a tree and applies compiled include/exclude patterns."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from fileset.patterns import CompiledPattern
from fileset.tree import TreeNode

log = logging.getLogger(__name__)


def match_tree(
    root: TreeNode,
    includes: Sequence[CompiledPattern],
    excludes: Sequence[CompiledPattern] = (),
) -> set[str]:
    """
    Return the `/`-separated paths, relative to `root`, of every file that
    matches at least one include and no exclude.

    With no includes nothing is walked and the result is empty. A root that
    cannot be walked also gives an empty result.
    """
    if not includes:
        return set()

    matched: set[str] = set()
    for parts in walk_files(root):
        if not any(p.matches(parts) for p in includes):
            continue
        if any(p.matches(parts) for p in excludes):
            continue
        matched.add("/".join(parts))

    log.debug(
        "Matched %d file(s) under %s (%d include(s), %d exclude(s))",
        len(matched),
        root.full_path,
        len(includes),
        len(excludes),
    )
    return matched


def walk_files(root: TreeNode) -> Iterator[list[str]]:
    """
    Yield the relative path segments of every file below `root`. Directories
    that cannot be listed are skipped.
    """
    if not root.is_dir():
        log.debug("Not a directory, nothing to walk: %s", root.full_path)
        return

    # Iterative depth-first walk; each entry is a directory and its relative segments.
    stack: list[tuple[TreeNode, list[str]]] = [(root, [])]
    while stack:
        directory, prefix = stack.pop()
        try:
            children = list(directory.children())
        except OSError as e:
            log.debug("Skipping unreadable directory %s: %s", directory.full_path, e)
            continue
        for child in children:
            parts = prefix + [child.name]
            if child.is_dir():
                stack.append((child, parts))
            else:
                yield parts

"""
Resolve sets of files from include and exclude glob patterns.

Usage::

    from fileset import FileSetSettings, get_file_set, get_file_set_by_patterns

    files = get_file_set_by_patterns(["src/**/*.py", "!src/**/test_*.py"], base_path="repo")

    settings = FileSetSettings(includes=["**/*.csproj"], excludes=["**/obj/**"])
    files = get_file_set(settings)
"""

from fileset.aliases import (
    get_file_set,
    get_file_set_by_include,
    get_file_set_by_includes,
    get_file_set_by_patterns,
)
from fileset.patterns import CompiledPattern, SegmentKind, compile_pattern, split_patterns
from fileset.resolver import FileSet, find, find_include, find_patterns, find_settings
from fileset.settings import FileSetSettings
from fileset.tree import FsNode, MemoryDirectory, MemoryFile, TreeNode

__all__ = [
    "CompiledPattern",
    "FileSet",
    "FileSetSettings",
    "FsNode",
    "MemoryDirectory",
    "MemoryFile",
    "SegmentKind",
    "TreeNode",
    "compile_pattern",
    "find",
    "find_include",
    "find_patterns",
    "find_settings",
    "get_file_set",
    "get_file_set_by_include",
    "get_file_set_by_includes",
    "get_file_set_by_patterns",
    "split_patterns",
]

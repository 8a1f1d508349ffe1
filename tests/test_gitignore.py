"""Tests for optional .gitignore filtering."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from fileset import find
from fileset.gitignore import (
    GitignoreFilter,
    _read_ignore_file,  # pyright: ignore[reportPrivateUsage]
    load_gitignore,
)


def _names(paths: list[Path]) -> list[str]:
    return sorted(p.name for p in paths)


def test_gitignore_not_applied_by_default(tmp_path: Path) -> None:
    (tmp_path / "keep.md").write_text("# Keep")
    (tmp_path / "draft.md").write_text("# Draft")
    (tmp_path / ".gitignore").write_text("draft.md\n")

    assert _names(find(tmp_path, ["*.md"])) == ["draft.md", "keep.md"]


def test_gitignore_file_pattern(tmp_path: Path) -> None:
    (tmp_path / "keep.md").write_text("# Keep")
    (tmp_path / "draft.md").write_text("# Draft")
    (tmp_path / ".gitignore").write_text("draft.md\n")

    assert _names(find(tmp_path, ["*.md"], respect_gitignore=True)) == ["keep.md"]


def test_gitignore_directory_pattern(tmp_path: Path) -> None:
    (tmp_path / "README.md").write_text("# Root")
    (tmp_path / ".gitignore").write_text("build/\n")
    build = tmp_path / "build" / "out"
    build.mkdir(parents=True)
    (build / "output.md").write_text("# Generated")

    assert _names(find(tmp_path, ["**/*.md"], respect_gitignore=True)) == ["README.md"]


def test_nested_gitignore_combines_parent_rules(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("*.log\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "keep.md").write_text("# Keep")
    (sub / "debug.log").write_text("log data")
    (sub / ".gitignore").write_text("generated/\n")
    gen = sub / "generated"
    gen.mkdir()
    (gen / "output.md").write_text("# Generated")
    (tmp_path / "generated").mkdir()
    (tmp_path / "generated" / "top.md").write_text("# Not covered by sub/.gitignore")

    result = find(tmp_path, ["**/*.md", "**/*.log"], respect_gitignore=True)
    rel = sorted(p.relative_to(tmp_path.resolve()).as_posix() for p in result)
    assert rel == ["generated/top.md", "sub/keep.md"]


def test_gitignore_filter_caches_per_directory(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("*.tmp\n")
    ignore = GitignoreFilter(tmp_path)
    assert ignore.is_ignored("a.tmp")
    (tmp_path / ".gitignore").write_text("*.other\n")
    # Already loaded for this filter instance.
    assert ignore.is_ignored("b.tmp")
    assert ignore.filter(["a.tmp", "a.txt"]) == {"a.txt"}


def test_load_gitignore_missing_or_comment_only(tmp_path: Path) -> None:
    assert load_gitignore(tmp_path) is None
    (tmp_path / ".gitignore").write_text("# just a comment\n\n")
    assert load_gitignore(tmp_path) is None


def test_read_ignore_file_missing(tmp_path: Path) -> None:
    assert _read_ignore_file(tmp_path / "nonexistent") is None


def test_read_ignore_file_unreadable(tmp_path: Path) -> None:
    if os.getuid() == 0:
        # Root can read any file regardless of permissions.
        assert _read_ignore_file(tmp_path / "nonexistent_ignore") is None
        return
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.log\n")
    ignore_file.chmod(0o000)
    try:
        assert _read_ignore_file(ignore_file) is None
    finally:
        ignore_file.chmod(stat.S_IRUSR | stat.S_IWUSR)


def test_read_ignore_file_non_utf8(tmp_path: Path) -> None:
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_bytes(b"\x80\x81\x82\xff\xfe")
    assert _read_ignore_file(ignore_file) is None

"""
Glob pattern compiler.

Patterns are split into path segments, each compiled once into a segment
matcher:

- `**` matches zero or more whole path segments.
- A segment containing `*` (any run of characters within one segment) or `?`
  (exactly one character) is a wildcard segment.
- Anything else is a literal segment.

Case-insensitive matching lower-cases both the pattern and the candidate path
one character at a time, so `?` still matches exactly one character and
literal and wildcard segments behave the same way. A trailing `**` is
compiled as `**/*`: it matches files below the preceding segments, never the
preceding segment itself.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

# Both separators are accepted in patterns; matched paths always use `/`.
_SEPARATORS = re.compile(r"[/\\]")

_WILDCARD_CHARS = frozenset("*?")

EXCLUDE_PREFIX = "!"


class SegmentKind(Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"
    RECURSIVE = "recursive"


@dataclass(frozen=True)
class Segment:
    """
    One compiled pattern segment. `text` is the (possibly case-folded) source
    token; `regex` is set only for wildcard segments.
    """

    kind: SegmentKind
    text: str
    regex: re.Pattern[str] | None = None

    def matches(self, name: str) -> bool:
        """Test a single, already case-normalized path segment."""
        if self.kind is SegmentKind.RECURSIVE:
            return True
        if self.regex is not None:
            return self.regex.fullmatch(name) is not None
        return self.text == name


@dataclass(frozen=True)
class CompiledPattern:
    """
    A glob pattern compiled into segment matchers. A pattern with no segments
    (empty, `/`, `.`) matches nothing.
    """

    source: str
    segments: tuple[Segment, ...]
    case_sensitive: bool = False

    @property
    def matches_nothing(self) -> bool:
        return not self.segments

    def matches(self, path: str | Sequence[str]) -> bool:
        """
        Check whether a relative path matches this pattern. `path` is either a
        `/`-separated string or an already split sequence of segments.
        """
        if not self.segments:
            return False
        parts = split_path(path) if isinstance(path, str) else list(path)
        if not self.case_sensitive:
            parts = [fold_case(part) for part in parts]
        return _match_segments(self.segments, parts)

    def __str__(self) -> str:
        return self.source


def fold_case(text: str) -> str:
    """
    Lower-case `text` one character at a time. Characters whose lower-case form
    is longer than one character are kept as is, so lengths never change.
    """
    return "".join(low if len(low := c.lower()) == 1 else c for c in text)


def split_path(path: str) -> list[str]:
    """Split a relative path into segments, dropping empty and `.` segments."""
    return [part for part in _SEPARATORS.split(path) if part and part != "."]


def compile_pattern(pattern: str, case_sensitive: bool = False) -> CompiledPattern:
    """
    Compile a glob pattern into a `CompiledPattern`. Never raises: anything
    that cannot match compiles to a pattern with no segments.
    """
    segments: list[Segment] = []
    for token in split_path(pattern):
        if not case_sensitive:
            token = fold_case(token)
        if token == "**":
            # Adjacent `**` segments are equivalent to one.
            if segments and segments[-1].kind is SegmentKind.RECURSIVE:
                continue
            segments.append(Segment(SegmentKind.RECURSIVE, token))
        elif any(c in _WILDCARD_CHARS for c in token):
            segments.append(Segment(SegmentKind.WILDCARD, token, _wildcard_regex(token)))
        else:
            segments.append(Segment(SegmentKind.LITERAL, token))
    # A trailing `**` still has to end in a file name below the preceding segments.
    if segments and segments[-1].kind is SegmentKind.RECURSIVE:
        segments.append(Segment(SegmentKind.WILDCARD, "*", _wildcard_regex("*")))
    return CompiledPattern(source=pattern, segments=tuple(segments), case_sensitive=case_sensitive)


def compile_patterns(
    patterns: Iterable[str | None], case_sensitive: bool = False
) -> list[CompiledPattern]:
    """Compile a collection of patterns, skipping `None` entries."""
    return [compile_pattern(p, case_sensitive) for p in patterns if p is not None]


def split_patterns(patterns: Iterable[str | None]) -> tuple[list[str], list[str]]:
    """
    Separate combined patterns into `(includes, excludes)`. Entries starting
    with `!` are excludes with the prefix removed; a bare `!` becomes an empty
    exclude, which matches nothing.
    """
    includes: list[str] = []
    excludes: list[str] = []
    for pattern in patterns:
        if pattern is None:
            continue
        if pattern.startswith(EXCLUDE_PREFIX):
            excludes.append(pattern[len(EXCLUDE_PREFIX) :])
        else:
            includes.append(pattern)
    return includes, excludes


def _wildcard_regex(token: str) -> re.Pattern[str]:
    parts: list[str] = []
    for c in token:
        if c == "*":
            # Collapse runs of `*`; they match the same strings as one.
            if not parts or parts[-1] != ".*":
                parts.append(".*")
        elif c == "?":
            parts.append(".")
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def _match_segments(segments: Sequence[Segment], parts: Sequence[str]) -> bool:
    """
    Align pattern segments with path segments. Recursive segments absorb zero
    or more path segments; every other segment consumes exactly one.

    Uses the usual single-backtrack wildcard algorithm: on a mismatch, retry
    from the most recent `**` with it absorbing one more segment.
    """
    seg_i = 0
    part_i = 0
    star_seg = -1
    star_part = 0

    while part_i < len(parts):
        if seg_i < len(segments):
            segment = segments[seg_i]
            if segment.kind is SegmentKind.RECURSIVE:
                star_seg = seg_i
                star_part = part_i
                seg_i += 1
                continue
            if segment.matches(parts[part_i]):
                seg_i += 1
                part_i += 1
                continue
        if star_seg < 0:
            return False
        star_part += 1
        part_i = star_part
        seg_i = star_seg + 1

    # Patterns never end in `**`, so every segment must be used up.
    return seg_i == len(segments)

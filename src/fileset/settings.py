"""Settings bundle for a file set lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class FileSetSettings:
    """
    Options for a file set lookup.

    `base_path=None` means the current working directory; it is filled in once
    by the alias entry points, never by the matcher.
    `respect_gitignore` additionally drops files ignored by `.gitignore` files
    inside the base directory.
    """

    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    case_sensitive: bool = False
    base_path: Path | None = None
    respect_gitignore: bool = False

    def __str__(self) -> str:
        includes = ",".join(f'"{p}"' for p in self.includes)
        excludes = ",".join(f'"{p}"' for p in self.excludes)
        base_path = str(self.base_path) if self.base_path is not None else ""
        return "\n".join(
            [
                "{",
                f'\t"Includes": [ {includes} ], ',
                f'\t"Excludes": [ {excludes} ], ',
                f'\t"CaseSensitive": {self.case_sensitive}, ',
                f'\t"RespectGitignore": {self.respect_gitignore}, ',
                f'\t"BasePath": {base_path}',
                "}",
            ]
        )

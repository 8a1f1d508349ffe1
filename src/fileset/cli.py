#!/usr/bin/env python3
"""
fileset: Find files from include and exclude glob patterns

Common usage:
  fileset '**/*.py'
  fileset 'src/**/*.py' '!src/**/test_*.py'
  fileset -i '**/*.csproj' -e '**/obj/**' --base-path src

Patterns are relative to the base directory (default: current directory).
`*` and `?` match within one path segment and `**` matches any number of
directories. Matching is case-insensitive unless --case-sensitive is given.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from fileset.aliases import get_file_set
from fileset.config import find_config_file, load_config, merge_config_with_settings
from fileset.patterns import split_patterns
from fileset.settings import FileSetSettings

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the fileset tool."""

    patterns: list[str]
    include: list[str]
    exclude: list[str]
    case_sensitive: bool
    base_path: str | None
    respect_gitignore: bool
    config: str | None
    no_config: bool
    show_settings: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)` where `explicit_flags` holds the
    settings field names the user set on the command line (for config merge
    precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="fileset",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Glob patterns to include; prefix with '!' to exclude",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Pattern to include. Can be repeated",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Pattern to exclude. Can be repeated",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        dest="case_sensitive",
        help="Match patterns case-sensitively",
    )
    parser.add_argument(
        "-b",
        "--base-path",
        type=str,
        default=None,
        dest="base_path",
        metavar="DIR",
        help="Base directory for patterns (default: current directory)",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        help="Also drop files ignored by .gitignore files under the base directory",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="Read settings from this TOML file instead of searching for one",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Do not read any config file",
    )
    parser.add_argument(
        "--show-settings",
        action="store_true",
        dest="show_settings",
        help="Print the effective settings to stderr before listing files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    positional_includes, positional_excludes = split_patterns(opts.patterns)

    explicit_flags: set[str] = set()
    if opts.include or positional_includes:
        explicit_flags.add("includes")
    if opts.exclude or positional_excludes:
        explicit_flags.add("excludes")
    if opts.case_sensitive:
        explicit_flags.add("case_sensitive")
    if opts.base_path is not None:
        explicit_flags.add("base_path")
    if opts.respect_gitignore:
        explicit_flags.add("respect_gitignore")

    return (
        Options(
            patterns=opts.patterns,
            include=opts.include,
            exclude=opts.exclude,
            case_sensitive=opts.case_sensitive,
            base_path=opts.base_path,
            respect_gitignore=opts.respect_gitignore,
            config=opts.config,
            no_config=opts.no_config,
            show_settings=opts.show_settings,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _build_settings(options: Options) -> FileSetSettings:
    positional_includes, positional_excludes = split_patterns(options.patterns)
    return FileSetSettings(
        includes=options.include + positional_includes,
        excludes=options.exclude + positional_excludes,
        case_sensitive=options.case_sensitive,
        base_path=Path(options.base_path).resolve() if options.base_path is not None else None,
        respect_gitignore=options.respect_gitignore,
    )


def _config_path(options: Options) -> Path | None:
    if options.no_config:
        return None
    if options.config is not None:
        path = Path(options.config)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {options.config}")
        return path
    return find_config_file(Path.cwd())


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the fileset CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, including no matches; 1 for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("fileset")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = _build_settings(options)

    try:
        config_path = _config_path(options)
        if config_path is not None:
            log.debug("Using config file %s", config_path)
            merge_config_with_settings(settings, load_config(config_path), explicit_flags)
    except (FileNotFoundError, ValueError) as e:
        # ValueError covers malformed TOML and values of the wrong type.
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not settings.includes:
        print(
            "Error: No include patterns given. Pass patterns as arguments, use --include,"
            " or set `includes` in a config file. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    if settings.base_path is None:
        settings.base_path = Path.cwd()

    if options.show_settings:
        print(settings, file=sys.stderr)

    for path in get_file_set(settings):
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command line entry point.

Usage:
    cdok [DIRECTORY]                         interactive browser
    cdok DIRECTORY --export markdown -o docs.md
    cdok DIRECTORY --check [--strict]        coverage report, exit 1 on errors
    cdok DIRECTORY --list                    discovered functions
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings
from .errors import ExportFormatError, StoreError
from .generators import EXPORTERS, get_exporter
from .project import Project
from .validators import validate_docs

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cdok",
        description="Browse and document the functions of a C project.",
    )
    ap.add_argument("directory", nargs="?", default=".", help="project directory (default: .)")
    ap.add_argument(
        "--export",
        metavar="FORMAT",
        help=f"write documentation and exit ({', '.join(EXPORTERS)})",
    )
    ap.add_argument("-o", "--output", metavar="OUT_FILE", help="export destination")
    ap.add_argument("--file", dest="only_file", metavar="NAME", help="export a single file")
    ap.add_argument("--check", action="store_true", help="report documentation coverage")
    ap.add_argument("--strict", action="store_true", help="with --check, fail on undocumented")
    ap.add_argument("--list", action="store_true", help="list discovered functions")
    ap.add_argument("--docs-file", metavar="NAME", help="documentation file name")
    ap.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    ap.add_argument("--log-file", metavar="PATH", help="write log output to a file")
    return ap


def _configure_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=log_file,
    )


def _print_listing(project: Project) -> None:
    for source in project.files:
        print(f"{source.filename} ({source.function_count} functions, "
              f"{source.documented_count} documented)")
        for func in source.functions:
            mark = "*" if func.is_documented else " "
            print(f"  {mark} {func.line_number:5d}  {func.return_type} {func.name}")


def _run_check(project: Project, strict: bool) -> int:
    validation = validate_docs(project.files, strict=strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}")
    for err in validation.errors:
        print(f"  ✗ {err}")

    stats = project.stats()
    print(
        f"\nCoverage: {stats.documented}/{stats.functions} functions documented "
        f"({stats.percent:.1f}%) in {stats.files} files"
    )
    return 1 if validation.errors else 0


def _run_export(project: Project, fmt: str, output: str | None, only_file: str | None) -> int:
    try:
        get_exporter(fmt)
    except ExportFormatError as e:
        print(f"cdok: {e}", file=sys.stderr)
        return 2

    files = None
    if only_file:
        source = project.find_file(only_file)
        if source is None:
            print(f"cdok: no functions found in {only_file}", file=sys.stderr)
            return 1
        files = [source]

    path = project.export(fmt, output, files)
    print(f"Exported documentation to {path}")
    return 0


def _run_browser(project: Project) -> int:
    # Imported here: termios is POSIX-only and the batch modes do not need it
    from .terminal import Terminal
    from .ui import Browser

    if not project.files:
        print(f"No C files found in {project.root}.")
        print("Run cdok from a directory containing .c and .h files.")
        return 1
    if not sys.stdin.isatty():
        print("cdok: the interactive browser needs a terminal", file=sys.stderr)
        return 1

    term = Terminal()
    try:
        with term.raw_mode():
            Browser(project, term).run()
    except KeyboardInterrupt:
        pass
    term.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run cdok and return the exit status."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_level, args.log_file)

    root = Path(args.directory)
    if not root.is_dir():
        print(f"cdok: {root}: not a directory", file=sys.stderr)
        return 1

    settings = Settings.from_env(docs_filename=args.docs_file)
    project = Project(root, settings)
    print(f"Scanning C files in {root}...")
    project.scan()

    try:
        if args.export:
            return _run_export(project, args.export, args.output, args.only_file)
        if args.check:
            return _run_check(project, args.strict)
        if args.list:
            _print_listing(project)
            return 0
        return _run_browser(project)
    except StoreError as e:
        print(f"cdok: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Directory scanner: builds SourceFile records from C files."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings
from .models import Function, SourceFile
from .parser import is_header_file, is_signature_line, parse_signature, trim

log = logging.getLogger(__name__)


def is_c_file(filename: str, settings: Settings | None = None) -> bool:
    """True for names ending in one of the scanned extensions (case-sensitive)."""
    extensions = (settings or Settings()).extensions
    return any(len(filename) > len(ext) and filename.endswith(ext) for ext in extensions)


def scan_file(path: Path, settings: Settings | None = None) -> list[Function]:
    """Discover functions in a single file.

    An unreadable file yields an empty list.
    """
    settings = settings or Settings()
    filename = path.name
    is_header = is_header_file(filename, settings.header_suffix)
    functions: list[Function] = []

    try:
        with path.open(encoding=settings.encoding, errors="replace") as f:
            for line_number, raw in enumerate(f, 1):
                if len(functions) >= settings.max_functions_per_file:
                    log.info(
                        "%s: function cap %d reached, ignoring the rest",
                        filename,
                        settings.max_functions_per_file,
                    )
                    break
                raw = raw.rstrip("\r\n")
                line = trim(raw)
                if not is_signature_line(line, is_header, original=raw):
                    continue
                func = parse_signature(line, filename, line_number, settings)
                if func is not None:
                    functions.append(func)
    except OSError as e:
        log.warning("Skipping %s: %s", path, e)
        return []

    return functions


def scan_directory(path: Path | str, settings: Settings | None = None) -> list[SourceFile]:
    """Scan the C files directly inside ``path`` (no recursion).

    Files are visited in name order so repeated scans are stable. Files
    with no discovered functions are left out. A directory that cannot be
    listed yields an empty list.
    """
    settings = settings or Settings()
    root = Path(path)

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        log.warning("Cannot open directory %s: %s", root, e)
        return []

    files: list[SourceFile] = []
    for entry in entries:
        if len(files) >= settings.max_files:
            log.info("File cap %d reached, ignoring remaining files", settings.max_files)
            break
        if not is_c_file(entry.name, settings) or not entry.is_file():
            continue

        functions = scan_file(entry, settings)
        if not functions:
            log.debug("%s: no functions found", entry.name)
            continue
        files.append(SourceFile(filename=entry.name, full_path=entry, functions=functions))

    log.info(
        "Scanned %s: %d files, %d functions",
        root,
        len(files),
        sum(f.function_count for f in files),
    )
    return files

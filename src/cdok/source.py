"""Function body extraction for the source viewer."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings
from .models import Function
from .parser import is_header_file, trim

log = logging.getLogger(__name__)


def function_source(
    func: Function, path: Path | str, settings: Settings | None = None
) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` pairs for a function's source.

    Starts at the signature line and stops when braces balance. A header
    prototype ending in ';' is returned as its single line. Brace counting
    is textual, so braces inside strings or comments are counted too.
    Lines are numbered the way the scanner numbers them.
    """
    settings = settings or Settings()
    path = Path(path)
    try:
        with path.open(encoding=settings.encoding, errors="replace") as f:
            lines = [line.rstrip("\r\n") for line in f]
    except OSError as e:
        log.warning("Cannot open %s to display source: %s", path, e)
        return []

    if not 1 <= func.line_number <= len(lines):
        return []

    first = lines[func.line_number - 1]
    result = [(func.line_number, first)]
    if is_header_file(func.source_file, settings.header_suffix) and trim(first).endswith(";"):
        return result

    depth = first.count("{") - first.count("}")
    for number in range(func.line_number + 1, len(lines) + 1):
        text = lines[number - 1]
        result.append((number, text))
        depth += text.count("{") - text.count("}")
        if depth <= 0:
            break
    return result

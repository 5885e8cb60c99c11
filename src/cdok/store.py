"""Flat-file persistence for function documentation.

File layout, one block per documented function:

    # Project Documentation
    # Auto-generated - do not edit the function signatures

    FUNCTION: <name>
    FILE: <filename>
    LINE: <line number>
    SIGNATURE: <raw signature line>
    DESCRIPTION: <text>
    PARAMETERS: <text>
    RETURN: <text>
    EXAMPLE: <text>
    NOTES: <text>
    ---

Records are reattached to freshly scanned functions by (FILE, FUNCTION).
Lines are trimmed on read, so values keep no leading or trailing
whitespace; DocumentationFields strips it before anything is saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import StoreError
from .models import Function, SourceFile
from .parser import trim

log = logging.getLogger(__name__)

HEADER = (
    "# Project Documentation\n"
    "# Auto-generated - do not edit the function signatures\n"
    "\n"
)
RECORD_END = "---"

# file tag -> DocRecord / Function attribute
_TAGS = {
    "FUNCTION": "function",
    "FILE": "filename",
    "LINE": "line_number",
    "SIGNATURE": "signature",
    "DESCRIPTION": "description",
    "PARAMETERS": "parameters_text",
    "RETURN": "return_value",
    "EXAMPLE": "example",
    "NOTES": "notes",
}

_APPLIED_FIELDS = ("description", "parameters_text", "return_value", "example", "notes")


@dataclass
class DocRecord:
    """One persisted documentation block."""

    function: str = ""
    filename: str = ""
    line_number: str = ""
    signature: str = ""
    description: str = ""
    parameters_text: str = ""
    return_value: str = ""
    example: str = ""
    notes: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.filename, self.function)


def _format_record(func: Function) -> str:
    values = {
        "FUNCTION": func.name,
        "FILE": func.source_file,
        "LINE": str(func.line_number),
        "SIGNATURE": func.signature,
        "DESCRIPTION": func.description,
        "PARAMETERS": func.parameters_text,
        "RETURN": func.return_value,
        "EXAMPLE": func.example,
        "NOTES": func.notes,
    }
    lines = [f"{tag}: {value}" for tag, value in values.items()]
    lines.append(RECORD_END)
    return "\n".join(lines) + "\n"


def find_function(files: Iterable[SourceFile], filename: str, name: str) -> Function | None:
    """First function named ``name`` in the first file named ``filename``."""
    for source in files:
        if source.filename == filename:
            for func in source.functions:
                if func.name == name:
                    return func
            return None
    return None


class DocumentationStore:
    """Reads and writes the documentation file for a project."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def save(self, files: Iterable[SourceFile]) -> int:
        """Write every documented function.

        Returns:
            Number of records written

        Raises:
            StoreError: If the file cannot be written
        """
        blocks = [
            _format_record(func)
            for source in files
            for func in source.functions
            if func.is_documented
        ]
        try:
            self.path.write_text(HEADER + "".join(blocks), encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Cannot write {self.path}: {e}", str(self.path)) from e
        log.info("Saved %d documented functions to %s", len(blocks), self.path)
        return len(blocks)

    def read(self) -> list[DocRecord]:
        """Parse the documentation file. A missing file yields no records."""
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return []
        except OSError as e:
            log.warning("Cannot read %s: %s", self.path, e)
            return []

        records: list[DocRecord] = []
        current: DocRecord | None = None
        # records are "\n"-separated, as save() writes them
        for raw in text.split("\n"):
            line = trim(raw)
            if line == RECORD_END:
                if current is not None:
                    records.append(current)
                current = None
                continue
            tag, sep, value = line.partition(": ")
            if not sep:
                # "DESCRIPTION:" with an empty value loses its space to trim()
                tag, sep, value = line.partition(":")
                if not sep or value:
                    continue
            attr = _TAGS.get(tag)
            if attr is None:
                continue
            if attr == "function":
                if current is not None:
                    records.append(current)
                current = DocRecord()
            if current is None:
                continue
            setattr(current, attr, value)

        if current is not None:
            records.append(current)
        return records

    def load(self, files: list[SourceFile]) -> int:
        """Merge persisted documentation onto scanned functions.

        Records whose (FILE, FUNCTION) no longer exists are discarded.

        Returns:
            Number of records applied
        """
        applied = 0
        for record in self.read():
            if not record.function or not record.filename:
                continue
            func = find_function(files, record.filename, record.function)
            if func is None:
                log.debug("Discarding stale documentation for %s:%s", *record.key)
                continue
            for attr in _APPLIED_FIELDS:
                setattr(func, attr, getattr(record, attr))
            func.is_documented = True
            applied += 1
        log.info("Loaded documentation for %d functions from %s", applied, self.path)
        return applied

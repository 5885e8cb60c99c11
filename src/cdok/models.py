"""Data models for discovered C functions and their documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

DOC_FIELDS = ("description", "parameters_text", "return_value", "example", "notes")


@dataclass(frozen=True)
class Parameter:
    """One formal argument parsed from a signature."""

    name: str  # never contains '*' or '[...]'
    type: str  # "unsigned long", "char"
    is_pointer: bool = False
    is_array: bool = False
    is_const: bool = False
    description: str = "Parameter"  # auto-generated hint

    @property
    def display_type(self) -> str:
        """Type as rendered in generated docs, e.g. ``const char*``."""
        return "".join(
            [
                "const " if self.is_const else "",
                self.type,
                "*" if self.is_pointer else "",
                "[]" if self.is_array else "",
            ]
        )


@dataclass
class Function:
    """A discovered function declaration or definition."""

    name: str
    signature: str  # raw trimmed source line
    source_file: str  # filename, the documentation key
    line_number: int  # 1-indexed
    return_type: str = "int"
    parameters: list[Parameter] = field(default_factory=list)
    # Documentation, empty until edited
    description: str = ""
    parameters_text: str = ""
    return_value: str = ""
    example: str = ""
    notes: str = ""
    is_documented: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.source_file, self.name)

    @property
    def parameter_doc(self) -> str:
        """Auto-generated ``@param`` lines for the parsed parameters."""
        from .parser import generate_parameter_doc

        return generate_parameter_doc(self.parameters)

    def documentation(self) -> dict[str, str]:
        """Documentation fields that have content, in display order."""
        return {name: getattr(self, name) for name in DOC_FIELDS if getattr(self, name)}


@dataclass
class SourceFile:
    """A scanned C source or header file with at least one function."""

    filename: str
    full_path: Path
    functions: list[Function] = field(default_factory=list)

    @property
    def function_count(self) -> int:
        return len(self.functions)

    @property
    def documented_count(self) -> int:
        return sum(1 for f in self.functions if f.is_documented)

    @property
    def coverage(self) -> float:
        """Documented share in percent (0.0 - 100.0)."""
        if not self.functions:
            return 0.0
        return self.documented_count / len(self.functions) * 100


@dataclass
class CoverageStats:
    """Documentation coverage across a set of files."""

    files: int = 0
    functions: int = 0
    documented: int = 0

    @property
    def percent(self) -> float:
        if self.functions == 0:
            return 0.0
        return self.documented / self.functions * 100


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # --check fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed


class DocumentationFields(BaseModel):
    """Edit payload for a function's documentation.

    None means "keep the current value". The persistence format stores one
    field per line, so anything str.splitlines() breaks on (\\n, \\r, \\v,
    \\f, \\x85, \\u2028, ...) is rejected instead of truncated. Surrounding
    spaces and tabs are stripped; the store trims them on read anyway.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    parameters: str | None = None
    return_value: str | None = None
    example: str | None = None
    notes: str | None = None

    @field_validator("description", "parameters", "return_value", "example", "notes")
    @classmethod
    def _single_line(cls, v: str | None):
        if v is None:
            return v
        if v.splitlines() not in ([], [v]):
            raise ValueError("documentation fields must be a single line")
        return v.strip(" \t")

    def changes(self) -> dict[str, str]:
        """Non-empty values keyed by Function attribute name."""
        mapping = {
            "description": self.description,
            "parameters_text": self.parameters,
            "return_value": self.return_value,
            "example": self.example,
            "notes": self.notes,
        }
        return {k: v for k, v in mapping.items() if v}

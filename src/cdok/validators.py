"""Documentation coverage and quality checks."""

from __future__ import annotations

from typing import Iterable

from .models import CoverageStats, SourceFile, ValidationResult


def _returns_value(return_type: str) -> bool:
    """False for "void" and "static void", True for "void *"."""
    tokens = return_type.replace("*", " * ").split()
    return "void" not in tokens or "*" in tokens


def validate_docs(files: Iterable[SourceFile], strict: bool = False) -> ValidationResult:
    """Validate documentation of scanned functions.

    Checks:
    1. Functions should be documented (warning in normal mode, error in strict)
    2. Documented functions with a non-void return type should describe it (warning)

    Args:
        files: Scanned source files
        strict: If True, undocumented functions are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for source in files:
        for func in source.functions:
            where = f"{source.filename}:{func.line_number} {func.name}"
            if not func.is_documented:
                msg = f"{where}: undocumented"
                if strict:
                    result.errors.append(msg)
                else:
                    result.warnings.append(msg)
                continue

            if _returns_value(func.return_type) and not func.return_value:
                result.warnings.append(f"{where}: documented but missing return value")

    return result


def compute_coverage(files: Iterable[SourceFile]) -> CoverageStats:
    """Count files, functions and documented functions."""
    stats = CoverageStats()
    for source in files:
        stats.files += 1
        stats.functions += source.function_count
        stats.documented += source.documented_count
    return stats

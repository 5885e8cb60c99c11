"""cdok - heuristic C function discovery and documentation."""

from cdok.config import Settings
from cdok.errors import CdokError, DocumentationFormatError, ExportFormatError, StoreError
from cdok.models import DocumentationFields, Function, Parameter, SourceFile
from cdok.parser import (
    extract_name,
    extract_return_type,
    generate_parameter_doc,
    is_signature_line,
    parse_parameter_list,
)
from cdok.project import Project
from cdok.scanner import scan_directory
from cdok.store import DocumentationStore

__all__ = [
    "CdokError",
    "DocumentationFields",
    "DocumentationFormatError",
    "DocumentationStore",
    "ExportFormatError",
    "Function",
    "Parameter",
    "Project",
    "Settings",
    "SourceFile",
    "StoreError",
    "extract_name",
    "extract_return_type",
    "generate_parameter_doc",
    "is_signature_line",
    "parse_parameter_list",
    "scan_directory",
]

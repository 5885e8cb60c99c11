"""Project state: the scanned files of one directory plus their documentation.

Example:
    project = Project("path/to/c/project")
    project.scan()

    for func in project.list_undocumented():
        print(func.source_file, func.name)

    func = project.search("parse")[0]
    project.edit(func, DocumentationFields(description="Parses a config line"))
    project.export("markdown")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import ValidationError

from .config import Settings
from .errors import DocumentationFormatError
from .generators import get_exporter
from .models import CoverageStats, DocumentationFields, Function, SourceFile
from .scanner import scan_directory
from .store import DocumentationStore
from .validators import compute_coverage

log = logging.getLogger(__name__)


class Project:
    """In-memory model of a scanned C project.

    Owns the list of SourceFile records. Every scan() replaces that list and
    reattaches persisted documentation by (filename, function name).
    """

    def __init__(
        self,
        root: Path | str,
        settings: Settings | None = None,
        store: DocumentationStore | None = None,
    ):
        self.root = Path(root)
        self.settings = settings or Settings()
        self.store = store or DocumentationStore(self.root / self.settings.docs_filename)
        self.files: list[SourceFile] = []

    @property
    def title(self) -> str:
        return f"{self.root.resolve().name or self.root} Documentation"

    def scan(self) -> list[SourceFile]:
        """Rescan the directory and reload saved documentation."""
        self.files = scan_directory(self.root, self.settings)
        self.load()
        return self.files

    def load(self) -> int:
        return self.store.load(self.files)

    def save(self) -> int:
        """Persist all documented functions.

        Raises:
            StoreError: If the documentation file cannot be written
        """
        return self.store.save(self.files)

    def functions(self) -> Iterator[Function]:
        """All functions in file order."""
        for source in self.files:
            yield from source.functions

    def find_file(self, filename: str) -> SourceFile | None:
        return next((f for f in self.files if f.filename == filename), None)

    def search(self, term: str) -> list[Function]:
        """Functions whose name, description or signature contains ``term``.

        Matching is case-sensitive. An empty term matches nothing.
        """
        if not term:
            return []
        return [
            func
            for func in self.functions()
            if term in func.name or term in func.description or term in func.signature
        ]

    def list_undocumented(self) -> list[Function]:
        return [func for func in self.functions() if not func.is_documented]

    def edit(self, func: Function, fields: DocumentationFields | dict) -> Function:
        """Commit documentation for ``func`` and save.

        Values are stripped of surrounding spaces; empty values keep the
        current text. When no parameter text exists after the edit, the
        auto-generated ``@param`` lines are used, joined with "; " to keep
        the stored field on one line.

        Args:
            func: A function from this project
            fields: DocumentationFields or a dict with the same keys

        Returns:
            The updated function

        Raises:
            DocumentationFormatError: If a field contains a line break or a
                key is not a DocumentationFields field
            StoreError: If saving fails
        """
        data = fields.model_dump() if isinstance(fields, DocumentationFields) else fields
        try:
            fields = DocumentationFields.model_validate(data)
        except ValidationError as e:
            raise DocumentationFormatError(str(e)) from e

        for attr, value in fields.changes().items():
            setattr(func, attr, value)
        if not func.parameters_text:
            func.parameters_text = "; ".join(func.parameter_doc.splitlines())
        func.is_documented = True

        log.info("Documented %s:%s", func.source_file, func.name)
        self.save()
        return func

    def stats(self) -> CoverageStats:
        return compute_coverage(self.files)

    def export(
        self,
        fmt: str,
        output: Path | str | None = None,
        files: Iterable[SourceFile] | None = None,
    ) -> Path:
        """Render documentation and write it to ``output``.

        Defaults to ``<root>/<project>_docs.<ext>``.

        Raises:
            ExportFormatError: If ``fmt`` is unknown
        """
        exporter = get_exporter(fmt)
        selected = list(self.files if files is None else files)
        content = exporter.render(self.title, selected)

        if output is None:
            stem = self.root.resolve().name or "project"
            output = self.root / f"{stem}_docs{exporter.extension}"
        output = Path(output)
        output.write_text(content, encoding="utf-8")
        log.info("Exported %s documentation to %s", exporter.name, output)
        return output

"""Static documentation exporters: text, Markdown, HTML and PostScript."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .errors import ExportFormatError
from .models import Function, SourceFile

FIELD_LABELS = {
    "description": "Description",
    "parameters_text": "Parameters",
    "return_value": "Return Value",
    "example": "Example",
    "notes": "Notes",
}

Renderer = Callable[[str, list[SourceFile]], str]

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _slugify(name: str) -> str:
    """Convert a file/function name to a markdown anchor slug."""
    return name.lower().replace(".", "").replace(" ", "-")


def _parameter_summary(func: Function) -> str:
    if not func.parameters:
        return "None"
    return ", ".join(f"{p.display_type} {p.name}" for p in func.parameters)


def _summary_line(source: SourceFile) -> str:
    return (
        f"{source.function_count} functions, {source.documented_count} documented "
        f"({source.coverage:.1f}%)"
    )


# --- plain text -------------------------------------------------------------


def _document_lines(title: str, files: list[SourceFile]) -> list[tuple[str, str]]:
    """Plain-text layout as (style, text) pairs; style is "title", "heading" or "body"."""
    rule = "=" * 78
    lines: list[tuple[str, str]] = [("title", title), ("body", "")]

    for source in files:
        lines.extend(
            [
                ("body", rule),
                ("heading", f"FILE: {source.filename}"),
                ("body", f"Coverage: {_summary_line(source)}"),
                ("body", rule),
                ("body", ""),
            ]
        )
        for func in source.functions:
            lines.extend(
                [
                    ("heading", f"FUNCTION: {func.name} (Line {func.line_number})"),
                    ("body", f"Signature: {func.signature}"),
                    ("body", f"Return Type: {func.return_type}"),
                    ("body", f"Parsed Parameters: {_parameter_summary(func)}"),
                ]
            )
            docs = func.documentation()
            if func.is_documented and docs:
                for attr, value in docs.items():
                    lines.append(("body", f"{FIELD_LABELS[attr]}: {value}"))
            else:
                lines.append(("body", "*** NOT YET DOCUMENTED ***"))
            lines.append(("body", ""))

    return lines


def generate_text(title: str, files: list[SourceFile]) -> str:
    """Generate a plain text report."""
    return "\n".join(text for _, text in _document_lines(title, files)) + "\n"


# --- Markdown ---------------------------------------------------------------


def generate_markdown(title: str, files: list[SourceFile]) -> str:
    """Generate a Markdown report with a coverage table and per-function sections."""
    lines = [
        "<!-- AUTO-GENERATED by cdok. Edit documentation with `cdok`, not here. -->",
        "",
        f"# {title}",
        "",
        "| File | Functions | Documented | Coverage |",
        "|------|-----------|------------|----------|",
    ]
    for source in files:
        lines.append(
            f"| [`{source.filename}`](#{_slugify(source.filename)}) "
            f"| {source.function_count} | {source.documented_count} "
            f"| {source.coverage:.1f}% |"
        )
    lines.append("")

    for source in files:
        lines.extend(
            [
                f"## {source.filename}",
                "",
                f"*{_summary_line(source)}*",
                "",
            ]
        )
        for func in source.functions:
            lines.extend(
                [
                    f"### {func.name}",
                    "",
                    "```c",
                    func.signature,
                    "```",
                    "",
                    f"**Line:** {func.line_number}  ",
                    f"**Return type:** `{func.return_type}`",
                    "",
                ]
            )

            if func.parameters:
                lines.append("**Parsed parameters:**")
                for p in func.parameters:
                    lines.append(f"- `{p.name}` (`{p.display_type}`): {p.description}")
                lines.append("")

            if not func.is_documented:
                lines.append("*Not yet documented.*")
                lines.append("")
            else:
                for attr, value in func.documentation().items():
                    if attr == "example":
                        lines.extend(["**Example:**", "```c", value, "```", ""])
                    else:
                        lines.append(f"**{FIELD_LABELS[attr]}:** {value}")
                        lines.append("")

            lines.append("---")
            lines.append("")

    return "\n".join(lines)


# --- HTML -------------------------------------------------------------------

_env: Environment | None = None


def _template_env() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _env


def generate_html(title: str, files: list[SourceFile]) -> str:
    """Generate a standalone HTML page with embedded styling."""
    template = _template_env().get_template("report.html")
    return template.render(title=title, files=files, labels=FIELD_LABELS, slugify=_slugify)


# --- PostScript -------------------------------------------------------------

PS_PAGE_TOP = 750
PS_PAGE_BOTTOM = 50
PS_LEFT = 50
PS_LINE_HEIGHT = 12
PS_WRAP = 88

_PS_FONTS = {
    "title": "/Courier-Bold findfont 14 scalefont setfont",
    "heading": "/Courier-Bold findfont 10 scalefont setfont",
    "body": "/Courier findfont 10 scalefont setfont",
}


def _ps_escape(text: str) -> str:
    text = text.encode("latin-1", errors="replace").decode("latin-1")
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _wrap(style: str, text: str) -> list[tuple[str, str]]:
    chunks = textwrap.wrap(text, PS_WRAP, subsequent_indent="  ")
    return [(style, chunk) for chunk in chunks] or [(style, "")]


def generate_postscript(title: str, files: list[SourceFile]) -> str:
    """Generate a paginated PostScript document (US Letter, Courier)."""
    wrapped = [
        piece for style, text in _document_lines(title, files) for piece in _wrap(style, text)
    ]
    per_page = (PS_PAGE_TOP - PS_PAGE_BOTTOM) // PS_LINE_HEIGHT + 1
    pages = [wrapped[i : i + per_page] for i in range(0, len(wrapped), per_page)] or [[]]

    out = [
        "%!PS-Adobe-3.0",
        f"%%Title: ({_ps_escape(title)})",
        "%%Creator: cdok",
        f"%%Pages: {len(pages)}",
        "%%DocumentFonts: Courier Courier-Bold",
        "%%EndComments",
    ]
    for number, page in enumerate(pages, 1):
        out.append(f"%%Page: {number} {number}")
        y = PS_PAGE_TOP
        current_style = None
        for style, text in page:
            if style != current_style:
                out.append(_PS_FONTS[style])
                current_style = style
            if text:
                out.append(f"{PS_LEFT} {y} moveto ({_ps_escape(text)}) show")
            y -= PS_LINE_HEIGHT
        out.append("showpage")
    out.append("%%EOF")
    return "\n".join(out) + "\n"


# --- registry ---------------------------------------------------------------


@dataclass(frozen=True)
class ExportFormat:
    name: str
    extension: str
    render: Renderer
    aliases: tuple[str, ...] = ()


EXPORTERS: dict[str, ExportFormat] = {
    fmt.name: fmt
    for fmt in (
        ExportFormat("text", ".txt", generate_text, ("txt", "plain")),
        ExportFormat("markdown", ".md", generate_markdown, ("md",)),
        ExportFormat("html", ".html", generate_html, ("htm",)),
        ExportFormat("postscript", ".ps", generate_postscript, ("ps",)),
    )
}


def get_exporter(name: str) -> ExportFormat:
    """Look up an export format by name or alias (case-insensitive).

    Raises:
        ExportFormatError: If the format is unknown
    """
    key = name.strip().lower()
    for fmt in EXPORTERS.values():
        if key == fmt.name or key in fmt.aliases:
            return fmt
    raise ExportFormatError(
        f"Unknown export format {name!r} (choose from: {', '.join(EXPORTERS)})"
    )


def render(fmt: str, title: str, files: Iterable[SourceFile]) -> str:
    """Render ``files`` in the named format."""
    return get_exporter(fmt).render(title, list(files))

"""Interactive terminal browser.

One view is rendered at a time; each keypress mutates the browser state
and the screen is redrawn. Keys:

    FILES         up/down, ENTER open, p print docs, r rescan, s search,
                  u undocumented, x export, q quit
    FUNCTIONS     up/down, ENTER details, b back
    DETAIL        e edit, v view source, a auto-parsed info, b back
    SEARCH        up/down, ENTER details, b back
    UNDOCUMENTED  up/down, ENTER document, b back
"""

from __future__ import annotations

import enum
import logging
from typing import Protocol

from .errors import CdokError, ExportFormatError
from .generators import EXPORTERS, FIELD_LABELS, get_exporter
from .models import Function, SourceFile
from .project import Project
from .source import function_source
from .terminal import BLUE, BOLD, CYAN, DOWN, ENTER, GREEN, RED, RESET, UP, YELLOW

log = logging.getLogger(__name__)

RULE = "═" * 79
FUNCTIONS_PER_PAUSE = 3


class Screen(Protocol):
    def write(self, text: str) -> None: ...

    def clear(self) -> None: ...

    def read_key(self) -> str: ...

    def prompt(self, message: str) -> str: ...

    def pause(self, message: str = ...) -> None: ...


class View(enum.Enum):
    FILES = "files"
    FUNCTIONS = "functions"
    DETAIL = "detail"
    SEARCH = "search"
    UNDOCUMENTED = "undocumented"


def _marker(selected: bool) -> str:
    return f"{BOLD}{YELLOW}► {RESET}" if selected else "  "


def _status(func: Function) -> str:
    return f"{GREEN}*{RESET}" if func.is_documented else f"{YELLOW} {RESET}"


class Browser:
    """Keyboard-driven browser over a Project."""

    def __init__(self, project: Project, screen: Screen):
        self.project = project
        self.screen = screen
        self.view = View.FILES
        self.selection = 0
        self.current_file = 0
        self.current_function: Function | None = None
        self.detail_origin = View.FUNCTIONS
        self.search_term = ""
        self.search_results: list[Function] = []
        self.undocumented: list[Function] = []
        self.message = ""

    # --- rendering ----------------------------------------------------------

    def _header(self) -> list[str]:
        return [
            f"{BOLD}{CYAN}{RULE}",
            "                      DYNAMIC C PROJECT DOCUMENTATION",
            f"{RULE}{RESET}",
        ]

    def _stats(self) -> str:
        stats = self.project.stats()
        return (
            f"{BLUE}Project Stats: {RESET}{stats.files} files, {stats.functions} functions, "
            f"{stats.documented} documented ({stats.percent:.1f}%)"
        )

    @property
    def source(self) -> SourceFile | None:
        if 0 <= self.current_file < len(self.project.files):
            return self.project.files[self.current_file]
        return None

    def render(self) -> str:
        """Text for the current view."""
        lines = self._header()
        renderer = {
            View.FILES: self._render_files,
            View.FUNCTIONS: self._render_functions,
            View.DETAIL: self._render_detail,
            View.SEARCH: self._render_search,
            View.UNDOCUMENTED: self._render_undocumented,
        }[self.view]
        lines.extend(renderer())
        if self.message:
            lines.extend(["", self.message])
        return "\n".join(lines) + "\n"

    def _render_files(self) -> list[str]:
        lines = [
            self._stats(),
            "",
            f"{BOLD}{GREEN}SOURCE FILES{RESET}",
            "Use ↑/↓ to navigate, ENTER to view functions, 'p' to print file docs, "
            "'r' to rescan, 's' to search, 'u' for undocumented, 'x' to export, 'q' to quit",
            "",
        ]
        for i, source in enumerate(self.project.files):
            lines.append(
                f"{_marker(i == self.selection)}{source.filename} "
                f"({source.function_count} functions, {source.documented_count} documented)"
            )
        if not self.project.files:
            lines.append(f"{YELLOW}No C files found in {self.project.root}.{RESET}")
        return lines

    def _render_functions(self) -> list[str]:
        source = self.source
        if source is None:
            return []
        lines = [
            f"{BOLD}{GREEN}FUNCTIONS in {source.filename}{RESET}",
            "Use ↑/↓ to navigate, ENTER to view/edit docs, 'b' to go back",
            "",
        ]
        for i, func in enumerate(source.functions):
            lines.append(
                f"{_marker(i == self.selection)}{_status(func)} {func.name} "
                f"{BLUE}(line {func.line_number}){RESET}"
            )
        return lines

    def _render_detail(self) -> list[str]:
        func = self.current_function
        if func is None:
            return []
        lines = [
            f"{BOLD}{GREEN}FUNCTION: {func.name}{RESET}",
            "Press 'e' to edit documentation, 'v' to view source, "
            "'a' to view auto-parsed info, 'b' to go back",
            "",
            f"{BOLD}{CYAN}File: {RESET}{func.source_file}:{func.line_number}",
            f"{BOLD}{CYAN}Signature: {RESET}{func.signature}",
            f"{BOLD}{CYAN}Return Type: {RESET}{func.return_type}",
        ]
        if func.parameters:
            params = ", ".join(f"{p.display_type} {p.name}" for p in func.parameters)
            lines.append(f"{BOLD}{CYAN}Parameters ({len(func.parameters)}): {RESET}{params}")
        else:
            lines.append(f"{BOLD}{CYAN}Parameters: {RESET}None")
        lines.append("")

        if func.is_documented:
            for attr, value in func.documentation().items():
                lines.extend([f"{BOLD}{CYAN}{FIELD_LABELS[attr]}:{RESET}", value, ""])
        else:
            lines.append(
                f"{YELLOW}This function is not yet documented. "
                f"Press 'e' to add documentation.{RESET}"
            )
            lines.append(
                f"{BLUE}Auto-generated parameter documentation is available "
                f"as a starting point.{RESET}"
            )
        return lines

    def _render_search(self) -> list[str]:
        lines = [
            f'{BOLD}{GREEN}SEARCH RESULTS for "{self.search_term}"{RESET}',
            "Use ↑/↓ to navigate, ENTER to view, 'b' to go back",
            "",
        ]
        for i, func in enumerate(self.search_results):
            lines.append(
                f"{_marker(i == self.selection)}{_status(func)} "
                f"{func.source_file}::{func.name} {BLUE}(line {func.line_number}){RESET}"
            )
        if not self.search_results:
            lines.append(f"{YELLOW}No results found.{RESET}")
        return lines

    def _render_undocumented(self) -> list[str]:
        lines = [
            f"{BOLD}{GREEN}UNDOCUMENTED FUNCTIONS{RESET}",
            "Use ↑/↓ to navigate, ENTER to document, 'b' to go back",
            "",
        ]
        for i, func in enumerate(self.undocumented):
            lines.append(
                f"{_marker(i == self.selection)}{func.source_file}::{func.name} "
                f"{BLUE}(line {func.line_number}){RESET}"
            )
        if not self.undocumented:
            lines.append(f"{GREEN}All functions are documented!{RESET}")
        return lines

    # --- input --------------------------------------------------------------

    def _item_count(self) -> int:
        if self.view is View.FILES:
            return len(self.project.files)
        if self.view is View.FUNCTIONS:
            return self.source.function_count if self.source else 0
        if self.view is View.SEARCH:
            return len(self.search_results)
        if self.view is View.UNDOCUMENTED:
            return len(self.undocumented)
        return 0

    def _move(self, key: str) -> bool:
        if key in (UP, "k"):
            if self.selection > 0:
                self.selection -= 1
            return True
        if key in (DOWN, "j"):
            if self.selection < self._item_count() - 1:
                self.selection += 1
            return True
        return False

    def handle_key(self, key: str) -> bool:
        """Apply one keypress. Returns False when the browser should exit."""
        self.message = ""
        if self.view is not View.DETAIL and self._move(key):
            return True

        handler = {
            View.FILES: self._on_files_key,
            View.FUNCTIONS: self._on_functions_key,
            View.DETAIL: self._on_detail_key,
            View.SEARCH: self._on_search_key,
            View.UNDOCUMENTED: self._on_undocumented_key,
        }[self.view]
        return handler(key)

    def _open_detail(self, func: Function, origin: View) -> None:
        self.current_function = func
        self.detail_origin = origin
        self.view = View.DETAIL

    def _on_files_key(self, key: str) -> bool:
        if key == "q":
            return False
        if key == "r":
            self.project.scan()
            self.selection = min(self.selection, max(len(self.project.files) - 1, 0))
            self.message = f"{GREEN}Rescanned {len(self.project.files)} files.{RESET}"
        elif key == "p" and self.project.files:
            self.show_file_documentation(self.project.files[self.selection])
        elif key == "s":
            term = self._ask("Search term: ")
            if term:
                self.search_term = term
                self.search_results = self.project.search(term)
                self.view = View.SEARCH
                self.selection = 0
        elif key == "u":
            self.undocumented = self.project.list_undocumented()
            self.view = View.UNDOCUMENTED
            self.selection = 0
        elif key == "x":
            self.export()
        elif key == ENTER and self.project.files:
            self.current_file = self.selection
            self.view = View.FUNCTIONS
            self.selection = 0
        return True

    def _on_functions_key(self, key: str) -> bool:
        if key == "b":
            self.view = View.FILES
            self.selection = self.current_file
        elif key == ENTER and self.source and self.source.functions:
            self._open_detail(self.source.functions[self.selection], View.FUNCTIONS)
        return True

    def _on_detail_key(self, key: str) -> bool:
        func = self.current_function
        if key == "b" or func is None:
            self.view = self.detail_origin
            if self.view is View.FUNCTIONS and self.source and func in self.source.functions:
                self.selection = self.source.functions.index(func)
        elif key == "e":
            self.edit_function(func)
        elif key == "a":
            self.show_parsed_info(func)
        elif key == "v":
            self.show_source(func)
        return True

    def _on_search_key(self, key: str) -> bool:
        if key == "b":
            self.view = View.FILES
            self.selection = 0
        elif key == ENTER and self.search_results:
            func = self.search_results[self.selection]
            found = self.project.find_file(func.source_file)
            if found is not None:
                self.current_file = self.project.files.index(found)
            self._open_detail(func, View.SEARCH)
        return True

    def _on_undocumented_key(self, key: str) -> bool:
        if key == "b":
            self.view = View.FILES
            self.selection = 0
        elif key == ENTER and self.undocumented:
            self.edit_function(self.undocumented[self.selection])
            self.undocumented = self.project.list_undocumented()
            self.selection = max(0, min(self.selection, len(self.undocumented) - 1))
        return True

    # --- actions ------------------------------------------------------------

    def _ask(self, message: str) -> str | None:
        try:
            return self.screen.prompt(message)
        except EOFError:
            return None

    def _write_source(self, func: Function) -> None:
        source = self.project.find_file(func.source_file)
        path = source.full_path if source else self.project.root / func.source_file
        lines = function_source(func, path, self.project.settings)
        self.screen.write(f"{BOLD}{CYAN}Function Source Code:{RESET}\n")
        self.screen.write(f"{CYAN}{'-' * 40}{RESET}\n")
        if not lines:
            self.screen.write(
                f"{RED}Could not find function at line {func.line_number}{RESET}\n"
            )
        for number, text in lines:
            self.screen.write(f"{YELLOW}{number:3d}: {RESET}{text}\n")
        self.screen.write(f"{CYAN}{'-' * 40}{RESET}\n")

    def show_source(self, func: Function) -> None:
        self.screen.clear()
        self.screen.write("\n".join(self._header()) + "\n")
        self.screen.write(f"{BOLD}{GREEN}SOURCE CODE: {func.name}{RESET}\n")
        self._write_source(func)
        self.screen.pause("\nPress any key to continue...")

    def show_parsed_info(self, func: Function) -> None:
        self.screen.clear()
        out = self._header() + [
            f"{BOLD}{GREEN}AUTO-PARSED INFORMATION: {func.name}{RESET}",
            "",
            f"{BOLD}{CYAN}Return Type: {RESET}{func.return_type}",
            "",
        ]
        if func.parameters:
            out.append(f"{BOLD}{CYAN}Parsed Parameters:{RESET}")
            for i, p in enumerate(func.parameters, 1):
                flags = [
                    flag
                    for flag, on in (
                        ("const", p.is_const),
                        ("pointer", p.is_pointer),
                        ("array", p.is_array),
                    )
                    if on
                ]
                out.extend(
                    [
                        f"  {i}. {BOLD}{p.name}{RESET}",
                        f"     Type: {p.display_type}",
                        f"     Auto-description: {p.description}",
                        f"     Flags: {' '.join(flags)}",
                        "",
                    ]
                )
        else:
            out.append(f"{BOLD}{CYAN}Parameters: {RESET}None (void function)")
        out.extend([f"{BOLD}{CYAN}Auto-generated parameter documentation:{RESET}", func.parameter_doc])
        self.screen.write("\n".join(out) + "\n")
        self.screen.pause("\nPress any key to go back...")

    def show_file_documentation(self, source: SourceFile) -> None:
        """Print every function of a file with source and documentation."""
        self.screen.clear()
        self.screen.write("\n".join(self._header()) + "\n")
        self.screen.write(f"{BOLD}{GREEN}COMPLETE DOCUMENTATION FOR: {source.filename}{RESET}\n\n")

        for i, func in enumerate(source.functions):
            self.screen.write(f"{RULE}\n")
            self.screen.write(f"{BOLD}{CYAN}FUNCTION: {func.name}{RESET} (Line {func.line_number})\n")
            self.screen.write(f"{RULE}\n")
            self._write_source(func)
            self.screen.write(f"\n{BOLD}{CYAN}DOCUMENTATION:{RESET}\n")
            docs = func.documentation()
            if func.is_documented and docs:
                for attr, value in docs.items():
                    self.screen.write(f"{BOLD}{FIELD_LABELS[attr]}:{RESET} {value}\n")
            else:
                self.screen.write(f"{YELLOW}*** NOT YET DOCUMENTED ***{RESET}\n")
            self.screen.write("\n")

            shown = i + 1
            if shown % FUNCTIONS_PER_PAUSE == 0 and shown < source.function_count:
                self.screen.pause(
                    f"{BLUE}--- Press any key to continue "
                    f"(showing function {shown} of {source.function_count}) ---{RESET}"
                )
                self.screen.write("\n")

        self.screen.write(f"{RULE}\n{BOLD}{GREEN}END OF DOCUMENTATION FOR {source.filename}{RESET}\n")
        self.screen.pause("\nPress any key to continue...")

    def edit_function(self, func: Function) -> None:
        """Prompt for each documentation field and commit the edit."""
        self.screen.clear()
        self.screen.write(f"{BOLD}{CYAN}Editing documentation for: {func.name}{RESET}\n")
        self.screen.write(f"File: {func.source_file}:{func.line_number}\n")
        self._write_source(func)
        self.screen.write(
            f"\n{BOLD}{CYAN}Documentation Editor{RESET}\n"
            "(Leave empty to keep current value, or type new value)\n\n"
        )

        current_params = func.parameters_text or func.parameter_doc.replace("\n", "; ")
        prompts = (
            ("description", "description", func.description),
            ("parameters", "parameters", current_params),
            ("return_value", "return value", func.return_value),
            ("example", "example", func.example),
            ("notes", "notes", func.notes),
        )
        values: dict[str, str] = {}
        for key, label, current in prompts:
            self.screen.write(f"{BOLD}Current {label}:{RESET} {current}\n")
            answer = self._ask(f"New {label}: ")
            if answer is None:
                self.message = f"{YELLOW}Edit cancelled.{RESET}"
                return
            values[key] = answer.strip()

        try:
            self.project.edit(func, values)
        except CdokError as e:
            log.warning("Edit of %s failed: %s", func.name, e)
            self.message = f"{RED}{e}{RESET}"
            return
        self.message = f"{GREEN}Documentation saved!{RESET}"

    def export(self) -> None:
        """Ask for a format and export the whole project."""
        choices = "/".join(EXPORTERS)
        while True:
            answer = self._ask(f"Export format ({choices}, empty to cancel): ")
            if not answer:
                self.message = f"{YELLOW}Export cancelled.{RESET}"
                return
            try:
                get_exporter(answer)
            except ExportFormatError as e:
                self.screen.write(f"{RED}{e}{RESET}\n")
                continue
            break

        try:
            path = self.project.export(answer)
        except OSError as e:
            self.message = f"{RED}Export failed: {e}{RESET}"
            return
        self.message = f"{GREEN}Exported to {path}{RESET}"

    def run(self) -> None:
        """Render/read/dispatch until the user quits."""
        while True:
            self.screen.clear()
            self.screen.write(self.render())
            if not self.handle_key(self.screen.read_key()):
                break

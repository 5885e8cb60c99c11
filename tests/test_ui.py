"""Tests for the interactive browser, driven through a scripted screen."""

import pytest
from cdok import Project, Settings
from cdok.terminal import DOWN, ENTER, UP
from cdok.ui import Browser, View

from tests.helpers import FakeScreen, get_function, write_project


def _browser(project, keys=(), answers=()):
    return Browser(project, FakeScreen(keys, answers))


def _press(browser, *keys):
    for key in keys:
        browser.handle_key(key)


class TestNavigation:
    def test_starts_on_file_list(self, project):
        browser = _browser(project)

        text = browser.render()

        assert browser.view is View.FILES
        assert "math.c (3 functions, 0 documented)" in text
        assert "math.h (2 functions, 0 documented)" in text
        assert "2 files, 5 functions, 0 documented (0.0%)" in text

    def test_selection_is_clamped(self, project):
        browser = _browser(project)

        _press(browser, DOWN, DOWN, DOWN)
        assert browser.selection == 1

        _press(browser, UP, UP)
        assert browser.selection == 0

    def test_vi_keys(self, project):
        browser = _browser(project)

        _press(browser, "j")
        assert browser.selection == 1
        _press(browser, "k")
        assert browser.selection == 0

    def test_open_file_and_function(self, project):
        browser = _browser(project)

        _press(browser, ENTER)
        assert browser.view is View.FUNCTIONS
        assert "FUNCTIONS in math.c" in browser.render()

        _press(browser, DOWN, ENTER)
        assert browser.view is View.DETAIL
        assert browser.current_function.name == "make_buf"
        text = browser.render()
        assert "static void *make_buf(size_t n) {" in text
        assert "not yet documented" in text

    def test_back_from_detail_restores_selection(self, project):
        browser = _browser(project)
        _press(browser, DOWN, ENTER, DOWN, ENTER)
        assert browser.current_function.key == ("math.h", "buffer_len")

        _press(browser, "b")
        assert browser.view is View.FUNCTIONS
        assert browser.selection == 1

        _press(browser, "b")
        assert browser.view is View.FILES
        assert browser.selection == 1

    def test_quit_only_from_file_list(self, project):
        browser = _browser(project)
        _press(browser, ENTER)

        assert browser.handle_key("q") is True
        _press(browser, "b")
        assert browser.handle_key("q") is False

    def test_run_loop(self, project):
        screen = FakeScreen(keys=[ENTER, DOWN, ENTER, "b", "b", "q"])

        Browser(project, screen).run()

        assert screen.output.count("<clear>") == 6
        assert "FUNCTION: make_buf" in screen.text


class TestSearch:
    def test_search_and_open(self, project):
        browser = _browser(project, answers=["buf"])

        _press(browser, "s")
        assert browser.view is View.SEARCH
        assert "math.c::make_buf" in browser.render()
        assert "math.h::buffer_len" in browser.render()

        _press(browser, DOWN, ENTER)
        assert browser.current_function.name == "buffer_len"
        assert browser.source.filename == "math.h"

        _press(browser, "b")
        assert browser.view is View.SEARCH

    def test_no_results(self, project):
        browser = _browser(project, answers=["nothing_here"])

        _press(browser, "s")

        assert "No results found." in browser.render()

    def test_cancel_on_eof(self, project):
        browser = _browser(project)

        _press(browser, "s")

        assert browser.view is View.FILES


class TestEditing:
    def test_document_from_undocumented_list(self, project, c_project):
        browser = _browser(project, answers=["Adds two ints", "", "The sum", "", ""])

        _press(browser, "u")
        assert len(browser.undocumented) == 5
        _press(browser, ENTER)

        add = get_function(project, "math.c", "add")
        assert add.is_documented
        assert add.description == "Adds two ints"
        assert add.return_value == "The sum"
        assert add.parameters_text == (
            "@param a (int) - Parameter; @param b (int) - Parameter"
        )
        assert len(browser.undocumented) == 4
        assert "Documentation saved!" in browser.render()
        assert "DESCRIPTION: Adds two ints" in (c_project / ".project_docs.txt").read_text()

    def test_prompts_in_order(self, project):
        browser = _browser(project, answers=["d", "p", "r", "e", "n"])

        browser.edit_function(get_function(project, "math.c", "add"))

        assert browser.screen.prompts == [
            "New description: ",
            "New parameters: ",
            "New return value: ",
            "New example: ",
            "New notes: ",
        ]

    def test_shows_current_values(self, project):
        func = get_function(project, "math.c", "add")
        project.edit(func, {"description": "Old text"})
        browser = _browser(project, answers=["", "", "", "", ""])

        browser.edit_function(func)

        assert "Current description:" in browser.screen.text
        assert "Old text" in browser.screen.text
        assert func.description == "Old text"

    def test_eof_cancels_without_changes(self, project, c_project):
        browser = _browser(project, answers=["Half done"])
        func = get_function(project, "math.c", "add")

        browser.edit_function(func)

        assert not func.is_documented
        assert func.description == ""
        assert "Edit cancelled." in browser.message
        assert not (c_project / ".project_docs.txt").exists()

    def test_edit_from_detail(self, project):
        browser = _browser(project, answers=["Prints values", "", "", "", ""])
        _press(browser, ENTER, DOWN, DOWN, ENTER)

        _press(browser, "e")

        func = get_function(project, "math.c", "print_values")
        assert func.description == "Prints values"
        assert "Prints values" in browser.render()

    def test_save_failure_reported(self, c_project):
        (c_project / "docs_dir").mkdir()
        project = Project(c_project, Settings(docs_filename="docs_dir"))
        project.scan()
        browser = _browser(project, answers=["text", "", "", "", ""])

        browser.edit_function(get_function(project, "math.c", "add"))

        assert "Cannot write" in browser.message


class TestExport:
    def test_reprompts_on_unknown_format(self, project, c_project):
        browser = _browser(project, answers=["pdf", "md"])

        _press(browser, "x")

        assert len(browser.screen.prompts) == 2
        assert "Unknown export format 'pdf'" in browser.screen.text
        out = c_project / f"{c_project.name}_docs.md"
        assert out.exists()
        assert str(out) in browser.message

    def test_empty_answer_cancels(self, project, c_project):
        browser = _browser(project, answers=[""])

        _press(browser, "x")

        assert "Export cancelled." in browser.message
        assert list(c_project.glob("*_docs.*")) == []


class TestScreens:
    def test_view_source(self, project):
        browser = _browser(project)
        _press(browser, ENTER, ENTER)

        _press(browser, "v")

        text = browser.screen.text
        assert "  6: " in text
        assert "int add(int a, int b)" in text
        assert "    return a + b;" in text
        assert "  9: " in text
        assert " 10: " not in text
        assert browser.screen.pauses == 1

    def test_parsed_info(self, project):
        browser = _browser(project)
        _press(browser, ENTER, DOWN, DOWN, ENTER)

        _press(browser, "a")

        text = browser.screen.text
        assert "Auto-description: String parameter" in text
        assert "Flags: const pointer" in text
        assert "@param values (double[]) - Parameter" in text

    def test_parsed_info_without_parameters(self, tmp_path):
        write_project(tmp_path, {"main.c": "int main(void)\n{\n}\n"})
        project = Project(tmp_path)
        project.scan()
        browser = _browser(project)

        browser.show_parsed_info(get_function(project, "main.c", "main"))

        assert "None (void function)" in browser.screen.text
        assert "No parameters" in browser.screen.text

    @pytest.mark.parametrize("count,pauses", [(3, 1), (4, 2), (7, 3)])
    def test_file_documentation_pauses(self, tmp_path, count, pauses):
        source = "".join(f"int fn{i}(void)\n{{\n}}\n" for i in range(count))
        write_project(tmp_path, {"many.c": source})
        project = Project(tmp_path)
        project.scan()
        browser = _browser(project)

        _press(browser, "p")

        assert browser.screen.pauses == pauses
        assert browser.screen.text.count("*** NOT YET DOCUMENTED ***") == count
        assert "END OF DOCUMENTATION FOR many.c" in browser.screen.text

    def test_rescan(self, project, c_project):
        browser = _browser(project)
        (c_project / "extra.c").write_text("int extra(void)\n")

        _press(browser, "r")

        assert len(project.files) == 3
        assert "Rescanned 3 files." in browser.render()

    def test_empty_project(self, tmp_path):
        project = Project(tmp_path)
        project.scan()
        browser = _browser(project)

        _press(browser, ENTER, "p")

        assert browser.view is View.FILES
        assert "No C files found" in browser.render()

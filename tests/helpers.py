"""Test helpers for building C projects on disk."""

from pathlib import Path

from cdok import Function, Project


def write_project(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative name: content}`` under root."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def get_function(project: Project, filename: str, name: str) -> Function:
    """First function called ``name`` in ``filename``."""
    source = project.find_file(filename)
    assert source is not None, f"{filename} not scanned"
    return next(f for f in source.functions if f.name == name)


class FakeScreen:
    """Scripted stand-in for Terminal.

    ``keys`` feed read_key(), ``answers`` feed prompt(). Running out of
    answers behaves like EOF on stdin.
    """

    def __init__(self, keys=(), answers=()):
        self.keys = list(keys)
        self.answers = list(answers)
        self.output: list[str] = []
        self.prompts: list[str] = []
        self.pauses = 0

    @property
    def text(self) -> str:
        return "".join(self.output)

    def write(self, text: str) -> None:
        self.output.append(text)

    def clear(self) -> None:
        self.output.append("<clear>")

    def read_key(self) -> str:
        assert self.keys, "browser asked for more keys than scripted"
        return self.keys.pop(0)

    def prompt(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def pause(self, message: str = "") -> None:
        self.pauses += 1
        self.output.append(message)

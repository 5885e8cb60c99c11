"""Heuristic C signature parsing.

Works on single source lines without a C front end:

- is_signature_line: decides if a trimmed line may introduce a function
- extract_name / extract_return_type: recover the identifier before '('
  and the text in front of it
- parse_parameter_list: splits the parenthesized list into Parameters

Every function here returns a best-effort result (None or an empty list)
instead of raising; unusual formatting is expected to produce misses.
"""

from __future__ import annotations

import logging

from .config import Settings
from .models import Function, Parameter

log = logging.getLogger(__name__)

# C isspace() set; str.strip() with no argument also strips unicode spaces
_WHITESPACE = " \t\n\v\f\r"

_REJECT_PREFIXES = ("//", "/*", "#", "typedef", "struct", "enum", "union")

# (substrings in name, description), first match wins
_NAME_HINTS = (
    (("count", "size", "len"), "Size/count parameter"),
    (("buffer", "buf"), "Buffer for data storage"),
    (("filename", "file"), "File path or name"),
    (("callback", "cb"), "Callback function"),
)


def trim(text: str) -> str:
    """Strip leading and trailing C whitespace."""
    return text.strip(_WHITESPACE)


def _is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _identifier_start(text: str, end: int) -> int:
    """Index where the identifier run ending just before ``end`` begins.

    Returns ``end`` itself when the character before it is not an
    identifier character.
    """
    start = end
    while start > 0 and _is_ident_char(text[start - 1]):
        start -= 1
    return start


def is_header_file(filename: str, suffix: str = ".h") -> bool:
    return filename.endswith(suffix)


def is_signature_line(line: str, is_header: bool, original: str | None = None) -> bool:
    """Check whether a trimmed line is a candidate function signature.

    Args:
        line: The whitespace-trimmed source line
        is_header: True for header files, where prototypes ending in ';'
            are accepted too
        original: The line before trimming. Top-level signatures are not
            indented, so a leading space or tab here rejects the line.
            Defaults to ``line``.

    Returns:
        True if the line should be handed to the name extractor
    """
    if line.startswith(_REJECT_PREFIXES):
        return False
    if "(" not in line or ")" not in line:
        return False
    raw = line if original is None else original
    if raw.startswith((" ", "\t")):
        return False
    if is_header:
        return bool(line)
    # In .c files a trailing ';' is a forward declaration, not a definition
    return bool(line) and not line.endswith(";")


def extract_name(line: str) -> str | None:
    """Return the identifier immediately before the first '(' or None."""
    paren = line.find("(")
    if paren < 0:
        return None
    start = _identifier_start(line, paren)
    if start == paren:
        return None
    return line[start:paren]


def extract_return_type(line: str) -> str:
    """Return the text in front of the function name.

    ``"void"`` when the line has no '(' at all, ``"int"`` (implicit int)
    when nothing precedes the name.
    """
    paren = line.find("(")
    if paren < 0:
        return "void"
    head = line[:paren]
    start = _identifier_start(head, paren)
    return trim(head[:start]) or "int"


def parameter_list_text(signature: str) -> str:
    """Text between the first '(' and the last ')', trimmed."""
    start = signature.find("(")
    end = signature.rfind(")")
    if start < 0 or end <= start:
        return ""
    return trim(signature[start + 1 : end])


def _describe(name: str, type_: str, is_pointer: bool) -> str:
    for needles, description in _NAME_HINTS:
        if any(n in name for n in needles):
            return description
    if is_pointer and "char" in type_:
        return "String parameter"
    if is_pointer:
        return "Pointer parameter"
    return "Parameter"


def parse_parameter(text: str, max_tokens: int = 10) -> Parameter | None:
    """Parse one parameter such as ``const char *name`` or ``int count``.

    The last whitespace token is the name; leading '*' on it and anything
    from '[' on are folded into the pointer/array flags. Tokens past
    ``max_tokens`` are ignored. Returns None if no name can be recovered.
    """
    text = trim(text)
    is_const = False
    if text.startswith("const "):
        is_const = True
        text = trim(text[len("const ") :])

    tokens = text.split()[:max_tokens]
    if not tokens:
        return None

    candidate = tokens[-1]
    name = candidate.lstrip("*")
    is_pointer = name != candidate
    is_array = "[" in name
    if is_array:
        name = name[: name.index("[")]
    type_ = " ".join(tokens[:-1])

    # "char * name" style: a detached '*' among the type tokens
    if any(token.startswith("*") for token in tokens):
        is_pointer = True

    if not name:
        return None

    return Parameter(
        name=name,
        type=type_,
        is_pointer=is_pointer,
        is_array=is_array,
        is_const=is_const,
        description=_describe(name, type_, is_pointer),
    )


def parse_parameter_list(
    text: str, max_parameters: int = 20, max_tokens: int = 10
) -> list[Parameter]:
    """Split a parameter list on commas and parse each entry.

    ``""`` and ``"void"`` mean no parameters. Empty entries (e.g. from a
    trailing comma) and unparseable entries are dropped. Collection stops
    at ``max_parameters``.
    """
    text = trim(text)
    if text in ("", "void"):
        return []

    params: list[Parameter] = []
    for piece in text.split(","):
        if len(params) >= max_parameters:
            log.debug("Parameter cap %d reached in %r", max_parameters, text)
            break
        if not trim(piece):
            continue
        param = parse_parameter(piece, max_tokens)
        if param is not None:
            params.append(param)
    return params


def generate_parameter_doc(parameters: list[Parameter]) -> str:
    """Render ``@param`` lines, or "No parameters" for an empty list."""
    if not parameters:
        return "No parameters"
    return "\n".join(
        f"@param {p.name} ({p.display_type}) - {p.description}" for p in parameters
    )


def parse_signature(
    line: str,
    filename: str,
    line_number: int,
    settings: Settings | None = None,
) -> Function | None:
    """Build a Function from a classified signature line.

    Returns None when no function name can be extracted.
    """
    name = extract_name(line)
    if not name:
        return None
    settings = settings or Settings()
    return Function(
        name=name,
        signature=line,
        source_file=filename,
        line_number=line_number,
        return_type=extract_return_type(line),
        parameters=parse_parameter_list(
            parameter_list_text(line),
            max_parameters=settings.max_parameters,
            max_tokens=settings.max_parameter_tokens,
        ),
    )

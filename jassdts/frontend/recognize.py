"""Declaration recognizer - extracts types, natives, globals, and functions.

Single forward pass over the lines of one source. The only state carried
between lines is whether we are inside a `globals ... endglobals` block, and
that state starts fresh for every source. Lines that match nothing are not
errors: executable code, blank lines, and comments are simply skipped.
"""

from __future__ import annotations

from ..model import Argument, FunctionDecl, GlobalDecl, Library, NativeDecl, TypeDecl
from .normalize import is_comment_line, normalize_line
from .tokens import TK_OP, TK_WORD, Token, find_keyword, has_keyword, tokenize_line, words

GLOBALS_OPEN: str = "globals"
GLOBALS_CLOSE: str = "endglobals"
NOTHING: str = "nothing"
BOM: str = "\ufeff"

# Leading words that may precede `native`/`function` without changing the shape.
MODIFIERS: set[str] = {"constant", "private", "public"}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class RecognizeError:
    """A reportable condition found while recognizing a source."""

    def __init__(self, path: str, lineno: int, message: str) -> None:
        self.path: str = path
        self.lineno: int = lineno
        self.message: str = message

    def __repr__(self) -> str:
        return self.path + ":" + str(self.lineno) + ": [recognize] " + self.message


class RecognizeResult:
    """Result of recognizing one or more sources."""

    def __init__(self, library: Library | None = None) -> None:
        self.library: Library = library if library is not None else Library()
        self._errors: list[RecognizeError] = []

    def add_error(self, path: str, lineno: int, message: str) -> None:
        self._errors.append(RecognizeError(path, lineno, message))

    def errors(self) -> list[RecognizeError]:
        return self._errors

    def ok(self) -> bool:
        return len(self._errors) == 0

    def merge(self, other: RecognizeResult) -> RecognizeResult:
        self.library.merge(other.library)
        self._errors.extend(other._errors)
        return self


# ---------------------------------------------------------------------------
# Prototypes
# ---------------------------------------------------------------------------


def _split_arguments(takes: str) -> list[Argument]:
    """Split a takes-clause into arguments. `nothing` means no arguments."""
    if takes == NOTHING:
        return []
    arguments: list[Argument] = []
    for piece in takes.split(","):
        parts = piece.strip(" ").split(" ")
        name = parts[1] if len(parts) > 1 else ""
        arguments.append(Argument(parts[0], name))
    return arguments


def _prototype(line: str, body: list[Token]) -> tuple[list[Argument], str]:
    """Split the text after `takes` at `returns`. Returns (arguments, return_type).

    body starts at the `native`/`function` keyword, so body[2] is `takes`.
    """
    takes_end = body[2].end
    r = find_keyword(body, "returns", 3)
    if r < 0:
        return _split_arguments(normalize_line(line[takes_end:])), ""
    takes = normalize_line(line[takes_end : body[r].col])
    returns = normalize_line(line[body[r].end :])
    return _split_arguments(takes), returns


# ---------------------------------------------------------------------------
# Line shapes
# ---------------------------------------------------------------------------


def _all_words(tokens: list[Token]) -> bool:
    for tok in tokens:
        if tok.type != TK_WORD:
            return False
    return True


def _match_global(line: str, tokens: list[Token]) -> GlobalDecl | None:
    """Match `[constant] TYPE [array] NAME [= VALUE]`."""
    is_constant = len(tokens) > 0 and tokens[0].value == "constant"
    rest = tokens[1:] if is_constant else tokens
    eq = 0
    while eq < len(rest) and not (rest[eq].type == TK_OP and rest[eq].value == "="):
        eq += 1
    head = rest[:eq]
    if not _all_words(head):
        return None
    match words(head):
        case [typ, "array", name]:
            is_array = True
        case [typ, name]:
            is_array = False
        case _:
            return None
    value: str | None = None
    if eq < len(rest):
        value = normalize_line(line[rest[eq].end :]) or None
    return GlobalDecl(is_constant, typ, is_array, name, value)


def _recognize_statement(line: str, tokens: list[Token], library: Library) -> None:
    """Try type, native, then function shapes. First match wins."""
    start = 0
    while start < len(tokens) and tokens[start].value in MODIFIERS:
        start += 1
    body = tokens[start:]
    if len(body) < 4 or not _all_words(body[:3]):
        return
    match words(body):
        case ["type", name, "extends", parent, *_] if body[3].type == TK_WORD:
            library.types.append(TypeDecl(name, parent))
        case ["native", name, "takes", *_]:
            arguments, return_type = _prototype(line, body)
            library.natives.append(NativeDecl(name, arguments, return_type))
        case ["function", name, "takes", *_]:
            arguments, return_type = _prototype(line, body)
            library.functions.append(FunctionDecl(name, arguments, return_type))


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def recognize(source: str, path: str = "<input>") -> RecognizeResult:
    """Recognize one source into a fresh Library."""
    result = RecognizeResult()
    library = result.library
    in_globals = False
    opened_at = 0
    if source.startswith(BOM):
        source = source[len(BOM) :]
    lineno = 0
    for raw in source.split("\n"):
        lineno += 1
        if is_comment_line(raw):
            continue
        line = normalize_line(raw)
        tokens = tokenize_line(line)
        if in_globals:
            if has_keyword(tokens, GLOBALS_CLOSE):
                in_globals = False
                continue
            decl = _match_global(line, tokens)
            if decl is not None:
                library.globals.append(decl)
        elif has_keyword(tokens, GLOBALS_OPEN):
            in_globals = True
            opened_at = lineno
        else:
            _recognize_statement(line, tokens, library)
    if in_globals:
        result.add_error(
            path,
            opened_at,
            "globals block opened here is not closed by " + GLOBALS_CLOSE,
        )
    return result


def recognize_sources(sources: list[tuple[str, str]]) -> RecognizeResult:
    """Recognize each (path, text) pair independently and merge in order."""
    merged = RecognizeResult()
    for path, text in sources:
        merged.merge(recognize(text, path))
    return merged

"""Line tokenizer - splits one normalized JASS line into words and operators."""

from __future__ import annotations


# Token type constants
TK_WORD = "WORD"
TK_OP = "OP"


class Token:
    """A token with type, value, and column span [col, end) in its line."""

    def __init__(self, type_: str, value: str, col: int, end: int):
        self.type: str = type_
        self.value: str = value
        self.col: int = col
        self.end: int = end

    def __repr__(self) -> str:
        return "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.col) + ")"


def _is_word_char(c: str) -> bool:
    return (
        (c >= "a" and c <= "z")
        or (c >= "A" and c <= "Z")
        or (c >= "0" and c <= "9")
        or c == "_"
    )


def tokenize_line(line: str) -> list[Token]:
    """Tokenize a single line. Every non-word, non-space character is its own OP."""
    tokens: list[Token] = []
    pos = 0
    length = len(line)
    while pos < length:
        c = line[pos]
        if c == " " or c == "\t":
            pos += 1
            continue
        start = pos
        if _is_word_char(c):
            while pos < length and _is_word_char(line[pos]):
                pos += 1
            tokens.append(Token(TK_WORD, line[start:pos], start, pos))
            continue
        pos += 1
        tokens.append(Token(TK_OP, c, start, pos))
    return tokens


def words(tokens: list[Token]) -> list[str]:
    """Token values, for matching against sequence patterns."""
    return [tok.value for tok in tokens]


def has_keyword(tokens: list[Token], keyword: str) -> bool:
    """Check if any word token equals keyword."""
    for tok in tokens:
        if tok.type == TK_WORD and tok.value == keyword:
            return True
    return False


def find_keyword(tokens: list[Token], keyword: str, start: int = 0) -> int:
    """Index of the first word token equal to keyword at or after start, or -1."""
    i = start
    while i < len(tokens):
        if tokens[i].type == TK_WORD and tokens[i].value == keyword:
            return i
        i += 1
    return -1

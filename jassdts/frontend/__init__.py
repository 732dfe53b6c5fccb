"""Frontend package - converts JASS source text to a declaration Library."""

from .normalize import is_comment_line, normalize_line
from .recognize import RecognizeError, RecognizeResult, recognize, recognize_sources
from .tokens import Token, tokenize_line

__all__ = [
    "RecognizeError",
    "RecognizeResult",
    "Token",
    "is_comment_line",
    "normalize_line",
    "recognize",
    "recognize_sources",
    "tokenize_line",
]

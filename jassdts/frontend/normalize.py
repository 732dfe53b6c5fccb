"""Line normalization shared by every frontend stage."""

from __future__ import annotations

COMMENT_START: str = "//"

# Only these separate words. Other Unicode whitespace is kept as written.
BLANKS: str = " \t"


def is_comment_line(raw: str) -> bool:
    """Check if the first non-blank characters start a comment."""
    return raw.lstrip(BLANKS).startswith(COMMENT_START)


def normalize_line(raw: str) -> str:
    """Strip the trailing comment, trim, and collapse space/tab runs to one space.

    Idempotent. Never fails; "" normalizes to "".
    """
    line = raw.replace("\r", "")
    cut = line.find(COMMENT_START)
    if cut >= 0:
        line = line[:cut]
    parts = line.replace("\t", " ").split(" ")
    return " ".join(p for p in parts if p != "")

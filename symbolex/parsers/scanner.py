"""
Cursor-based text scanning primitives and the lexical skipper.

All functions take the source text and an integer cursor and return a new
cursor; nothing is mutated, so a caller backtracks simply by keeping the
cursor it started from.
"""

import string
from typing import Callable, Optional

from ..errors import UnterminatedCommentError

WHITESPACE = " \t"
NEWLINE = "\n\r"
DECIMAL_DIGITS = string.digits

LINE_COMMENT_START = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"


def scan_chars(text: str, pos: int, chars: str) -> int:
    """Return the end of the run of characters from *chars* starting at *pos*."""
    end = pos
    length = len(text)
    while end < length and text[end] in chars:
        end += 1
    return end


def scan_chars_where(text: str, pos: int, predicate: Callable[[str], bool]) -> int:
    """Return the end of the run of characters satisfying *predicate*."""
    end = pos
    length = len(text)
    while end < length and predicate(text[end]):
        end += 1
    return end


def scan_until(text: str, pos: int, chars: str) -> int:
    """Return the position of the first character from *chars* (or the text end)."""
    return scan_chars_where(text, pos, lambda ch: ch not in chars)


def char_at(text: str, pos: int, chars: str) -> bool:
    """True when the character at *pos* is one of *chars*."""
    return pos < len(text) and text[pos] in chars


def skip_whitespace(text: str, pos: int, newlines: bool = False) -> int:
    return scan_chars(text, pos, WHITESPACE + NEWLINE if newlines else WHITESPACE)


def skip_line_comment(text: str, pos: int) -> Optional[int]:
    """Skip ``// ...`` through the end of the line, including the terminator."""
    if not text.startswith(LINE_COMMENT_START, pos):
        return None
    end = scan_until(text, pos + len(LINE_COMMENT_START), NEWLINE)
    return scan_chars(text, end, NEWLINE)


def skip_block_comment(text: str, pos: int) -> Optional[int]:
    """Skip ``/* ... */``; an opened comment without a close is fatal."""
    if not text.startswith(BLOCK_COMMENT_START, pos):
        return None
    end = text.find(BLOCK_COMMENT_END, pos + len(BLOCK_COMMENT_START))
    if end < 0:
        raise UnterminatedCommentError(
            f'Unterminated comment "{line_fragment(text, pos)}".'
        )
    return end + len(BLOCK_COMMENT_END)


def skip_blank(text: str, pos: int) -> int:
    """Skip any mix of whitespace, newlines, line comments and block comments."""
    while True:
        end = skip_whitespace(text, pos, newlines=True)
        if end > pos:
            pos = end
            continue
        end = skip_line_comment(text, pos)
        if end is None:
            end = skip_block_comment(text, pos)
        if end is None:
            return pos
        pos = end


def find_keyword(text: str, pos: int, keyword: str) -> Optional[int]:
    """
    Find the next occurrence of *keyword* at or after *pos*.

    Returns the cursor just past the keyword, or None when there is no further
    occurrence or nothing follows it.
    """
    index = text.find(keyword, pos)
    if index < 0:
        return None
    end = index + len(keyword)
    return end if end < len(text) else None


def line_fragment(text: str, pos: int) -> str:
    """Raw source text from *pos* up to the end of its line."""
    return text[pos:scan_until(text, pos, NEWLINE)]

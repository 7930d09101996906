"""
Table header directive parser.

A marked block follows the block keyword with a line comment of the form

    localparam  // $table_name : bit_width [, removing_prefix]

Anything that does not match is simply an unmarked block; only a
well-formed header with an unsupported bit width is an error.
"""

import string
from typing import Optional, Tuple

from ..errors import HeaderError
from ..services import Header
from .number_parser import MAX_BIT_WIDTH
from .scanner import (
    DECIMAL_DIGITS,
    LINE_COMMENT_START,
    NEWLINE,
    WHITESPACE,
    char_at,
    scan_chars,
    scan_until,
    skip_whitespace,
)

TABLE_NAME_CHARS = string.ascii_letters + string.digits + "_"
TABLE_MARKER = "$"

# a width beyond a 32-bit int leaves the block unmarked
MAX_WIDTH_TEXT_VALUE = 2**31 - 1


def parse_header(
    text: str, pos: int, max_bit_width: int = MAX_BIT_WIDTH
) -> Optional[Tuple[int, Header]]:
    """
    Try to read a table header right after a block keyword.

    Returns:
        ``(cursor, header)`` on success, or None if the text at *pos* is not
        a header.

    Raises:
        HeaderError: if the header's bit width is outside 1..max_bit_width.
    """
    pos = skip_whitespace(text, pos, newlines=True)

    if not text.startswith(LINE_COMMENT_START, pos):
        return None
    pos = skip_whitespace(text, pos + len(LINE_COMMENT_START))

    if not char_at(text, pos, TABLE_MARKER):
        return None
    pos += 1

    end = scan_chars(text, pos, TABLE_NAME_CHARS)
    if end == pos:
        return None
    table_name = text[pos:end]
    pos = skip_whitespace(text, end)

    if not char_at(text, pos, ":"):
        return None
    pos = skip_whitespace(text, pos + 1)

    end = scan_chars(text, pos, DECIMAL_DIGITS)
    if end == pos:
        return None
    bit_width = int(text[pos:end])
    if bit_width > MAX_WIDTH_TEXT_VALUE:
        return None
    pos = skip_whitespace(text, end)

    removing_prefix = ""
    if char_at(text, pos, ","):
        pos = skip_whitespace(text, pos + 1)
        end = scan_until(text, pos, WHITESPACE + NEWLINE)
        removing_prefix = text[pos:end]
        pos = skip_whitespace(text, end)

    end = scan_chars(text, pos, NEWLINE)
    if end == pos:
        return None
    pos = end

    if not 1 <= bit_width <= max_bit_width:
        raise HeaderError(
            f'Unsupported size ({bit_width} bits) of "{table_name}" '
            f"(size must be from 1 to {max_bit_width} bits)."
        )

    return pos, Header(table_name, bit_width, removing_prefix)

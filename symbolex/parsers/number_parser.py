"""
Verilog number literal parser.

Supported forms, tried in this order:

    <bit_width> ' <radix> <digits>     e.g. 4'b0001, 8 'h FF
    ' <radix> <digits>                 e.g. 'hFF      (32 bits)
    <digits>                           e.g. 1_000     (decimal, 32 bits)

The radix letter is one of b, o, d, h (any case) and ``_`` may separate
digit groups. The literal's own bit width is only range-checked; values are
truncated later to the width declared by the table header.
"""

import string
from typing import NamedTuple, Optional, Tuple

from ..errors import NumberFormatError
from .scanner import DECIMAL_DIGITS, scan_chars, skip_whitespace

DEFAULT_BIT_WIDTH = 32
MAX_BIT_WIDTH = 64

RADIX_LETTERS = {"b": 2, "o": 8, "d": 10, "h": 16}

DIGIT_SEPARATOR = "_"

# digit runs are read with the widest charset; the radix is checked on conversion
VALUE_CHARS = string.hexdigits + DIGIT_SEPARATOR


class NumberLiteral(NamedTuple):
    value: int
    bit_width: int
    radix: int


class _Match(NamedTuple):
    pos: int
    bit_width: int
    radix: int
    digits: str


def _read_bit_width(text: str, pos: int) -> Optional[Tuple[int, int]]:
    end = scan_chars(text, pos, DECIMAL_DIGITS)
    if end == pos:
        return None
    return end, int(text[pos:end])


def _read_radix(text: str, pos: int) -> Optional[Tuple[int, int]]:
    if not text.startswith("'", pos) or pos + 1 >= len(text):
        return None
    radix = RADIX_LETTERS.get(text[pos + 1].lower())
    if radix is None:
        return None
    return pos + 2, radix


def _read_digits(text: str, pos: int) -> Optional[Tuple[int, str]]:
    end = scan_chars(text, pos, VALUE_CHARS)
    if end == pos:
        return None
    return end, text[pos:end].replace(DIGIT_SEPARATOR, "")


def _match_radix_digits(text: str, pos: int) -> Optional[Tuple[int, int, str]]:
    radix_match = _read_radix(text, pos)
    if radix_match is None:
        return None
    pos, radix = radix_match
    digits_match = _read_digits(text, skip_whitespace(text, pos))
    if digits_match is None:
        return None
    pos, digits = digits_match
    return pos, radix, digits


def match_sized_literal(text: str, pos: int) -> Optional[_Match]:
    width_match = _read_bit_width(text, pos)
    if width_match is None:
        return None
    end, bit_width = width_match
    rest = _match_radix_digits(text, skip_whitespace(text, end))
    if rest is None:
        return None
    end, radix, digits = rest
    return _Match(end, bit_width, radix, digits)


def match_unsized_literal(text: str, pos: int) -> Optional[_Match]:
    rest = _match_radix_digits(text, pos)
    if rest is None:
        return None
    end, radix, digits = rest
    return _Match(end, DEFAULT_BIT_WIDTH, radix, digits)


def match_decimal_literal(text: str, pos: int) -> Optional[_Match]:
    digits_match = _read_digits(text, pos)
    if digits_match is None:
        return None
    end, digits = digits_match
    return _Match(end, DEFAULT_BIT_WIDTH, 10, digits)


GRAMMARS = (match_sized_literal, match_unsized_literal, match_decimal_literal)


def parse_number(text: str, pos: int) -> Tuple[int, NumberLiteral]:
    """
    Parse one number literal at *pos*.

    Returns:
        The cursor after the literal and the parsed :class:`NumberLiteral`.

    Raises:
        NumberFormatError: if no form matches, the bit width is outside
            1..64 or the digits do not form a 64-bit unsigned value.
    """
    match = None
    for grammar in GRAMMARS:
        match = grammar(text, pos)
        if match is not None:
            break

    if (
        match is None
        or not 1 <= match.bit_width <= MAX_BIT_WIDTH
        or not match.digits
    ):
        raise _format_error()

    try:
        value = int(match.digits, match.radix)
    except ValueError as e:
        raise _format_error() from e
    if value >= 1 << MAX_BIT_WIDTH:
        raise _format_error()

    return match.pos, NumberLiteral(value, match.bit_width, match.radix)


def _format_error() -> NumberFormatError:
    return NumberFormatError(
        f"Value must be non-negative integer constant with max {MAX_BIT_WIDTH} bits size.",
        max_bit_width=MAX_BIT_WIDTH,
    )

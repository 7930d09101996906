"""
Parser for the ``name = value, name = value ;`` list of a marked block.
"""

import string
from typing import List, Tuple

from ..errors import IdentifierError, SymbolExError, UnterminatedDefinitionError
from ..services import Symbol
from .number_parser import parse_number
from .scanner import char_at, line_fragment, scan_chars, skip_blank

IDENTIFIER_START_CHARS = string.ascii_letters + "_"
IDENTIFIER_CHARS = string.ascii_letters + string.digits + "_$"


def parse_identifier(text: str, pos: int) -> Tuple[int, str]:
    """Read a simple Verilog identifier; escaped identifiers are rejected."""
    if char_at(text, pos, "\\"):
        raise IdentifierError("Escaped identifiers are not supported.")

    if not char_at(text, pos, IDENTIFIER_START_CHARS):
        raise IdentifierError("Missing or invalid identifier.")

    end = scan_chars(text, pos + 1, IDENTIFIER_CHARS)
    return end, text[pos:end]


def parse_symbol(text: str, pos: int) -> Tuple[int, Symbol]:
    # format: identifier = value
    pos, name = parse_identifier(text, pos)
    pos = skip_blank(text, pos)

    if not char_at(text, pos, "="):
        raise UnterminatedDefinitionError(
            'Unexpected end of the definition (expected "=" after identifier).'
        )
    pos = skip_blank(text, pos + 1)

    pos, literal = parse_number(text, pos)
    return pos, Symbol(name, literal.value)


def parse_definitions(text: str, pos: int, table_name: str) -> Tuple[int, List[Symbol]]:
    """
    Parse the comma separated symbol list terminated by ``;``.

    Returns:
        The cursor after the ``;`` and the symbols in declaration order.

    Raises:
        SymbolExError: any failure, with the table name and the offending
            source line fragment added as context.
    """
    symbols: List[Symbol] = []
    symbol_start = pos

    try:
        while True:
            pos = skip_blank(text, pos)
            symbol_start = pos
            pos, symbol = parse_symbol(text, pos)
            symbols.append(symbol)

            pos = skip_blank(text, pos)
            if not char_at(text, pos, ","):
                break
            pos += 1

        if not char_at(text, pos, ";"):
            raise UnterminatedDefinitionError(
                'Unexpected end of the definition (expected ";" after last value).'
            )
    except SymbolExError as err:
        fragment = line_fragment(text, symbol_start)
        raise err.wrap(f'Can\'t analyze source text "{fragment}".').wrap(
            f'Can\'t parse definition of "{table_name}".'
        ) from err

    return pos + 1, symbols

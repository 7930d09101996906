"""
Source text parsers for marked constant blocks.

Modules:
    scanner           - Cursor primitives and the whitespace/comment skipper
    number_parser     - Verilog number literals (sized, unsized, decimal)
    header_parser     - ``// $name:width[,prefix]`` table directive
    definition_parser - ``name = value, ... ;`` symbol list
"""

from .definition_parser import parse_definitions, parse_identifier, parse_symbol
from .header_parser import parse_header
from .number_parser import DEFAULT_BIT_WIDTH, MAX_BIT_WIDTH, NumberLiteral, parse_number
from .scanner import find_keyword, line_fragment, skip_blank

__all__ = [
    "parse_definitions",
    "parse_identifier",
    "parse_symbol",
    "parse_header",
    "parse_number",
    "NumberLiteral",
    "DEFAULT_BIT_WIDTH",
    "MAX_BIT_WIDTH",
    "find_keyword",
    "line_fragment",
    "skip_blank",
]

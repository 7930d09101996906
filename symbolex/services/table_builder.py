"""
Table Builder — serializes a parsed block into waveform viewer text.

Each retained symbol becomes one ``<HEX> <name>`` line, the value masked
to the table's bit width and zero-padded to ``ceil(bit_width / 4)`` digits.
"""

from __future__ import annotations

import logging

from utils.common.console_log import ConsoleLog, Verbosity

from . import SymbolTable

logger = logging.getLogger(__name__)


def bit_width_mask(bit_width: int) -> int:
    return (1 << bit_width) - 1


def hex_digit_count(bit_width: int) -> int:
    return (bit_width + 3) // 4


def format_hex(value: int, digit_count: int = 0) -> str:
    return f"{value:0{digit_count}X}"


def strip_prefix(name: str, prefix: str) -> str:
    """Remove *prefix* from the start of *name* (exact, case-sensitive)."""
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def build_table_text(table: SymbolTable, log: ConsoleLog) -> str:
    """
    Build the lookup table text for *table*.

    Values wider than the table are truncated and names that the removing
    prefix shortens to nothing are dropped; both are reported as warnings.
    """
    mask = bit_width_mask(table.bit_width)
    digit_count = hex_digit_count(table.bit_width)

    lines = []
    was_warning = False

    for symbol in table.symbols:
        qualified = f"{table.source_name}.{table.table_name}.{symbol.name}"
        truncated = symbol.value & mask
        truncated_hex = format_hex(truncated, digit_count)

        if truncated != symbol.value:
            log.warning(
                f"Value of symbol {qualified} was truncated to {table.bit_width} bits "
                f"from value {format_hex(symbol.value)} to {truncated_hex}."
            )
            was_warning = True

        name = strip_prefix(symbol.name, table.removing_prefix)
        if not name:
            log.warning(
                f'Removing prefix "{table.removing_prefix}" shorted the name of the '
                f"symbol {qualified} to empty text."
            )
            was_warning = True
            continue

        lines.append(f"{truncated_hex} {name}\n")

    if was_warning:
        log.write(Verbosity.FILE)

    text = "".join(lines)
    log.write(Verbosity.CONTENT, text.rstrip("\n"))
    logger.debug("Built table %s with %d lines", table.table_name, len(lines))
    return text

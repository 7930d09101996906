import unittest

from symbolex.services import Header, Symbol, SymbolTable
from symbolex.services.table_builder import (
    bit_width_mask,
    build_table_text,
    format_hex,
    hex_digit_count,
    strip_prefix,
)

from helpers import captured_log, output

STATE_SYMBOLS = [
    Symbol("sIdle", 1),
    Symbol("sStartBit", 2),
    Symbol("sDataBit", 4),
    Symbol("sStopBit", 8),
]


def table(symbols, bit_width=4, prefix="", name="State", source="uart"):
    return SymbolTable(source, Header(name, bit_width, prefix), list(symbols))


class TestFormatting(unittest.TestCase):
    def test_mask_and_digit_count_for_every_width(self):
        for width in range(1, 65):
            mask = bit_width_mask(width)
            self.assertEqual(mask, (1 << width) - 1)
            digits = hex_digit_count(width)
            self.assertEqual(digits, -(-width // 4))
            for value in (0, (1 << 64) - 1, 0x123456789ABCDEF0):
                self.assertEqual(len(format_hex(value & mask, digits)), digits, (width, value))

    def test_format_hex_uppercase_and_padding(self):
        self.assertEqual(format_hex(0xab, 4), "00AB")
        self.assertEqual(format_hex(0x1F), "1F")
        self.assertEqual(format_hex(3, hex_digit_count(5)), "03")

    def test_strip_prefix(self):
        self.assertEqual(strip_prefix("sIdle", "s"), "Idle")
        self.assertEqual(strip_prefix("SIdle", "s"), "SIdle")
        self.assertEqual(strip_prefix("sIdle", ""), "sIdle")
        self.assertEqual(strip_prefix("s", "s"), "")
        self.assertEqual(strip_prefix("xs", "s"), "xs")


class TestBuildTableText(unittest.TestCase):
    def test_state_machine_example(self):
        log = captured_log()
        text = build_table_text(table(STATE_SYMBOLS), log)
        self.assertEqual(text, "1 sIdle\n2 sStartBit\n4 sDataBit\n8 sStopBit\n")
        self.assertEqual(output(log), "")

    def test_prefix_removed(self):
        text = build_table_text(table(STATE_SYMBOLS, prefix="s"), captured_log())
        self.assertEqual(text, "1 Idle\n2 StartBit\n4 DataBit\n8 StopBit\n")

    def test_truncation_keeps_symbol_and_warns(self):
        log = captured_log()
        text = build_table_text(table([Symbol("X", 0x1F)]), log)
        self.assertEqual(text, "F X\n")
        self.assertIn(
            "SymbolEx Warning: Value of symbol uart.State.X was truncated to 4 bits "
            "from value 1F to F.",
            output(log),
        )

    def test_name_stripped_to_empty_is_omitted(self):
        log = captured_log()
        symbols = [Symbol("s", 0), Symbol("sRun", 1)]
        text = build_table_text(table(symbols, prefix="s"), log)
        self.assertEqual(text, "1 Run\n")
        self.assertIn(
            'Removing prefix "s" shorted the name of the symbol uart.State.s to empty text.',
            output(log),
        )

    def test_wide_and_narrow_tables(self):
        wide = build_table_text(table([Symbol("All", (1 << 64) - 1)], bit_width=64), captured_log())
        self.assertEqual(wide, "F" * 16 + " All\n")
        narrow = build_table_text(table([Symbol("Bit", 1)], bit_width=1), captured_log())
        self.assertEqual(narrow, "1 Bit\n")
        padded = build_table_text(table([Symbol("Op", 0x3)], bit_width=12), captured_log())
        self.assertEqual(padded, "003 Op\n")

    def test_empty_table(self):
        self.assertEqual(build_table_text(table([]), captured_log()), "")

    def test_content_dump_at_highest_verbosity(self):
        log = captured_log(verbosity=5)
        build_table_text(table(STATE_SYMBOLS[:1]), log)
        self.assertIn("1 sIdle", output(log))

    def test_warnings_silenced_at_verbosity_zero(self):
        log = captured_log(verbosity=0)
        build_table_text(table([Symbol("X", 0x1F)]), log)
        self.assertEqual(output(log), "")


if __name__ == "__main__":
    unittest.main()

import tempfile
import unittest
from pathlib import Path

from symbolex.config import ExtractionConfig
from symbolex.errors import (
    DuplicateTableError,
    ErrorKind,
    FileSystemError,
    HeaderError,
    UnterminatedDefinitionError,
)
from symbolex.services.symbol_table_builder import (
    SymbolTableBuilder,
    is_table_file_name,
    source_base_name,
    table_file_path,
)

from helpers import captured_log, output

UART_SOURCE = """\
module uart_tx (input clk);

    localparam DIVIDER = 868;  // not marked

    localparam  // $State:4,s
        sIdle     = 4'b0001,
        sStartBit = 4'b0010,
        sDataBit  = 4'b0100,   /* shifted */
        sStopBit  = 4'b1000;

    localparam
        // $Cmd:8
        CMD_READ  = 'h0A,
        CMD_WRITE = 8'd11,
        CMD_RESET = 255;

endmodule
"""


class BuilderTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.out = self.root / "out"
        self.out.mkdir()
        self.log = captured_log()
        self.builder = SymbolTableBuilder(ExtractionConfig(), self.log)

    def tearDown(self):
        self._tmp.cleanup()

    def write_source(self, name, text):
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def out_names(self):
        return sorted(p.name for p in self.out.iterdir())


class TestTableFileNames(unittest.TestCase):
    def test_table_file_path(self):
        self.assertEqual(
            table_file_path("/tmp/out", "/src/uart.v", "State"),
            Path("/tmp/out") / "uart.State.txt",
        )

    def test_source_base_name(self):
        self.assertEqual(source_base_name("rtl/uart_tx.sv"), "uart_tx")

    def test_is_table_file_name(self):
        self.assertTrue(is_table_file_name("uart.State.txt", "rtl/uart.v"))
        self.assertTrue(is_table_file_name("UART.State.TXT", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("uart.txt", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("uart..txt", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("uart.a.b.txt", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("uart.State.log", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("uart_rx.State.txt", "rtl/uart.v"))
        self.assertFalse(is_table_file_name("other.State.txt", "rtl/uart.v"))


class TestExtractFile(BuilderTestCase):
    def test_writes_one_file_per_marked_block(self):
        source = self.write_source("uart.v", UART_SOURCE)

        written = self.builder.extract_file(source, self.out)

        self.assertEqual([f.path.name for f in written], ["uart.State.txt", "uart.Cmd.txt"])
        self.assertEqual(self.out_names(), ["uart.Cmd.txt", "uart.State.txt"])
        self.assertEqual(
            (self.out / "uart.State.txt").read_text(),
            "1 Idle\n2 StartBit\n4 DataBit\n8 StopBit\n",
        )
        self.assertEqual(
            (self.out / "uart.Cmd.txt").read_text(),
            "0A CMD_READ\n0B CMD_WRITE\nFF CMD_RESET\n",
        )
        self.assertEqual(written[0].line_count, 4)

    def test_removes_stale_tables_before_regenerating(self):
        source = self.write_source("uart.v", UART_SOURCE)
        for name in ("uart.Old.txt", "UART.Gone.TXT", "uart.txt", "uart.a.b.txt",
                     "other.State.txt", "uart.State.log"):
            (self.out / name).write_text("stale\n")

        self.builder.extract_file(source, self.out)

        self.assertEqual(
            self.out_names(),
            ["other.State.txt", "uart.Cmd.txt", "uart.State.log", "uart.State.txt",
             "uart.a.b.txt", "uart.txt"],
        )

    def test_rerun_drops_tables_no_longer_defined(self):
        source = self.write_source("uart.v", UART_SOURCE)
        self.builder.extract_file(source, self.out)

        source.write_text(UART_SOURCE.replace("// $Cmd:8", "// Cmd"))
        self.builder.extract_file(source, self.out)

        self.assertEqual(self.out_names(), ["uart.State.txt"])

    def test_file_without_blocks_only_cleans(self):
        source = self.write_source("empty.v", "module empty; endmodule\n")
        (self.out / "empty.Old.txt").write_text("stale\n")

        self.assertEqual(self.builder.extract_file(source, self.out), [])
        self.assertEqual(self.out_names(), [])

    def test_unmarked_block_then_marked_block(self):
        source = self.write_source(
            "m.v", "localparam A = 1;\nlocalparam // $T:2\n  x = 5;\n"
        )
        self.builder.extract_file(source, self.out)
        self.assertEqual((self.out / "m.T.txt").read_text(), "1 x\n")
        self.assertIn("truncated to 2 bits from value 5 to 1", output(self.log))

    def test_configured_keyword(self):
        builder = SymbolTableBuilder(ExtractionConfig(keyword="parameter"), self.log)
        source = self.write_source("p.sv", "parameter // $P:16\n  WIDTH = 32;\n")
        builder.extract_file(source, self.out)
        self.assertEqual((self.out / "p.P.txt").read_text(), "0020 WIDTH\n")

    def test_progress_messages(self):
        log = captured_log(verbosity=4)
        builder = SymbolTableBuilder(ExtractionConfig(), log)
        source = self.write_source("uart.v", UART_SOURCE)
        (self.out / "uart.Old.txt").write_text("stale\n")

        builder.extract_file(source, self.out)

        text = output(log)
        self.assertIn(f"Analyzing: {source}", text)
        self.assertIn("Deleting: uart.Old.txt", text)
        self.assertIn("Extracting: State:4,s", text)
        self.assertIn("Extracting: Cmd:8", text)


class TestExtractFileErrors(BuilderTestCase):
    def test_duplicate_table_keeps_earlier_output(self):
        source = self.write_source(
            "dup.v",
            "localparam // $T:4\n a = 1;\nlocalparam // $U:4\n b = 2;\n"
            "localparam // $T:4\n c = 3;\n",
        )
        with self.assertRaises(DuplicateTableError) as ctx:
            self.builder.extract_file(source, self.out)

        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.DUPLICATE_TABLE)
        self.assertEqual(err.context, [f'Problem when processing file "{source}".'])
        self.assertEqual(err.message, 'Multiple definition of "T".')
        self.assertEqual(self.out_names(), ["dup.T.txt", "dup.U.txt"])

    def test_table_names_are_case_sensitive(self):
        source = self.write_source(
            "case.v", "localparam // $t:4\n a = 1;\nlocalparam // $T:4\n b = 2;\n"
        )
        written = self.builder.extract_file(source, self.out)
        self.assertEqual(len(written), 2)

    def test_header_width_error(self):
        source = self.write_source("wide.v", "localparam // $W:65\n a = 1;\n")
        with self.assertRaises(HeaderError) as ctx:
            self.builder.extract_file(source, self.out)
        self.assertTrue(str(ctx.exception).startswith('Problem when processing file "'))

    def test_definition_error_chain(self):
        source = self.write_source("bad.v", "localparam // $T:4\n a = 1\nendmodule\n")
        with self.assertRaises(UnterminatedDefinitionError) as ctx:
            self.builder.extract_file(source, self.out)
        self.assertEqual(
            str(ctx.exception).splitlines(),
            [
                f'Problem when processing file "{source}".',
                'Can\'t parse definition of "T".',
                'Can\'t analyze source text "a = 1".',
                'Unexpected end of the definition (expected ";" after last value).',
            ],
        )

    def test_missing_output_directory(self):
        source = self.write_source("uart.v", UART_SOURCE)
        with self.assertRaises(FileSystemError) as ctx:
            self.builder.extract_file(source, self.root / "missing")
        self.assertEqual(ctx.exception.kind, ErrorKind.FILE_SYSTEM)

    def test_missing_source_file(self):
        with self.assertRaises(FileSystemError) as ctx:
            self.builder.extract_file(self.root / "nope.v", self.out)
        self.assertIn("Can not read file", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()

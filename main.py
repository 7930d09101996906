#!/usr/bin/env python
"""
main.py

Command-line entry point for SymbolEx, the Verilog/SystemVerilog symbol
extractor.

For every ``localparam`` block marked with a ``// $table:width[,prefix]``
comment the tool writes ``<output_dir>/<source>.<table>.txt`` containing one
``<HEX> <name>`` line per symbol, ready to be used as a waveform viewer
translate file.

Stages:
1. Configuration: symbolex.yaml / .env / environment, then CLI arguments
2. Output directory preparation
3. Extraction of a single source file or every .v/.sv file of a directory
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from symbolex import __version__
from symbolex.config import ExtractionConfig
from symbolex.core.file_processor import FileProcessor
from symbolex.errors import ArgumentError, FileSystemError, SymbolExError
from symbolex.services.symbol_table_builder import SymbolTableBuilder
from utils.common.console_log import MAX_VERBOSITY, ConsoleLog
from utils.parsers.global_config_parser import ConfigError, ConfigValidationError, GlobalConfig

logger = logging.getLogger(__name__)

PROGRAM_DESCRIPTION = (
    f"Symbol Extractor {__version__}\n"
    "Tool for extracting symbols from verilog source files."
)

SYNTAX = (
    f"Syntax: symbolex [--verbosity 0-{MAX_VERBOSITY}] "
    "verilog_file_or_folder [output_folder]"
)


def resolve_log_level(level_name: Optional[str], debug: bool = False) -> int:
    """Root logging level: --debug, else logging.level / LOG_LEVEL, else WARNING."""
    if debug:
        return logging.DEBUG
    if not level_name:
        return logging.WARNING
    level = logging.getLevelName(str(level_name).strip().upper())
    if not isinstance(level, int):
        raise ConfigValidationError(f"Unknown logging level: {level_name!r}")
    return level


class SymbolExtractor:
    """Resolves configuration and runs one extraction."""

    def __init__(self, args: argparse.Namespace, console: Optional[Console] = None):
        self.args = args
        self.console = console
        self.config: Optional[ExtractionConfig] = None
        self.log: Optional[ConsoleLog] = None
        self.source_path: Optional[Path] = None
        self.output_dir: Optional[Path] = None
        self._create_output_dir = False

    def setup(self) -> None:
        """Load configuration and resolve source and output paths."""
        global_config = GlobalConfig(config_file=self.args.config_file)
        logging.getLogger().setLevel(
            resolve_log_level(global_config.get("logging.level"), self.args.debug)
        )
        base = ExtractionConfig.from_global_config(global_config)
        self.config = ExtractionConfig.from_cli_args(self.args, base)
        self.log = ConsoleLog(self.config.verbosity, console=self.console)

        source = self.args.source_path or global_config.get_path("paths.source_path")
        if not source:
            raise ArgumentError(f"Missing path to source verilog file or folder.\n\n{SYNTAX}")
        self.source_path = Path(source)

        output = self.args.output_dir or global_config.get_path("paths.output_dir")
        self._create_output_dir = bool(output)
        self.output_dir = Path(output) if output else Path(os.getcwd())

    def prepare_output_directory(self) -> None:
        if not self._create_output_dir:
            return
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(
                f'Can\'t create output directory "{self.output_dir}".\n{e}'
            ) from e

    def run(self) -> int:
        self.setup()

        if not self.source_path.exists():
            raise FileSystemError(
                f'Verilog source file or folder "{self.source_path}" not found.'
            )
        self.prepare_output_directory()

        builder = SymbolTableBuilder(self.config, self.log)
        processor = FileProcessor(self.config, builder)
        written = processor.extract(self.source_path, self.output_dir)

        logger.info("Wrote %d table file(s) to %s", len(written), self.output_dir)
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbolex",
        description="SymbolEx: extract marked localparam symbols from Verilog/SystemVerilog "
                    "sources into waveform viewer lookup tables",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "source_path",
        nargs="?",
        default=None,
        help="Verilog source file, or folder whose .v/.sv files are processed",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="Directory for table files (created if missing; default: current directory)",
    )
    parser.add_argument(
        "--verbosity",
        type=int,
        choices=range(0, MAX_VERBOSITY + 1),
        default=None,
        metavar=f"0-{MAX_VERBOSITY}",
        help="0 errors, 1 warnings, 2 files, 3 tables, 4 deletions, 5 table contents "
             "(default: logging.verbosity from config, else 1)",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        help="Path to symbolex.yaml (overrides auto-discovery)",
    )
    parser.add_argument(
        "-D", "--debug",
        action="store_true",
        help="Enable debug logging with full tracebacks",
    )
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    console = console or Console(highlight=False, emoji=False)

    if not argv:
        console.print(f"{PROGRAM_DESCRIPTION}\n\n{SYNTAX}", markup=False, highlight=False, emoji=False)
        return 0

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    extractor = SymbolExtractor(args, console=console)
    try:
        return extractor.run()
    except (SymbolExError, ConfigError) as e:
        log = extractor.log or ConsoleLog(console=console)
        log.error(str(e))
        logger.debug("Extraction failed", exc_info=args.debug)
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Extraction interrupted by user[/yellow]")
        return 1


if __name__ == "__main__":
    sys.exit(main())

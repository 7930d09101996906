"""
Symbol Table Builder — per-source-file extraction.

Drives one Verilog/SystemVerilog file end to end: removes the table files
generated for it by earlier runs, scans the text for marked blocks, parses
every block and writes one ``<source>.<table>.txt`` file per block.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from utils.common.console_log import ConsoleLog, Verbosity

from ..config import ExtractionConfig
from ..errors import DuplicateTableError, FileSystemError, SymbolExError
from ..parsers.definition_parser import parse_definitions
from ..parsers.header_parser import parse_header
from ..parsers.scanner import find_keyword
from . import DefinedTableNames, SymbolTable, TableFile
from .table_builder import build_table_text

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def source_base_name(source_path: PathLike) -> str:
    """File name without directory and without its last extension."""
    return Path(source_path).stem


def table_file_path(
    output_dir: PathLike,
    source_path: PathLike,
    table_name: str,
    table_extension: str = "txt",
) -> Path:
    return Path(output_dir) / f"{source_base_name(source_path)}.{table_name}.{table_extension}"


def is_table_file_name(
    file_name: str,
    source_path: PathLike,
    table_extension: str = "txt",
) -> bool:
    """
    True when *file_name* looks like ``<source>.<table>.<ext>`` for *source_path*.

    The base name and extension compare case-insensitively; the table part
    must be non-empty and contain no dots.
    """
    base = source_base_name(source_path).lower()
    lowered = file_name.lower()
    head = base + "."
    tail = "." + table_extension.lower()

    if not (lowered.startswith(head) and lowered.endswith(tail)):
        return False
    if len(lowered) < len(head) + len(tail):
        return False

    table_part = file_name[len(head):len(file_name) - len(tail)]
    return bool(table_part) and "." not in table_part


class SymbolTableBuilder:
    """
    Extracts every marked block of one source file into table files.

    Table names must be unique within a file (case-sensitive). A fatal error
    stops the file; tables written before it stay on disk.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None, log: Optional[ConsoleLog] = None) -> None:
        self.config = config or ExtractionConfig()
        self.log = log or ConsoleLog(self.config.verbosity)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def extract_file(self, source_path: PathLike, output_dir: PathLike) -> List[TableFile]:
        """
        Regenerate all table files of *source_path* inside *output_dir*.

        Returns:
            The table files written, in source order.

        Raises:
            SymbolExError: wrapped with the source file path.
        """
        source_path = Path(source_path)
        output_dir = Path(output_dir)

        self.log.write(Verbosity.TABLE)
        self.log.write(Verbosity.FILE, f"Analyzing: {source_path}")

        try:
            self.clean_output_directory(source_path, output_dir)
            text = self._read_source(source_path)
            return self._extract_tables(text, source_path, output_dir)
        except SymbolExError as err:
            raise err.wrap(f'Problem when processing file "{source_path}".') from err

    def clean_output_directory(self, source_path: PathLike, output_dir: PathLike) -> List[Path]:
        """Delete every stale table file generated for *source_path*."""
        deleted: List[Path] = []
        output_dir = Path(output_dir)

        try:
            entries = sorted(os.scandir(output_dir), key=lambda entry: entry.name)
        except OSError as e:
            raise FileSystemError(f'Can\'t list directory "{output_dir}".\n{e}') from e

        for entry in entries:
            if not entry.is_file():
                continue
            if not is_table_file_name(entry.name, source_path, self.config.table_extension):
                continue

            self.log.write(Verbosity.DELETE, f"Deleting: {entry.name}")
            try:
                os.remove(entry.path)
            except OSError as e:
                raise FileSystemError(f'Can\'t delete file "{entry.path}".\n{e}') from e
            deleted.append(Path(entry.path))

        return deleted

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _extract_tables(self, text: str, source_path: Path, output_dir: Path) -> List[TableFile]:
        source_name = source_base_name(source_path)
        defined = DefinedTableNames()
        written: List[TableFile] = []

        pos = 0
        while True:
            keyword_end = find_keyword(text, pos, self.config.keyword)
            if keyword_end is None:
                break

            parsed = parse_header(text, keyword_end)
            if parsed is None:
                pos = keyword_end
                continue
            pos, header = parsed

            if header.table_name in defined:
                raise DuplicateTableError(f'Multiple definition of "{header.table_name}".')
            defined.add(header.table_name)

            self.log.write(Verbosity.CONTENT)
            self.log.write(Verbosity.TABLE, f"Extracting: {header.describe()}")

            pos, symbols = parse_definitions(text, pos, header.table_name)
            table = SymbolTable(source_name, header, symbols)

            table_file = TableFile(
                table_file_path(output_dir, source_path, header.table_name, self.config.table_extension),
                build_table_text(table, self.log),
            )
            self._write_table(table_file)
            written.append(table_file)

        logger.debug("%s: %d table(s) written", source_path, len(written))
        return written

    def _read_source(self, source_path: Path) -> str:
        try:
            return source_path.read_text(encoding=self.config.encoding, errors="replace")
        except (OSError, LookupError) as e:
            raise FileSystemError(f'Can not read file "{source_path}".\n{e}') from e

    def _write_table(self, table_file: TableFile) -> None:
        try:
            with open(table_file.path, "w", encoding="utf-8", newline="\n") as f:
                f.write(table_file.content)
        except OSError as e:
            raise FileSystemError(f'Can not write file "{table_file.path}".\n{e}') from e

"""
Verilog/SystemVerilog source discovery and dispatch.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from ..config import ExtractionConfig
from ..errors import FileSystemError
from ..services import TableFile
from ..services.symbol_table_builder import SymbolTableBuilder

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileProcessor:
    """
    Finds source files and hands them to a :class:`SymbolTableBuilder`.

    Directories are scanned non-recursively; only regular files whose
    extension (case-insensitive) is listed in the configuration are
    processed. Files are handled one after another and the first fatal
    error ends the whole run.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        builder: Optional[SymbolTableBuilder] = None,
    ):
        self.config = config or ExtractionConfig()
        self.builder = builder or SymbolTableBuilder(self.config)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def is_source_file(self, path: PathLike) -> bool:
        """Check the extension of *path* against the configured source extensions."""
        return Path(path).suffix.lower() in self.config.source_extensions

    def discover(self, input_dir: PathLike) -> List[Path]:
        """List the source files directly inside *input_dir*, sorted by name."""
        input_dir = Path(input_dir)
        try:
            entries = sorted(os.scandir(input_dir), key=lambda entry: entry.name)
        except OSError as e:
            raise FileSystemError(f'Can\'t list directory "{input_dir}".\n{e}') from e

        files = [
            Path(entry.path)
            for entry in entries
            if entry.is_file() and self.is_source_file(entry.name)
        ]
        logger.debug("Discovered %d source file(s) in %s", len(files), input_dir)
        return files

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def extract_directory(self, input_dir: PathLike, output_dir: PathLike) -> List[TableFile]:
        written: List[TableFile] = []
        for source_path in self.discover(input_dir):
            written.extend(self.builder.extract_file(source_path, output_dir))
        return written

    def extract(self, source_path: PathLike, output_dir: PathLike) -> List[TableFile]:
        """Process a single file or every source file of a directory."""
        source_path = Path(source_path)
        if not source_path.exists():
            raise FileSystemError(f'Verilog source file or folder "{source_path}" not found.')

        if source_path.is_dir():
            return self.extract_directory(source_path, output_dir)
        return self.builder.extract_file(source_path, output_dir)

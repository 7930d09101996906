"""
SymbolEx — Symbol extractor for Verilog/SystemVerilog sources.

Finds ``localparam`` blocks marked with a ``// $table:width[,prefix]``
comment and writes each block's symbols as a ``<HEX> <name>`` lookup
table for waveform viewers (GTKWave translate filter files).

Packages:
    symbolex.parsers   - Cursor-based scanner, number, header and symbol list parsers
    symbolex.services  - Data models, table text builder, per-file extraction
    symbolex.core      - Source discovery and directory dispatch
"""

__version__ = "1.0.0"

from .config import ExtractionConfig
from .core.file_processor import FileProcessor
from .errors import ErrorKind, SymbolExError
from .services.symbol_table_builder import SymbolTableBuilder

__all__ = [
    "ExtractionConfig",
    "FileProcessor",
    "SymbolTableBuilder",
    "SymbolExError",
    "ErrorKind",
]

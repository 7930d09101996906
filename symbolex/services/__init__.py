"""
Symbol Extraction — Data Models.

Canonical dataclass definitions shared by the parsers, the table builder
and the file/directory orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set


# ---------------------------------------------------------------------------
# Parsed Block
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Header:
    """The ``// $name:width[,prefix]`` directive of one marked block."""
    table_name: str
    bit_width: int
    removing_prefix: str = ""

    def describe(self) -> str:
        suffix = f",{self.removing_prefix}" if self.removing_prefix else ""
        return f"{self.table_name}:{self.bit_width}{suffix}"


@dataclass(frozen=True)
class Symbol:
    """A single ``name = value`` definition."""
    name: str
    value: int


@dataclass
class SymbolTable:
    """All symbols of one marked block, in declaration order."""
    source_name: str  # source file base name without extension
    header: Header
    symbols: List[Symbol] = field(default_factory=list)

    @property
    def table_name(self) -> str:
        return self.header.table_name

    @property
    def bit_width(self) -> int:
        return self.header.bit_width

    @property
    def removing_prefix(self) -> str:
        return self.header.removing_prefix


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass
class TableFile:
    """A generated lookup table file."""
    path: Path
    content: str

    @property
    def line_count(self) -> int:
        return self.content.count("\n")


@dataclass
class DefinedTableNames:
    """Table names already seen in one source file (case-sensitive)."""
    names: Set[str] = field(default_factory=set)

    def __contains__(self, table_name: str) -> bool:
        return table_name in self.names

    def add(self, table_name: str) -> None:
        self.names.add(table_name)

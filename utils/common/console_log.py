"""
Verbosity-filtered console output.

A single :class:`ConsoleLog` is created by the entry point and handed to
every component that reports progress or warnings; there is no global
verbosity state.

Levels:
    0  errors
    1  warnings (default)
    2  analyzed source files
    3  extracted tables
    4  deleted stale table files
    5  generated table contents
"""

import logging
from enum import IntEnum
from typing import Optional

from rich.console import Console

logger = logging.getLogger(__name__)


class Verbosity(IntEnum):
    ERROR = 0
    WARNING = 1
    FILE = 2
    TABLE = 3
    DELETE = 4
    CONTENT = 5


MAX_VERBOSITY = int(max(Verbosity))


class ConsoleLog:
    """Prints messages whose level does not exceed the verbosity threshold."""

    def __init__(self, verbosity: int = Verbosity.WARNING, console: Optional[Console] = None):
        if not 0 <= verbosity <= MAX_VERBOSITY:
            raise ValueError(f"Verbosity level must be from 0 to {MAX_VERBOSITY}, got {verbosity}")
        self.verbosity = int(verbosity)
        self.console = console or Console(highlight=False, emoji=False)
        self._was_written = False

    def enabled(self, level: int) -> bool:
        return level <= self.verbosity

    def write(self, level: int, message: str = "", style: Optional[str] = None) -> None:
        if not self.enabled(level):
            return

        # separate an error from whatever was printed before it
        if self._was_written and level == Verbosity.ERROR:
            self.console.print()

        self.console.print(message, style=style, markup=False, highlight=False, emoji=False, soft_wrap=True)
        self._was_written = True
        logger.debug("console[%d]: %s", level, message)

    def warning(self, message: str) -> None:
        self.write(Verbosity.WARNING, f"SymbolEx Warning: {message}", style="yellow")

    def error(self, message: str) -> None:
        self.write(Verbosity.ERROR, f"SymbolEx Error:\n{message}", style="red")

    def __repr__(self) -> str:
        return f"ConsoleLog(verbosity={self.verbosity})"

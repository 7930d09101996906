"""
utils.common - Standalone helpers shared by the SymbolEx packages.

Modules:
    console_log - Verbosity-filtered rich console output (ConsoleLog)
"""

from utils.common.console_log import (
    ConsoleLog,
    Verbosity,
    MAX_VERBOSITY,
)

__all__ = [
    "ConsoleLog",
    "Verbosity",
    "MAX_VERBOSITY",
]

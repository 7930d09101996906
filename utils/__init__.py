"""
utils - Shared utilities for SymbolEx.

Subpackages:
    utils.common   - Console output (ConsoleLog)
    utils.parsers  - Configuration parsing (GlobalConfig)
"""

__version__ = "1.0.0"

"""
SymbolEx — Error types.

Every fatal condition is a :class:`SymbolExError` tagged with an
:class:`ErrorKind`. Each calling layer adds one line of context with
:meth:`SymbolExError.wrap` before re-raising, so the final message reads
from the outermost context (file) down to the original cause (symbol).
"""

import copy
from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    GENERAL = "general"
    HEADER = "header"
    NUMBER_FORMAT = "number_format"
    IDENTIFIER = "identifier"
    UNTERMINATED_DEFINITION = "unterminated_definition"
    UNTERMINATED_COMMENT = "unterminated_comment"
    DUPLICATE_TABLE = "duplicate_table"
    FILE_SYSTEM = "file_system"
    ARGUMENT = "argument"


class SymbolExError(Exception):
    """Base error for symbol extraction."""

    kind: ErrorKind = ErrorKind.GENERAL

    def __init__(self, message: str, context: Optional[List[str]] = None) -> None:
        self.message = message
        self.context: List[str] = list(context or [])
        super().__init__(str(self))

    def wrap(self, context: str) -> "SymbolExError":
        """Return a copy of this error with *context* prepended to the chain."""
        wrapped = copy.copy(self)
        wrapped.context = [context] + self.context
        wrapped.args = (str(wrapped),)
        return wrapped

    def __str__(self) -> str:
        return "\n".join(self.context + [self.message])


class HeaderError(SymbolExError):
    """Marked block header is well-formed but carries an invalid bit width."""

    kind = ErrorKind.HEADER


class NumberFormatError(SymbolExError):
    """No literal grammar matched or the literal does not convert."""

    kind = ErrorKind.NUMBER_FORMAT

    def __init__(
        self,
        message: str,
        context: Optional[List[str]] = None,
        max_bit_width: int = 64,
    ) -> None:
        self.max_bit_width = max_bit_width
        super().__init__(message, context)


class IdentifierError(SymbolExError):
    kind = ErrorKind.IDENTIFIER


class UnterminatedDefinitionError(SymbolExError):
    kind = ErrorKind.UNTERMINATED_DEFINITION


class UnterminatedCommentError(SymbolExError):
    kind = ErrorKind.UNTERMINATED_COMMENT


class DuplicateTableError(SymbolExError):
    kind = ErrorKind.DUPLICATE_TABLE


class FileSystemError(SymbolExError):
    kind = ErrorKind.FILE_SYSTEM


class ArgumentError(SymbolExError):
    kind = ErrorKind.ARGUMENT

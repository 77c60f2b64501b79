"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        2000-2999: Tree processing errors (serialization)
        3000-3999: Syntax errors (parser failures)
    """

    # Tree processing errors (2000-2999)
    MAX_DEPTH_EXCEEDED = 2010

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    INVALID_SYNTAX = 3003
    TRAILING_CONTENT = 3004
    NESTING_DEPTH_EXCEEDED = 3005

    # Literal errors
    EXPECTED_NUMBER = 3101
    INVALID_NUMBER = 3102
    MISSING_NUMBER = 3103
    INTEGER_OUT_OF_RANGE = 3104
    EXPECTED_STRING = 3110
    UNTERMINATED_STRING = 3111
    INVALID_ESCAPE = 3112
    ESCAPE_TOO_SHORT = 3113
    ESCAPE_NOT_HEX = 3114
    INVALID_CODEPOINT = 3115
    EXPECTED_IDENTIFIER = 3120

    # Structural list errors
    INVALID_COUNT = 3201
    VARARG_ORDER = 3202
    DUPLICATE_VARARG = 3203


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        """Number of characters covered by the span."""
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors not tied to input text)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[UNTERMINATED_STRING]: Unterminated string
              --> line 1, column 5
              = help: Close the string with the same quote it was opened with

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

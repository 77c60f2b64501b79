"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern used by every Cascade sub-parser.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - Every advance() returns NEW cursor (prevents infinite loops)
    - End of input reads as a single space sentinel via ``char``, so
      lookahead never needs a None check
    - Line:column computed on-demand (O(n) only for errors)

Result Type:
    Sub-parsers return ``ParseResult[T] | ParseError``. A ParseError is a
    value, not an exception; callers short-circuit with
    ``if isinstance(result, ParseError): return result``. Only the entry
    point turns it into a raised CascadeSyntaxError.
"""

from dataclasses import dataclass, replace

from cascade.diagnostics import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["EOF_SENTINEL", "Cursor", "ParseError", "ParseResult"]

# Character reported by Cursor.char at end of input. A space can never
# start or continue any construct, so it terminates every scanning loop.
EOF_SENTINEL: str = " "

# Whitespace between tokens: space, tab, LF, CR.
_WHITESPACE: frozenset[str] = frozenset(" \t\n\r")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).char  # End of input reads as a space
        ' '
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    @property
    def char(self) -> str:
        """Current character, or EOF_SENTINEL at end of input. Never fails."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return EOF_SENTINEL

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get up to n characters from the current position without advancing."""
        return self.source[self.pos : self.pos + n]

    def skip_whitespace(self) -> "Cursor":
        """Skip whitespace characters (space, tab, newline, carriage return).

        Example:
            >>> cursor = Cursor(" \\t\\n\\r hello", 0)
            >>> cursor.skip_whitespace().pos
            5
        """
        pos = self.pos
        source = self.source
        while pos < len(source) and source[pos] in _WHITESPACE:
            pos += 1
        if pos == self.pos:
            return self
        return Cursor(source, pos)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult('h', cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse failure with location.

    Attributes:
        diagnostic: Span-less diagnostic from ErrorTemplate
        cursor: Cursor at the start of the offending text
        length: Number of characters the error covers

    Example:
        >>> error = ParseError(ErrorTemplate.invalid_syntax(), Cursor("a\\n#", 2), 1)
        >>> error.format_error()
        '2:1: Invalid syntax'
    """

    diagnostic: Diagnostic
    cursor: Cursor
    length: int = 0

    @classmethod
    def at(cls, diagnostic: Diagnostic, cursor: Cursor) -> "ParseError":
        """Error implicating the single character under the cursor.

        Covers one character, or none when the cursor is at end of input.
        """
        return cls(diagnostic, cursor, 0 if cursor.is_eof else 1)

    @classmethod
    def between(cls, diagnostic: Diagnostic, start: Cursor, end: Cursor) -> "ParseError":
        """Error covering the text from ``start`` up to ``end``."""
        return cls(diagnostic, start, end.pos - start.pos)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> DiagnosticCode:
        return self.diagnostic.code

    @property
    def offset(self) -> int:
        return self.cursor.pos

    def to_diagnostic(self) -> Diagnostic:
        """Attach the source location to the diagnostic."""
        line, col = self.cursor.compute_line_col()
        span = SourceSpan(
            start=self.offset, end=self.offset + self.length, line=line, column=col
        )
        return replace(self.diagnostic, span=span)

    def format_error(self) -> str:
        """Format error as ``line:column: message``."""
        line, col = self.cursor.compute_line_col()
        return f"{line}:{col}: {self.message}"

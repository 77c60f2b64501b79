"""Cascade exception hierarchy with structured diagnostics.

All exceptions can carry a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class CascadeError(Exception):
    """Base exception for all Cascade errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CascadeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class CascadeSyntaxError(CascadeError):
    """Cascade syntax error during parsing.

    Parsing stops at the first error; no partial AST is ever returned.

    Attributes:
        message: Human-readable description
        offset: 0-based position in the source where the error starts
        length: Number of characters the error covers (0 at end of input)
        source: The complete expression that failed to parse
    """

    def __init__(
        self,
        diagnostic: Diagnostic,
        *,
        offset: int,
        length: int,
        source: str,
    ) -> None:
        super().__init__(diagnostic)
        self.message = diagnostic.message
        self.offset = offset
        self.length = length
        self.source = source

    def __str__(self) -> str:
        return f"{self.message} (at offset {self.offset})"

    def format_with_context(self) -> str:
        """Format error with the offending source line and a caret underline.

        Example:
            >>> try:
            ...     parse("(fun 1 'abc")
            ... except CascadeSyntaxError as e:
            ...     print(e.format_with_context())
            1:8: Unterminated string
            <BLANKLINE>
               1 | (fun 1 'abc
                 |        ^^^^
        """
        line_start = self.source.rfind("\n", 0, self.offset) + 1
        line_end = self.source.find("\n", self.offset)
        if line_end < 0:
            line_end = len(self.source)
        line_no = self.source.count("\n", 0, self.offset) + 1
        col = self.offset - line_start + 1

        # Underline at least one column, never past the end of the line
        underline = max(1, min(self.length, line_end - self.offset))

        gutter = f"{line_no:4} | "
        return "\n".join(
            [
                f"{line_no}:{col}: {self.message}",
                "",
                gutter + self.source[line_start:line_end],
                " " * (len(gutter) - 2) + "| " + " " * (col - 1) + "^" * underline,
            ]
        )

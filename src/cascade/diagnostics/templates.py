"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Templates return span-less diagnostics; the parser attaches the source
    location when the error is raised (see ``ParseError.to_diagnostic``).
    """

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof() -> Diagnostic:
        """Input ended inside a compound expression."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message="Unexpected end of string",
            hint="Close the list or application with its matching delimiter",
        )

    @staticmethod
    def unexpected_character(expected: str, found: str | None) -> Diagnostic:
        """A required delimiter is missing.

        Args:
            expected: The delimiter the grammar requires
            found: The character actually present (None at end of input)
        """
        got = "end of input" if found is None else f"'{found}'"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=f"Expected '{expected}'. Got: {got}",
        )

    @staticmethod
    def invalid_syntax() -> Diagnostic:
        """No expression can start with the current character."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_SYNTAX,
            message="Invalid syntax",
            hint="An expression starts with ( [ < ` ? a quote, a number or an identifier",
        )

    @staticmethod
    def illegal_expression() -> Diagnostic:
        """Content remains after a complete top-level expression."""
        return Diagnostic(
            code=DiagnosticCode.TRAILING_CONTENT,
            message="Illegal expression",
            hint="Wrap multiple expressions in a function application",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Compound expressions are nested deeper than the parser allows."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            hint="Increase max_nesting_depth in the CascadeParser constructor",
        )

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    @staticmethod
    def expected_number() -> Diagnostic:
        """A number list element or literal has no number characters."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_NUMBER,
            message="Expected a number",
        )

    @staticmethod
    def invalid_number(text: str) -> Diagnostic:
        """The scanned run is not a decimal floating-point literal.

        Args:
            text: The scanned run of number characters
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_NUMBER,
            message="Invalid number",
            hint=f"'{text}' is not a decimal number (infinities are not supported)",
        )

    @staticmethod
    def missing_number() -> Diagnostic:
        """A slice list expected an integer but found no digits."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_NUMBER,
            message="Missing a number",
            hint="Slice list items have the form base[:count[:stride]]",
        )

    @staticmethod
    def integer_out_of_range(text: str) -> Diagnostic:
        """An integer does not fit in a signed 64-bit value."""
        return Diagnostic(
            code=DiagnosticCode.INTEGER_OUT_OF_RANGE,
            message=f"Integer out of range: {text}",
            hint="Slice list values must fit in a signed 64-bit integer",
        )

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    @staticmethod
    def expected_string() -> Diagnostic:
        """A string list element does not start with a quote."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_STRING,
            message="Expected a string",
            hint="String lists cannot contain numbers or identifiers",
        )

    @staticmethod
    def unterminated_string() -> Diagnostic:
        """Input ended before the closing quote."""
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_STRING,
            message="Unterminated string",
            hint="Close the string with the same quote it was opened with",
        )

    @staticmethod
    def invalid_escape(escape_char: str) -> Diagnostic:
        """Backslash followed by a character with no escape meaning."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_ESCAPE,
            message=f"Invalid escape sequence '\\{escape_char}'",
            hint="Use \\\\ for a literal backslash",
        )

    @staticmethod
    def escape_too_short() -> Diagnostic:
        """Input ended inside an escape sequence."""
        return Diagnostic(
            code=DiagnosticCode.ESCAPE_TOO_SHORT,
            message="Escape sequence too short",
        )

    @staticmethod
    def escape_not_hex(char: str) -> Diagnostic:
        """A \\x, \\u or \\U payload contains a non-hex character."""
        return Diagnostic(
            code=DiagnosticCode.ESCAPE_NOT_HEX,
            message=f"Escape sequence contains non-hexadecimal character '{char}'",
        )

    @staticmethod
    def invalid_codepoint(hex_digits: str) -> Diagnostic:
        """A \\U escape names a code point above U+10FFFF."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_CODEPOINT,
            message=f"Illegal Unicode codepoint 0x{hex_digits.upper()}",
            hint="The largest Unicode codepoint is 0x10FFFF",
        )

    # ------------------------------------------------------------------
    # Identifiers and lists
    # ------------------------------------------------------------------

    @staticmethod
    def expected_identifier() -> Diagnostic:
        """An identifier list item does not start with a letter or underscore."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_IDENTIFIER,
            message="Expected an identifier",
            hint="Identifiers start with a letter or '_'",
        )

    @staticmethod
    def invalid_count() -> Diagnostic:
        """A slice list count is zero or negative."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_COUNT,
            message="Count must be a positive integer",
        )

    @staticmethod
    def vararg_order() -> Diagnostic:
        """A plain identifier follows the *vararg identifier."""
        return Diagnostic(
            code=DiagnosticCode.VARARG_ORDER,
            message="regular variable cannot follow a vararg variable",
            hint="Move the *vararg identifier to the end of the list",
        )

    @staticmethod
    def duplicate_vararg() -> Diagnostic:
        """An identifier list has two *vararg identifiers."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_VARARG,
            message="only one vararg variable is allowed",
        )

    # ------------------------------------------------------------------
    # Tree processing
    # ------------------------------------------------------------------

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """An AST is nested deeper than a tree walker allows."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum expression depth ({max_depth}) exceeded",
            hint="The AST was likely built programmatically with unbounded nesting",
        )

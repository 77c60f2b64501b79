"""Primitive parsing utilities for the Cascade parser.

This module provides the literal scanners: identifiers, numbers (double),
integers (signed 64-bit) and string literals with escape decoding. Each
scanner takes a Cursor and returns ``ParseResult[T] | ParseError``.

The character tables below are module-level constants, read-only and
shared by every parse.
"""

import math
import re

from cascade.diagnostics import ErrorTemplate
from cascade.syntax.cursor import Cursor, ParseError, ParseResult

__all__ = [
    "is_identifier_char",
    "is_identifier_start",
    "is_quote",
    "parse_escape_sequence",
    "parse_identifier",
    "parse_integer",
    "parse_number",
    "parse_string_literal",
]

# ASCII digits only: str.isdigit() accepts Unicode digits like ² which int()
# and float() then reject.
_ASCII_DIGITS: frozenset[str] = frozenset("0123456789")

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

_IDENTIFIER_START: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
)
_IDENTIFIER_CHARS: frozenset[str] = _IDENTIFIER_START | _ASCII_DIGITS

# Characters that may appear in a number literal. The letters let "nan" and
# "NaN" be scanned by the same routine as ordinary numbers.
_NUMBER_CHARS: frozenset[str] = frozenset("0123456789.-+eEnNaA")
_NAN_LETTERS: frozenset[str] = frozenset("nNaA")

_QUOTES: frozenset[str] = frozenset("'\"")

# Two-character escapes: \n \t \r \f \b \' \" \\
_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "b": "\b",
    "'": "'",
    '"': '"',
    "\\": "\\",
}

# Number of hex digits following \x (one byte), \u (one UTF-16 code unit)
# and \U (one full code point).
_HEX_ESCAPE_LENGTHS: dict[str, int] = {"x": 2, "u": 4, "U": 8}

# Maximum valid Unicode code point per Unicode Standard.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# Slice list values are signed 64-bit integers.
_INT64_MIN: int = -(2**63)
_INT64_MAX: int = 2**63 - 1

# Significant digits in the largest int64 magnitude. Longer runs are out of
# range without conversion; int() refuses strings beyond 4300 digits.
_INT64_MAX_DIGITS: int = 19

# A high surrogate followed by a low surrogate, as produced by two
# consecutive \uXXXX escapes spelling one astral character.
_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")


def is_identifier_start(ch: str) -> bool:
    """Check if character can start an identifier: [A-Za-z_]"""
    return ch in _IDENTIFIER_START


def is_identifier_char(ch: str) -> bool:
    """Check if character can continue an identifier: [A-Za-z0-9_]"""
    return ch in _IDENTIFIER_CHARS


def is_quote(ch: str) -> bool:
    """Check if character opens a string literal (single or double quote)."""
    return ch in _QUOTES


def parse_identifier(cursor: Cursor) -> ParseResult[str] | ParseError:
    """Parse identifier: [A-Za-z_][A-Za-z0-9_]*

    Examples:
        fun → "fun"
        _tmp2 → "_tmp2"

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(identifier, new_cursor) on success
        ParseError if the cursor is not at an identifier start
    """
    if not is_identifier_start(cursor.char):
        return ParseError.at(ErrorTemplate.expected_identifier(), cursor)

    start = cursor
    cursor = cursor.advance()
    while is_identifier_char(cursor.char):
        cursor = cursor.advance()

    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_number(cursor: Cursor) -> ParseResult[float] | ParseError:
    """Parse number literal as a double.

    Scans the maximal run of number characters, then interprets it:
    "nan" in any letter case is NaN, anything else must be a decimal
    floating-point literal. Infinity literals are not recognized, and
    literals whose magnitude overflows a double are rejected.

    Examples:
        -42.7e+03 → -42700.0
        .5 → 0.5
        NaN → nan

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(value, new_cursor) on success
        ParseError("Expected a number") if no number characters are present,
        ParseError("Invalid number") spanning the run if it is malformed, or
        if it overflows to infinity (e.g. 1e400) where a plain float parse
        would return inf
    """
    start = cursor
    while cursor.char in _NUMBER_CHARS:
        cursor = cursor.advance()

    if cursor.pos == start.pos:
        return ParseError.at(ErrorTemplate.expected_number(), start)

    text = start.slice_to(cursor.pos)
    if text.lower() == "nan":
        return ParseResult(math.nan, cursor)

    # float() would accept "-nan" and friends; only bare nan is allowed
    if any(ch in _NAN_LETTERS for ch in text):
        return ParseError.between(ErrorTemplate.invalid_number(text), start, cursor)

    try:
        value = float(text)
    except ValueError:
        return ParseError.between(ErrorTemplate.invalid_number(text), start, cursor)

    if math.isinf(value):
        return ParseError.between(ErrorTemplate.invalid_number(text), start, cursor)

    return ParseResult(value, cursor)


def parse_integer(cursor: Cursor) -> ParseResult[int] | ParseError:
    """Parse signed 64-bit integer: -?[0-9]+

    Leading whitespace is skipped first.

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(value, new_cursor) on success
        ParseError("Missing a number") if there are no digits,
        ParseError("Integer out of range: ...") if the value overflows int64
    """
    cursor = cursor.skip_whitespace()
    start = cursor

    if cursor.char == "-":
        cursor = cursor.advance()

    digits_start = cursor.pos
    while cursor.char in _ASCII_DIGITS:
        cursor = cursor.advance()

    if cursor.pos == digits_start:
        return ParseError.at(ErrorTemplate.missing_number(), start)

    text = start.slice_to(cursor.pos)
    digits = cursor.source[digits_start : cursor.pos].lstrip("0")
    if len(digits) > _INT64_MAX_DIGITS:
        return ParseError.between(ErrorTemplate.integer_out_of_range(text), start, cursor)

    value = int(digits) if digits else 0
    if start.char == "-":
        value = -value
    if not _INT64_MIN <= value <= _INT64_MAX:
        return ParseError.between(ErrorTemplate.integer_out_of_range(text), start, cursor)

    return ParseResult(value, cursor)


def parse_escape_sequence(cursor: Cursor) -> ParseResult[str] | ParseError:
    """Parse escape sequence starting at a backslash.

    Supported escape sequences:
        \\n \\t \\r \\f \\b \\' \\" \\\\ → the usual control/quote characters
        \\xHH → one byte (U+0000 to U+00FF)
        \\uHHHH → one UTF-16 code unit
        \\UHHHHHHHH → one code point (at most U+10FFFF)

    Args:
        cursor: Position OF the backslash

    Returns:
        ParseResult(decoded_text, cursor_after_escape) on success
        ParseError spanning the escape on invalid, truncated or
        non-hexadecimal escapes and on out-of-range code points
    """
    escape_start = cursor
    cursor = cursor.advance()  # Skip backslash

    if cursor.is_eof:
        return ParseError.between(ErrorTemplate.escape_too_short(), escape_start, cursor)

    escape_ch = cursor.current
    simple = _SIMPLE_ESCAPES.get(escape_ch)
    if simple is not None:
        return ParseResult(simple, cursor.advance())

    n_digits = _HEX_ESCAPE_LENGTHS.get(escape_ch)
    if n_digits is None:
        return ParseError(ErrorTemplate.invalid_escape(escape_ch), escape_start, 2)

    cursor = cursor.advance()
    hex_digits = cursor.slice_ahead(n_digits)
    if len(hex_digits) < n_digits:
        end = cursor.advance(n_digits)
        return ParseError.between(ErrorTemplate.escape_too_short(), escape_start, end)

    for ch in hex_digits:
        if ch not in _HEX_DIGITS:
            return ParseError(ErrorTemplate.escape_not_hex(ch), escape_start, n_digits + 2)

    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT:
        return ParseError(
            ErrorTemplate.invalid_codepoint(hex_digits), escape_start, n_digits + 2
        )

    return ParseResult(chr(code_point), cursor.advance(n_digits))


def _join_surrogate_pairs(text: str) -> str:
    """Replace each high/low surrogate pair with the code point it encodes."""

    def combine(match: re.Match[str]) -> str:
        high, low = match[0]
        return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))

    return _SURROGATE_PAIR.sub(combine, text)


def parse_string_literal(cursor: Cursor) -> ParseResult[str] | ParseError:
    """Parse string literal: 'text' or "text"

    The opening quote also closes the literal; the other quote character
    may appear unescaped inside. Any character other than the backslash and
    the closing quote may appear literally, including newlines.

    Strings are Python ``str`` values (code points). ``\\u`` escapes that
    spell a UTF-16 surrogate pair are joined into one code point; lone
    surrogates are kept as-is.

    Examples:
        'hello' → "hello"
        "a\\nb" → "a" + newline + "b"
        "\\uD83D\\uDE00" → "😀"

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(decoded_value, new_cursor) on success
        ParseError("Expected a string") if not at a quote,
        ParseError("Unterminated string") spanning from the opening quote
        to the end of input, or the escape error from parse_escape_sequence
    """
    quote = cursor.char
    if not is_quote(quote):
        return ParseError.at(ErrorTemplate.expected_string(), cursor)

    open_cursor = cursor
    source = cursor.source
    cursor = cursor.advance()  # Skip opening quote
    chunk_start = cursor.pos
    chunks: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "\\":
            chunks.append(source[chunk_start : cursor.pos])
            escape_result = parse_escape_sequence(cursor)
            if isinstance(escape_result, ParseError):
                return escape_result
            chunks.append(escape_result.value)
            cursor = escape_result.cursor
            chunk_start = cursor.pos

        elif ch == quote:
            tail = source[chunk_start : cursor.pos]
            if not chunks:
                # No escapes: the literal is the text between the quotes
                return ParseResult(tail, cursor.advance())
            chunks.append(tail)
            return ParseResult(_join_surrogate_pairs("".join(chunks)), cursor.advance())

        else:
            cursor = cursor.advance()

    return ParseError.between(ErrorTemplate.unterminated_string(), open_cursor, cursor)

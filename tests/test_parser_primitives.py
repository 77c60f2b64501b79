"""Tests for the literal scanners in syntax.parser.primitives.

Each scanner returns ParseResult on success and ParseError on failure;
nothing here raises.
"""

from __future__ import annotations

import math

import pytest
from hypothesis import event, example, given
from hypothesis import strategies as st

from cascade.diagnostics import DiagnosticCode
from cascade.syntax.cursor import Cursor, ParseError, ParseResult
from cascade.syntax.parser.primitives import (
    is_identifier_char,
    is_identifier_start,
    is_quote,
    parse_escape_sequence,
    parse_identifier,
    parse_integer,
    parse_number,
    parse_string_literal,
)
from tests.strategies import cascade_identifiers


def _ok[T](result: ParseResult[T] | ParseError) -> ParseResult[T]:
    assert isinstance(result, ParseResult), f"Expected success, got {result!r}"
    return result


def _err(result: ParseResult[object] | ParseError) -> ParseError:
    assert isinstance(result, ParseError), f"Expected failure, got {result!r}"
    return result


# ============================================================================
# CHARACTER CLASSES
# ============================================================================


class TestCharacterClasses:
    """Test identifier and quote predicates."""

    @pytest.mark.parametrize("ch", ["a", "Z", "_"])
    def test_identifier_start(self, ch: str) -> None:
        assert is_identifier_start(ch)

    @pytest.mark.parametrize("ch", ["1", "-", "é", " ", "*"])
    def test_not_identifier_start(self, ch: str) -> None:
        assert not is_identifier_start(ch)

    def test_digits_continue_identifiers(self) -> None:
        """Digits may continue but not start an identifier."""
        assert is_identifier_char("7")
        assert not is_identifier_char("²")

    def test_quotes(self) -> None:
        assert is_quote("'")
        assert is_quote('"')
        assert not is_quote("`")


# ============================================================================
# IDENTIFIERS
# ============================================================================


class TestParseIdentifier:
    """Test parse_identifier."""

    def test_scans_maximal_run(self) -> None:
        """The identifier ends at the first non-identifier character."""
        result = _ok(parse_identifier(Cursor("fun_2(x)", 0)))
        assert result.value == "fun_2"
        assert result.cursor.pos == 5

    def test_rejects_non_identifier_start(self) -> None:
        """A digit cannot start an identifier."""
        error = _err(parse_identifier(Cursor("1abc", 0)))
        assert error.message == "Expected an identifier"
        assert (error.offset, error.length) == (0, 1)

    def test_eof_is_not_identifier(self) -> None:
        error = _err(parse_identifier(Cursor("", 0)))
        assert error.code is DiagnosticCode.EXPECTED_IDENTIFIER
        assert error.length == 0

    @given(cascade_identifiers())
    def test_any_identifier_scans_whole(self, name: str) -> None:
        """Every identifier is consumed completely."""
        event(f"length={min(len(name), 5)}")
        result = _ok(parse_identifier(Cursor(name + " ", 0)))
        assert result.value == name


# ============================================================================
# NUMBERS
# ============================================================================


class TestParseNumber:
    """Test parse_number (double literals and nan)."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("7", 7.0),
            ("4.2", 4.2),
            ("-1.78E+3", -1780.0),
            (".5", 0.5),
            ("-0", -0.0),
            ("1e-3", 0.001),
            ("00012", 12.0),
        ],
    )
    def test_valid_numbers(self, source: str, expected: float) -> None:
        result = _ok(parse_number(Cursor(source, 0)))
        assert result.value == expected
        assert result.cursor.pos == len(source)

    @pytest.mark.parametrize("source", ["nan", "NaN", "NAN", "nAn"])
    def test_nan_any_case(self, source: str) -> None:
        """nan is recognized regardless of letter case."""
        assert math.isnan(_ok(parse_number(Cursor(source, 0))).value)

    def test_stops_at_delimiter(self) -> None:
        """The run ends at the first character outside the number alphabet."""
        result = _ok(parse_number(Cursor("12,3", 0)))
        assert result.value == 12.0
        assert result.cursor.pos == 2

    def test_empty_run(self) -> None:
        error = _err(parse_number(Cursor("x", 0)))
        assert error.message == "Expected a number"
        assert error.code is DiagnosticCode.EXPECTED_NUMBER

    @pytest.mark.parametrize(
        "source", ["1.2.3", "1-2", "-", "e5", "+nan", "-nan", "nana", "1e", "a", "1e999", "-1e400"]
    )
    def test_invalid_numbers(self, source: str) -> None:
        """Malformed runs, signed nan and overflow are all Invalid number."""
        error = _err(parse_number(Cursor(source + "]", 0)))
        assert error.message == "Invalid number"
        assert (error.offset, error.length) == (0, len(source))

    def test_infinity_is_not_a_number_literal(self) -> None:
        """inf is outside the number alphabet past its first letter."""
        error = _err(parse_number(Cursor("inf", 0)))
        assert error.message == "Expected a number"

    @given(st.floats(allow_nan=False, allow_infinity=False))
    @example(0.0)
    @example(-2.5e-308)
    def test_repr_roundtrip(self, value: float) -> None:
        """repr() of any finite double scans back to the same double."""
        event(f"sign={'neg' if math.copysign(1.0, value) < 0 else 'pos'}")
        result = _ok(parse_number(Cursor(repr(value), 0)))
        assert result.value == value


# ============================================================================
# INTEGERS
# ============================================================================


class TestParseInteger:
    """Test parse_integer (signed 64-bit)."""

    def test_skips_leading_whitespace(self) -> None:
        result = _ok(parse_integer(Cursor("  -42:", 0)))
        assert result.value == -42
        assert result.cursor.pos == 5

    def test_missing_digits(self) -> None:
        error = _err(parse_integer(Cursor(" >", 0)))
        assert error.message == "Missing a number"
        assert error.offset == 1

    def test_lone_minus(self) -> None:
        error = _err(parse_integer(Cursor("-x", 0)))
        assert error.code is DiagnosticCode.MISSING_NUMBER
        assert error.offset == 0

    def test_int64_bounds(self) -> None:
        """Both ends of the signed 64-bit range are accepted."""
        assert _ok(parse_integer(Cursor(str(2**63 - 1), 0))).value == 2**63 - 1
        assert _ok(parse_integer(Cursor(str(-(2**63)), 0))).value == -(2**63)

    @pytest.mark.parametrize("text", [str(2**63), str(-(2**63) - 1), "9" * 40])
    def test_out_of_range(self, text: str) -> None:
        error = _err(parse_integer(Cursor(text, 0)))
        assert error.message == f"Integer out of range: {text}"
        assert (error.offset, error.length) == (0, len(text))

    def test_very_long_digit_run(self) -> None:
        """Digit runs beyond int() conversion limits are still out of range."""
        text = "1" * 5000
        error = _err(parse_integer(Cursor(text + ">", 0)))
        assert error.code is DiagnosticCode.INTEGER_OUT_OF_RANGE
        assert (error.offset, error.length) == (0, 5000)

    def test_leading_zeros_do_not_count(self) -> None:
        """Leading zeros are insignificant, however many there are."""
        result = _ok(parse_integer(Cursor("-" + "0" * 5000 + "42", 0)))
        assert result.value == -42
        assert _ok(parse_integer(Cursor("0" * 30, 0))).value == 0

    @given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
    def test_any_int64(self, value: int) -> None:
        event(f"sign={'neg' if value < 0 else 'non_neg'}")
        assert _ok(parse_integer(Cursor(str(value), 0))).value == value


# ============================================================================
# ESCAPES
# ============================================================================


class TestParseEscapeSequence:
    """Test parse_escape_sequence (cursor at the backslash)."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\n", "\n"),
            ("\\t", "\t"),
            ("\\r", "\r"),
            ("\\f", "\f"),
            ("\\b", "\b"),
            ("\\'", "'"),
            ('\\"', '"'),
            ("\\\\", "\\"),
            ("\\x41", "A"),
            ("\\xff", "\xff"),
            ("\\u00e9", "é"),
            ("\\U0001F600", "\U0001f600"),
            ("\\U0010FFFF", "\U0010ffff"),
        ],
    )
    def test_valid_escapes(self, source: str, expected: str) -> None:
        result = _ok(parse_escape_sequence(Cursor(source, 0)))
        assert result.value == expected
        assert result.cursor.pos == len(source)

    def test_unknown_escape(self) -> None:
        error = _err(parse_escape_sequence(Cursor("\\q", 0)))
        assert error.message == "Invalid escape sequence '\\q'"
        assert error.length == 2

    def test_backslash_at_eof(self) -> None:
        error = _err(parse_escape_sequence(Cursor("\\", 0)))
        assert error.message == "Escape sequence too short"

    @pytest.mark.parametrize("source", ["\\x4", "\\u12", "\\U0001F6"])
    def test_truncated_hex(self, source: str) -> None:
        """Hex escapes need their full digit count before end of input."""
        error = _err(parse_escape_sequence(Cursor(source, 0)))
        assert error.code is DiagnosticCode.ESCAPE_TOO_SHORT
        assert (error.offset, error.length) == (0, len(source))

    def test_non_hex_digit(self) -> None:
        error = _err(parse_escape_sequence(Cursor("\\u12g4'", 0)))
        assert error.message == "Escape sequence contains non-hexadecimal character 'g'"
        assert error.length == 6

    def test_codepoint_above_unicode_range(self) -> None:
        error = _err(parse_escape_sequence(Cursor("\\U00110000", 0)))
        assert error.message == "Illegal Unicode codepoint 0x00110000"
        assert error.code is DiagnosticCode.INVALID_CODEPOINT


# ============================================================================
# STRINGS
# ============================================================================


class TestParseStringLiteral:
    """Test parse_string_literal."""

    def test_single_and_double_quotes(self) -> None:
        assert _ok(parse_string_literal(Cursor("'one'", 0))).value == "one"
        assert _ok(parse_string_literal(Cursor('"two"', 0))).value == "two"

    def test_other_quote_inside(self) -> None:
        """The quote that did not open the literal is ordinary text."""
        assert _ok(parse_string_literal(Cursor("\"it's\"", 0))).value == "it's"

    def test_escape_decoding(self) -> None:
        """a\\nb decodes to a, newline, b."""
        result = _ok(parse_string_literal(Cursor("'a\\nb' rest", 0)))
        assert result.value == "a\nb"
        assert result.cursor.pos == 6

    def test_raw_newline_allowed(self) -> None:
        assert _ok(parse_string_literal(Cursor("'a\nb'", 0))).value == "a\nb"

    def test_surrogate_pair_joined(self) -> None:
        """Two \\u escapes spelling a surrogate pair become one code point."""
        result = _ok(parse_string_literal(Cursor("'\\uD83D\\uDE00'", 0)))
        assert result.value == "\U0001f600"

    def test_lone_surrogate_kept(self) -> None:
        result = _ok(parse_string_literal(Cursor("'\\uD83D'", 0)))
        assert result.value == "\ud83d"

    def test_not_a_quote(self) -> None:
        error = _err(parse_string_literal(Cursor("2", 0)))
        assert error.message == "Expected a string"

    def test_unterminated_from_opening_quote(self) -> None:
        """The error covers the opening quote through end of input."""
        error = _err(parse_string_literal(Cursor("x 'abc", 2)))
        assert error.message == "Unterminated string"
        assert (error.offset, error.length) == (2, 4)

    def test_escaped_quote_does_not_close(self) -> None:
        error = _err(parse_string_literal(Cursor("'ab\\'", 0)))
        assert error.code is DiagnosticCode.UNTERMINATED_STRING

    def test_escape_error_propagates(self) -> None:
        error = _err(parse_string_literal(Cursor("'a\\zb'", 0)))
        assert error.code is DiagnosticCode.INVALID_ESCAPE
        assert error.offset == 2

    @given(st.text(st.characters(blacklist_characters="'\\"), max_size=30))
    def test_plain_text_fast_path(self, text: str) -> None:
        """Text without backslash or closing quote comes back verbatim."""
        event(f"empty={not text}")
        result = _ok(parse_string_literal(Cursor(f"'{text}'", 0)))
        assert result.value == text
        assert result.cursor.pos == len(text) + 2

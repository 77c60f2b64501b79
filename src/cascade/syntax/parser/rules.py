"""Grammar rules for the Cascade parser.

This module provides the dispatcher and the structural parsers:
- Dispatcher (parse_next): routes on the next significant character
- Function application: (head arg1 ... argN)
- Bracketed lists: [1 2 3] or ['a' "b"]
- Slice lists: <base:count:stride ...>
- Identifier lists: `a b *rest`
- Unevaluated expressions: ?expr

All rules are co-located in one module because the dispatcher and the
compound rules call each other recursively.

Lookahead:
    A single significant character decides every branch; sub-parsers
    consume their own leading delimiter.

    ====== =====================================
    ``(``  function application
    ``[``  number list or string list
    ``<``  slice list
    ```` ` ```` identifier list
    ``?``  unevaluated expression
    quote  string literal
    digit, ``-``, ``.``  number literal
    letter, ``_``  identifier (``nan`` becomes a number)
    ====== =====================================

Security:
    Includes configurable nesting depth limit so deeply nested input such as
    ``((((...))))`` fails with a syntax error instead of RecursionError.
"""

from collections.abc import Callable
from dataclasses import dataclass

from cascade.constants import MAX_DEPTH
from cascade.diagnostics import ErrorTemplate
from cascade.syntax.ast import (
    Apply,
    AstNode,
    Id,
    IdList,
    Num,
    NumList,
    SliceList,
    Span,
    Str,
    StrList,
    Uneval,
)
from cascade.syntax.cursor import Cursor, ParseError, ParseResult
from cascade.syntax.parser.primitives import (
    _ASCII_DIGITS,
    is_identifier_start,
    is_quote,
    parse_identifier,
    parse_integer,
    parse_number,
    parse_string_literal,
)

__all__ = [
    "ParseContext",
    "consume",
    "parse_function_application",
    "parse_id_list",
    "parse_list",
    "parse_next",
    "parse_slice_list",
    "parse_unevaluated_expression",
]


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Passed down the recursion instead of living on a parser object, so
    concurrent parses share nothing.

    Attributes:
        max_nesting_depth: Maximum allowed nesting of applications and ?-wrappers
        current_depth: Current nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nested(self) -> "ParseContext":
        """Create new context with incremented depth."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


def consume(cursor: Cursor, expected: str) -> Cursor | ParseError:
    """Consume one expected character.

    Returns:
        Cursor advanced past ``expected``, or ParseError
        "Expected 'x'. Got: 'y'" at the current position
    """
    if cursor.char != expected:
        return ParseError.at(
            ErrorTemplate.unexpected_character(expected, cursor.peek()), cursor
        )
    return cursor.advance()


def _check_depth(cursor: Cursor, context: ParseContext) -> ParseError | None:
    if context.is_depth_exceeded():
        return ParseError.at(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth), cursor
        )
    return None


# =============================================================================
# Lists
# =============================================================================


def _parse_items[T](
    cursor: Cursor,
    closing: str,
    parse_item: Callable[[Cursor], ParseResult[T] | ParseError],
) -> ParseResult[list[T]] | ParseError:
    """Parse list items up to (not including) the closing delimiter.

    Items are separated by whitespace and/or a single comma.

    Returns:
        ParseResult(items, cursor_at_closing_delimiter) on success
        ParseError("Unexpected end of string") if input ends first
    """
    items: list[T] = []
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.char == closing:
            return ParseResult(items, cursor)
        if cursor.is_eof:
            return ParseError.at(ErrorTemplate.unexpected_eof(), cursor)

        item_result = parse_item(cursor)
        if isinstance(item_result, ParseError):
            return item_result
        items.append(item_result.value)

        # Optional comma separating list elements
        cursor = item_result.cursor.skip_whitespace()
        if cursor.char == ",":
            cursor = cursor.advance()


def parse_list(cursor: Cursor) -> ParseResult[NumList | StrList] | ParseError:
    """Parse bracketed list: [1 2.5 nan] or ['one', "two"]

    The first element decides the list type: a quote makes a string list,
    anything else a number list. Lists are never mixed and never nested;
    use a function application to build those. ``[]`` is an empty NumList.

    Args:
        cursor: Position of the opening bracket

    Returns:
        ParseResult with NumList or StrList on success
    """
    start = cursor
    cursor_or_error = consume(cursor, "[")
    if isinstance(cursor_or_error, ParseError):
        return cursor_or_error
    cursor = cursor_or_error.skip_whitespace()

    node: NumList | StrList
    if is_quote(cursor.char):
        str_result = _parse_items(cursor, "]", parse_string_literal)
        if isinstance(str_result, ParseError):
            return str_result
        cursor = str_result.cursor.advance()  # Skip ]
        node = StrList(values=tuple(str_result.value), span=Span(start.pos, cursor.pos))
    else:
        num_result = _parse_items(cursor, "]", parse_number)
        if isinstance(num_result, ParseError):
            return num_result
        cursor = num_result.cursor.advance()  # Skip ]
        node = NumList(values=tuple(num_result.value), span=Span(start.pos, cursor.pos))

    return ParseResult(node, cursor)


def _parse_slice_item(cursor: Cursor) -> ParseResult[tuple[int, int, int]] | ParseError:
    """Parse one slice list item: base[:count[:stride]]

    Count defaults to 1 and must be positive. Stride defaults to 1 and is
    forced to 1 whenever count is 1.
    """
    base_result = parse_integer(cursor)
    if isinstance(base_result, ParseError):
        return base_result
    base = base_result.value
    count = 1
    stride = 1
    cursor = base_result.cursor.skip_whitespace()

    if cursor.char == ":":
        count_start = cursor.advance().skip_whitespace()
        count_result = parse_integer(count_start)
        if isinstance(count_result, ParseError):
            return count_result
        count = count_result.value
        if count <= 0:
            return ParseError.between(
                ErrorTemplate.invalid_count(), count_start, count_result.cursor
            )
        cursor = count_result.cursor.skip_whitespace()

    if cursor.char == ":":
        stride_result = parse_integer(cursor.advance())
        if isinstance(stride_result, ParseError):
            return stride_result
        stride = stride_result.value
        cursor = stride_result.cursor

    if count == 1:
        stride = 1

    return ParseResult((base, count, stride), cursor)


def parse_slice_list(cursor: Cursor) -> ParseResult[SliceList] | ParseError:
    """Parse slice list: <0, -3, 2:7:5, 3:2, -5:11:-2>

    Each item ``base:count:stride`` denotes ``base, base + stride, ...,
    base + (count - 1) * stride``. Only integers are allowed; items may be
    separated by spaces or commas.

    Args:
        cursor: Position of the opening ``<``

    Returns:
        ParseResult with SliceList on success
    """
    start = cursor
    cursor_or_error = consume(cursor, "<")
    if isinstance(cursor_or_error, ParseError):
        return cursor_or_error

    items_result = _parse_items(cursor_or_error, ">", _parse_slice_item)
    if isinstance(items_result, ParseError):
        return items_result
    cursor = items_result.cursor.advance()  # Skip >

    triples = items_result.value
    node = SliceList(
        bases=tuple(base for base, _, _ in triples),
        counts=tuple(count for _, count, _ in triples),
        strides=tuple(stride for _, _, stride in triples),
        span=Span(start.pos, cursor.pos),
    )
    return ParseResult(node, cursor)


def parse_id_list(cursor: Cursor) -> ParseResult[IdList] | ParseError:
    """Parse identifier list: `var1 var2 ... varN *rest`

    The identifiers are kept unevaluated. An identifier prefixed with ``*``
    is the vararg collecting all remaining arguments; it must come last
    and appear at most once.

    Args:
        cursor: Position of the opening backtick

    Returns:
        ParseResult with IdList on success
    """
    start = cursor
    cursor_or_error = consume(cursor, "`")
    if isinstance(cursor_or_error, ParseError):
        return cursor_or_error
    cursor = cursor_or_error

    names: list[str] = []
    vararg: str | None = None
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.char == "`":
            break
        if cursor.is_eof:
            return ParseError.at(ErrorTemplate.unexpected_eof(), cursor)

        if cursor.char == "*":
            if vararg is not None:
                return ParseError.at(ErrorTemplate.duplicate_vararg(), cursor)
            id_result = parse_identifier(cursor.advance())
            if isinstance(id_result, ParseError):
                return id_result
            vararg = id_result.value
        else:
            id_result = parse_identifier(cursor)
            if isinstance(id_result, ParseError):
                return id_result
            if vararg is not None:
                return ParseError.between(
                    ErrorTemplate.vararg_order(), cursor, id_result.cursor
                )
            names.append(id_result.value)

        cursor = id_result.cursor.skip_whitespace()
        if cursor.char == ",":
            cursor = cursor.advance()

    cursor = cursor.advance()  # Skip closing `
    node = IdList(names=tuple(names), vararg=vararg, span=Span(start.pos, cursor.pos))
    return ParseResult(node, cursor)


# =============================================================================
# Expressions
# =============================================================================


def parse_function_application(
    cursor: Cursor, context: ParseContext
) -> ParseResult[Apply] | ParseError:
    """Parse function application: (fun arg1 ... argN)

    The first expression inside the parentheses is the head (the function
    itself), every following expression is an argument.

    Args:
        cursor: Position of the opening parenthesis
        context: Parse context for depth tracking

    Returns:
        ParseResult with Apply spanning ``(`` through ``)`` on success
    """
    depth_error = _check_depth(cursor, context)
    if depth_error is not None:
        return depth_error
    context = context.enter_nested()

    start = cursor
    cursor_or_error = consume(cursor, "(")
    if isinstance(cursor_or_error, ParseError):
        return cursor_or_error

    head_result = parse_next(cursor_or_error, context)
    if isinstance(head_result, ParseError):
        return head_result
    cursor = head_result.cursor

    args: list[AstNode] = []
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.char == ")":
            break
        if cursor.is_eof:
            return ParseError.at(ErrorTemplate.unexpected_eof(), cursor)
        arg_result = parse_next(cursor, context)
        if isinstance(arg_result, ParseError):
            return arg_result
        args.append(arg_result.value)
        cursor = arg_result.cursor

    cursor = cursor.advance()  # Skip )
    node = Apply(head=head_result.value, args=tuple(args), span=Span(start.pos, cursor.pos))
    return ParseResult(node, cursor)


def parse_unevaluated_expression(
    cursor: Cursor, context: ParseContext
) -> ParseResult[Uneval] | ParseError:
    """Parse unevaluated expression: ?expr

    The wrapped expression is handed to the called function as-is, e.g.
    ``(if test ?then ?else)`` evaluates only ``test`` eagerly. The span of
    the Uneval node includes the ``?`` marker.
    """
    depth_error = _check_depth(cursor, context)
    if depth_error is not None:
        return depth_error

    start = cursor
    cursor_or_error = consume(cursor, "?")
    if isinstance(cursor_or_error, ParseError):
        return cursor_or_error

    inner_result = parse_next(cursor_or_error, context.enter_nested())
    if isinstance(inner_result, ParseError):
        return inner_result

    cursor = inner_result.cursor
    return ParseResult(Uneval(expr=inner_result.value, span=Span(start.pos, cursor.pos)), cursor)


def _parse_string_node(cursor: Cursor) -> ParseResult[AstNode] | ParseError:
    """Parse string literal expression."""
    str_result = parse_string_literal(cursor)
    if isinstance(str_result, ParseError):
        return str_result
    end = str_result.cursor
    return ParseResult(Str(value=str_result.value, span=Span(cursor.pos, end.pos)), end)


def _parse_number_node(cursor: Cursor) -> ParseResult[AstNode] | ParseError:
    """Parse number literal expression."""
    num_result = parse_number(cursor)
    if isinstance(num_result, ParseError):
        return num_result
    end = num_result.cursor
    return ParseResult(Num(value=num_result.value, span=Span(cursor.pos, end.pos)), end)


def _parse_identifier_node(cursor: Cursor) -> ParseResult[AstNode] | ParseError:
    """Parse identifier expression; ``nan`` in any letter case is a number."""
    id_result = parse_identifier(cursor)
    if isinstance(id_result, ParseError):
        return id_result
    end = id_result.cursor
    span = Span(cursor.pos, end.pos)
    name = id_result.value
    if name.lower() == "nan":
        return ParseResult(Num(value=float("nan"), span=span), end)
    return ParseResult(Id(name=name, span=span), end)


def parse_next(cursor: Cursor, context: ParseContext) -> ParseResult[AstNode] | ParseError:
    """Parse the next expression, whatever its kind.

    Skips whitespace, then dispatches on the first significant character
    without consuming it. This is the single recursion point of the grammar.

    Args:
        cursor: Current position in source
        context: Parse context for depth tracking

    Returns:
        ParseResult with the parsed node on success
        ParseError("Invalid syntax") if no expression starts here
    """
    cursor = cursor.skip_whitespace()
    ch = cursor.char

    match ch:
        case "(":
            return parse_function_application(cursor, context)
        case "[":
            return parse_list(cursor)
        case "`":
            return parse_id_list(cursor)
        case "<":
            return parse_slice_list(cursor)
        case "?":
            return parse_unevaluated_expression(cursor, context)
        case _ if is_quote(ch):
            return _parse_string_node(cursor)
        case "-" | ".":
            return _parse_number_node(cursor)
        case _ if ch in _ASCII_DIGITS:
            return _parse_number_node(cursor)
        case _ if is_identifier_start(ch):
            return _parse_identifier_node(cursor)
        case _:
            return ParseError.at(ErrorTemplate.invalid_syntax(), cursor)

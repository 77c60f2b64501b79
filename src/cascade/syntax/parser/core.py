"""Core Cascade parser implementation.

This module provides the CascadeParser class that turns one Cascade
expression string into an AST defined in :mod:`cascade.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~cascade.syntax.cursor.Cursor`)
    to traverse source text. Each sub-parser (in :mod:`~cascade.syntax.parser.rules`
    and :mod:`~cascade.syntax.parser.primitives`) returns either a
    :class:`~cascade.syntax.cursor.ParseResult` containing the parsed node and
    updated cursor, or a :class:`~cascade.syntax.cursor.ParseError` value.
    Only :meth:`CascadeParser.parse` raises: the first ParseError aborts the
    parse and becomes a :class:`~cascade.diagnostics.CascadeSyntaxError`.

Security:
    Includes configurable input size and nesting depth limits.

See Also:
    - :mod:`cascade.syntax.ast` - AST node type definitions
    - :mod:`cascade.syntax.parser.rules` - Dispatcher and structural rules
"""

import logging

from cascade.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from cascade.core.depth_guard import depth_clamp
from cascade.diagnostics import CascadeSyntaxError, ErrorTemplate
from cascade.syntax.ast import AstNode
from cascade.syntax.cursor import Cursor, ParseError, ParseResult
from cascade.syntax.parser.rules import ParseContext, parse_next

__all__ = ["CascadeParser"]

logger = logging.getLogger(__name__)


class CascadeParser:
    """Cascade expression parser using immutable cursor pattern.

    A parser instance holds only its configured limits; all per-parse state
    lives in the cursor and context of one ``parse`` call, so a single
    instance can be shared between threads.

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum nesting of applications and ?-wrappers (default: 100)

    Example:
        >>> parser = CascadeParser()
        >>> node = parser.parse("(fun 1 2 3)")
        >>> node.head.name
        'fun'
        >>> [arg.value for arg in node.args]
        [1.0, 2.0, 3.0]
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable the size limit.
            max_nesting_depth: Maximum nesting depth (default: 100). Clamped
                              against the interpreter recursion limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> AstNode:
        """Parse one Cascade expression into its AST.

        Exactly one expression is allowed; only whitespace may follow it.

        Args:
            source: The complete expression text

        Returns:
            Root node of the AST, every node carrying its source span

        Raises:
            ValueError: If source exceeds max_source_size
            CascadeSyntaxError: On the first syntax error, with the offset
                and length of the offending text

        Example:
            >>> CascadeParser().parse("<1:2:-1 3:3 5 7>").counts
            (2, 3, 1, 1)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in CascadeParser constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        result = self._parse_expression(Cursor(source, 0), context)

        if isinstance(result, ParseError):
            logger.debug(
                "Syntax error at offset %d: %s", result.offset, result.message
            )
            raise CascadeSyntaxError(
                result.to_diagnostic(),
                offset=result.offset,
                length=result.length,
                source=source,
            )

        node = result.value
        logger.debug("Parsed %s from %d characters", type(node).__name__, len(source))
        return node

    def _parse_expression(
        self, cursor: Cursor, context: ParseContext
    ) -> ParseResult[AstNode] | ParseError:
        """Parse one expression and require only trailing whitespace after it."""
        result = parse_next(cursor, context)
        if isinstance(result, ParseError):
            return result

        trailing = result.cursor.skip_whitespace()
        if not trailing.is_eof:
            end = trailing.advance(len(trailing.source))
            return ParseError.between(ErrorTemplate.illegal_expression(), trailing, end)
        return ParseResult(result.value, trailing)

"""Cascade syntax parsing package.

Provides parser, AST definitions, cursor infrastructure and serialization.
Separate from any evaluator so tooling can depend on syntax alone.

Python 3.13+.
"""

from .ast import (
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
from .cursor import Cursor, ParseError, ParseResult
from .parser import CascadeParser
from .serializer import SerializationValidationError, serialize

__all__ = [
    "Apply",
    "AstNode",
    "CascadeParser",
    "Cursor",
    "Id",
    "IdList",
    "Num",
    "NumList",
    "ParseError",
    "ParseResult",
    "SerializationValidationError",
    "SliceList",
    "Span",
    "Str",
    "StrList",
    "Uneval",
    "parse",
    "serialize",
]


def parse(source: str) -> AstNode:
    """Parse a Cascade expression into its AST.

    Convenience function for CascadeParser().parse().

    Args:
        source: Cascade expression

    Returns:
        Root AST node

    Raises:
        CascadeSyntaxError: If the expression cannot be parsed

    Example:
        >>> from cascade.syntax import parse
        >>> parse("(if test ?then ?else)").args[1].expr.name
        'then'
    """
    parser = CascadeParser()
    return parser.parse(source)

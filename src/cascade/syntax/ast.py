"""Cascade AST (Abstract Syntax Tree) node definitions.

The node set is closed: consumers match exhaustively on the concrete
classes (``match node: case Apply(): ...``). Every node carries an optional
source span, assigned once by the parser when the node is constructed.

Python 3.13+. Zero external dependencies.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Expressions
    "Apply",
    "Id",
    "Uneval",
    # Literals
    "Num",
    "Str",
    # Lists
    "NumList",
    "StrList",
    "SliceList",
    "IdList",
    # Type aliases
    "AstNode",
]


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Tracks character offsets in source text for error reporting and tooling.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "(fun 1 2)"
        Apply span: Span(start=0, end=9)
        Head ``fun`` span: Span(start=1, end=4)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        """Number of characters covered by the span."""
        return self.end - self.start


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Apply:
    """Function application: (head arg1 ... argN)

    The head is any expression; it is usually an Id naming the function.
    """

    head: "AstNode"
    args: tuple["AstNode", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Id:
    """Identifier: [A-Za-z_][A-Za-z0-9_]*"""

    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Uneval:
    """Unevaluated expression: ?expr

    Marks an argument that the receiving function evaluates itself
    (``if``, ``for``, ``def``, ``and``, ``or`` ...).
    """

    expr: "AstNode"
    span: Span | None = None


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Num:
    """Number literal (IEEE-754 double, may be NaN).

    Note:
        NaN never compares equal to itself, so two ``Num(nan)`` nodes are
        unequal. Use ``is_nan`` to test for it.
    """

    value: float
    span: Span | None = None

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.value)


@dataclass(frozen=True, slots=True)
class Str:
    """String literal with all escape sequences resolved."""

    value: str
    span: Span | None = None


# ============================================================================
# LISTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumList:
    """List of numbers: [7 4.2 nan -1.78E+3]"""

    values: tuple[float, ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class StrList:
    """List of strings: ['one' "two"]"""

    values: tuple[str, ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class SliceList:
    """Compact list of integer ranges: <1:2:-1 3:3 5 7>

    Each item ``base:count:stride`` stands for the arithmetic sequence
    ``base, base + stride, ..., base + (count - 1) * stride``. The three
    sequences are stored side by side rather than materialized.

    Invariants (checked on construction):
        - bases, counts and strides have equal length
        - every count is >= 1
        - a count of 1 always has stride 1
    """

    bases: tuple[int, ...]
    counts: tuple[int, ...]
    strides: tuple[int, ...]
    span: Span | None = None

    def __post_init__(self) -> None:
        """Validate slice list invariants."""
        if not len(self.bases) == len(self.counts) == len(self.strides):
            msg = (
                "SliceList sequences must have equal length, got "
                f"{len(self.bases)}/{len(self.counts)}/{len(self.strides)}"
            )
            raise ValueError(msg)
        for count, stride in zip(self.counts, self.strides, strict=True):
            if count < 1:
                msg = f"SliceList count must be >= 1, got {count}"
                raise ValueError(msg)
            if count == 1 and stride != 1:
                msg = f"SliceList stride must be 1 when count is 1, got {stride}"
                raise ValueError(msg)

    def triples(self) -> Iterator[tuple[int, int, int]]:
        """Yield (base, count, stride) for each item."""
        return zip(self.bases, self.counts, self.strides, strict=True)

    def expand(self) -> list[int]:
        """Materialize every item into one flat list of integers."""
        result: list[int] = []
        for base, count, stride in self.triples():
            result.extend(base + i * stride for i in range(count))
        return result


@dataclass(frozen=True, slots=True)
class IdList:
    """List of unevaluated identifiers: `x y *rest`

    Attributes:
        names: Regular identifiers, in order
        vararg: Name of the trailing ``*rest`` identifier, if any
    """

    names: tuple[str, ...]
    vararg: str | None = None
    span: Span | None = None


# ============================================================================
# TYPE ALIASES
# ============================================================================

type AstNode = Apply | Id | Uneval | Num | Str | NumList | StrList | SliceList | IdList

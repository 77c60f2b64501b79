"""Serialize Cascade AST back to Cascade syntax.

Converts AST nodes to canonical expression text. Useful for:
- Pretty-printing and logging of expressions
- Code generators building expressions programmatically
- Property-based testing (roundtrip: parse → serialize → parse)

Canonical form: single spaces between elements, double-quoted strings,
shortest round-tripping number representation.

Python 3.13+.
"""

import math
import re

from cascade.constants import MAX_DEPTH
from cascade.core.depth_guard import DepthGuard

from .ast import (
    Apply,
    AstNode,
    Id,
    IdList,
    Num,
    NumList,
    SliceList,
    Str,
    StrList,
    Uneval,
)

__all__ = ["CascadeSerializer", "SerializationValidationError", "serialize"]


class SerializationValidationError(ValueError):
    """Raised when an AST cannot be written as valid Cascade syntax.

    Common causes:
    - Infinite numbers (Cascade has no infinity literal)
    - Identifier names that are not identifiers, or that spell ``nan``
    """


_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\b": "\\b",
}

# Floats with an integral value below this magnitude print without ".0";
# beyond it repr() switches to exponent notation anyway.
_PLAIN_INTEGER_LIMIT: float = 1e16


class CascadeSerializer:
    """Converts AST back to Cascade source string.

    Thread-safe: all serialization state is local to the serialize() call.

    Usage:
        >>> from cascade.syntax import parse
        >>> CascadeSerializer().serialize(parse("( fun 1.0 'a' )"))
        '(fun 1 "a")'
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        self._max_depth = max_depth if max_depth is not None else MAX_DEPTH

    def serialize(self, node: AstNode) -> str:
        """Serialize an AST node to canonical Cascade text.

        Raises:
            SerializationValidationError: If the node has no Cascade spelling
            DepthLimitExceededError: If the AST nests deeper than max_depth
        """
        guard = DepthGuard(max_depth=self._max_depth)
        return self._serialize_node(node, guard)

    def _serialize_node(self, node: AstNode, guard: DepthGuard) -> str:
        match node:
            case Apply(head=head, args=args):
                with guard:
                    parts = [self._serialize_node(head, guard)]
                    parts.extend(self._serialize_node(arg, guard) for arg in args)
                return "(" + " ".join(parts) + ")"
            case Uneval(expr=expr):
                with guard:
                    return "?" + self._serialize_node(expr, guard)
            case Id(name=name):
                return _serialize_identifier(name)
            case Num(value=value):
                return _serialize_number(value)
            case Str(value=value):
                return _serialize_string(value)
            case NumList(values=values):
                return "[" + " ".join(_serialize_number(v) for v in values) + "]"
            case StrList(values=values):
                return "[" + " ".join(_serialize_string(v) for v in values) + "]"
            case SliceList():
                return "<" + " ".join(_serialize_slice(*t) for t in node.triples()) + ">"
            case IdList(names=names, vararg=vararg):
                parts = [_serialize_identifier(name) for name in names]
                if vararg is not None:
                    parts.append("*" + _serialize_identifier(vararg))
                return "`" + " ".join(parts) + "`"
            case _:
                msg = f"Unknown AST node type: {type(node).__name__}"
                raise SerializationValidationError(msg)


def _serialize_identifier(name: str) -> str:
    if not _IDENTIFIER_RE.fullmatch(name) or name.lower() == "nan":
        msg = f"Not a valid Cascade identifier: {name!r}"
        raise SerializationValidationError(msg)
    return name


def _serialize_number(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        msg = f"Cascade has no literal for {value}"
        raise SerializationValidationError(msg)
    if value.is_integer() and abs(value) < _PLAIN_INTEGER_LIMIT:
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0.0"
        return str(int(value))
    return repr(value)


def _serialize_string(value: str) -> str:
    out: list[str] = ['"']
    for ch in value:
        escaped = _STRING_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
            continue
        code_point = ord(ch)
        if code_point < 0x20 or code_point == 0x7F:
            out.append(f"\\x{code_point:02x}")
        elif 0xD800 <= code_point <= 0xDFFF:
            out.append(f"\\u{code_point:04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _serialize_slice(base: int, count: int, stride: int) -> str:
    if count == 1:
        return str(base)
    if stride == 1:
        return f"{base}:{count}"
    return f"{base}:{count}:{stride}"


def serialize(node: AstNode, *, max_depth: int | None = None) -> str:
    """Serialize an AST node to canonical Cascade text.

    ``parse(serialize(node))`` is equal to ``node`` up to spans, with one
    exception: an empty StrList serializes as ``[]`` and parses back as an
    empty NumList.

    Example:
        >>> serialize(parse("<1:2:-1 3:3 5 7>"))
        '<1:2:-1 3:3 5 7>'
    """
    return CascadeSerializer(max_depth=max_depth).serialize(node)

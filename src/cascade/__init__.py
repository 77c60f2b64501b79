"""Cascade - parser for the Cascade expression language.

Cascade is a small Lisp-like language of function applications, number and
string literals, compact integer slice lists, identifier lists and
unevaluated expressions. This package turns expression text into an AST;
evaluating the AST is the job of the consuming engine.

Public API:
    parse - Parse expression text to AST
    serialize - Serialize AST to canonical expression text
    CascadeParser - Parser with configurable size/depth limits

Exceptions:
    CascadeError - Base exception class
    CascadeSyntaxError - Parse errors (message, offset, length)

Submodules:
    cascade.syntax.ast - AST node types (Apply, Num, Str, SliceList, ...)
    cascade.diagnostics - Error codes, diagnostics and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import CascadeError, CascadeSyntaxError
from .syntax import CascadeParser, parse, serialize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("cascade-parser")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CascadeError",
    "CascadeParser",
    "CascadeSyntaxError",
    "__version__",
    "parse",
    "serialize",
]

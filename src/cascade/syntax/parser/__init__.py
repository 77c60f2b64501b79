"""Cascade parser module.

Module Organization:
- core.py: CascadeParser class and parse() entry point
- primitives.py: Literal scanners (identifiers, numbers, integers, strings)
- rules.py: Dispatcher and structural rules (applications, lists, ?-wrappers)

Public API:
    CascadeParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from cascade.syntax.parser.core import CascadeParser
from cascade.syntax.parser.rules import ParseContext

__all__ = ["CascadeParser", "ParseContext"]

"""Shared constants for the Cascade parser.

Centralized limits used by the parser, the serializer and the depth guard.
Placing them here avoids circular imports between ``syntax`` and ``core``.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of function applications and ?-wrappers, the only
# constructs that recurse. Shared by the parser and the serializer. Stays
# well below Python's default recursion limit of 1000.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB).
# Expressions are single strings held in memory; anything larger is almost
# certainly a mistake rather than a real expression.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

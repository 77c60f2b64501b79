"""Hypothesis strategies for Cascade property-based testing.

Strategies are organized by domain:

- cascade: identifiers, literals, AST nodes and expression source text

Usage:
    from tests.strategies import cascade_identifiers, cascade_nodes
    from tests.strategies.cascade import cascade_chaos_source

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - cascade_numbers, cascade_slice_items, cascade_chaos_source,
      cascade_pathological_nesting
"""

from .cascade import (
    CASCADE_SIGNIFICANT_CHARS,
    cascade_chaos_source,
    cascade_id_lists,
    cascade_identifiers,
    cascade_nodes,
    cascade_num_lists,
    cascade_numbers,
    cascade_pathological_nesting,
    cascade_slice_items,
    cascade_slice_lists,
    cascade_str_lists,
    cascade_strings,
)

__all__ = [
    "CASCADE_SIGNIFICANT_CHARS",
    "cascade_chaos_source",
    "cascade_id_lists",
    "cascade_identifiers",
    "cascade_nodes",
    "cascade_num_lists",
    "cascade_numbers",
    "cascade_pathological_nesting",
    "cascade_slice_items",
    "cascade_slice_lists",
    "cascade_str_lists",
    "cascade_strings",
]

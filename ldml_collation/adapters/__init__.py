"""Adapter modules for converting external document formats into the IR.

WHY: The collation core uses its own immutable tree (CollationTree,
RuleItem, ...) rather than any XML library's node types. Adapters bridge
parsed documents into that representation so each side can evolve
independently.

HOW: Each adapter module provides a conversion function that maps an
external structure to the IR.

RULES:
- Adapters must not modify the source document.
- Each adapter lives in its own module under this package.
"""

from ldml_collation.adapters.ldml_adapter import (
    collation_tree_from_element,
    find_collation_element,
    load_collation_tree,
)

__all__ = [
    "collation_tree_from_element",
    "find_collation_element",
    "load_collation_tree",
]

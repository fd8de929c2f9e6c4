"""Core compiler, reducer, and intermediate representation modules.

WHY: The core package contains the stable heart of the converter — the
collation tree IR, the ICU rule compiler and the simple-rules reducer.
These are consumed by every formatter and must stay independent of any
XML library.

HOW: ir.py defines the tree, escaping.py and extraction.py are the shared
leaf utilities, compiler.py and simple_rules.py are the two translators.

RULES:
- IR dataclasses are the contract — change with care
- Core functions are pure: no I/O, no global state, safe to call
  concurrently on different trees
"""

from ldml_collation.core.compiler import compile_icu_rules
from ldml_collation.core.errors import CollationConfigError, CollationError
from ldml_collation.core.escaping import escape_for_icu, replace_unicode_escapes
from ldml_collation.core.ir import (
    CodePoint,
    CollationTree,
    IndirectPosition,
    RuleItem,
    Settings,
)
from ldml_collation.core.simple_rules import try_get_simple_rules

__all__ = [
    "CodePoint",
    "CollationConfigError",
    "CollationError",
    "CollationTree",
    "IndirectPosition",
    "RuleItem",
    "Settings",
    "compile_icu_rules",
    "escape_for_icu",
    "replace_unicode_escapes",
    "try_get_simple_rules",
]

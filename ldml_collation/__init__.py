"""LDML Collation Converter — LDML collation trees to collation rule text.

WHY: Writing-system definitions store sort-order tailorings as LDML
``<collation>`` elements, but collation engines read ICU rule text. This
package compiles one into the other, and offers a far more readable
"simple rules" form when a tailoring is plain enough to allow it.

HOW: Three-stage pipeline — adapt (parsed LDML element → immutable
CollationTree), translate (ICU compiler or simple-rules reducer), format
(pluggable formatters deciding which dialect to emit). Each stage is
independently testable.

RULES:
- The core (ldml_collation.core) is pure: tree in, string out
- All formatters consume the same CollationTree
- "Not representable as simple rules" is a None result, never an error
"""

from ldml_collation.core import (
    CollationConfigError,
    CollationError,
    CollationTree,
    compile_icu_rules,
    try_get_simple_rules,
)

__version__ = "0.1.0"

__all__ = [
    "CollationConfigError",
    "CollationError",
    "CollationTree",
    "compile_icu_rules",
    "try_get_simple_rules",
]

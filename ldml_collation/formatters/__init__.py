"""Output formatter registry — pluggable rule dialects.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new dialects: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["icu_rules"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from ldml_collation.formatters.icu_rules import IcuRulesFormatter
from ldml_collation.formatters.preferred import PreferredRulesFormatter
from ldml_collation.formatters.simple_rules import SimpleRulesFormatter

if TYPE_CHECKING:
    from ldml_collation.formatters.base import BaseFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "icu_rules": IcuRulesFormatter,
    "simple_rules": SimpleRulesFormatter,
    "preferred": PreferredRulesFormatter,
}

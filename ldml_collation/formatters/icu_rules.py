"""ICU rule formatter — the full compiler output.

WHY: Every collation tree can be written as ICU rules, so this formatter
never comes back empty. It is the baseline every other dialect falls back
to.

RULES:
- Always returns exactly one output, even for an empty tree (content "")
- Output suffix: "-icu-rules.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from ldml_collation.core.compiler import compile_icu_rules
from ldml_collation.core.ir import CollationTree
from ldml_collation.formatters.base import DIALECT_ICU, BaseFormatter, FormatterOutput


class IcuRulesFormatter(BaseFormatter):
    """Formatter that produces the complete ICU tailoring rules."""

    @property
    def name(self) -> str:
        return "ICU Rules"

    def format(self, tree: CollationTree) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-icu-rules.txt",
                content=compile_icu_rules(tree, newline=self.newline),
                media_type="text/plain",
                dialect=DIALECT_ICU,
            )
        ]

"""Simple rules formatter — only for trees the simple dialect can express.

WHY: Writing-system editors show simple rules to users who do not know ICU
syntax. The file is only worth producing when the conversion is lossless.

HOW: Delegates to try_get_simple_rules(). A None result (not representable)
becomes an empty output list instead of an error.

RULES:
- Returns [] when the tree has settings or non-simple rule items
- Output suffix: "-simple-rules.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from ldml_collation.core.ir import CollationTree
from ldml_collation.core.simple_rules import try_get_simple_rules
from ldml_collation.formatters.base import DIALECT_SIMPLE, BaseFormatter, FormatterOutput


class SimpleRulesFormatter(BaseFormatter):
    """Formatter that produces the simple rules dialect when possible."""

    @property
    def name(self) -> str:
        return "Simple Rules"

    def format(self, tree: CollationTree) -> List[FormatterOutput]:
        rules = try_get_simple_rules(tree, newline=self.newline)
        if rules is None:
            return []
        return [
            FormatterOutput(
                suffix="-simple-rules.txt",
                content=rules,
                media_type="text/plain",
                dialect=DIALECT_SIMPLE,
            )
        ]

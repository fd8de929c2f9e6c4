"""Preferred rules formatter — simple rules if lossless, ICU rules otherwise.

WHY: Most callers just want "the best readable rules" for a tailoring:
the simple dialect when it can say everything, the full ICU syntax when
it cannot. This formatter encodes that decision once.

HOW: Tries the simple-rules reducer first; on a None result compiles the
full ICU rules. The chosen syntax is reported in FormatterOutput.dialect.

RULES:
- Always returns exactly one output
- dialect is "simple" or "icu"
- Output suffix: "-rules.txt"
"""

from __future__ import annotations

import logging
from typing import List

from ldml_collation.core.compiler import compile_icu_rules
from ldml_collation.core.ir import CollationTree
from ldml_collation.core.simple_rules import try_get_simple_rules
from ldml_collation.formatters.base import (
    DIALECT_ICU,
    DIALECT_SIMPLE,
    BaseFormatter,
    FormatterOutput,
)

logger = logging.getLogger(__name__)


class PreferredRulesFormatter(BaseFormatter):
    """Formatter that picks the simple dialect whenever it is representable."""

    @property
    def name(self) -> str:
        return "Preferred Rules"

    def format(self, tree: CollationTree) -> List[FormatterOutput]:
        rules = try_get_simple_rules(tree, newline=self.newline)
        dialect = DIALECT_SIMPLE
        if rules is None:
            logger.debug("Tree not representable as simple rules; using ICU rules")
            rules = compile_icu_rules(tree, newline=self.newline)
            dialect = DIALECT_ICU
        return [
            FormatterOutput(
                suffix="-rules.txt",
                content=rules,
                media_type="text/plain",
                dialect=dialect,
            )
        ]

"""Reducer from LDML collation trees to the "simple rules" dialect.

WHY: Most tailorings just list characters in order, with some treated as
secondary or tertiary variants. For those, ICU syntax is noisy; the simple
dialect expresses the same order with plain separators that a non-expert
can read and edit:
  - a new line      → primary difference
  - a space         → secondary difference
  - ``(a b c)``     → tertiary group (a, b, c differ only in case etc.)

HOW: try_get_simple_rules() first checks the cheap preconditions (no
settings), then walks the rule body with a single "inside tertiary group"
flag. A tertiary item opens a group retroactively by inserting ``(`` at the
last separator, so the preceding token joins the group.

RULES:
- Any settings → not representable (None)
- No ``<rules>`` or an empty one → "" (trivially representable)
- First item must be ``<reset before="primary"><first_non_ignorable/></reset>``
- Later items: p, s, t, pc, sc, tc only; anything else → None
- Text is emitted raw, never ICU-escaped (the dialect has no escapes)
- None means "use the full ICU rules instead", not an error
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ldml_collation.core.escaping import iter_scalars
from ldml_collation.core.extraction import get_before_option, get_icu_data, get_text_data
from ldml_collation.core.ir import (
    PRIMARY,
    PRIMARY_CONCAT,
    RESET,
    SECONDARY,
    SECONDARY_CONCAT,
    TERTIARY,
    TERTIARY_CONCAT,
    CollationTree,
    RuleItem,
)

logger = logging.getLogger(__name__)

NEWLINE = "\n"

GROUP_OPEN = "("
GROUP_CLOSE = ")"

_SIMPLE_START_BEFORE = "[before 1] "
_SIMPLE_START_DATA = "[first regular]"


class _SimpleRulesBuilder:
    """Output buffer plus the "inside tertiary group" flag."""

    def __init__(self, newline: str) -> None:
        self.newline = newline
        self.in_group = False
        self._parts: List[str] = []

    def append(self, text: str) -> None:
        self._parts.append(text)

    def append_each(self, separator: str, data: str) -> None:
        """Append ``separator + char`` for every scalar value of ``data``."""
        for unit in iter_scalars(data):
            self._parts.append(separator + unit)

    def end_group(self) -> None:
        if self.in_group:
            self.in_group = False
            self._parts.append(GROUP_CLOSE)

    def begin_group(self) -> None:
        """Open a tertiary group around the most recent token, if none is open.

        HOW: The token starts after the last newline or space written so
        far; ``(`` is inserted there.
        """
        if self.in_group:
            return
        self.in_group = True
        text = self.text()
        newline_index = text.rfind(self.newline)
        after_newline = newline_index + len(self.newline) if newline_index >= 0 else 0
        after_space = text.rfind(" ") + 1
        position = max(after_newline, after_space)
        self._parts = [text[:position], GROUP_OPEN, text[position:]]

    def text(self) -> str:
        return "".join(self._parts)


def _is_simple_start(item: RuleItem) -> bool:
    """True for ``<reset before="primary"><first_non_ignorable/></reset>``."""
    return (
        item.kind == RESET
        and get_before_option(item) == _SIMPLE_START_BEFORE
        and get_icu_data(item) == _SIMPLE_START_DATA
    )


def try_get_simple_rules(tree: CollationTree, newline: str = NEWLINE) -> Optional[str]:
    """Express a collation tree in the simple rules dialect, if possible.

    WHY: Callers prefer the simple dialect whenever it is lossless and fall
    back to compile_icu_rules() otherwise. A None result is the expected
    signal for that fallback.

    HOW: Rejects trees with settings, then delegates the body to
    get_simple_rules().

    Args:
        tree: The collation element tree.
        newline: Separator used for primary differences.

    Returns:
        The simple rules text, or None when the tree cannot be expressed.

    Raises:
        ValueError: If tree is None.
        CollationConfigError: If the first reset is structurally invalid.
    """
    if tree is None:
        raise ValueError("A collation tree is required.")

    if tree.settings is not None:
        logger.debug("Simple rules cannot express collation settings")
        return None

    if tree.rules is None:
        return ""

    return get_simple_rules(tree.rules, newline)


def get_simple_rules(items: Sequence[RuleItem], newline: str = NEWLINE) -> Optional[str]:
    """Render a rule body in the simple dialect, or None if it does not fit.

    RULES:
    - p: close group, newline + text
    - s: close group, space + text
    - t: open group (retroactively), space + text
    - pc/sc/tc: as p/s/t, one separator per character
    - Any open group is closed at the end; the result is stripped
    """
    if not items:
        return ""

    first = items[0]
    if not _is_simple_start(first):
        logger.debug("Simple rules must start with a primary reset before the first regular element")
        return None

    builder = _SimpleRulesBuilder(newline)

    for item in items[1:]:
        kind = item.kind
        if kind == PRIMARY:
            builder.end_group()
            builder.append(newline + get_text_data(item))
        elif kind == SECONDARY:
            builder.end_group()
            builder.append(" " + get_text_data(item))
        elif kind == TERTIARY:
            builder.begin_group()
            builder.append(" " + get_text_data(item))
        elif kind == PRIMARY_CONCAT:
            builder.end_group()
            builder.append_each(newline, get_text_data(item))
        elif kind == SECONDARY_CONCAT:
            builder.end_group()
            builder.append_each(" ", get_text_data(item))
        elif kind == TERTIARY_CONCAT:
            builder.begin_group()
            builder.append_each(" ", get_text_data(item))
        else:
            logger.debug("Simple rules cannot express '%s' rule elements", kind)
            return None

    builder.end_group()
    return builder.text().strip()

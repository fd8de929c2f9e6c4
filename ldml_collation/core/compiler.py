"""LDML collation tree → ICU tailoring rule compiler.

WHY: Collation engines consume ICU rule text, but writing-system data
stores tailorings as LDML ``<collation>`` elements. This module is the
bridge: it translates the full element tree — settings, option
directives, and the ordered rule body — into one ICU rule string.

HOW: A single pass over the tree appends text fragments to a per-call
buffer. Settings become bracketed directives; each rule item becomes its
relation operator followed by escaped data. The ``variableTop`` setting is
resolved against the rule body as it is emitted: the first item whose
escaped data equals it gets the ``[variable top]`` marker. If no item
matches, a reset to the variable top is spliced in right after the
settings block. Finally leading (and unescaped trailing) whitespace is
trimmed.

RULES:
- Settings directives are emitted in attribute order, each on a new line
- strength: primary/secondary/tertiary/quaternary/identical → 1/2/3/4/I
- backwards: off/on → 1/2; other strength/backwards values are fatal
- The variable top is consumed at most once
- The fallback position for the variable top is fixed right after the
  settings block and never moves
- Concatenated items emit one relation per scalar value; surrogate pairs
  are never split
- Any structural problem raises CollationConfigError; no partial output
- No state survives between calls; the compiler is reentrant
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ldml_collation.core.errors import CollationConfigError
from ldml_collation.core.escaping import BACKSLASH, escape_for_icu, escape_scalar, iter_scalars
from ldml_collation.core.extraction import (
    get_before_option,
    get_icu_data,
    get_text_data,
    unescape_variable_top,
)
from ldml_collation.core.ir import (
    CONTEXT,
    EXTEND,
    EXTENDED,
    IDENTICAL,
    IDENTICAL_CONCAT,
    PRIMARY,
    PRIMARY_CONCAT,
    RESET,
    SECONDARY,
    SECONDARY_CONCAT,
    TERTIARY,
    TERTIARY_CONCAT,
    CollationTree,
    RuleItem,
    Settings,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NEWLINE = "\n"

VARIABLE_TOP_MARKER = " < [variable top]"

SUPPRESS_CONTRACTIONS = "suppress_contractions"
OPTIMIZE = "optimize"

STRENGTH_VALUES = {
    "primary": "1",
    "secondary": "2",
    "tertiary": "3",
    "quaternary": "4",
    "identical": "I",
}

BACKWARDS_VALUES = {
    "off": "1",
    "on": "2",
}

# Settings copied into a directive unchanged: [name value]
_VERBATIM_SETTINGS = frozenset({
    "alternate",
    "normalization",
    "caseLevel",
    "caseFirst",
    "numeric",
})

RELATION_OPERATORS = {
    PRIMARY: "<",
    SECONDARY: "<<",
    TERTIARY: "<<<",
    IDENTICAL: "=",
}

CONCAT_OPERATORS = {
    PRIMARY_CONCAT: "<",
    SECONDARY_CONCAT: "<<",
    TERTIARY_CONCAT: "<<<",
    IDENTICAL_CONCAT: "=",
}


@dataclass
class _CompilerState:
    """Per-call output buffer and pending variable top.

    WHY: The variable top is a non-local dependency — set by the settings,
    consumed somewhere in the rule body. Keeping it on an explicit state
    object (instead of module globals) keeps concurrent calls independent.

    RULES:
    - variable_top: escaped target text, None once consumed (or never set)
    - parts: output fragments, joined once at the end
    """

    variable_top: Optional[str] = None
    parts: List[str] = field(default_factory=list)

    def take_variable_top(self, icu_data: str) -> str:
        """Return the marker if ``icu_data`` is the pending variable top, consuming it."""
        if self.variable_top is None or self.variable_top != icu_data:
            return ""
        self.variable_top = None
        return VARIABLE_TOP_MARKER


def compile_icu_rules(tree: CollationTree, newline: str = NEWLINE) -> str:
    """Compile a collation tree into ICU rule text.

    WHY: This is the main entry point of the core. Every collation tree —
    however unusual its settings — can be expressed this way, so callers
    always have this output to fall back on.

    HOW:
    1. Settings directives; remember the variable top and the position
       right after the settings block
    2. [suppress contractions ...] and [optimize ...] directives
    3. Rule body, resolving the variable top as items are emitted
    4. Splice an unmatched variable top in at the remembered position
    5. Trim whitespace (see trim_unescaped_whitespace)

    Args:
        tree: The collation element tree.
        newline: Line break placed before each directive and reset.

    Returns:
        The complete ICU rule string ("" for a tree with no content).

    Raises:
        ValueError: If tree is None.
        CollationConfigError: If the tree is structurally invalid.
    """
    if tree is None:
        raise ValueError("A collation tree is required.")

    state = _CompilerState()
    fallback_index = 0

    if tree.settings is not None:
        settings_text, state.variable_top = get_icu_settings(tree.settings, newline)
        state.parts.append(settings_text)
        fallback_index = len(state.parts)

    if tree.suppress_contractions is not None:
        state.parts.append(get_icu_option(SUPPRESS_CONTRACTIONS, tree.suppress_contractions, newline))

    if tree.optimize is not None:
        state.parts.append(get_icu_option(OPTIMIZE, tree.optimize, newline))

    if tree.rules is not None:
        for item in tree.rules:
            state.parts.append(_compile_rule_item(item, state, newline))
        logger.debug("Compiled %d collation rule items", len(tree.rules))

    if state.variable_top is not None:
        logger.debug("Variable top %r not found in rules; resetting to it after settings",
                     state.variable_top)
        state.parts.insert(
            fallback_index,
            "{}&{}{}".format(newline, state.variable_top, VARIABLE_TOP_MARKER),
        )

    return trim_unescaped_whitespace("".join(state.parts))


def trim_unescaped_whitespace(rules: str) -> str:
    """Trim all leading whitespace and unescaped trailing whitespace.

    If the last backslash sits two characters before the end, the final
    character is escaped (e.g. ``\\ ``) and must survive, so only the
    start is trimmed.
    """
    if rules.rfind(BACKSLASH) + 2 == len(rules):
        return rules.lstrip()
    return rules.strip()


def get_icu_settings(settings: Settings, newline: str = NEWLINE) -> Tuple[str, Optional[str]]:
    """Translate ``<settings>`` attributes into ICU directives.

    WHY: Each LDML setting has an ICU directive of its own, some with
    renamed values. The variable top is the exception: it is not a
    directive but a position marker inside the rule body.

    HOW: Walks the attributes in order, appending one ``[name value]``
    directive per recognised attribute. Unknown attributes are ignored.

    RULES:
    - Each directive is preceded by ``newline``
    - hiraganaQuaternary is spelled ``hiraganaQ`` in ICU
    - variableTop is decoded from its ``uXXXX`` form and escaped

    Returns:
        Tuple of (directives_text, escaped_variable_top_or_None).

    Raises:
        CollationConfigError: For an unknown strength or backwards value,
            or a malformed variableTop.
    """
    directives: List[str] = []
    variable_top: Optional[str] = None

    for name, value in settings.attributes:
        if name in _VERBATIM_SETTINGS:
            directives.append("{}[{} {}]".format(newline, name, value))
        elif name == "strength":
            if value not in STRENGTH_VALUES:
                raise CollationConfigError(
                    "Invalid collation strength setting in LDML: '{}'".format(value),
                    node="settings",
                )
            directives.append("{}[strength {}]".format(newline, STRENGTH_VALUES[value]))
        elif name == "backwards":
            if value not in BACKWARDS_VALUES:
                raise CollationConfigError(
                    "Invalid backwards setting in LDML collation: '{}'".format(value),
                    node="settings",
                )
            directives.append("{}[backwards {}]".format(newline, BACKWARDS_VALUES[value]))
        elif name == "hiraganaQuaternary":
            directives.append("{}[hiraganaQ {}]".format(newline, value))
        elif name == "variableTop":
            variable_top = escape_for_icu(unescape_variable_top(value))
        else:
            logger.debug("Ignoring unsupported collation setting '%s'", name)

    return "".join(directives), variable_top


def get_icu_option(name: str, value: str, newline: str = NEWLINE) -> str:
    """Render an option element as ``[suppress contractions ...]`` / ``[optimize ...]``."""
    if name not in (SUPPRESS_CONTRACTIONS, OPTIMIZE):
        raise CollationConfigError(
            "Invalid LDML collation option element: {}".format(name),
            node=name,
        )
    return "{}[{} {}]".format(newline, name.replace("_", " "), value)


def _compile_rule_item(item: RuleItem, state: _CompilerState, newline: str) -> str:
    """Translate one top-level rule item into ICU text."""
    kind = item.kind

    if kind == RESET:
        before = get_before_option(item)
        icu_data = get_icu_data(item)
        return "{}& {}{}{}".format(newline, before, icu_data, state.take_variable_top(icu_data))

    if kind in RELATION_OPERATORS:
        icu_data = get_icu_data(item)
        return " {} {}{}".format(RELATION_OPERATORS[kind], icu_data, state.take_variable_top(icu_data))

    if kind in CONCAT_OPERATORS:
        return _compile_concatenated(CONCAT_OPERATORS[kind], item, state)

    if kind == EXTENDED:
        return _compile_extended(item)

    raise CollationConfigError(
        "Invalid LDML collation rule element: {}".format(kind),
        node=kind,
    )


def _compile_concatenated(operator: str, item: RuleItem, state: _CompilerState) -> str:
    """Emit one relation per scalar value of a ``pc``/``sc``/``tc``/``ic`` item.

    WHY: ``<pc>abc</pc>`` is shorthand for ``< a < b < c``. Each character
    is a separate relation, so each is escaped on its own and each may be
    the variable top.

    RULES:
    - A quoted span never crosses characters: ``-`` → ``'-'``
    - Surrogate pairs stay together
    """
    if item.is_empty:
        raise CollationConfigError(
            "Empty LDML collation rule: {}".format(item.kind),
            node=item.kind,
        )
    pieces = []
    for unit in iter_scalars(get_text_data(item)):
        icu_data = escape_scalar(unit)
        pieces.append(" {} {}{}".format(operator, icu_data, state.take_variable_top(icu_data)))
    return "".join(pieces)


def _compile_extended(item: RuleItem) -> str:
    """Translate an extended (``x``) item: ``<op> context | data / extend``.

    Children are taken in document order. Context and extension text
    accumulate; the strength child wraps what has accumulated so far in
    its operator.
    """
    rule = ""
    for child in item.children:
        kind = child.kind
        if kind == CONTEXT:
            rule += "{} | ".format(get_icu_data(child))
        elif kind == EXTEND:
            rule += " / {}".format(get_icu_data(child))
        elif kind in RELATION_OPERATORS:
            rule = " {} {}{}".format(RELATION_OPERATORS[kind], rule, get_icu_data(child))
        else:
            raise CollationConfigError(
                "Invalid node in extended LDML collation rule: {}".format(kind),
                node=kind,
            )
    return rule

"""Intermediate representation dataclasses for LDML collation trees.

WHY: An LDML ``<collation>`` element arrives from an XML library as a live,
parent-linked node graph. The compiler and the simple-rule reducer only need
a handful of node kinds and their payloads. Decoupling the core from any
particular XML library keeps both components pure: they walk an immutable
tree of plain values and return a string.

HOW: Four dataclasses form a hierarchy:
  CodePoint        — one ``<cp hex="..."/>`` reference
  IndirectPosition — a named anchor such as ``<first_non_ignorable/>``
  RuleItem         — one element of the ``<rules>`` body (or of an ``<x>``)
  Settings         — the ``<settings>`` attributes, in document order
  CollationTree    — the complete ``<collation>`` element

RULES:
- All classes are frozen; the core never mutates its input
- RuleItem.kind is the LDML element name ("reset", "p", "sc", "x", ...).
  It is a plain string so that unknown kinds reach the compiler and are
  reported there as structural errors
- CollationTree.rules is None when ``<rules>`` is absent and a (possibly
  empty) tuple when it is present
- Settings.attributes is a tuple of (name, value) pairs in document order
  (directives are emitted in it); a dict passed in is converted, so every
  class here is hashable
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

# ---------------------------------------------------------------------------
# Rule item kinds (LDML element names)
# ---------------------------------------------------------------------------

RESET = "reset"
PRIMARY = "p"
SECONDARY = "s"
TERTIARY = "t"
IDENTICAL = "i"
PRIMARY_CONCAT = "pc"
SECONDARY_CONCAT = "sc"
TERTIARY_CONCAT = "tc"
IDENTICAL_CONCAT = "ic"
EXTENDED = "x"

# Children of an extended (``x``) item besides the strength markers.
CONTEXT = "context"
EXTEND = "extend"

# Indirect position anchors with a dedicated ICU spelling.
FIRST_NON_IGNORABLE = "first_non_ignorable"
LAST_NON_IGNORABLE = "last_non_ignorable"


@dataclass(frozen=True)
class CodePoint:
    """A single explicit code point reference (``<cp hex="0041"/>``).

    The hex string is kept undecoded; decoding (and rejecting bad values)
    is the extractor's job so the error surfaces with the rule that owns it.
    """

    hex: str


@dataclass(frozen=True)
class IndirectPosition:
    """A named anchor used in place of literal text, e.g. ``first_non_ignorable``."""

    name: str


@dataclass(frozen=True)
class RuleItem:
    """One rule-body element with its payload.

    WHY: Every LDML rule element carries the same payload shapes — literal
    text, a run of ``<cp>`` references, or (for resets) an anchor — plus a
    few kind-specific extras. One dataclass covers them all.

    HOW: Exactly one payload is normally populated. ``children`` is only
    used by extended (``x``) items, whose sub-items are themselves
    RuleItems of kind context/extend/p/s/t/i.

    RULES:
    - kind: LDML element name (see the module constants)
    - text: all literal text of the element ("" when absent)
    - code_points: ``<cp>`` references in document order
    - anchor: set when the element's first child is not a ``<cp>``
    - before: the reset's ``before`` attribute, or None
    - children: sub-items of an ``x`` item, in document order
    """

    kind: str
    text: str = ""
    code_points: Tuple[CodePoint, ...] = ()
    anchor: Optional[IndirectPosition] = None
    before: Optional[str] = None
    children: Tuple[RuleItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when the element had no text and no child elements at all."""
        return (
            not self.text
            and not self.code_points
            and self.anchor is None
            and not self.children
        )


@dataclass(frozen=True)
class Settings:
    """The ``<settings>`` element's attributes, in document order.

    Accepts a mapping or an iterable of (name, value) pairs and stores the
    pairs as a tuple.
    """

    attributes: Tuple[Tuple[str, str], ...] = ()

    def __init__(self, attributes: Union[Mapping[str, str], Iterable[Tuple[str, str]]] = ()) -> None:
        if isinstance(attributes, Mapping):
            attributes = attributes.items()
        object.__setattr__(self, "attributes", tuple((name, value) for name, value in attributes))


@dataclass(frozen=True)
class CollationTree:
    """The complete intermediate representation of one ``<collation>`` element.

    WHY: This is the single input both core components receive. It holds
    everything either of them reads: settings, the two option directives,
    and the ordered rule body.

    HOW: Built by the LDML adapter from a parsed XML element, or directly by
    callers and tests.

    RULES:
    - settings: None when there is no ``<settings>`` element
    - suppress_contractions / optimize: element text, or None when absent
    - rules: None when ``<rules>`` is absent, else the ordered items
    """

    settings: Optional[Settings] = None
    suppress_contractions: Optional[str] = None
    optimize: Optional[str] = None
    rules: Optional[Tuple[RuleItem, ...]] = None

"""Adapter: parsed LDML ``<collation>`` elements to the collation tree IR.

WHY: The core works on an immutable CollationTree so it never depends on an
XML library. Real input, though, is LDML documents (CLDR locale files,
writing-system definitions). This adapter is the one place that knows how
LDML spells collation data in XML.

HOW: collation_tree_from_element() reads an already-parsed element (lxml,
or anything with the ElementTree API) and builds the IR:
  - ``<settings>``              → Settings, attributes in document order
  - ``<suppress_contractions>`` → its text
  - ``<optimize>``              → its text
  - ``<rules>``                 → one RuleItem per child element
Within a rule element, ``<cp hex>`` children become CodePoints, a first child
that is not ``<cp>`` becomes the IndirectPosition anchor, and ``<x>``
children are converted recursively. load_collation_tree() parses a file with
lxml and picks the requested ``<collation type>``.

RULES:
- Adapters are pure data transformations; only load_collation_tree() does I/O
- Comments and processing instructions are skipped
- Only the first ``<settings>``/``<rules>``/option element counts
- Element text is the concatenation of all descendant text
- A ``<collation>`` without a type attribute is the "standard" collation
- External entities and network access are disabled when parsing
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from lxml import etree

from ldml_collation.core.errors import CollationConfigError
from ldml_collation.core.ir import (
    EXTENDED,
    CodePoint,
    CollationTree,
    IndirectPosition,
    RuleItem,
    Settings,
)

logger = logging.getLogger(__name__)

DEFAULT_COLLATION_TYPE = "standard"

_CODE_POINT_TAG = "cp"


def _local_name(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from a tag or attribute name."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _child_elements(element: Any) -> Iterator[Any]:
    """Yield child elements, skipping comments and processing instructions."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def _element_text(element: Any) -> str:
    """Concatenate all descendant text of an element (comments excluded)."""
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            parts.append(_element_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def rule_item_from_element(element: Any) -> RuleItem:
    """Convert one rule element (``<reset>``, ``<p>``, ``<x>``, ...) into a RuleItem.

    WHY: Rule elements carry their payload in three different shapes, and
    the core needs to know which one it has without looking at XML.

    HOW: Collects ``<cp>`` children as code points. For ``<x>`` every child
    becomes a sub-item; for any other element a leading non-``<cp>`` child
    is the anchor. The literal text is recorded for every element but
    ``<x>``, whose data lives in its children; the extractor decides
    whether it is used.

    RULES:
    - kind is the local element name, unknown names are kept as-is
    - ``before`` is taken verbatim (validated later by the compiler)
    """
    kind = _local_name(element.tag)
    children = list(_child_elements(element))

    code_points = tuple(
        CodePoint(child.get("hex", ""))
        for child in children
        if _local_name(child.tag) == _CODE_POINT_TAG
    )

    anchor: Optional[IndirectPosition] = None
    sub_items = ()
    text = _element_text(element)
    if kind == EXTENDED:
        sub_items = tuple(rule_item_from_element(child) for child in children)
        text = ""
    elif children and _local_name(children[0].tag) != _CODE_POINT_TAG:
        anchor = IndirectPosition(_local_name(children[0].tag))

    return RuleItem(
        kind=kind,
        text=text,
        code_points=code_points,
        anchor=anchor,
        before=element.get("before"),
        children=sub_items,
    )


def collation_tree_from_element(element: Any) -> CollationTree:
    """Convert a parsed ``<collation>`` element into a CollationTree.

    Args:
        element: An lxml (or ElementTree) element whose tag is ``collation``.

    Returns:
        The collation tree IR.

    Raises:
        ValueError: If element is None.
        CollationConfigError: If element is not a ``<collation>``.
    """
    if element is None:
        raise ValueError("A collation element is required.")

    tag = _local_name(element.tag)
    if tag != "collation":
        raise CollationConfigError(
            "Expected a <collation> element, got <{}>".format(tag),
            node=tag,
        )

    settings: Optional[Settings] = None
    suppress_contractions: Optional[str] = None
    optimize: Optional[str] = None
    rules = None

    for child in _child_elements(element):
        name = _local_name(child.tag)
        if name == "settings" and settings is None:
            settings = Settings({
                _local_name(key): value for key, value in child.attrib.items()
            })
        elif name == "suppress_contractions" and suppress_contractions is None:
            suppress_contractions = _element_text(child)
        elif name == "optimize" and optimize is None:
            optimize = _element_text(child)
        elif name == "rules" and rules is None:
            rules = tuple(rule_item_from_element(item) for item in _child_elements(child))
        else:
            logger.debug("Skipping <%s> in <collation>", name)

    return CollationTree(
        settings=settings,
        suppress_contractions=suppress_contractions,
        optimize=optimize,
        rules=rules,
    )


def find_collation_element(root: Any, collation_type: str = DEFAULT_COLLATION_TYPE) -> Optional[Any]:
    """Find the ``<collation type=...>`` element in an lxml LDML tree.

    RULES:
    - A root that is itself a ``<collation>`` is returned as-is
    - A collation with no type attribute matches "standard"
    - Returns None when nothing matches
    """
    if _local_name(root.tag) == "collation":
        return root
    for collation in root.xpath("//*[local-name()='collation']"):
        if collation.get("type", DEFAULT_COLLATION_TYPE) == collation_type:
            return collation
    return None


def load_collation_tree(
    path: Union[str, Path],
    collation_type: str = DEFAULT_COLLATION_TYPE,
) -> CollationTree:
    """Parse an LDML file and return the requested collation as a CollationTree.

    Raises:
        OSError: If the file cannot be read.
        lxml.etree.XMLSyntaxError: If the file is not well-formed XML.
        CollationConfigError: If the document has no matching collation.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    document = etree.parse(str(path), parser)
    element = find_collation_element(document.getroot(), collation_type)
    if element is None:
        raise CollationConfigError(
            "No <collation type=\"{}\"> element in {}".format(collation_type, path),
            node="collation",
        )
    logger.debug("Loaded <collation type=\"%s\"> from %s", collation_type, path)
    return collation_tree_from_element(element)

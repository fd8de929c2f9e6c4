"""Payload extraction for rule items: code points, literal text, anchors.

WHY: Every rule element stores its data in one of three shapes — literal
text, a run of ``<cp hex>`` references, or an indirect-position anchor.
Both the compiler and the simple-rule reducer need the decoded data, and
both must reject malformed code points the same way.

HOW: get_text_data() decodes the raw characters; get_icu_data() adds anchor
rendering and ICU escaping on top. Hex decoding is strict: only hex
digits, and only Unicode scalar values.

RULES:
- ``<cp>`` data wins; literal text is used only when the cp data is empty
- An item with no text, no code points, no anchor and no children is an
  "empty rule" error
- first_non_ignorable → "[first regular]", last_non_ignorable →
  "[last regular]", any other anchor → "[name with spaces]"
"""

from __future__ import annotations

import re

from ldml_collation.core.errors import CollationConfigError
from ldml_collation.core.escaping import escape_for_icu
from ldml_collation.core.ir import (
    FIRST_NON_IGNORABLE,
    LAST_NON_IGNORABLE,
    CodePoint,
    IndirectPosition,
    RuleItem,
)

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")

_MAX_CODE_POINT = 0x10FFFF

_ANCHOR_NAMES = {
    FIRST_NON_IGNORABLE: "[first regular]",
    LAST_NON_IGNORABLE: "[last regular]",
}

_BEFORE_OPTIONS = {
    "primary": "[before 1] ",
    "secondary": "[before 2] ",
    "tertiary": "[before 3] ",
}


def code_point_to_text(value: int, node: str) -> str:
    """Convert a code point to a one-character string, rejecting non-scalars.

    Surrogate code points and values above U+10FFFF are not Unicode scalar
    values and cannot appear in rule data.
    """
    if value < 0 or value > _MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF:
        raise CollationConfigError(
            "Invalid Unicode code point U+{:X} in LDML '{}' element.".format(value, node),
            node=node,
        )
    return chr(value)


def parse_hex(hex_text: str, node: str) -> int:
    """Parse a bare hexadecimal string (no prefix, sign or whitespace)."""
    if not _HEX_RE.match(hex_text):
        raise CollationConfigError(
            "Invalid non-hexadecimal character code '{}' in LDML '{}' element.".format(
                hex_text, node,
            ),
            node=node,
        )
    return int(hex_text, 16)


def decode_code_point(code_point: CodePoint) -> str:
    """Decode one ``<cp hex>`` reference. An empty hex attribute decodes to ""."""
    if not code_point.hex:
        return ""
    return code_point_to_text(parse_hex(code_point.hex, "cp"), "cp")


def get_text_data(item: RuleItem) -> str:
    """Return the raw (unescaped) characters of a rule item.

    HOW: Concatenates the decoded ``<cp>`` references; when that yields
    nothing, falls back to the element's literal text.
    """
    data = "".join(decode_code_point(cp) for cp in item.code_points)
    if not data:
        data = item.text
    return data


def get_indirect_position(anchor: IndirectPosition) -> str:
    """Render an anchor as an ICU indirect position, e.g. ``[first regular]``."""
    rendered = _ANCHOR_NAMES.get(anchor.name)
    if rendered is not None:
        return rendered
    return "[{}]".format(anchor.name.replace("_", " "))


def get_icu_data(item: RuleItem) -> str:
    """Return the ICU-ready data of a rule item.

    WHY: This is the single path by which rule data enters the ICU output,
    so every payload is escaped exactly once.

    HOW: Anchors render as indirect positions; everything else is decoded
    with get_text_data() and escaped with escape_for_icu().

    RULES:
    - Raises CollationConfigError for an empty item
    - Anchors are never escaped

    Args:
        item: A rule item (or a child of an extended item).

    Returns:
        Escaped rule data.
    """
    if item.is_empty:
        raise CollationConfigError(
            "Empty LDML collation rule: {}".format(item.kind),
            node=item.kind,
        )
    if item.anchor is not None:
        return get_indirect_position(item.anchor)
    return escape_for_icu(get_text_data(item))


def get_before_option(item: RuleItem) -> str:
    """Return the ``[before N] `` prefix for a reset, or "" when there is none."""
    if not item.before:
        return ""
    option = _BEFORE_OPTIONS.get(item.before)
    if option is None:
        raise CollationConfigError(
            "Invalid before specifier '{}' on reset collation element.".format(item.before),
            node=item.kind,
        )
    return option


def unescape_variable_top(value: str) -> str:
    """Decode a ``variableTop`` setting such as ``"u0041u0042"`` into text.

    The value is a sequence of hex code points, each introduced by ``u``.
    Empty pieces (leading ``u``, doubled ``u``) are skipped.
    """
    chars = []
    for hex_code in value.split("u"):
        if not hex_code:
            continue
        chars.append(code_point_to_text(parse_hex(hex_code, "settings"), "settings"))
    return "".join(chars)

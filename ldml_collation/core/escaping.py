"""ICU literal escaping and Unicode escape handling.

WHY: ICU rule syntax reserves every ASCII character that is not a letter
or digit, and all whitespace. Collation data routinely contains such
characters (hyphens, apostrophes, spaces), and LDML authors sometimes
escape them by hand already. Output must be ICU-safe without escaping
anything twice.

HOW: escape_for_icu() walks the text one scalar value at a time, keeping a
single "inside a quoted span" flag. Runs of characters that need escaping
share one ``'...'`` span. Existing escapes (``\\x``, ``'x``) and fixed-width
Unicode escapes (``\\uXXXX``, ``\\UXXXXXXXX``) are copied through verbatim.

RULES:
- Needs escaping: (code point < U+007F and not alphanumeric) or whitespace
- A quote is always doubled (``''``), inside a span or not, and never opens one
- Outside a span, a backslash or quote followed by a character that needs
  escaping is an existing escape; both characters pass through unchanged
- Inside a span, a quote is literal data (doubled); a backslash escape or
  Unicode escape first closes the span
- ``\\uXXXX`` / ``\\UXXXXXXXX`` pass through uninspected; the ``u``/``U``
  prefix decides the width, hex digits may be either case
- A surrogate pair is one scalar value and is never split
- The two escape regexes are the only module-level state; they are immutable
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Tuple

from ldml_collation.core.errors import CollationConfigError

QUOTE = "'"
BACKSLASH = "\\"

# Fixed-width Unicode escapes: lowercase u takes 4 digits, uppercase U takes 8.
UNICODE_ESCAPE_4_DIGIT = re.compile(r"\\u([0-9A-Fa-f]{4})")
UNICODE_ESCAPE_8_DIGIT = re.compile(r"\\U([0-9A-Fa-f]{8})")

_HIGH_SURROGATES = ("\ud800", "\udbff")
_LOW_SURROGATES = ("\udc00", "\udfff")


def _is_high_surrogate(ch: str) -> bool:
    return _HIGH_SURROGATES[0] <= ch <= _HIGH_SURROGATES[1]


def _is_low_surrogate(ch: str) -> bool:
    return _LOW_SURROGATES[0] <= ch <= _LOW_SURROGATES[1]


def scalar_at(text: str, index: int) -> str:
    """Return the scalar value starting at ``index`` (one or two code units)."""
    ch = text[index]
    if (
        _is_high_surrogate(ch)
        and index + 1 < len(text)
        and _is_low_surrogate(text[index + 1])
    ):
        return text[index:index + 2]
    return ch


def iter_scalars(text: str) -> Iterator[str]:
    """Yield the scalar values of ``text``, keeping surrogate pairs together.

    WHY: Python strings are normally code point sequences already, but text
    that travelled through UTF-16 APIs (``surrogatepass`` decoding, JSON
    with paired ``\\ud83d\\ude00`` escapes) can hold the two halves of a
    supplementary character as separate code units. Per-character output
    (concatenated rules, simple rules) must never put an operator between
    them.

    RULES:
    - A high surrogate immediately followed by a low surrogate is one unit
    - Lone surrogates are yielded on their own
    """
    index = 0
    while index < len(text):
        unit = scalar_at(text, index)
        yield unit
        index += len(unit)


def code_point_of(unit: str) -> int:
    """Return the code point of a unit produced by :func:`iter_scalars`."""
    if len(unit) == 2:
        return 0x10000 + ((ord(unit[0]) - 0xD800) << 10) + (ord(unit[1]) - 0xDC00)
    return ord(unit)


def needs_escaping(unit: str) -> bool:
    """True when ICU requires ``unit`` to be quoted.

    ICU reserves every ASCII character that is not a letter or digit, and
    all whitespace anywhere in Unicode.
    """
    return (code_point_of(unit) < 0x7F and not unit.isalnum()) or unit.isspace()


def escape_char(unit: str, in_span: bool = False) -> Tuple[str, bool]:
    """Escape one scalar value given the current quoted-span state.

    WHY: Consecutive characters that need quoting share a single span, so
    escaping is stateful across characters. Threading the flag through the
    return value keeps this function pure.

    HOW: Opens a span before the first character that needs escaping,
    closes it before the first one that does not.

    RULES:
    - Returns (escaped_text, in_span_after)
    - A quote is always doubled and never opens or closes a span

    Args:
        unit: One scalar value (one or two code units).
        in_span: Whether a ``'`` span is currently open.

    Returns:
        The text to append and the new span state.
    """
    if needs_escaping(unit):
        if unit == QUOTE:
            return QUOTE + QUOTE, in_span
        if in_span:
            return unit, True
        return QUOTE + unit, True
    if in_span:
        return QUOTE + unit, False
    return unit, False


def escape_scalar(unit: str) -> str:
    """Escape a single scalar value as a self-contained literal."""
    escaped, in_span = escape_char(unit)
    if in_span:
        escaped += QUOTE
    return escaped


def escape_for_icu(text: str) -> str:
    """Escape arbitrary text for use as an ICU rule literal.

    WHY: Rule data comes straight from LDML and may contain ICU syntax
    characters, hand-written escapes, or Unicode escape sequences. Only the
    first kind should be quoted.

    HOW: Scans left to right. At each position, in priority order: an
    existing two-character escape is copied; an 8-digit then 4-digit
    Unicode escape is copied; otherwise the scalar value goes through
    escape_char(). A span still open at the end is closed.

    RULES:
    - Letters and digits only → returned unchanged
    - Already-escaped input is not escaped again
    - Unicode escapes are never inspected or decoded

    Args:
        text: Unescaped (or partially escaped) rule data.

    Returns:
        ICU-safe literal text.
    """
    parts = []
    in_span = False
    index = 0
    length = len(text)

    while index < length:
        ch = text[index]

        # Already escaped: "\-" always, "'-" only outside a span
        if (
            (ch == BACKSLASH or (ch == QUOTE and not in_span))
            and index + 1 < length
            and needs_escaping(scalar_at(text, index + 1))
        ):
            if in_span:
                parts.append(QUOTE)
                in_span = False
            parts.append(text[index:index + 2])
            index += 2
            continue

        match = (
            UNICODE_ESCAPE_8_DIGIT.match(text, index)
            or UNICODE_ESCAPE_4_DIGIT.match(text, index)
        )
        if match:
            if in_span:
                parts.append(QUOTE)
                in_span = False
            parts.append(match.group(0))
            index = match.end()
            continue

        unit = scalar_at(text, index)
        escaped, in_span = escape_char(unit, in_span)
        parts.append(escaped)
        index += len(unit)

    if in_span:
        parts.append(QUOTE)
    return "".join(parts)


def _decode_escape(match: "re.Match[str]") -> str:
    value = int(match.group(1), 16)
    try:
        return chr(value)
    except (ValueError, OverflowError) as e:
        raise CollationConfigError(
            "Invalid Unicode code point in escape sequence: {}".format(match.group(0)),
            node="rules",
        ) from e


def replace_unicode_escapes(rules: Optional[str]) -> Optional[str]:
    """Replace ``\\uXXXX`` and ``\\UXXXXXXXX`` escapes with the characters they encode.

    WHY: Some collation engines take rule text literally and do not
    interpret Unicode escapes. Callers feeding such an engine decode the
    escapes first.

    HOW: Substitutes 8-digit escapes, then 4-digit escapes, so the short
    pattern never eats the start of a long one.

    RULES:
    - None and "" are returned unchanged
    - An escape encoding a value above U+10FFFF raises CollationConfigError
    """
    if not rules:
        return rules
    rules = UNICODE_ESCAPE_8_DIGIT.sub(_decode_escape, rules)
    return UNICODE_ESCAPE_4_DIGIT.sub(_decode_escape, rules)

"""Exception types raised by the collation core.

WHY: Callers need to tell a malformed collation document apart from a
programming error, and the CLI reports the former without a traceback.

RULES:
- CollationConfigError is a ValueError so generic config handlers catch it
- Always name the offending node kind in ``node`` when one is known
- "Not representable as simple rules" is NOT an error; the reducer returns None
"""

from __future__ import annotations

from typing import Optional


class CollationError(Exception):
    """Base class for all errors raised while converting a collation tree."""


class CollationConfigError(CollationError, ValueError):
    """Raised when a collation tree is structurally invalid.

    WHY: Unknown strength/backwards values, malformed ``<cp>`` hex, unknown
    rule elements and empty rule elements all mean the source LDML document
    is broken. Translation stops immediately and no partial rules are
    returned.

    HOW: Carries the offending node kind (e.g. ``"settings"``, ``"cp"``,
    ``"pc"``) so the message points at the right place in the document.

    RULES:
    - node is None only when no single node is to blame
    """

    def __init__(self, message: str, node: Optional[str] = None) -> None:
        self.node = node
        self.message = message
        super().__init__(message)

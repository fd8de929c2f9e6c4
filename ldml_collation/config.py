"""Configuration constants, newline styles, and .env loading.

WHY: Centralizes the few configurable values of the command-line surface
so they are easy to find, update, and override. The core itself reads no
configuration; everything here is passed to it explicitly.

HOW: python-dotenv loads the .env file on import. Defaults are read from
environment variables once, at import time. resolve_newline() turns a
newline style name into the actual separator.

RULES:
- NEWLINE_STYLES maps style names to separators ("lf", "crlf")
- Unknown newline style names raise ValueError
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from typing import Dict

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Newline styles
# ---------------------------------------------------------------------------

NEWLINE_STYLES: Dict[str, str] = {
    "lf": "\n",
    "crlf": "\r\n",
}


def resolve_newline(style: str) -> str:
    """Map a newline style name ("lf", "crlf") to its separator.

    WHY: Rule files written for Windows tooling traditionally use CRLF
    between directives; everything else uses LF.

    RULES:
    - Matching is case-insensitive and ignores surrounding whitespace
    - Raises ValueError listing the valid styles for anything else
    """
    key = style.strip().lower()
    if key not in NEWLINE_STYLES:
        raise ValueError(
            "Unknown newline style '{}'. Valid styles: {}".format(
                style, ", ".join(sorted(NEWLINE_STYLES)),
            )
        )
    return NEWLINE_STYLES[key]


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_NEWLINE_STYLE = os.getenv("LDML_COLLATION_NEWLINE", "lf")
DEFAULT_COLLATION_TYPE = os.getenv("LDML_COLLATION_TYPE", "standard")
DEFAULT_LOG_LEVEL = os.getenv("LDML_COLLATION_LOG_LEVEL", "WARNING").upper()

"""Abstract base formatter and output container.

WHY: Every output dialect consumes the same CollationTree but produces
different rule text. This base class enforces a consistent interface so
the CLI (and any other caller) can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content, MIME type and rule dialect.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list — usually one item, but an empty list when
  the tree cannot be expressed in the formatter's dialect
- ``suffix`` starts with a hyphen, e.g. ``"-icu-rules.txt"``
- The caller is responsible for prepending the source filename stem
- Formatters never raise for "not representable"; structural errors in the
  tree (CollationConfigError) propagate unchanged
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ldml_collation.core.compiler import NEWLINE
from ldml_collation.core.ir import CollationTree

DIALECT_ICU = "icu"
DIALECT_SIMPLE = "simple"


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-icu-rules.txt"`` → ``"de-icu-rules.txt"``.
        content: The rule text.
        media_type: MIME type for the content, always ``"text/plain"`` today.
        dialect: ``"icu"`` or ``"simple"``, the syntax ``content`` is in.
    """

    suffix: str
    content: str
    media_type: str
    dialect: Optional[str] = None


class BaseFormatter(ABC):
    """Abstract base for all rule formatters.

    To add a new output dialect:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    def __init__(self, newline: str = NEWLINE) -> None:
        self.newline = newline

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'ICU Rules'."""

    @abstractmethod
    def format(self, tree: CollationTree) -> List[FormatterOutput]:
        """Convert the collation tree into zero or more output files.

        Args:
            tree: The collation element tree.

        Returns:
            List of FormatterOutput objects.
        """

"""Shared test fixtures for the ldml_collation test suite.

WHY: Several test modules need the same small collation trees — an empty
one, a typical tailoring with settings, and one that fits the simple rules
dialect. Centralizing them here keeps the expected outputs in one place.

HOW: Pytest fixtures return CollationTree instances built directly from the
IR dataclasses, plus raw LDML text for adapter and CLI tests.

RULES:
- Trees are immutable, so fixtures may be shared freely
- SAMPLE_LDML and the tailored_tree fixture describe the same collation
"""

import pytest

from ldml_collation.core.ir import (
    CodePoint,
    CollationTree,
    IndirectPosition,
    RuleItem,
    Settings,
)

FIRST_REGULAR = IndirectPosition("first_non_ignorable")


# ---------------------------------------------------------------------------
# LDML documents
# ---------------------------------------------------------------------------

SAMPLE_LDML = """<?xml version="1.0" encoding="UTF-8"?>
<ldml>
  <identity><version number="1"/><language type="de"/></identity>
  <collations>
    <collation type="standard">
      <settings strength="secondary" backwards="on"/>
      <suppress_contractions>[abc]</suppress_contractions>
      <rules>
        <reset before="primary"><first_non_ignorable/></reset>
        <p>a</p>
        <pc><cp hex="0062"/><cp hex="0063"/></pc>
        <x><context>c</context><s>h</s><extend>k</extend></x>
      </rules>
    </collation>
    <collation type="simple">
      <rules>
        <reset before="primary"><first_non_ignorable/></reset>
        <p>a</p>
        <t>A</t>
        <p>b</p>
      </rules>
    </collation>
  </collations>
</ldml>
"""

SAMPLE_ICU_RULES = (
    "[strength 2]\n"
    "[backwards 2]\n"
    "[suppress contractions [abc]]\n"
    "& [before 1] [first regular] < a < b < c << c | h / k"
)

SIMPLE_ICU_RULES = "& [before 1] [first regular] < a <<< A < b"

SIMPLE_RULES = "(a A)\nb"


@pytest.fixture
def sample_ldml():
    return SAMPLE_LDML


@pytest.fixture
def sample_icu_rules():
    """Expected ICU rules for the standard collation of SAMPLE_LDML."""
    return SAMPLE_ICU_RULES


@pytest.fixture
def simple_icu_rules():
    """Expected ICU rules for the "simple" collation of SAMPLE_LDML."""
    return SIMPLE_ICU_RULES


@pytest.fixture
def simple_rules():
    """Expected simple rules for the "simple" collation of SAMPLE_LDML."""
    return SIMPLE_RULES


@pytest.fixture
def sample_ldml_path(tmp_path):
    """SAMPLE_LDML written to a temporary de.xml."""
    path = tmp_path / "de.xml"
    path.write_text(SAMPLE_LDML, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------

@pytest.fixture
def empty_tree():
    return CollationTree()


@pytest.fixture
def tailored_tree():
    """The standard collation of SAMPLE_LDML, built by hand."""
    return CollationTree(
        settings=Settings({"strength": "secondary", "backwards": "on"}),
        suppress_contractions="[abc]",
        rules=(
            RuleItem("reset", before="primary", anchor=FIRST_REGULAR),
            RuleItem("p", text="a"),
            RuleItem("pc", code_points=(CodePoint("0062"), CodePoint("0063"))),
            RuleItem("x", children=(
                RuleItem("context", text="c"),
                RuleItem("s", text="h"),
                RuleItem("extend", text="k"),
            )),
        ),
    )


@pytest.fixture
def simple_tree():
    """A tree the simple rules dialect can express: (a A)\\nb."""
    return CollationTree(
        rules=(
            RuleItem("reset", before="primary", anchor=FIRST_REGULAR),
            RuleItem("p", text="a"),
            RuleItem("t", text="A"),
            RuleItem("p", text="b"),
        ),
    )

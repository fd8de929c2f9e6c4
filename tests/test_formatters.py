"""Unit tests for all formatter modules.

WHY: Formatters decide which dialect a caller gets. The ICU formatter must
never come back empty, the simple formatter must stay silent for trees it
cannot express, and the preferred formatter must pick correctly between
them.

HOW: Each formatter runs against the conftest trees:
  - ICU rules: full compiler output, including for the empty tree
  - Simple rules: output only for simple_tree, [] otherwise
  - Preferred: simple for simple_tree, ICU for tailored_tree
  - Registry: every key maps to a BaseFormatter subclass

RULES:
- All tests use fixtures from conftest.py
"""

import pytest

from ldml_collation.core.errors import CollationConfigError
from ldml_collation.core.ir import CollationTree, RuleItem, Settings
from ldml_collation.formatters import FORMATTERS
from ldml_collation.formatters.base import (
    DIALECT_ICU,
    DIALECT_SIMPLE,
    BaseFormatter,
    FormatterOutput,
)
from ldml_collation.formatters.icu_rules import IcuRulesFormatter
from ldml_collation.formatters.preferred import PreferredRulesFormatter
from ldml_collation.formatters.simple_rules import SimpleRulesFormatter


class TestIcuRulesFormatter:

    def test_tailored_tree(self, tailored_tree, sample_icu_rules):
        outputs = IcuRulesFormatter().format(tailored_tree)
        assert outputs == [
            FormatterOutput("-icu-rules.txt", sample_icu_rules, "text/plain", DIALECT_ICU),
        ]

    def test_simple_tree_still_icu(self, simple_tree, simple_icu_rules):
        [output] = IcuRulesFormatter().format(simple_tree)
        assert output.content == simple_icu_rules

    def test_empty_tree_gives_empty_output(self, empty_tree):
        [output] = IcuRulesFormatter().format(empty_tree)
        assert output.content == ""

    def test_newline(self, tailored_tree, sample_icu_rules):
        [output] = IcuRulesFormatter(newline="\r\n").format(tailored_tree)
        assert output.content == sample_icu_rules.replace("\n", "\r\n")

    def test_structural_error_propagates(self):
        tree = CollationTree(settings=Settings({"strength": "bogus"}))
        with pytest.raises(CollationConfigError):
            IcuRulesFormatter().format(tree)

    def test_name(self):
        assert IcuRulesFormatter().name == "ICU Rules"


class TestSimpleRulesFormatter:

    def test_simple_tree(self, simple_tree, simple_rules):
        outputs = SimpleRulesFormatter().format(simple_tree)
        assert outputs == [
            FormatterOutput("-simple-rules.txt", simple_rules, "text/plain", DIALECT_SIMPLE),
        ]

    def test_not_representable_gives_no_output(self, tailored_tree):
        assert SimpleRulesFormatter().format(tailored_tree) == []

    def test_newline(self, simple_tree):
        [output] = SimpleRulesFormatter(newline="\r\n").format(simple_tree)
        assert output.content == "(a A)\r\nb"

    def test_name(self):
        assert SimpleRulesFormatter().name == "Simple Rules"


class TestPreferredRulesFormatter:

    def test_prefers_simple(self, simple_tree, simple_rules):
        [output] = PreferredRulesFormatter().format(simple_tree)
        assert output.content == simple_rules
        assert output.dialect == DIALECT_SIMPLE
        assert output.suffix == "-rules.txt"

    def test_falls_back_to_icu(self, tailored_tree, sample_icu_rules):
        [output] = PreferredRulesFormatter().format(tailored_tree)
        assert output.content == sample_icu_rules
        assert output.dialect == DIALECT_ICU

    def test_unsupported_item_falls_back(self):
        tree = CollationTree(rules=(RuleItem("reset", text="a"), RuleItem("i", text="b")))
        [output] = PreferredRulesFormatter().format(tree)
        assert output.content == "& a = b"
        assert output.dialect == DIALECT_ICU

    def test_empty_tree_is_simple(self, empty_tree):
        [output] = PreferredRulesFormatter().format(empty_tree)
        assert output.content == ""
        assert output.dialect == DIALECT_SIMPLE


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"icu_rules", "simple_rules", "preferred"}

    @pytest.mark.parametrize("key", sorted(FORMATTERS))
    def test_values_are_formatter_classes(self, key):
        formatter_class = FORMATTERS[key]
        assert issubclass(formatter_class, BaseFormatter)
        assert isinstance(formatter_class().name, str)

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseFormatter()

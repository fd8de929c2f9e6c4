"""Unit tests for rule item payload extraction.

WHY: The compiler and the simple-rule reducer both read rule data through
these helpers. A lenient hex parser or a wrong anchor spelling would slip
invalid data into every output format.

HOW: Tests cover code point decoding (valid, malformed, out of range),
the text/cp precedence, anchor rendering, the empty-rule error, before
options, and variableTop decoding.
"""

import pytest

from ldml_collation.core.errors import CollationConfigError
from ldml_collation.core.extraction import (
    code_point_to_text,
    decode_code_point,
    get_before_option,
    get_icu_data,
    get_indirect_position,
    get_text_data,
    parse_hex,
    unescape_variable_top,
)
from ldml_collation.core.ir import CodePoint, IndirectPosition, RuleItem


class TestCodePoints:

    def test_decodes_bmp(self):
        assert decode_code_point(CodePoint("0041")) == "A"

    def test_decodes_lowercase_hex(self):
        assert decode_code_point(CodePoint("00e9")) == "é"

    def test_decodes_supplementary(self):
        assert decode_code_point(CodePoint("1F600")) == "\U0001F600"

    def test_empty_hex_decodes_to_nothing(self):
        assert decode_code_point(CodePoint("")) == ""

    @pytest.mark.parametrize("hex_text", ["zz", "0x41", "+41", " 41", "41 ", "4G"])
    def test_non_hex_raises(self, hex_text):
        with pytest.raises(CollationConfigError) as exc_info:
            decode_code_point(CodePoint(hex_text))
        assert exc_info.value.node == "cp"

    @pytest.mark.parametrize("hex_text", ["110000", "D800", "DFFF"])
    def test_non_scalar_raises(self, hex_text):
        with pytest.raises(CollationConfigError):
            decode_code_point(CodePoint(hex_text))

    def test_code_point_to_text_bounds(self):
        assert code_point_to_text(0x10FFFF, "cp") == "\U0010FFFF"
        with pytest.raises(CollationConfigError):
            code_point_to_text(-1, "cp")

    def test_parse_hex_reports_node(self):
        with pytest.raises(CollationConfigError) as exc_info:
            parse_hex("xyz", "settings")
        assert exc_info.value.node == "settings"
        assert "xyz" in str(exc_info.value)


class TestGetTextData:

    def test_literal_text(self):
        assert get_text_data(RuleItem("p", text="ch")) == "ch"

    def test_code_points_joined(self):
        item = RuleItem("pc", code_points=(CodePoint("0061"), CodePoint("0062")))
        assert get_text_data(item) == "ab"

    def test_code_points_win_over_text(self):
        item = RuleItem("p", text="x", code_points=(CodePoint("0061"),))
        assert get_text_data(item) == "a"

    def test_empty_code_points_fall_back_to_text(self):
        item = RuleItem("p", text="x", code_points=(CodePoint(""),))
        assert get_text_data(item) == "x"


class TestGetIcuData:

    def test_escapes_text(self):
        assert get_icu_data(RuleItem("p", text="-")) == "'-'"

    def test_escapes_decoded_code_points(self):
        item = RuleItem("p", code_points=(CodePoint("0026"),))
        assert get_icu_data(item) == "'&'"

    def test_first_non_ignorable(self):
        item = RuleItem("reset", anchor=IndirectPosition("first_non_ignorable"))
        assert get_icu_data(item) == "[first regular]"

    def test_anchor_not_escaped(self):
        item = RuleItem("reset", anchor=IndirectPosition("last_variable"))
        assert get_icu_data(item) == "[last variable]"

    def test_empty_item_raises(self):
        with pytest.raises(CollationConfigError) as exc_info:
            get_icu_data(RuleItem("s"))
        assert exc_info.value.node == "s"
        assert "Empty" in str(exc_info.value)


class TestGetIndirectPosition:

    @pytest.mark.parametrize("name, expected", [
        ("first_non_ignorable", "[first regular]"),
        ("last_non_ignorable", "[last regular]"),
        ("first_tertiary_ignorable", "[first tertiary ignorable]"),
        ("last_trailing", "[last trailing]"),
    ])
    def test_rendering(self, name, expected):
        assert get_indirect_position(IndirectPosition(name)) == expected


class TestGetBeforeOption:

    @pytest.mark.parametrize("before, expected", [
        ("primary", "[before 1] "),
        ("secondary", "[before 2] "),
        ("tertiary", "[before 3] "),
        ("", ""),
        (None, ""),
    ])
    def test_values(self, before, expected):
        assert get_before_option(RuleItem("reset", text="a", before=before)) == expected

    def test_invalid_value_raises(self):
        with pytest.raises(CollationConfigError) as exc_info:
            get_before_option(RuleItem("reset", text="a", before="quaternary"))
        assert exc_info.value.node == "reset"


class TestUnescapeVariableTop:

    def test_single(self):
        assert unescape_variable_top("u0041") == "A"

    def test_sequence(self):
        assert unescape_variable_top("u0041u0042") == "AB"

    def test_empty_pieces_skipped(self):
        assert unescape_variable_top("uu002D") == "-"
        assert unescape_variable_top("") == ""

    def test_malformed_raises(self):
        with pytest.raises(CollationConfigError) as exc_info:
            unescape_variable_top("u00G1")
        assert exc_info.value.node == "settings"

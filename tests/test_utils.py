"""
Tests for timestamp normalization and text helpers.
"""
import re

import pytest

from xmltvguide.utils import HtmlUtils, JsonUtils, TimeUtils

CANONICAL = re.compile(r"^\d{14} \+0000$")


class TestNormalizeUnixSeconds:
    """Unix epoch seconds to XMLTV time"""

    def test_string_value(self):
        assert TimeUtils.normalize_unix_seconds("1700000000") == "20231114221320 +0000"

    def test_integer_value(self):
        assert TimeUtils.normalize_unix_seconds(1700003600) == "20231114231320 +0000"

    def test_epoch(self):
        assert TimeUtils.normalize_unix_seconds("0") == "19700101000000 +0000"

    def test_surrounding_whitespace(self):
        assert TimeUtils.normalize_unix_seconds(" 1700000000 ") == "20231114221320 +0000"

    @pytest.mark.parametrize("value", [None, "", "abc", "17000.5", "1_700_000_000", "2024-01-01", True])
    def test_invalid_values(self, value):
        assert TimeUtils.normalize_unix_seconds(value) is None

    def test_out_of_range(self):
        assert TimeUtils.normalize_unix_seconds("99999999999999999999") is None


class TestNormalizeIsoDateTime:
    """General date-time strings to XMLTV time"""

    def test_utc_designator(self):
        assert TimeUtils.normalize_iso_datetime("2024-01-01T10:00:00Z") == "20240101100000 +0000"

    def test_offset_converted_to_utc(self):
        assert TimeUtils.normalize_iso_datetime("2024-01-01T12:30:00+02:00") == "20240101103000 +0000"

    def test_negative_offset_crosses_midnight(self):
        assert TimeUtils.normalize_iso_datetime("2024-01-01T22:00:00-05:00") == "20240102030000 +0000"

    def test_rfc_style(self):
        assert TimeUtils.normalize_iso_datetime("Mon, 01 Jan 2024 10:00:00 GMT") == "20240101100000 +0000"

    def test_naive_value_is_utc(self):
        assert TimeUtils.normalize_iso_datetime("2024-01-01 10:00:00") == "20240101100000 +0000"

    @pytest.mark.parametrize("value", [None, "", "   ", "xyz"])
    def test_invalid_values(self, value):
        assert TimeUtils.normalize_iso_datetime(value) is None

    @pytest.mark.parametrize("value", ["2024-01-01 10:00:00 EST", "Mon, 01 Jan 2024 10:00:00 PST"])
    def test_unknown_zone_abbreviation_rejected(self, value):
        assert TimeUtils.normalize_iso_datetime(value) is None

    def test_output_is_canonical(self):
        assert CANONICAL.match(TimeUtils.normalize_iso_datetime("2024-06-30T23:59:59.999+00:00"))


class TestNormalizeAny:
    def test_prefers_unix_seconds(self):
        assert TimeUtils.normalize_any("1700000000") == "20231114221320 +0000"

    def test_falls_back_to_date_string(self):
        assert TimeUtils.normalize_any("2024-01-01T10:00:00Z") == "20240101100000 +0000"


class TestJsonUtils:
    def test_text_conversions(self):
        assert JsonUtils.text(None) is None
        assert JsonUtils.text("abc") == "abc"
        assert JsonUtils.text(5) == "5"
        assert JsonUtils.text(False) == "false"
        assert JsonUtils.text({"a": 1}) == '{"a": 1}'

    def test_get_text_follows_path(self):
        node = {"program": {"title": "News"}}
        assert JsonUtils.get_text(node, "program", "title") == "News"
        assert JsonUtils.get_text(node, "program", "missing") is None
        assert JsonUtils.get_text(node, "program", "title", "deeper") is None
        assert JsonUtils.get_text(None, "program") is None

    def test_is_blank(self):
        assert JsonUtils.is_blank(None)
        assert JsonUtils.is_blank("  ")
        assert not JsonUtils.is_blank("x")


class TestHtmlUtils:
    def test_escapes_markup(self):
        assert HtmlUtils.conv_html('Tom & "Jerry" <live>') == "Tom &amp; &quot;Jerry&quot; &lt;live&gt;"

    def test_existing_entities_not_double_escaped(self):
        assert HtmlUtils.conv_html("AT&amp;T") == "AT&amp;T"

    def test_strips_control_characters(self):
        assert HtmlUtils.conv_html("a\x00b\x1fc") == "abc"

    def test_strips_xml_non_characters(self):
        assert HtmlUtils.conv_html("x \uffff y\ufffe") == "x  y"

    def test_strips_lone_surrogates(self):
        assert HtmlUtils.conv_html("Bad \ud800 title\udfff") == "Bad  title"

    def test_none(self):
        assert HtmlUtils.conv_html(None) == ""

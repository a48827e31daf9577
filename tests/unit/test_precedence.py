"""
Unit tests for weighted header lists (Accept-Language, Accept-Charset, Accept-Encoding).
"""

import pytest

from negotiator.header import (
    DEFAULT_PRECEDENCE_VALUE,
    KV,
    PrecedenceValue,
    parse_accept_charset,
    parse_accept_encoding,
    parse_accept_language,
    parse_precedence_values,
    rank_precedence_values,
)
from negotiator.header.precedence import format_quality, parse_quality, split_header


class TestParseQuality:
    """Tests for q-value parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1", 1.0),
        ("0", 0.0),
        ("0.5", 0.5),
        (" 0.25 ", 0.25),
        ("1.000", 1.0),
    ])
    def test_valid_qualities(self, text, expected):
        """Test that numbers in [0, 1] are accepted."""
        assert parse_quality(text) == expected

    @pytest.mark.parametrize("text", ["blah", "", "7", "-0.1", "1.5", "nan", "inf"])
    def test_invalid_qualities(self, text):
        """Test that anything else counts as absent."""
        assert parse_quality(text) is None

    def test_format_quality(self):
        """Test that qualities are formatted without trailing zeros."""
        assert format_quality(1.0) == "1"
        assert format_quality(0.5) == "0.5"
        assert format_quality(0.0) == "0"


class TestSplitHeader:
    """Tests for the low-level splitter."""

    def test_params_and_extensions(self):
        """Test that parameters before q are params and after q are extensions."""
        (part,) = split_header("text/html;level=1;q=0.5;a=1;b")

        assert part.value == "text/html"
        assert part.quality == 0.5
        assert part.params == (KV("level", "1"),)
        assert part.extensions == (KV("a", "1"), KV("b", ""))

    def test_quality_key_is_case_insensitive(self):
        """Test that Q=0.3 sets the quality."""
        (part,) = split_header("en;Q=0.3")

        assert part.quality == 0.3
        assert part.params == ()

    def test_whitespace_is_trimmed(self):
        """Test trimming around separators."""
        (part,) = split_header("  en-GB ;  q = 0.8 ; x = y ")

        assert part.value == "en-GB"
        assert part.quality == 0.8
        assert part.extensions == (KV("x", "y"),)

    def test_empty_members_skipped(self):
        """Test that empty list members are ignored."""
        parts = list(split_header("en,, ,fr,"))

        assert [p.value for p in parts] == ["en", "fr"]

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_blank_header(self, header):
        """Test that a blank header yields nothing."""
        assert list(split_header(header)) == []


class TestParsePrecedenceValues:
    """Tests for parse_precedence_values()."""

    def test_keeps_header_order(self):
        """Test that parsing does not sort."""
        values = parse_precedence_values("fr;q=0.5, en")

        assert [v.value for v in values] == ["fr", "en"]

    def test_default_quality(self):
        """Test that a missing q means 1.0."""
        (value,) = parse_precedence_values("utf-8")

        assert value == PrecedenceValue("utf-8", 1.0)

    def test_invalid_quality_uses_default(self):
        """Test that a bad q-value does not drop the entry."""
        (value,) = parse_precedence_values("gzip;q=blah")

        assert value.value == "gzip"
        assert value.quality == 1.0

    def test_blank_header_is_empty(self):
        """Test that a blank header gives an empty list."""
        assert parse_precedence_values("") == []


class TestRankPrecedenceValues:
    """Tests for ranking generic values."""

    def test_sorts_by_quality(self):
        """Test descending quality order."""
        ranked = parse_accept_language("da, en-gb;q=0.8, en;q=0.7")

        assert [v.value for v in ranked] == ["da", "en-gb", "en"]

    def test_more_params_first_on_equal_quality(self):
        """Test that params break quality ties."""
        values = [PrecedenceValue("a", 0.5), PrecedenceValue("b", 0.5, (KV("x", "1"),))]

        ranked = rank_precedence_values(values)

        assert [v.value for v in ranked] == ["b", "a"]

    def test_stable_for_equal_entries(self):
        """Test that fully equal entries keep header order."""
        ranked = parse_accept_charset("iso-8859-5, utf-8, unicode-1-1;q=0.8")

        assert [v.value for v in ranked] == ["iso-8859-5", "utf-8", "unicode-1-1"]

    def test_extensions_do_not_affect_rank(self):
        """Test that extensions are not counted as params."""
        ranked = parse_accept_encoding("gzip;q=1;x=1;y=2, br")

        assert [v.value for v in ranked] == ["gzip", "br"]

    @pytest.mark.parametrize("parse", [
        parse_accept_language,
        parse_accept_charset,
        parse_accept_encoding,
    ])
    def test_missing_header_accepts_anything(self, parse):
        """Test that an absent header means "*"."""
        assert parse(None) == [DEFAULT_PRECEDENCE_VALUE]
        assert parse("") == [DEFAULT_PRECEDENCE_VALUE]


class TestPrecedenceValueFormatting:
    """Tests for str(PrecedenceValue)."""

    def test_default_quality_omitted(self):
        """Test that q=1 is not written."""
        assert str(PrecedenceValue("en", 1.0)) == "en"

    def test_quality_and_extensions(self):
        """Test the full canonical form."""
        value = PrecedenceValue("en", 0.5, (KV("a", "1"),), (KV("b", "2"),))

        assert str(value) == "en;a=1;q=0.5;b=2"

    def test_round_trip(self):
        """Test that the canonical form parses back to the same value."""
        header = "en-GB;a=1;q=0.5;b=2, fr, de;q=0"

        values = parse_precedence_values(header)
        again = parse_precedence_values(", ".join(str(v) for v in values))

        assert again == values

    def test_is_wildcard(self):
        """Test the wildcard helper."""
        assert DEFAULT_PRECEDENCE_VALUE.is_wildcard
        assert not PrecedenceValue("en", 1.0).is_wildcard

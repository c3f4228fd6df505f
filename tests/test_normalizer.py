"""Tests for normalize_line."""

import pytest

from svloader.ingestion.normalizer import normalize_line


class TestSplitting:
    def test_plain_split(self):
        assert normalize_line("1\tAlice", "\t", False) == ["1", "Alice"]

    def test_trailing_empty_fields_are_kept(self):
        assert normalize_line("a,,", ",", False) == ["a", "", ""]

    def test_leading_and_inner_empty_fields(self):
        assert normalize_line(",a,,b", ",", False) == ["", "a", "", "b"]

    def test_empty_line_is_one_empty_field(self):
        assert normalize_line("", ",", False) == [""]

    def test_no_trimming(self):
        assert normalize_line(" a , b ", ",", False) == [" a ", " b "]

    @pytest.mark.parametrize("delimiter", ["|", ".", "*", "+", "$", "^", "?", "\\"])
    def test_regex_metacharacters_are_literal(self, delimiter):
        line = delimiter.join(["x", "y", "z"])
        assert normalize_line(line, delimiter, False) == ["x", "y", "z"]

    def test_escaped_tab_sequence_is_not_a_tab(self):
        assert normalize_line("a\tb", "\\t", False) == ["a\tb"]

    def test_multi_character_delimiter(self):
        assert normalize_line("a||b|c", "||", False) == ["a", "b|c"]

    def test_quotes_untouched_without_enforcement(self):
        assert normalize_line('"x","y"', ",", False) == ['"x"', '"y"']


class TestEnforceDoubleQuotes:
    def test_strip_then_wrap(self):
        assert normalize_line('"x","y"', ",", True) == ['"x"', '"y"']

    def test_trailing_empty_fields_are_wrapped(self):
        assert normalize_line("a,,", ",", True) == ['"a"', '""', '""']

    @pytest.mark.parametrize("content", ['abc', '"abc"', 'a"b"c', '""a"""', '"'])
    def test_output_independent_of_quote_count(self, content):
        expected = '"' + content.replace('"', "") + '"'
        assert normalize_line(content, ",", True) == [expected]

    def test_quoted_delimiter_still_splits(self):
        # No awareness of quoted regions.
        assert normalize_line('"a,b",c', ",", True) == ['"a"', '"b"', '"c"']

    def test_wrap_disabled(self):
        assert normalize_line('"x",y', ",", True, wrap=False) == ["x", "y"]

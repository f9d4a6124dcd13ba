"""Tests for lexical string utilities."""

import pytest

from toon_transformer.options import Delimiter
from toon_transformer.utils.strings import StringUtils


class TestNeedsQuoting:
    """Tests for StringUtils.needs_quoting."""

    @pytest.mark.parametrize("value", [
        "", " a", "a ", "- a", "true", "false", "null", "a,b", "a:b", 'a"b', "a\\b",
        "a\nb", "a\x00b", "42", "-1", "3.14", "1e10", "-2.5E-3", "[3]", "{a,b}",
        "[2]: x", "-a",
    ])
    def test_values_requiring_quotes(self, value):
        """Test every condition that forces quoting."""
        assert StringUtils.needs_quoting(value, Delimiter.COMMA)

    @pytest.mark.parametrize("value", [
        "hello", "hello world", "a.b", "True", "nulls", "1.2.3", "+5", "1_000",
        "a\tb", "[a]", "{}", "-", "café",
    ])
    def test_values_left_bare(self, value):
        """Test strings that read back unchanged without quotes."""
        assert not StringUtils.needs_quoting(value, Delimiter.COMMA)

    def test_active_delimiter_only(self):
        """Test only the active delimiter forces quoting."""
        assert not StringUtils.needs_quoting("a|b", Delimiter.COMMA)
        assert StringUtils.needs_quoting("a|b", Delimiter.PIPE)
        assert not StringUtils.needs_quoting("a,b", Delimiter.PIPE)
        assert StringUtils.needs_quoting("a\tb", Delimiter.TAB)

    def test_none_needs_quoting(self):
        """Test a missing value is treated like an empty one."""
        assert StringUtils.needs_quoting(None)


class TestEscaping:
    """Tests for escape, unescape, quote and unquote."""

    def test_escape_table(self):
        """Test each escaped character."""
        assert StringUtils.escape('"\\\n\r\t\b\f') == '\\"\\\\\\n\\r\\t\\b\\f'

    def test_escape_other_control_characters(self):
        """Test other control characters use lowercase unicode escapes."""
        assert StringUtils.escape("\x01\x1f") == "\\u0001\\u001f"

    def test_escape_none(self):
        """Test None escapes to the null literal."""
        assert StringUtils.escape(None) == "null"

    def test_escape_passes_non_ascii(self):
        """Test non-control characters are unchanged."""
        assert StringUtils.escape("naïve ☃") == "naïve ☃"

    def test_unescape_inverts_escape(self):
        """Test unescape reverses escape."""
        original = 'q"\\ \n\r\t\b\f \x02 é'
        assert StringUtils.unescape(StringUtils.escape(original)) == original

    def test_unescape_unicode_sequences(self):
        """Test four-digit unicode escapes in either case."""
        assert StringUtils.unescape("\\u0041\\u00E9") == "Aé"

    def test_unescape_incomplete_sequences(self):
        """Test incomplete or unknown escapes stay literal."""
        assert StringUtils.unescape("\\u12") == "\\u12"
        assert StringUtils.unescape("\\uzzzz") == "\\uzzzz"
        assert StringUtils.unescape("\\q") == "\\q"
        assert StringUtils.unescape("end\\") == "end\\"

    def test_quote(self):
        """Test quoting only when needed."""
        assert StringUtils.quote("hello") == "hello"
        assert StringUtils.quote("a,b") == '"a,b"'
        assert StringUtils.quote('say "hi"') == '"say \\"hi\\""'

    def test_unquote(self):
        """Test unquoting requires surrounding quotes."""
        assert StringUtils.unquote('"a\\nb"') == "a\nb"
        assert StringUtils.unquote('""') == ""
        assert StringUtils.unquote('"') == '"'
        assert StringUtils.unquote("plain") == "plain"
        assert StringUtils.unquote(None) is None


class TestIdentifiers:
    """Tests for identifier checks and key encoding."""

    @pytest.mark.parametrize("key,expected", [
        ("name", True), ("_private", True), ("a.b.c", True), ("x1", True),
        ("1x", False), ("first name", False), ("", False), ("a-b", False), ("ключ", False),
    ])
    def test_is_valid_identifier(self, key, expected):
        """Test the identifier pattern."""
        assert StringUtils.is_valid_identifier(key) is expected

    def test_encode_key(self):
        """Test non-identifier keys are quoted and escaped."""
        assert StringUtils.encode_key("name") == "name"
        assert StringUtils.encode_key("true") == "true"
        assert StringUtils.encode_key('a "b"') == '"a \\"b\\""'


class TestSplitRespectingQuotes:
    """Tests for StringUtils.split_respecting_quotes."""

    def test_simple_split(self):
        """Test splitting on the delimiter."""
        assert StringUtils.split_respecting_quotes("a,b,c", ",") == ["a", "b", "c"]

    def test_quoted_delimiters_are_kept(self):
        """Test delimiters inside quotes do not split."""
        assert StringUtils.split_respecting_quotes('"a,b",c', ",") == ['"a,b"', "c"]

    def test_escaped_quote_keeps_state(self):
        """Test an escaped quote does not end a quoted field."""
        assert StringUtils.split_respecting_quotes('"a\\",b",c', ",") == ['"a\\",b"', "c"]

    def test_empty_line(self):
        """Test an empty line yields one empty field."""
        assert StringUtils.split_respecting_quotes("", ",") == [""]

    def test_empty_fields(self):
        """Test consecutive delimiters produce empty fields."""
        assert StringUtils.split_respecting_quotes("a||b|", "|") == ["a", "", "b", ""]

    def test_indent(self):
        """Test indentation strings."""
        assert StringUtils.indent(3, 2) == "      "
        assert StringUtils.indent(2, 0) == ""

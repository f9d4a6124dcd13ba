"""Tests for the JSON bridge."""

import json

import pytest

from toon_transformer.converters import (
    JsonConversionOptions,
    JsonToToonConverter,
    ToonToJsonConverter,
)
from toon_transformer.options import Delimiter, ToonOptions
from toon_transformer.types import ConversionError, ErrorType, ToonValidationError


class TestJsonToToonConverter:
    """Tests for JsonToToonConverter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = JsonToToonConverter()

    def test_convert_object(self):
        """Test a JSON object becomes TOON fields."""
        assert self.converter.convert('{"id": 123, "tags": ["a", "b"]}') == "id: 123\ntags[2]: a,b"

    def test_convert_uses_toon_options(self):
        """Test the TOON options are applied."""
        options = JsonConversionOptions(toon_options=ToonOptions(delimiter=Delimiter.PIPE))
        converter = JsonToToonConverter(options)
        assert converter.convert('{"tags": ["a", "b"]}') == "tags[2|]: a|b"

    def test_convert_invalid_json(self):
        """Test malformed JSON raises a syntax conversion error."""
        with pytest.raises(ConversionError) as exc_info:
            self.converter.convert('{"a": ')
        assert exc_info.value.error_type == ErrorType.SYNTAX


class TestToonToJsonConverter:
    """Tests for ToonToJsonConverter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = ToonToJsonConverter()

    def test_convert_pretty(self):
        """Test pretty JSON output."""
        assert self.converter.convert("a: 1") == '{\n  "a": 1\n}'

    def test_convert_compact(self):
        """Test compact JSON output."""
        converter = ToonToJsonConverter(JsonConversionOptions(pretty=False))
        assert converter.convert("tags[2]: x,y") == '{"tags": ["x", "y"]}'

    def test_convert_keeps_unicode(self):
        """Test non-ASCII text is written as is."""
        assert json.loads(self.converter.convert("name: café")) == {"name": "café"}
        assert "café" in self.converter.convert("name: café")

    def test_convert_propagates_strict_errors(self):
        """Test decoding errors reach the caller."""
        with pytest.raises(ToonValidationError):
            self.converter.convert("items[3]: a,b")

    def test_convert_rejects_non_finite_numbers(self):
        """Test overflowing reals cannot be written as JSON."""
        with pytest.raises(ConversionError):
            self.converter.convert("big: 1e999")

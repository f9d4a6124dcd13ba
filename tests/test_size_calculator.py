"""Tests for size calculation utilities."""

import pytest

from toon_transformer.utils.size_calculator import SizeCalculator


class TestSizeCalculator:
    """Tests for SizeCalculator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = SizeCalculator()

    def test_calculate_json_length_pretty(self):
        """Test pretty-printed JSON length."""
        assert self.calculator.calculate_json_length({"a": 1}) == len('{\n  "a": 1\n}')

    def test_calculate_json_length_compact(self):
        """Test compact JSON length."""
        assert self.calculator.calculate_json_length({"a": [1, 2]}, indent=None) == len('{"a":[1,2]}')

    def test_calculate_json_length_counts_characters(self):
        """Test non-ASCII text is counted in characters, not bytes."""
        assert self.calculator.calculate_json_length("é", indent=None) == 3

    def test_calculate_json_length_invalid(self):
        """Test unserializable data raises ValueError."""
        with pytest.raises(ValueError, match="not JSON serializable"):
            self.calculator.calculate_json_length({"a": object()})

    def test_estimate_savings(self):
        """Test the savings report."""
        savings = self.calculator.estimate_savings({"a": 1}, "a: 1")

        assert savings.json_length == 12
        assert savings.toon_length == 4
        assert savings.saved_chars == 8
        assert savings.savings_percent == pytest.approx(66.666, rel=1e-3)
        assert str(savings) == "JSON: 12 chars | TOON: 4 chars | Savings: 8 chars (66.7%)"

    def test_estimate_savings_empty_toon(self):
        """Test an empty TOON rendering saves the whole JSON length."""
        savings = self.calculator.estimate_savings("", "")
        assert savings.json_length == 2
        assert savings.savings_percent == pytest.approx(100.0)

"""Tests for validation utilities."""

from toon_transformer.types import ErrorType
from toon_transformer.utils.validation import ValidationUtils


class TestValidationUtils:
    """Tests for ValidationUtils class."""

    def test_validate_valid_tree(self, sample_nested):
        """Test a tree built from supported values."""
        result = ValidationUtils.validate_value_tree(sample_nested)

        assert result.is_valid
        assert len(result.errors) == 0
        assert len(result.warnings) == 0

    def test_validate_non_string_keys(self):
        """Test non-string keys are reported with their location."""
        result = ValidationUtils.validate_value_tree({"a": {2: "x"}})

        assert not result.is_valid
        assert len(result.errors) == 1
        assert result.errors[0].type == ErrorType.STRUCTURE
        assert result.errors[0].location == "root.a.2"

    def test_validate_unsupported_values(self):
        """Test unsupported value types are reported per position."""
        result = ValidationUtils.validate_value_tree({"a": [1, b"bytes", {1, 2}]})

        assert not result.is_valid
        assert [error.location for error in result.errors] == ["root.a[1]", "root.a[2]"]

    def test_validate_circular_reference(self):
        """Test self references are detected."""
        data = {"items": []}
        data["items"].append(data)
        result = ValidationUtils.validate_value_tree(data)

        assert not result.is_valid
        assert "Circular" in result.errors[0].message

    def test_shared_subtree_is_not_circular(self):
        """Test the same child reused in two places is accepted."""
        shared = {"x": 1}
        result = ValidationUtils.validate_value_tree({"a": shared, "b": [shared, shared]})

        assert result.is_valid

    def test_validate_deep_nesting_warning(self):
        """Test warning for deep nesting."""
        data = {}
        current = data
        for i in range(70):
            current[f"level_{i}"] = {}
            current = current[f"level_{i}"]

        result = ValidationUtils.validate_value_tree(data)

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "Deep nesting" in result.warnings[0]

    def test_validate_toon_text_indentation(self):
        """Test indentation warnings for TOON text."""
        text = "a:\n  b: 1\n   c: 2\n\td: 3\n\n"
        warnings = ValidationUtils.validate_toon_text(text, 2)

        assert len(warnings) == 2
        assert warnings[0].startswith("Line 3")
        assert warnings[1].startswith("Line 4")

    def test_validate_toon_text_zero_indent(self):
        """Test any indentation is accepted when the width is zero."""
        assert ValidationUtils.validate_toon_text("a:\n   b: 1", 0) == []

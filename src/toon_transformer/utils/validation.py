"""Validation utilities for value trees and TOON input."""

from typing import Any, List, Set

from ..types import ErrorType, ValidationError, ValidationResult

_PRIMITIVE_TYPES = (str, int, float, bool, type(None))


class ValidationUtils:
    """Utility class for validating value trees and TOON text."""

    @staticmethod
    def validate_value_tree(value: Any) -> ValidationResult:
        """
        Check that a value only uses the supported variants.

        Object keys must be strings, values must be None, bool, int, float,
        str, dict, list or tuple, and containers must not reference
        themselves.

        Args:
            value: Value tree to validate

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if ValidationUtils._has_circular_references(value):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="Circular references detected in value tree",
                location="root"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        ValidationUtils._collect_type_errors(value, "root", errors)

        max_depth = ValidationUtils._calculate_max_depth(value)
        if max_depth > 64:
            warnings.append(f"Deep nesting detected (depth: {max_depth}).")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _collect_type_errors(value: Any, location: str, errors: List[ValidationError]) -> None:
        if isinstance(value, dict):
            for key, item in value.items():
                if not isinstance(key, str):
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Object key must be a string, got {type(key).__name__}",
                        location=f"{location}.{key!r}"
                    ))
                    continue
                ValidationUtils._collect_type_errors(item, f"{location}.{key}", errors)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                ValidationUtils._collect_type_errors(item, f"{location}[{index}]", errors)
        elif not isinstance(value, _PRIMITIVE_TYPES):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Unsupported value type: {type(value).__name__}",
                location=location
            ))

    @staticmethod
    def _has_circular_references(data: Any, seen: Set[int] = None) -> bool:
        """Check for circular references in data structure."""
        if seen is None:
            seen = set()

        if isinstance(data, (dict, list, tuple)):
            obj_id = id(data)
            if obj_id in seen:
                return True
            seen.add(obj_id)

            children = data.values() if isinstance(data, dict) else data
            for child in children:
                if ValidationUtils._has_circular_references(child, seen):
                    return True

            seen.remove(obj_id)

        return False

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if isinstance(data, dict):
            children = data.values()
        elif isinstance(data, (list, tuple)):
            children = data
        else:
            return current_depth

        max_child_depth = current_depth
        for child in children:
            max_child_depth = max(max_child_depth,
                                  ValidationUtils._calculate_max_depth(child, current_depth + 1))
        return max_child_depth

    @staticmethod
    def validate_toon_text(text: str, indent: int) -> List[str]:
        """
        Check TOON text for indentation problems.

        Tab-indented lines and space indentation that is not a multiple of
        the indent width are reported; neither stops decoding.

        Args:
            text: TOON text
            indent: Configured spaces per level

        Returns:
            List of warning messages
        """
        warnings: List[str] = []

        for number, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            stripped = line.lstrip(" ")
            spaces = len(line) - len(stripped)
            if stripped.startswith("\t"):
                warnings.append(f"Line {number}: tab indentation is not counted as nesting")
            elif indent > 0 and spaces % indent != 0:
                warnings.append(
                    f"Line {number}: indentation of {spaces} spaces is not a multiple of {indent}"
                )

        return warnings

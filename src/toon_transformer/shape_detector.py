"""Value kind classification and array shape selection."""

import logging
import math
from typing import Any, List, Optional

from .types import ArrayShape, ValueKind


class ShapeDetector:
    """
    Classifies value tree nodes and selects the encoding for arrays.

    Every encoder and validator decision about a node goes through
    detect_value_kind(), so the set of variants is handled in one place.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the shape detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect_value_kind(self, value: Any) -> ValueKind:
        """
        Detect the variant of a single value.

        Args:
            value: Value to classify

        Returns:
            ValueKind of the value

        Raises:
            TypeError: If the value is not part of the value model
        """
        if value is None:
            return ValueKind.NULL
        elif isinstance(value, bool):
            return ValueKind.BOOL
        elif isinstance(value, int):
            return ValueKind.INTEGER
        elif isinstance(value, float):
            return ValueKind.REAL
        elif isinstance(value, str):
            return ValueKind.STRING
        elif isinstance(value, dict):
            return ValueKind.OBJECT
        elif isinstance(value, (list, tuple)):
            return ValueKind.ARRAY
        raise TypeError(f"Unsupported value type: {type(value).__name__}")

    def is_primitive(self, value: Any) -> bool:
        return self.detect_value_kind(value).is_primitive

    def are_all_primitives(self, array: List[Any]) -> bool:
        return all(self.is_primitive(item) for item in array)

    def is_tabular_eligible(self, array: List[Any]) -> bool:
        """
        Check whether an array qualifies for the tabular encoding.

        Every element must be a non-empty object with the same key set as
        the first element, and no field may hold an object or an array.
        """
        if not array:
            return False

        if not all(isinstance(item, dict) and item for item in array):
            return False

        first_keys = set(array[0].keys())
        for item in array[1:]:
            if set(item.keys()) != first_keys:
                return False

        for item in array:
            if not all(self.is_primitive(value) for value in item.values()):
                return False

        return True

    def tabular_fields(self, array: List[Any]) -> List[str]:
        """Field names of a tabular array, sorted lexicographically."""
        return sorted(array[0].keys())

    def detect_array_shape(self, array: List[Any]) -> ArrayShape:
        """
        Select the encoding for an array.

        Args:
            array: Array to analyze

        Returns:
            ArrayShape in priority order: empty, tabular, primitive, list
        """
        if not array:
            shape = ArrayShape.EMPTY
        elif self.is_tabular_eligible(array):
            shape = ArrayShape.TABULAR
        elif self.are_all_primitives(array):
            shape = ArrayShape.PRIMITIVE
        else:
            shape = ArrayShape.LIST

        self.logger.debug(f"Selected {shape.value} encoding for array of {len(array)} items")
        return shape

    def is_finite_number(self, value: Any) -> bool:
        kind = self.detect_value_kind(value)
        if kind == ValueKind.INTEGER:
            return True
        return kind == ValueKind.REAL and math.isfinite(value)

"""Utility functions for the TOON Transformer."""

from .size_calculator import SizeCalculator
from .strings import StringUtils
from .validation import ValidationUtils

__all__ = ["SizeCalculator", "StringUtils", "ValidationUtils"]

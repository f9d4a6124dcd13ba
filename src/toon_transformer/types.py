"""Core type definitions for the TOON Transformer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# JSON-compatible value tree
JsonPrimitive = Union[str, int, float, bool, None]
JsonObject = Dict[str, Any]
JsonArray = List[Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]


class ValueKind(Enum):
    """Enumeration of the value tree variants."""
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def is_primitive(self) -> bool:
        return self not in (ValueKind.OBJECT, ValueKind.ARRAY)


class ArrayShape(Enum):
    """Enumeration of the array encodings."""
    EMPTY = "empty"
    TABULAR = "tabular"
    PRIMITIVE = "primitive"
    LIST = "list"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    FORMAT = "format"
    LENGTH = "length"
    FIELD_COUNT = "field_count"
    INDENTATION = "indentation"
    STRUCTURE = "structure"
    CONVERSION = "conversion"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class DecodeResult:
    """Decoded value together with the violations tolerated in lenient mode."""
    value: Any
    warnings: List[ValidationError] = field(default_factory=list)


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


@dataclass
class TokenSavings:
    """Character-count comparison between JSON and TOON renderings."""
    json_length: int
    toon_length: int
    saved_chars: int
    savings_percent: float

    def __str__(self) -> str:
        return (
            f"JSON: {self.json_length} chars | TOON: {self.toon_length} chars | "
            f"Savings: {self.saved_chars} chars ({self.savings_percent:.1f}%)"
        )


class ToonError(Exception):
    """Base exception for TOON errors."""

    def __init__(self, message: str, error_type: ErrorType,
                 line: Optional[int] = None, context: Optional[Any] = None):
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.error_type = error_type
        self.line = line
        self.context = context


class ToonParseError(ToonError):
    """Raised when TOON text cannot be decoded."""


class ToonFormatError(ToonParseError):
    """Raised for malformed syntax that is fatal in every mode."""

    def __init__(self, message: str, line: Optional[int] = None, context: Optional[Any] = None):
        super().__init__(message, ErrorType.FORMAT, line, context)


class ToonValidationError(ToonParseError):
    """Raised for declared-vs-actual mismatches in strict mode."""


class ToonEncodeError(ToonError):
    """Raised when a value tree violates the model invariants."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.STRUCTURE, context=context)


class ConversionError(ToonError):
    """Raised when a format bridge fails to convert its input."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.CONVERSION,
                 context: Optional[Any] = None):
        super().__init__(message, error_type, context=context)


# Abstract base classes for interfaces

class EncoderInterface(ABC):
    """Abstract interface for value tree encoders."""

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Encode a value tree to TOON text."""
        pass


class DecoderInterface(ABC):
    """Abstract interface for TOON decoders."""

    @abstractmethod
    def decode(self, text: str) -> JsonValue:
        """Decode TOON text to a value tree."""
        pass


class ConverterInterface(ABC):
    """Abstract interface for format bridges."""

    @abstractmethod
    def convert(self, source: str) -> str:
        """Convert a document from one format to another."""
        pass

"""
TOON Transformer - Token-Oriented Object Notation for JSON-compatible data.

Encodes value trees into a compact, indentation-based text format that
spends fewer characters than JSON on uniform data, and decodes it back.
"""

from typing import Any, Optional

from .decoder import ToonDecoder
from .encoder import ToonEncoder
from .options import Delimiter, ToonOptions
from .toon_transformer import ToonTransformer
from .types import (
    ConversionError,
    DecodeResult,
    JsonValue,
    TokenSavings,
    ToonEncodeError,
    ToonError,
    ToonFormatError,
    ToonParseError,
    ToonValidationError,
)

__version__ = "1.0.0"


def encode(value: Any, options: Optional[ToonOptions] = None) -> str:
    """Encode a value tree into TOON text."""
    return ToonEncoder(options).encode(value)


def decode(text: str, options: Optional[ToonOptions] = None) -> JsonValue:
    """Decode TOON text into a value tree."""
    return ToonDecoder(options).decode(text)


__all__ = [
    "encode",
    "decode",
    "ToonTransformer",
    "ToonEncoder",
    "ToonDecoder",
    "ToonOptions",
    "Delimiter",
    "DecodeResult",
    "TokenSavings",
    "ToonError",
    "ToonParseError",
    "ToonFormatError",
    "ToonValidationError",
    "ToonEncodeError",
    "ConversionError",
]

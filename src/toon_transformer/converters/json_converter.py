"""JSON bridge."""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..decoder import ToonDecoder
from ..encoder import ToonEncoder
from ..options import ToonOptions
from ..types import ConversionError, ConverterInterface, ErrorType


@dataclass(frozen=True)
class JsonConversionOptions:
    """
    Options for converting between JSON and TOON.

    Attributes:
        toon_options: Options for the TOON side of the conversion
        pretty: Indent the JSON output (default: True)
        indent: JSON indentation when pretty (default: 2)
    """
    toon_options: ToonOptions = field(default_factory=lambda: ToonOptions.DEFAULT)
    pretty: bool = True
    indent: int = 2


class JsonToToonConverter(ConverterInterface):
    """Converts JSON documents to TOON text."""

    def __init__(self, options: Optional[JsonConversionOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or JsonConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.encoder = ToonEncoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert a JSON document to TOON.

        Raises:
            ConversionError: If the input is not valid JSON
            ToonEncodeError: If the parsed value cannot be encoded
        """
        try:
            value = json.loads(source)
        except json.JSONDecodeError as e:
            raise ConversionError(
                f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                ErrorType.SYNTAX, context=e
            ) from e
        return self.encoder.encode(value)


class ToonToJsonConverter(ConverterInterface):
    """Converts TOON text to JSON documents."""

    def __init__(self, options: Optional[JsonConversionOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or JsonConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = ToonDecoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert TOON text to a JSON document.

        Raises:
            ToonParseError: If the TOON text cannot be decoded
            ConversionError: If the decoded value holds a non-finite number
        """
        value = self.decoder.decode(source)
        try:
            return json.dumps(
                value,
                ensure_ascii=False,
                allow_nan=False,
                indent=self.options.indent if self.options.pretty else None
            )
        except ValueError as e:
            raise ConversionError(f"Cannot represent decoded value as JSON: {e}", context=e) from e

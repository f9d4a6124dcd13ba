"""Main TOON Transformer implementation."""

import dataclasses
import json
import logging
from typing import Any, Optional

from .converters import (
    CsvToToonConverter,
    CsvToToonOptions,
    JsonConversionOptions,
    JsonToToonConverter,
    ToonToCsvConverter,
    ToonToCsvOptions,
    ToonToJsonConverter,
    ToonToXmlConverter,
    XmlConversionOptions,
    XmlToToonConverter,
)
from .decoder import ToonDecoder
from .encoder import ToonEncoder
from .error_handler import ErrorHandler
from .options import ToonOptions
from .types import ConversionError, DecodeResult, ErrorType, JsonValue, TokenSavings
from .utils.size_calculator import SizeCalculator


class ToonTransformer:
    """
    Entry point bundling the encoder, the decoder and the format bridges.

    All conversions share one ToonOptions instance. XML and CSV options
    can be passed per call; their TOON side always uses the transformer's
    options.
    """

    def __init__(self, options: Optional[ToonOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the TOON Transformer.

        Args:
            options: Options shared by every conversion
            logger: Optional logger instance
        """
        self.options = options or ToonOptions.DEFAULT
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.options.strict, self.logger)
        self.encoder = ToonEncoder(self.options, self.logger)
        self.decoder = ToonDecoder(self.options, self.logger, self.error_handler)
        self.size_calculator = SizeCalculator(self.logger)

    def encode(self, value: Any) -> str:
        """Encode a value tree into TOON text."""
        return self.encoder.encode(value)

    def decode(self, text: str) -> JsonValue:
        """Decode TOON text into a value tree."""
        return self.decoder.decode(text)

    def decode_with_report(self, text: str) -> DecodeResult:
        return self.decoder.decode_with_report(text)

    def from_json(self, json_string: str) -> str:
        """Convert a JSON document to TOON."""
        self.logger.info(f"Converting JSON ({len(json_string)} chars) to TOON")
        return JsonToToonConverter(self._json_options(), self.logger).convert(json_string)

    def to_json(self, toon_string: str, pretty: bool = True) -> str:
        """Convert TOON text to a JSON document."""
        self.logger.info(f"Converting TOON ({len(toon_string)} chars) to JSON")
        return ToonToJsonConverter(self._json_options(pretty), self.logger).convert(toon_string)

    def from_xml(self, xml_string: str, options: Optional[XmlConversionOptions] = None) -> str:
        """Convert an XML document to TOON."""
        self.logger.info(f"Converting XML ({len(xml_string)} chars) to TOON")
        xml_options = self._with_toon_options(options or XmlConversionOptions())
        return XmlToToonConverter(xml_options, self.logger).convert(xml_string)

    def to_xml(self, toon_string: str, options: Optional[XmlConversionOptions] = None) -> str:
        """Convert TOON text to an XML document."""
        self.logger.info(f"Converting TOON ({len(toon_string)} chars) to XML")
        xml_options = self._with_toon_options(options or XmlConversionOptions())
        return ToonToXmlConverter(xml_options, self.logger).convert(toon_string)

    def from_csv(self, csv_string: str, options: Optional[CsvToToonOptions] = None) -> str:
        """Convert a CSV document to TOON."""
        self.logger.info(f"Converting CSV ({len(csv_string)} chars) to TOON")
        csv_options = self._with_toon_options(options or CsvToToonOptions())
        return CsvToToonConverter(csv_options, self.logger).convert(csv_string)

    def to_csv(self, toon_string: str, options: Optional[ToonToCsvOptions] = None) -> str:
        """Convert TOON text to a CSV document."""
        self.logger.info(f"Converting TOON ({len(toon_string)} chars) to CSV")
        csv_options = self._with_toon_options(options or ToonToCsvOptions())
        return ToonToCsvConverter(csv_options, self.logger).convert(toon_string)

    def estimate_savings(self, value: Any) -> TokenSavings:
        """
        Compare the size of a value as pretty-printed JSON and as TOON.

        Args:
            value: Value tree

        Returns:
            TokenSavings with both character counts and the saving
        """
        savings = self.size_calculator.estimate_savings(value, self.encode(value))
        self.logger.info(str(savings))
        return savings

    def estimate_savings_from_json(self, json_string: str) -> TokenSavings:
        try:
            value = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConversionError(f"JSON parsing failed: {e.msg} at line {e.lineno}",
                                  ErrorType.SYNTAX, context=e) from e
        return self.estimate_savings(value)

    def _json_options(self, pretty: bool = True) -> JsonConversionOptions:
        return JsonConversionOptions(toon_options=self.options, pretty=pretty)

    def _with_toon_options(self, options: Any) -> Any:
        return dataclasses.replace(options, toon_options=self.options)

"""Bridges between TOON and other document formats."""

from .csv_converter import (
    CsvToToonConverter,
    CsvToToonOptions,
    EmptyValueHandling,
    NestedDataHandling,
    QuoteMode,
    ToonToCsvConverter,
    ToonToCsvOptions,
)
from .json_converter import JsonConversionOptions, JsonToToonConverter, ToonToJsonConverter
from .xml_converter import (
    ArrayDetection,
    ToonToXmlConverter,
    XmlConversionOptions,
    XmlToToonConverter,
)

__all__ = [
    "ArrayDetection",
    "CsvToToonConverter",
    "CsvToToonOptions",
    "EmptyValueHandling",
    "JsonConversionOptions",
    "JsonToToonConverter",
    "NestedDataHandling",
    "QuoteMode",
    "ToonToCsvConverter",
    "ToonToCsvOptions",
    "ToonToJsonConverter",
    "ToonToXmlConverter",
    "XmlConversionOptions",
    "XmlToToonConverter",
]

"""CSV bridge built on the csv module."""

import csv
import io
import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..decoder import ToonDecoder
from ..encoder import ToonEncoder
from ..options import ToonOptions
from ..types import ConversionError, ConverterInterface, ErrorType

INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
REAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class EmptyValueHandling(Enum):
    """What an empty CSV cell becomes."""
    EMPTY_STRING = "empty_string"
    NULL = "null"
    SKIP = "skip"


class NestedDataHandling(Enum):
    """How object and array fields are written to a CSV cell."""
    JSON_STRING = "json_string"
    FLATTEN = "flatten"
    ERROR = "error"


class QuoteMode(Enum):
    """CSV quoting policy for written cells."""
    MINIMAL = csv.QUOTE_MINIMAL
    ALL = csv.QUOTE_ALL
    NON_NUMERIC = csv.QUOTE_NONNUMERIC
    NONE = csv.QUOTE_NONE


@dataclass(frozen=True)
class CsvToToonOptions:
    """
    Options for reading CSV into TOON.

    Attributes:
        toon_options: Options for the TOON side of the conversion
        delimiter: CSV field separator (default: ",")
        quote_char: CSV quote character (default: '"')
        has_header: First record holds the column names (default: True)
        custom_headers: Column names to use instead of the header record
        type_inference: Read booleans and numbers as typed values (default: True)
        empty_value_handling: What an empty cell becomes (default: EMPTY_STRING)
        trim_whitespace: Strip cells before interpreting them (default: True)
        skip_empty_lines: Ignore blank records (default: True)
        null_value: Cell text that reads as null, if any
        wrapper_key: Field holding the rows in the encoded object (default: "data")
    """
    toon_options: ToonOptions = field(default_factory=lambda: ToonOptions.DEFAULT)
    delimiter: str = ","
    quote_char: str = '"'
    has_header: bool = True
    custom_headers: Optional[Tuple[str, ...]] = None
    type_inference: bool = True
    empty_value_handling: EmptyValueHandling = EmptyValueHandling.EMPTY_STRING
    trim_whitespace: bool = True
    skip_empty_lines: bool = True
    null_value: Optional[str] = None
    wrapper_key: str = "data"


@dataclass(frozen=True)
class ToonToCsvOptions:
    """
    Options for writing TOON as CSV.

    Attributes:
        toon_options: Options for the TOON side of the conversion
        delimiter: CSV field separator (default: ",")
        quote_char: CSV quote character (default: '"')
        include_header: Write a header record (default: True)
        column_order: Explicit column list; defaults to the union of row keys
        auto_detect_array: Use the first array field of a root object (default: True)
        array_path: Dotted path to the array holding the rows
        nested_data_handling: How nested values are written (default: JSON_STRING)
        null_value: Cell text for null values (default: "")
        quote_mode: Quoting policy (default: MINIMAL)
        line_ending: Record separator (default: "\\n")
    """
    toon_options: ToonOptions = field(default_factory=lambda: ToonOptions.DEFAULT)
    delimiter: str = ","
    quote_char: str = '"'
    include_header: bool = True
    column_order: Optional[Tuple[str, ...]] = None
    auto_detect_array: bool = True
    array_path: Optional[str] = None
    nested_data_handling: NestedDataHandling = NestedDataHandling.JSON_STRING
    null_value: str = ""
    quote_mode: QuoteMode = QuoteMode.MINIMAL
    line_ending: str = "\n"


class CsvToToonConverter(ConverterInterface):
    """
    Converts CSV documents to TOON text.

    Records become objects keyed by column name, wrapped in a single-field
    object so uniform rows encode as one tabular array.
    """

    def __init__(self, options: Optional[CsvToToonOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or CsvToToonOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.encoder = ToonEncoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert a CSV document to TOON.

        Raises:
            ConversionError: If the CSV cannot be parsed
        """
        return self.encoder.encode({self.options.wrapper_key: self.to_rows(source)})

    def to_rows(self, source: str) -> List[Dict[str, Any]]:
        """Parse a CSV document into a list of row objects."""
        try:
            records = list(csv.reader(io.StringIO(source),
                                      delimiter=self.options.delimiter,
                                      quotechar=self.options.quote_char))
        except csv.Error as e:
            raise ConversionError(f"Invalid CSV format: {e}", ErrorType.SYNTAX, context=e) from e

        if self.options.skip_empty_lines:
            records = [record for record in records if not self._is_empty(record)]

        headers, records = self._extract_headers(records)
        rows = [self._build_row(headers, record) for record in records]

        self.logger.debug(f"Read {len(rows)} CSV rows with {len(headers)} columns")
        return rows

    def _is_empty(self, record: List[str]) -> bool:
        return not record or (len(record) == 1 and not record[0].strip())

    def _extract_headers(self, records: List[List[str]]) -> Tuple[List[str], List[List[str]]]:
        # A header record is skipped even when custom headers replace it
        if self.options.has_header and records:
            header_record, records = records[0], records[1:]
        else:
            header_record = None

        if self.options.custom_headers is not None:
            return list(self.options.custom_headers), records

        if header_record is not None:
            if self.options.trim_whitespace:
                header_record = [name.strip() for name in header_record]
            return header_record, records

        width = len(records[0]) if records else 0
        return [f"col{index}" for index in range(width)], records

    def _build_row(self, headers: List[str], record: List[str]) -> Dict[str, Any]:
        row: Dict[str, Any] = {}

        for index, header in enumerate(headers):
            value = record[index] if index < len(record) else ""
            if self.options.trim_whitespace:
                value = value.strip()

            if self.options.null_value is not None and value == self.options.null_value:
                row[header] = None
                continue

            if not value:
                handling = self.options.empty_value_handling
                if handling == EmptyValueHandling.NULL:
                    row[header] = None
                elif handling == EmptyValueHandling.EMPTY_STRING:
                    row[header] = ""
                continue

            row[header] = self.infer_type(value)

        return row

    def infer_type(self, value: str) -> Any:
        """Read booleans, integers and reals; keep anything else as text."""
        if not self.options.type_inference:
            return value
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        if INTEGER_PATTERN.fullmatch(value):
            return int(value)
        if REAL_PATTERN.fullmatch(value):
            return float(value)
        return value


class ToonToCsvConverter(ConverterInterface):
    """
    Converts TOON text to CSV documents.

    The rows come from a root array, the array at ``array_path`` or the
    first array field of a root object. Headers are the union of row keys
    in first-seen order unless a column order is given.
    """

    def __init__(self, options: Optional[ToonToCsvOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or ToonToCsvOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = ToonDecoder(self.options.toon_options, self.logger)

    def convert(self, source: str) -> str:
        """
        Convert TOON text to a CSV document.

        Raises:
            ToonParseError: If the TOON text cannot be decoded
            ConversionError: If no array is found or nested data is refused
        """
        return self.from_value(self.decoder.decode(source))

    def from_value(self, value: Any) -> str:
        """Write the rows found in a value tree as CSV."""
        rows = [self._extract_row(element) for element in self._find_array(value)]
        if not rows:
            return ""

        if self.options.column_order is not None:
            headers = list(self.options.column_order)
        else:
            headers = list(dict.fromkeys(key for row in rows for key in row))

        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            delimiter=self.options.delimiter,
            quotechar=self.options.quote_char,
            quoting=self.options.quote_mode.value,
            lineterminator=self.options.line_ending,
            escapechar="\\" if self.options.quote_mode == QuoteMode.NONE else None
        )
        if self.options.include_header:
            writer.writerow(headers)
        for row in rows:
            writer.writerow([self._cell_value(row.get(header)) for header in headers])

        self.logger.debug(f"Wrote {len(rows)} CSV rows with {len(headers)} columns")
        return buffer.getvalue()

    def _find_array(self, value: Any) -> List[Any]:
        if isinstance(value, list):
            return value

        if self.options.array_path is not None:
            node = value
            for part in self.options.array_path.strip(".").split("."):
                if not isinstance(node, dict) or part not in node:
                    raise ConversionError(f"Array not found at path: {self.options.array_path}")
                node = node[part]
            if not isinstance(node, list):
                raise ConversionError(f"Value at path is not an array: {self.options.array_path}")
            return node

        if self.options.auto_detect_array and isinstance(value, dict):
            for item in value.values():
                if isinstance(item, list):
                    return item

        raise ConversionError("Cannot extract tabular data from TOON: no array found")

    def _extract_row(self, element: Any) -> Dict[str, Any]:
        if not isinstance(element, dict):
            return {"value": element}

        row: Dict[str, Any] = {}
        for key, value in element.items():
            if not isinstance(value, (dict, list)):
                row[key] = value
                continue

            handling = self.options.nested_data_handling
            if handling == NestedDataHandling.JSON_STRING:
                row[key] = self._to_json(value)
            elif handling == NestedDataHandling.FLATTEN:
                self._flatten(key, value, row)
            else:
                raise ConversionError(
                    f"Nested data encountered at field '{key}' "
                    f"(use JSON_STRING or FLATTEN nested data handling)"
                )
        return row

    def _flatten(self, prefix: str, value: Any, target: Dict[str, Any]) -> None:
        if isinstance(value, dict):
            for key, item in value.items():
                self._flatten(f"{prefix}.{key}", item, target)
        elif isinstance(value, list):
            target[prefix] = self._to_json(value)
        else:
            target[prefix] = value

    def _to_json(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    def _cell_value(self, value: Any) -> Any:
        if value is None:
            return self.options.null_value
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

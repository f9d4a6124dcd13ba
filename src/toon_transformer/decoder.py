"""TOON decoder: text to value tree."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .error_handler import ErrorHandler
from .options import Delimiter, ToonOptions
from .types import (
    DecodeResult,
    DecoderInterface,
    ErrorType,
    JsonValue,
    ToonParseError,
    ValidationError,
)
from .utils.strings import LIST_ITEM_PREFIX, NUMBER_PATTERN, StringUtils

_KEY = r'[A-Za-z_][A-Za-z0-9_.]*|"(?:[^"\\]|\\.)*"'

ARRAY_LINE_PATTERN = re.compile(r"\[.*\](?:\{.*\})?:.*")
ARRAY_HEADER_PATTERN = re.compile(r"\[(#)?(\d+)([^\]]*)\](:)?(.*)", re.ASCII)
TABULAR_HEADER_PATTERN = re.compile(r"\[(#)?(\d+)([^\]]*)\]\{(.+)\}:", re.ASCII)
KEY_VALUE_PATTERN = re.compile(rf"({_KEY}):(.*)", re.ASCII)
KEY_ARRAY_PATTERN = re.compile(rf"({_KEY})(\[[^\]]*\](?:\{{.*\}})?:.*)", re.ASCII)

_INDICATORS = {
    "": Delimiter.COMMA,
    ",": Delimiter.COMMA,
    " ": Delimiter.TAB,
    "|": Delimiter.PIPE,
}


@dataclass
class LineCursor:
    """Position within the input lines of a single decode call."""
    lines: List[str]
    position: int = 0
    warnings: List[ValidationError] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        return cls(lines)

    def has_more(self) -> bool:
        return self.position < len(self.lines)

    def peek(self) -> str:
        return self.lines[self.position]

    def advance(self) -> str:
        line = self.lines[self.position]
        self.position += 1
        return line

    @property
    def line_number(self) -> int:
        """1-based number of the line at the cursor."""
        return self.position + 1

    def skip_blank_lines(self) -> None:
        while self.has_more() and not self.peek().strip(" "):
            self.position += 1


class ToonDecoder(DecoderInterface):
    """
    Decoder for converting TOON text back into value trees.

    Nesting is recovered from indentation (leading spaces divided by the
    configured width). Array headers declare their length and delimiter;
    in strict mode any mismatch between declared and observed contents
    raises ToonValidationError, in lenient mode the decoder logs it and
    returns what it could read. An unknown delimiter indicator raises
    ToonFormatError in both modes.
    """

    def __init__(self, options: Optional[ToonOptions] = None,
                 logger: Optional[logging.Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the decoder.

        Args:
            options: Decoding options (defaults to ToonOptions.DEFAULT)
            logger: Optional logger instance
            error_handler: Optional ErrorHandler instance
        """
        self.options = options or ToonOptions.DEFAULT
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.options.strict, self.logger)

    def decode(self, text: str) -> JsonValue:
        """
        Decode TOON text into a value tree.

        Args:
            text: TOON-formatted string

        Returns:
            Decoded value; empty input yields an empty object

        Raises:
            ToonFormatError: If an array header has an unknown delimiter indicator
            ToonValidationError: If strict mode is enabled and a count or
                indentation check fails
        """
        return self.decode_with_report(text).value

    def decode_with_report(self, text: str) -> DecodeResult:
        """Decode text and return the violations tolerated in lenient mode."""
        if text is None or not text.strip():
            return DecodeResult(value={})

        validation_result = self.error_handler.validate_input(text, self.options.indent)
        if not validation_result.is_valid:
            messages = [error.message for error in validation_result.errors]
            raise ToonParseError(f"Invalid TOON input: {'; '.join(messages)}", ErrorType.SYNTAX)

        cursor = LineCursor.from_text(text)
        value = self._parse_value(cursor, 0)
        if value is None:
            value = {}

        self.logger.debug(f"Decoded {len(cursor.lines)} lines "
                          f"with {len(cursor.warnings)} tolerated violations")
        return DecodeResult(value=value, warnings=cursor.warnings)

    def indent_level(self, line: str) -> int:
        """Nesting level of a line from its leading spaces."""
        if self.options.indent == 0:
            return 0
        spaces = len(line) - len(line.lstrip(" "))
        return spaces // self.options.indent

    def parse_primitive(self, token: str) -> Any:
        """
        Interpret a trimmed scalar token.

        Quoted tokens are strings; null/true/false are keywords; tokens
        matching the numeric literal are numbers (real when they contain
        '.', 'e' or 'E'); anything else is the raw string.
        """
        if not token:
            return None
        if StringUtils.is_quoted(token):
            return StringUtils.unquote(token)
        if token == "null":
            return None
        if token == "true":
            return True
        if token == "false":
            return False
        if NUMBER_PATTERN.fullmatch(token):
            if any(char in token for char in ".eE"):
                return float(token)
            return int(token)
        return token

    def _violation(self, cursor: LineCursor, message: str, error_type: ErrorType,
                   line: Optional[int]) -> None:
        cursor.warnings.append(self.error_handler.violation(message, error_type, line))

    def _parse_value(self, cursor: LineCursor, base: int) -> Any:
        cursor.skip_blank_lines()
        if not cursor.has_more():
            return None

        line = cursor.peek()
        indent = self.indent_level(line)
        if indent < base:
            return None

        trimmed = line.strip(" ")
        if ARRAY_LINE_PATTERN.fullmatch(trimmed):
            header_line = cursor.line_number
            cursor.advance()
            return self._parse_array(cursor, trimmed, indent, header_line)

        return self._parse_object(cursor, base)

    def _parse_object(self, cursor: LineCursor, base: int,
                      stop_at_list_item: bool = False) -> Dict[str, Any]:
        obj: Dict[str, Any] = {}

        while cursor.has_more():
            line = cursor.peek()
            trimmed = line.strip(" ")
            if not trimmed:
                cursor.advance()
                continue

            indent = self.indent_level(line)
            if indent < base:
                break

            if stop_at_list_item and (trimmed == "-" or trimmed.startswith(LIST_ITEM_PREFIX)):
                break

            match = self._match_field(trimmed)
            if match is not None:
                field_line = cursor.line_number
                cursor.advance()
                key, value = self._read_field(cursor, match, indent, field_line)
                obj[key] = value
                continue

            if ARRAY_LINE_PATTERN.fullmatch(trimmed):
                break

            self.logger.debug(f"Skipping unrecognized line {cursor.line_number}: {trimmed!r}")
            cursor.advance()

        return obj

    def _match_field(self, text: str) -> Optional["re.Match[str]"]:
        return KEY_ARRAY_PATTERN.fullmatch(text) or KEY_VALUE_PATTERN.fullmatch(text)

    def _read_field(self, cursor: LineCursor, match: "re.Match[str]", indent: int,
                    line: int) -> Tuple[str, Any]:
        """
        Read the value of a field whose line has already been consumed.

        Args:
            cursor: Line cursor positioned after the field line
            match: Match of KEY_ARRAY_PATTERN or KEY_VALUE_PATTERN
            indent: Logical indentation level of the field
            line: Line number of the field line

        Returns:
            Tuple of (key, value)
        """
        key = StringUtils.unquote(match.group(1))

        if match.re is KEY_ARRAY_PATTERN:
            return key, self._parse_array(cursor, match.group(2), indent, line)

        value_part = match.group(2).strip(" ")
        if value_part:
            return key, self.parse_primitive(value_part)
        return key, self._parse_value(cursor, indent + 1)

    def _parse_array(self, cursor: LineCursor, header_text: str, base: int,
                     line: int) -> List[Any]:
        """
        Dispatch on an array header.

        Args:
            cursor: Line cursor positioned after the header line
            header_text: Header starting at '[' (key already removed)
            base: Logical indentation level of the header
            line: Line number of the header

        Returns:
            Decoded array
        """
        header = header_text.strip(" ")

        match = TABULAR_HEADER_PATTERN.fullmatch(header)
        if match:
            length = int(match.group(2))
            delimiter = self._determine_delimiter(match.group(3), line)
            return self._parse_tabular_array(cursor, match.group(4), length, delimiter, base, line)

        match = ARRAY_HEADER_PATTERN.fullmatch(header)
        if match:
            length = int(match.group(2))
            delimiter = self._determine_delimiter(match.group(3), line)
            rest = match.group(5).strip(" ")
            if rest:
                return self._parse_primitive_array(cursor, rest, length, delimiter, line)
            return self._parse_list_array(cursor, length, base, line)

        self.logger.warning(f"Unrecognized array header on line {line}: {header!r}")
        return []

    def _determine_delimiter(self, indicator: str, line: int) -> Delimiter:
        delimiter = _INDICATORS.get(indicator)
        if delimiter is None:
            self.error_handler.format_error(
                f"Unsupported delimiter indicator {indicator!r} in array header", line
            )
        return delimiter

    def _split_fields(self, fields_text: str, delimiter: Delimiter) -> List[str]:
        if delimiter is Delimiter.TAB and "\t" not in fields_text:
            # Space-separated field lists are accepted in tab headers
            parts = StringUtils.split_respecting_quotes(fields_text, " ")
            return [part for part in parts if part]
        return StringUtils.split_respecting_quotes(fields_text, delimiter.char)

    def _parse_tabular_array(self, cursor: LineCursor, fields_text: str, length: int,
                             delimiter: Delimiter, base: int, line: int) -> List[Dict[str, Any]]:
        fields = [StringUtils.unquote(name.strip(" "))
                  for name in self._split_fields(fields_text, delimiter)]
        rows: List[Dict[str, Any]] = []

        for index in range(length):
            cursor.skip_blank_lines()
            if not cursor.has_more():
                self._violation(cursor, f"Declared array length: {length}, "
                                        f"but only {index} rows found", ErrorType.LENGTH, line)
                break

            row_line = cursor.peek()
            if self.indent_level(row_line) < base:
                self._violation(cursor, "Incorrect indentation in tabular array",
                                ErrorType.INDENTATION, cursor.line_number)
                break

            row_number = cursor.line_number
            cursor.advance()
            values = StringUtils.split_respecting_quotes(row_line.strip(" "), delimiter.char)
            if len(values) != len(fields):
                self._violation(cursor, f"Row has {len(values)} values "
                                        f"but {len(fields)} fields declared",
                                ErrorType.FIELD_COUNT, row_number)

            rows.append({
                name: self.parse_primitive(value.strip(" "))
                for name, value in zip(fields, values)
            })

        return rows

    def _parse_primitive_array(self, cursor: LineCursor, rest: str, length: int,
                               delimiter: Delimiter, line: int) -> List[Any]:
        values = StringUtils.split_respecting_quotes(rest, delimiter.char)
        if len(values) != length:
            self._violation(cursor, f"Declared array length: {length}, "
                                    f"but {len(values)} values found", ErrorType.LENGTH, line)
        return [self.parse_primitive(value.strip(" ")) for value in values]

    def _parse_list_array(self, cursor: LineCursor, length: int, base: int,
                          line: int) -> List[Any]:
        items: List[Any] = []

        while len(items) < length:
            cursor.skip_blank_lines()
            if not cursor.has_more():
                break

            item_line = cursor.peek()
            indent = self.indent_level(item_line)
            if indent <= base:
                break

            trimmed = item_line.strip(" ")
            if trimmed == "-":
                cursor.advance()
                items.append({})
                continue
            if not trimmed.startswith(LIST_ITEM_PREFIX):
                break

            item_number = cursor.line_number
            cursor.advance()
            remainder = trimmed[len(LIST_ITEM_PREFIX):].strip(" ")
            items.append(self._parse_list_item(cursor, remainder, indent, item_number))

        if len(items) != length:
            self._violation(cursor, f"Declared array length: {length}, "
                                    f"but {len(items)} items found", ErrorType.LENGTH, line)
        return items

    def _parse_list_item(self, cursor: LineCursor, remainder: str, dash_indent: int,
                         line: int) -> Any:
        """
        Decode the content after a list item's dash.

        The item's fields (or its nested array) are read as if the content
        sat on its own line one level deeper than the dash.
        """
        if ARRAY_LINE_PATTERN.fullmatch(remainder):
            return self._parse_array(cursor, remainder, dash_indent + 1, line)

        match = self._match_field(remainder)
        if match is None:
            return self.parse_primitive(remainder)

        key, value = self._read_field(cursor, match, dash_indent + 1, line)
        item = {key: value}
        item.update(self._parse_object(cursor, dash_indent + 1, stop_at_list_item=True))
        return item

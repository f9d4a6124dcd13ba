"""TOON encoder: value tree to text."""

import logging
from typing import Any, Dict, List, Optional

from .options import ToonOptions
from .shape_detector import ShapeDetector
from .types import ArrayShape, EncoderInterface, ToonEncodeError, ValueKind
from .utils.strings import LIST_ITEM_PREFIX, StringUtils
from .utils.validation import ValidationUtils
from .writer import LineWriter


class ToonEncoder(EncoderInterface):
    """
    Encoder for converting value trees to TOON text.

    Objects become indented ``key: value`` lines. Arrays are written in one
    of three shapes chosen by the ShapeDetector:

    - tabular: ``items[2]{id,name}:`` followed by one delimited row per object
    - primitive: ``tags[3]: a,b,c`` on a single line
    - list: ``items[2]:`` followed by ``- `` prefixed items one level deeper
    """

    def __init__(self, options: Optional[ToonOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the encoder.

        Args:
            options: Encoding options (defaults to ToonOptions.DEFAULT)
            logger: Optional logger instance
        """
        self.options = options or ToonOptions.DEFAULT
        self.logger = logger or logging.getLogger(__name__)
        self.detector = ShapeDetector(self.logger)

    def encode(self, value: Any) -> str:
        """
        Encode a value tree into TOON text.

        Args:
            value: Value tree built from None, bool, int, float, str, dict and list

        Returns:
            TOON-formatted string

        Raises:
            ToonEncodeError: If the value violates the value model invariants
        """
        validation_result = ValidationUtils.validate_value_tree(value)
        if not validation_result.is_valid:
            messages = [error.message for error in validation_result.errors]
            raise ToonEncodeError(f"Invalid value tree: {'; '.join(messages)}",
                                  context=validation_result.errors)

        kind = self.detector.detect_value_kind(value)
        if kind == ValueKind.NULL:
            return "null"

        writer = LineWriter(self.options.indent)
        if kind == ValueKind.OBJECT:
            self._encode_object(value, writer, 0)
        elif kind == ValueKind.ARRAY:
            self._encode_array(None, list(value), writer, 0)
        else:
            writer.push(0, self.format_primitive(value))

        self.logger.debug(f"Encoded {kind.value} into {len(writer)} lines")
        return writer.to_string()

    def format_primitive(self, value: Any) -> str:
        """Render a primitive value, quoting strings when needed."""
        kind = self.detector.detect_value_kind(value)
        if kind == ValueKind.NULL:
            return "null"
        elif kind == ValueKind.BOOL:
            return "true" if value else "false"
        elif kind == ValueKind.INTEGER:
            return str(value)
        elif kind == ValueKind.REAL:
            if not self.detector.is_finite_number(value):
                return "null"
            return repr(value)
        elif kind == ValueKind.STRING:
            return StringUtils.quote(value, self.options.delimiter)
        raise ToonEncodeError(f"Cannot render {kind.value} as a primitive")

    def format_header(self, length: int, fields: Optional[List[str]] = None) -> str:
        """
        Build an array header such as ``[#3|]{a|b}``.

        The delimiter suffix lets the decoder recover the delimiter from
        the header alone.
        """
        marker = "#" if self.options.length_marker else ""
        header = f"[{marker}{length}{self.options.delimiter.header_suffix}]"
        if fields is not None:
            encoded_fields = [StringUtils.encode_key(field) for field in fields]
            header += "{" + self.options.delimiter.char.join(encoded_fields) + "}"
        return header

    def _join(self, values: List[Any]) -> str:
        return self.options.delimiter.char.join(self.format_primitive(v) for v in values)

    def _push_head(self, writer: LineWriter, depth: int, item_depth: Optional[int],
                   content: str) -> None:
        # Inside a list item the first line shares the dash line
        if item_depth is None:
            writer.push(depth, content)
        else:
            writer.push(item_depth, LIST_ITEM_PREFIX + content)

    def _encode_object(self, obj: Dict[str, Any], writer: LineWriter, depth: int) -> None:
        for key, value in obj.items():
            self._encode_field(key, value, writer, depth)

    def _encode_field(self, key: str, value: Any, writer: LineWriter, depth: int,
                      item_depth: Optional[int] = None) -> None:
        """
        Encode one object field.

        Args:
            key: Field name
            value: Field value
            writer: Line writer for output
            depth: Indentation depth of the field
            item_depth: Depth of the enclosing dash line when this is the
                first field of a list item
        """
        encoded_key = StringUtils.encode_key(key)
        kind = self.detector.detect_value_kind(value)

        if kind == ValueKind.OBJECT:
            self._push_head(writer, depth, item_depth, f"{encoded_key}:")
            self._encode_object(value, writer, depth + 1)
        elif kind == ValueKind.ARRAY:
            self._encode_array(encoded_key, list(value), writer, depth, item_depth)
        else:
            self._push_head(writer, depth, item_depth,
                            f"{encoded_key}: {self.format_primitive(value)}")

    def _encode_array(self, encoded_key: Optional[str], array: List[Any], writer: LineWriter,
                      depth: int, item_depth: Optional[int] = None) -> None:
        """
        Encode an array, inline after its key when it has one.

        Tabular rows are written at the header's depth and list items one
        level deeper.
        """
        prefix = encoded_key or ""
        shape = self.detector.detect_array_shape(array)

        if shape == ArrayShape.EMPTY:
            self._push_head(writer, depth, item_depth, f"{prefix}{self.format_header(0)}:")

        elif shape == ArrayShape.TABULAR:
            fields = self.detector.tabular_fields(array)
            header = self.format_header(len(array), fields)
            self._push_head(writer, depth, item_depth, f"{prefix}{header}:")
            for obj in array:
                writer.push(depth, self._join([obj[field] for field in fields]))

        elif shape == ArrayShape.PRIMITIVE:
            header = self.format_header(len(array))
            self._push_head(writer, depth, item_depth, f"{prefix}{header}: {self._join(array)}")

        else:
            self._push_head(writer, depth, item_depth, f"{prefix}{self.format_header(len(array))}:")
            for item in array:
                self._encode_list_item(item, writer, depth + 1)

    def _encode_list_item(self, item: Any, writer: LineWriter, depth: int) -> None:
        kind = self.detector.detect_value_kind(item)

        if kind == ValueKind.OBJECT:
            if not item:
                writer.push(depth, LIST_ITEM_PREFIX.rstrip())
                return
            fields = list(item.items())
            first_key, first_value = fields[0]
            self._encode_field(first_key, first_value, writer, depth + 1, item_depth=depth)
            for key, value in fields[1:]:
                self._encode_field(key, value, writer, depth + 1)
        elif kind == ValueKind.ARRAY:
            self._encode_array(None, list(item), writer, depth + 1, item_depth=depth)
        else:
            writer.push(depth, LIST_ITEM_PREFIX + self.format_primitive(item))

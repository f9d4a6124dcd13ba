"""String quoting, escaping and splitting rules of the TOON grammar."""

import re
from typing import List, Optional

from ..options import Delimiter

RESERVED_WORDS = frozenset({"true", "false", "null"})
LIST_ITEM_PREFIX = "- "

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*", re.ASCII)
NUMBER_PATTERN = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?", re.ASCII)
# Bare strings of these shapes would read back as headers or list items
STRUCTURAL_TOKEN_PATTERN = re.compile(
    r"\[\d+\]|\{.+\}|\[\d+\]:.*|\[\d+\{.+\}:.*|-.+", re.ASCII
)

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class StringUtils:
    """Utility class for the lexical rules shared by encoder and decoder."""

    @staticmethod
    def needs_quoting(value: Optional[str], delimiter: Delimiter = Delimiter.COMMA) -> bool:
        """
        Check whether a string must be quoted to read back unchanged.

        Args:
            value: String to check
            delimiter: Active delimiter

        Returns:
            True if the bare string would be misread by the decoder
        """
        if not value:
            return True

        if value[0] == " " or value[-1] == " ":
            return True

        if value.startswith(LIST_ITEM_PREFIX):
            return True

        if value in RESERVED_WORDS:
            return True

        for char in value:
            if char == delimiter.char:
                return True
            if char in ':"\\':
                return True
            if ord(char) < 32 and char != "\t":
                return True

        if NUMBER_PATTERN.fullmatch(value):
            return True

        return STRUCTURAL_TOKEN_PATTERN.fullmatch(value) is not None

    @staticmethod
    def escape(value: Optional[str]) -> str:
        """Escape quotes, backslashes and control characters."""
        if value is None:
            return "null"

        parts = []
        for char in value:
            if char in _ESCAPES:
                parts.append(_ESCAPES[char])
            elif ord(char) < 32:
                parts.append(f"\\u{ord(char):04x}")
            else:
                parts.append(char)
        return "".join(parts)

    @staticmethod
    def unescape(value: Optional[str]) -> Optional[str]:
        """
        Reverse escape().

        Unknown escapes and incomplete \\u sequences are kept literally.
        """
        if value is None:
            return None

        parts = []
        i = 0
        length = len(value)
        while i < length:
            char = value[i]
            if char == "\\" and i + 1 < length:
                nxt = value[i + 1]
                if nxt in _UNESCAPES:
                    parts.append(_UNESCAPES[nxt])
                    i += 2
                    continue
                if nxt == "u":
                    hex_digits = value[i + 2:i + 6]
                    if len(hex_digits) == 4 and all(c in _HEX_DIGITS for c in hex_digits):
                        parts.append(chr(int(hex_digits, 16)))
                        i += 6
                        continue
            parts.append(char)
            i += 1
        return "".join(parts)

    @staticmethod
    def quote(value: str, delimiter: Delimiter = Delimiter.COMMA) -> str:
        """Wrap value in escaped double quotes if it needs quoting."""
        if StringUtils.needs_quoting(value, delimiter):
            return f'"{StringUtils.escape(value)}"'
        return value

    @staticmethod
    def is_quoted(value: Optional[str]) -> bool:
        return value is not None and len(value) >= 2 and value[0] == '"' and value[-1] == '"'

    @staticmethod
    def unquote(value: Optional[str]) -> Optional[str]:
        """Strip surrounding double quotes and unescape the interior."""
        if StringUtils.is_quoted(value):
            return StringUtils.unescape(value[1:-1])
        return value

    @staticmethod
    def is_valid_identifier(key: Optional[str]) -> bool:
        return key is not None and IDENTIFIER_PATTERN.fullmatch(key) is not None

    @staticmethod
    def encode_key(key: str) -> str:
        """Render an object key, quoting it unless it is an identifier."""
        if StringUtils.is_valid_identifier(key):
            return key
        return f'"{StringUtils.escape(key)}"'

    @staticmethod
    def split_respecting_quotes(line: str, delimiter_char: str) -> List[str]:
        """
        Split a line on a delimiter, ignoring delimiters inside quotes.

        A backslash always copies the following character and never toggles
        the quote state. Quotes are kept in the returned fields.

        Returns:
            List of fields (at least one, even for an empty line)
        """
        fields = []
        current = []
        in_quotes = False
        escaped = False

        for char in line:
            if escaped:
                current.append(char)
                escaped = False
                continue

            if char == "\\":
                escaped = True
                current.append(char)
                continue

            if char == '"':
                in_quotes = not in_quotes
                current.append(char)
                continue

            if not in_quotes and char == delimiter_char:
                fields.append("".join(current))
                current = []
                continue

            current.append(char)

        fields.append("".join(current))
        return fields

    @staticmethod
    def indent(level: int, spaces_per_level: int) -> str:
        return " " * (level * spaces_per_level)

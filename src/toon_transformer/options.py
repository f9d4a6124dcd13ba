"""Encoding and decoding options."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Delimiter(Enum):
    """Value delimiters supported in arrays and tabular rows."""
    COMMA = ","
    TAB = "\t"
    PIPE = "|"

    @property
    def char(self) -> str:
        return self.value

    @property
    def header_suffix(self) -> str:
        """Indicator written inside an array header's brackets."""
        if self is Delimiter.TAB:
            return " "
        if self is Delimiter.PIPE:
            return "|"
        return ""

    @classmethod
    def from_char(cls, char: str) -> "Delimiter":
        for delimiter in cls:
            if delimiter.value == char:
                return delimiter
        raise ValueError(f"Unsupported delimiter: {char!r}")

    @classmethod
    def from_name(cls, name: str) -> "Delimiter":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported delimiter name: {name!r}") from None


@dataclass(frozen=True)
class ToonOptions:
    """
    Immutable configuration shared by the encoder and the decoder.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
        delimiter: Delimiter for array values and tabular rows (default: comma)
        length_marker: Prefix array lengths with '#' (default: False)
        strict: Treat length and field-count mismatches as errors (default: True)
    """
    indent: int = 2
    delimiter: Delimiter = Delimiter.COMMA
    length_marker: bool = False
    strict: bool = True

    DEFAULT: ClassVar["ToonOptions"]

    def __post_init__(self):
        if not isinstance(self.indent, int) or isinstance(self.indent, bool) or self.indent < 0:
            raise ValueError("Indentation must be an integer >= 0")
        if not isinstance(self.delimiter, Delimiter):
            raise ValueError(f"Delimiter must be a Delimiter member, got {self.delimiter!r}")

    def replace(self, **changes) -> "ToonOptions":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


ToonOptions.DEFAULT = ToonOptions()

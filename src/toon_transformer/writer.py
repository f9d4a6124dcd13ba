"""Line buffer used by the encoder."""

from typing import List

from .utils.strings import StringUtils


class LineWriter:
    """Collects output lines, indenting each by its depth."""

    def __init__(self, indent_size: int = 2):
        self.indent_size = indent_size
        self.lines: List[str] = []

    def push(self, depth: int, content: str) -> None:
        self.lines.append(StringUtils.indent(depth, self.indent_size) + content)

    def to_string(self) -> str:
        # No trailing newline after the last line
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

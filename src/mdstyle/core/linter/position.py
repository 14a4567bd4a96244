"""Byte offset <-> line/character mapping for one document snapshot.

Fix ranges are UTF-8 byte offsets while warnings and LSP positions count
characters, so every conversion between the two goes through ``LineIndex``.
"""
from bisect import bisect_right
from typing import NamedTuple, Optional


class Position(NamedTuple):
    """0-based line and character (Unicode scalar values, not bytes)."""
    line: int
    character: int


def is_char_boundary(data: bytes, offset: int) -> bool:
    """True if ``offset`` does not split a multi-byte UTF-8 sequence."""
    if offset < 0 or offset > len(data):
        return False
    if offset == 0 or offset == len(data):
        return True
    # UTF-8 continuation bytes look like 0b10xxxxxx
    return (data[offset] & 0xC0) != 0x80


class LineIndex:
    """
    Line start table for a document.

    Lines are split on ``\\n`` only; a ``\\r`` before it is part of the line
    content as far as columns are concerned.
    """

    def __init__(self, content: str):
        self.content = content
        self.data = content.encode("utf-8")
        self.lines = content.split("\n")

        self.char_starts: list[int] = []
        self.byte_starts: list[int] = []
        char_pos = 0
        byte_pos = 0
        for line in self.lines:
            self.char_starts.append(char_pos)
            self.byte_starts.append(byte_pos)
            char_pos += len(line) + 1
            byte_pos += len(line.encode("utf-8")) + 1

    @property
    def byte_length(self) -> int:
        return len(self.data)

    def byte_offset(self, line: int, character: int) -> int:
        """Byte offset of a 0-based (line, character) that is known to be valid."""
        text = self.lines[line]
        return self.byte_starts[line] + len(text[:character].encode("utf-8"))

    def char_to_byte(self, char_offset: int) -> int:
        """Byte offset of a character offset into ``content``."""
        line = bisect_right(self.char_starts, char_offset) - 1
        return self.byte_offset(line, char_offset - self.char_starts[line])

    def position_at(self, byte_offset: int) -> Optional[Position]:
        """Position of a single byte offset, or None if it is unmappable."""
        if not is_char_boundary(self.data, byte_offset):
            return None

        line = bisect_right(self.byte_starts, byte_offset) - 1
        prefix = self.data[self.byte_starts[line]:byte_offset]
        return Position(line, len(prefix.decode("utf-8")))

    def to_range(
        self, byte_start: int, byte_end: int
    ) -> Optional[tuple[Position, Position]]:
        """
        Convert a byte range to a pair of positions.

        Returns None when either end is past the text, negative, not on a
        character boundary, or when the range is reversed. ``byte_end`` equal
        to the document length maps to the position after the last character.
        """
        if byte_start > byte_end:
            return None

        start = self.position_at(byte_start)
        end = self.position_at(byte_end)
        if start is None or end is None:
            return None
        return start, end

    def to_byte_offset(self, position: Position) -> Optional[int]:
        """Byte offset of a position, or None if it lies outside the text."""
        line, character = position
        if line < 0 or line >= len(self.lines) or character < 0:
            return None
        if character > len(self.lines[line]):
            return None
        return self.byte_offset(line, character)

    def to_byte_range(self, start: Position, end: Position) -> Optional[range]:
        """Inverse of ``to_range``."""
        byte_start = self.to_byte_offset(start)
        byte_end = self.to_byte_offset(end)
        if byte_start is None or byte_end is None or byte_start > byte_end:
            return None
        return range(byte_start, byte_end)

    def line_col_to_byte_range(
        self, line: int, column: int, length: int
    ) -> Optional[range]:
        """Byte range of ``length`` characters at a 1-based line/column."""
        return self.to_byte_range(
            Position(line - 1, column - 1),
            Position(line - 1, column - 1 + length)
        )

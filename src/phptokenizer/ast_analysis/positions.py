"""
Offset to line/column resolution.
"""

from bisect import bisect_right
from typing import Any, List, Union

from ..exceptions import PositionError
from .models import Position


class PositionMap:
    """
    Resolves byte offsets of a source text to 1-based line and column.

    Columns count bytes from the start of the line. Lines are separated
    by ``\\n`` only.
    """

    def __init__(self, source: Union[bytes, str]):
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.length = len(source)
        self._line_starts: List[int] = [0]
        index = source.find(b"\n")
        while index != -1:
            self._line_starts.append(index + 1)
            index = source.find(b"\n", index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_for_offset(self, offset: int) -> Position:
        """
        Get the position of a byte offset.

        Args:
            offset: Byte offset, ``len(source)`` included

        Returns:
            Position with 1-based line and column

        Raises:
            PositionError: If the offset is outside the source
        """
        if offset < 0 or offset > self.length:
            raise PositionError(f"Offset {offset} outside source of length {self.length}")
        line_index = bisect_right(self._line_starts, offset) - 1
        return Position(line_index + 1, offset - self._line_starts[line_index] + 1)

    def start_position(self, anchor: Any) -> Position:
        """Position of the first character of a token, node or span."""
        return self.position_for_offset(anchor.start_byte)

    def end_position(self, node: Any) -> Position:
        """Position one past the last character of a node."""
        return self.position_for_offset(node.end_byte)

"""
Column resolution for one day-block.

The routine renders each weekday as a row of time-slot columns. The header
line repeats an anchor word ("Course") once per column; the position of each
anchor tells us roughly where that column sits on the line.

Boundary rule (midpoints between anchors):
    column 0      [0, mid(a0, a1))
    column i      [mid(a(i-1), ai), mid(ai, a(i+1)))
    last column   [mid(a(n-2), a(n-1)), SENTINEL_WIDTH)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from myroutine.model import TimeSlotColumn

logger = logging.getLogger(__name__)

# Right edge of the last column; wider than any rendered line.
SENTINEL_WIDTH = 1000


class BoundaryStrategy(Protocol):
    def build(self, times: Sequence[Tuple[str, str]], anchors: Sequence[int]) -> List[TimeSlotColumn]:
        ...


class MidpointBoundaries:
    """Split the line halfway between neighbouring anchors."""

    def __init__(self, sentinel_width: int = SENTINEL_WIDTH) -> None:
        self.sentinel_width = sentinel_width

    def build(self, times: Sequence[Tuple[str, str]], anchors: Sequence[int]) -> List[TimeSlotColumn]:
        count = min(len(times), len(anchors))
        if len(times) != len(anchors):
            logger.warning(
                "Found %d time ranges but %d column anchors; keeping the first %d columns.",
                len(times),
                len(anchors),
                count,
            )

        columns: List[TimeSlotColumn] = []
        for i in range(count):
            start, end = times[i]
            column_start = 0 if i == 0 else (anchors[i - 1] + anchors[i]) // 2
            column_end = (anchors[i] + anchors[i + 1]) // 2 if i + 1 < count else self.sentinel_width
            columns.append(TimeSlotColumn(start, end, column_start, column_end))
        return columns


class ColumnResolver:
    """
    Maps a character offset to the time-slot column that owns it.

    Offsets outside every column fall back to the first column so an entry is
    never dropped just because the layout heuristic missed it.
    """

    def __init__(self, columns: Sequence[TimeSlotColumn]) -> None:
        self.columns: Tuple[TimeSlotColumn, ...] = tuple(columns)

    @classmethod
    def from_header(
        cls,
        times: Sequence[Tuple[str, str]],
        anchors: Sequence[int],
        strategy: Optional[BoundaryStrategy] = None,
    ) -> "ColumnResolver":
        strategy = strategy or MidpointBoundaries()
        return cls(strategy.build(times, anchors))

    def __len__(self) -> int:
        return len(self.columns)

    def assign(self, offset: int) -> Optional[int]:
        if not self.columns:
            return None
        for index, column in enumerate(self.columns):
            if column.contains(offset):
                return index
        return 0

    def column_for(self, offset: int) -> Optional[TimeSlotColumn]:
        index = self.assign(offset)
        return None if index is None else self.columns[index]

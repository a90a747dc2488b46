"""
Text segmentation (layout text -> day-blocks).

Walks the routine text line by line. A line that is exactly a weekday name
opens a new day-block; the next few lines are searched for the time ranges
and the column anchors of that block. Everything before the first weekday is
ignored (title, department header, legend).

Inside a block, the lab marker line ("COM LAB") switches every following
entry of the block to lab classes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from myroutine.columns import BoundaryStrategy, ColumnResolver
from myroutine.model import WEEKDAYS

logger = logging.getLogger(__name__)

TIME_RANGE_RE = re.compile(r"(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})")

_DAY_BY_UPPER = {day.upper(): day for day in WEEKDAYS}


@dataclass(frozen=True)
class DayState:
    """Context handed to the extractor for every line of a day-block."""

    day: str
    resolver: ColumnResolver
    is_lab: bool = False


def match_weekday(line: str) -> Optional[str]:
    """Return the canonical weekday if the whole line is a weekday name."""
    return _DAY_BY_UPPER.get(line.strip().upper())


def find_time_ranges(line: str) -> List[Tuple[str, str]]:
    return [(m.group(1), m.group(2)) for m in TIME_RANGE_RE.finditer(line)]


def find_anchors(line: str, anchor_token: str) -> List[int]:
    return [m.start() for m in re.finditer(re.escape(anchor_token), line)]


class TextSegmenter:
    def __init__(
        self,
        anchor_token: str = "Course",
        lab_marker: str = "COM LAB",
        lookahead: int = 4,
        strategy: Optional[BoundaryStrategy] = None,
    ) -> None:
        self.anchor_token = anchor_token
        self.lab_marker = lab_marker
        self.lookahead = lookahead
        self.strategy = strategy

    def _build_resolver(self, lines: Sequence[str], header_index: int) -> Tuple[ColumnResolver, Set[int]]:
        """
        Look at the lines following a weekday header for the time-range line
        and the anchor line, and pair them into columns.
        """
        times: List[Tuple[str, str]] = []
        anchors: List[int] = []
        consumed: Set[int] = set()

        window_end = min(len(lines), header_index + 1 + self.lookahead)
        for index in range(header_index + 1, window_end):
            line = lines[index]
            if match_weekday(line):
                break
            if not times:
                times = find_time_ranges(line)
                if times:
                    consumed.add(index)
            if not anchors:
                anchors = find_anchors(line, self.anchor_token)
                if anchors:
                    consumed.add(index)
            if times and anchors:
                break

        if not times or not anchors:
            logger.debug(
                "Day header on line %d has no usable column header (times=%d, anchors=%d).",
                header_index + 1,
                len(times),
                len(anchors),
            )
        return ColumnResolver.from_header(times, anchors, self.strategy), consumed

    def segment(self, text: str) -> Iterator[Tuple[str, DayState]]:
        """
        Yield (line, state) for every line that belongs to a day-block.

        Header lines and the lab marker line are consumed here and not yielded.
        """
        lines = text.splitlines()
        state: Optional[DayState] = None
        header_lines: Set[int] = set()

        for index, line in enumerate(lines):
            day = match_weekday(line)
            if day:
                resolver, header_lines = self._build_resolver(lines, index)
                state = DayState(day=day, resolver=resolver, is_lab=False)
                logger.debug("Entering %s with %d time-slot columns.", day, len(resolver))
                continue

            if state is None or index in header_lines:
                continue

            if self.lab_marker and self.lab_marker in line:
                state = replace(state, is_lab=True)
                continue

            if not len(state.resolver):
                continue

            yield line, state

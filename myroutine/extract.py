"""
Entry extraction (one routine line -> candidate class entries).

A class cell in the layout text looks like:

    KT-222CSE112(71_I)MB

room, then course code with (batch_section), then teacher initials. Cells of
neighbouring time slots sit on the same line, so every course match is
resolved on its own: the room is searched right before it, the teacher right
after it, and the time slot comes from the match position.
"""

from __future__ import annotations

import re
from typing import List, Mapping, Optional, Tuple

from myroutine.courses import DEFAULT_COURSE_NAMES
from myroutine.model import ClassEntry
from myroutine.segment import DayState


COURSE_RE = re.compile(r"([A-Z]{3}\d{3})\((\d{2,3})_([A-Z]\d?)\)")

# Room code must end right where the course code starts.
ROOM_RE = re.compile(r"([A-Z]{1,2}-?\d{2,3}(?:\([A-Z]\)|[A-Z])?|G\d-\d{3})\s*$")

TEACHER_RE = re.compile(r"^\s*([A-Z]{1,4}(?:_\d+)?)")

ROOM_WINDOW = 50
TEACHER_WINDOW = 30
UNKNOWN = "TBA"


def find_room(line: str, position: int) -> str:
    window = line[max(0, position - ROOM_WINDOW) : position]
    match = ROOM_RE.search(window)
    return match.group(1) if match else UNKNOWN


def find_teacher(line: str, position: int) -> Tuple[str, bool]:
    """
    Return (initials, glued) for the token after a course match.

    `glued` is True when the initials run straight into a digit or dash,
    which usually means they are the start of a room or course code.
    """
    window = line[position : position + TEACHER_WINDOW]
    match = TEACHER_RE.match(window)
    if not match:
        return UNKNOWN, False
    rest = window[match.end() :]
    glued = bool(rest) and (rest[0].isdigit() or rest[0] == "-")
    return match.group(1), glued


class EntryExtractor:
    def __init__(self, course_names: Optional[Mapping[str, str]] = None) -> None:
        self.course_names = course_names if course_names is not None else DEFAULT_COURSE_NAMES

    def extract(self, line: str, state: DayState) -> List[ClassEntry]:
        candidates: List[ClassEntry] = []

        # department prefixes of every course on the line (CSE, MAT, ...)
        prefixes = {m.group(1)[:3] for m in COURSE_RE.finditer(line)}

        for match in COURSE_RE.finditer(line):
            column = state.resolver.column_for(match.start())
            if column is None:
                continue

            course_code, batch, section = match.group(1), match.group(2), match.group(3)
            teacher, glued = find_teacher(line, match.end())

            candidates.append(
                ClassEntry(
                    day=state.day,
                    time_start=column.start,
                    time_end=column.end,
                    course_code=course_code,
                    course_name=self.course_names.get(course_code, course_code),
                    batch=batch,
                    section=section,
                    room=find_room(line, match.start()),
                    is_lab=state.is_lab,
                    teacher_initials=teacher,
                    low_confidence=glued or teacher in prefixes,
                )
            )

        return candidates

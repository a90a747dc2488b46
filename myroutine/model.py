"""
Central data model definitions used across the project.

This module defines the canonical structure of the objects that flow through
the routine pipeline so that:
- the extractor, cache and CLI share the same field names
- persisted cache rows can be turned back into the exact same objects
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


# Academic week starts on Saturday.
WEEKDAYS: Tuple[str, ...] = (
    "Saturday",
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
)

EntryKey = Tuple[str, str, str, str, str, str]


@dataclass(frozen=True)
class ClassEntry:
    """
    One class meeting extracted from the routine.

    Entries are immutable once extracted. Two entries are duplicates only if
    their composite key (see `key`) is equal.
    """

    day: str
    time_start: str
    time_end: str
    course_code: str
    course_name: str
    batch: str
    section: str
    room: str
    is_lab: bool
    teacher_initials: str
    low_confidence: bool = False

    @property
    def batch_section(self) -> str:
        return f"{self.batch}_{self.section}"

    @property
    def key(self) -> EntryKey:
        return (
            self.day,
            self.time_start,
            self.course_code,
            self.batch_section,
            self.teacher_initials,
            self.room,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "time_start": self.time_start,
            "time_end": self.time_end,
            "course_code": self.course_code,
            "course_name": self.course_name,
            "batch": self.batch,
            "section": self.section,
            "batch_section": self.batch_section,
            "room": self.room,
            "is_lab": self.is_lab,
            "teacher_initials": self.teacher_initials,
            "low_confidence": self.low_confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassEntry":
        course_code = str(data["course_code"])
        return cls(
            day=str(data["day"]),
            time_start=str(data["time_start"]),
            time_end=str(data["time_end"]),
            course_code=course_code,
            course_name=str(data.get("course_name") or course_code),
            batch=str(data["batch"]),
            section=str(data["section"]),
            room=str(data.get("room") or "TBA"),
            is_lab=bool(data.get("is_lab", False)),
            teacher_initials=str(data.get("teacher_initials") or "TBA"),
            low_confidence=bool(data.get("low_confidence", False)),
        )


@dataclass(frozen=True)
class TimeSlotColumn:
    """
    Horizontal extent of one time slot inside a day-block.

    Only lives while the block is being extracted.
    """

    start: str
    end: str
    column_start: int
    column_end: int

    def contains(self, offset: int) -> bool:
        return self.column_start <= offset < self.column_end


@dataclass(frozen=True)
class ScheduleStats:
    total_classes: int
    busiest_day: str
    busiest_day_count: int
    lightest_day: str
    lightest_day_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_classes": self.total_classes,
            "busiest_day": self.busiest_day,
            "busiest_day_count": self.busiest_day_count,
            "lightest_day": self.lightest_day,
            "lightest_day_count": self.lightest_day_count,
        }


@dataclass(frozen=True)
class ParseResult:
    entries: List[ClassEntry]
    stats: ScheduleStats


@dataclass
class CacheRecord:
    """
    One cached parse of a department's routine.

    Represents one row of the "records" table in the cache file; its entries
    are stored as separate rows that carry the department redundantly.
    """

    record_id: str
    department: str
    source_url: str
    version: str
    parsed_at: datetime
    expires_at: datetime
    entries: List[ClassEntry] = field(default_factory=list)

    @property
    def total_classes(self) -> int:
        return len(self.entries)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True)
class CacheStatus:
    is_cached: bool
    parsed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    total_classes: Optional[int] = None

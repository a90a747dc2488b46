"""
Query helpers used by the CLI (and any other presentation layer).

All helpers are pure: they take a list of entries and return new lists,
never touching the cache.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from myroutine.model import WEEKDAYS, ClassEntry


def filter_by_batch_section(entries: Iterable[ClassEntry], batch_section: str) -> List[ClassEntry]:
    wanted = batch_section.strip().upper()
    return [e for e in entries if e.batch_section.upper() == wanted]


def filter_by_teacher(entries: Iterable[ClassEntry], initials: str) -> List[ClassEntry]:
    wanted = initials.strip().upper()
    return [e for e in entries if e.teacher_initials.upper() == wanted]


def filter_by_room(entries: Iterable[ClassEntry], room: str) -> List[ClassEntry]:
    # substring match, so "KT-222" also finds "KT-222(A)"
    wanted = room.strip().upper()
    return [e for e in entries if wanted in e.room.upper()]


def group_by_day(entries: Iterable[ClassEntry]) -> Dict[str, List[ClassEntry]]:
    """
    Group entries per weekday. Every weekday is present, in academic-week
    order, even when it has no classes.
    """
    grouped: Dict[str, List[ClassEntry]] = {day: [] for day in WEEKDAYS}
    for entry in entries:
        grouped[entry.day].append(entry)
    return grouped


def batch_sections(entries: Iterable[ClassEntry]) -> List[str]:
    return sorted({e.batch_section for e in entries})


def faculty_initials(entries: Iterable[ClassEntry]) -> List[str]:
    """Unique teacher initials in order of first appearance."""
    seen: Dict[str, None] = {}
    for e in entries:
        seen.setdefault(e.teacher_initials, None)
    return list(seen)

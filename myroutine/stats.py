"""
Schedule statistics.

Busiest day: highest count, ties go to the earlier day of the academic week.
Lightest day: lowest count among days that have classes at all, so a day off
is never reported as the lightest day.
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

from myroutine.model import WEEKDAYS, ClassEntry, ScheduleStats

EMPTY_DAY = "N/A"


def count_by_day(entries: Iterable[ClassEntry]) -> Dict[str, int]:
    counts = {day: 0 for day in WEEKDAYS}
    for entry in entries:
        if entry.day in counts:
            counts[entry.day] += 1
    return counts


def aggregate(entries: Sequence[ClassEntry]) -> ScheduleStats:
    counts = count_by_day(entries)

    busiest_day, busiest_count = EMPTY_DAY, 0
    lightest_day, lightest_count = EMPTY_DAY, 0

    for day in WEEKDAYS:
        count = counts[day]
        if count == 0:
            continue
        if count > busiest_count:
            busiest_day, busiest_count = day, count
        if lightest_count == 0 or count < lightest_count:
            lightest_day, lightest_count = day, count

    return ScheduleStats(
        total_classes=len(entries),
        busiest_day=busiest_day,
        busiest_day_count=busiest_count,
        lightest_day=lightest_day,
        lightest_day_count=lightest_count,
    )

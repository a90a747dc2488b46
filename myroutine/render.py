"""
Terminal rendering of a weekly routine (rich tables).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from myroutine.model import WEEKDAYS, ClassEntry, ScheduleStats


def entry_line(e: ClassEntry) -> str:
    lab = " (lab)" if e.is_lab else ""
    flag = " ?" if e.low_confidence else ""
    return f"{e.time_start}-{e.time_end} {e.course_code} {e.batch_section} {e.room} {e.teacher_initials}{lab}{flag}"


def week_table(schedule: Dict[str, List[ClassEntry]], title: Optional[str] = None) -> Table:
    """
    One column per weekday that has classes, one row per class slot.
    """
    days = [d for d in WEEKDAYS if schedule.get(d)]
    table = Table(title=title, box=box.SIMPLE)
    for day in days:
        table.add_column(day)

    ordered = {d: sorted(schedule[d], key=lambda x: x.time_start) for d in days}
    max_len = max((len(ordered[d]) for d in days), default=0)
    for r in range(max_len):
        row = []
        for day in days:
            row.append(entry_line(ordered[day][r]) if r < len(ordered[day]) else "")
        table.add_row(*row)
    return table


def print_week(
    schedule: Dict[str, List[ClassEntry]],
    stats: ScheduleStats,
    title: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    if stats.total_classes == 0:
        console.print("No classes found.")
        return

    console.print(week_table(schedule, title=title))
    console.print(
        f"Total: {stats.total_classes} | "
        f"busiest: {stats.busiest_day} ({stats.busiest_day_count}) | "
        f"lightest: {stats.lightest_day} ({stats.lightest_day_count})"
    )

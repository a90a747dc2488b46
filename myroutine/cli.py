"""
CLI (Command Line Interface).

Quick terminal commands on top of the routine cache, e.g.:

    myroutine student 71_I
    myroutine teacher MB
    myroutine room KT-222
    myroutine sections
    myroutine parse
    myroutine status
    myroutine invalidate
    myroutine latest-url

Global options pick the department, routine URL and version. With
--text-file an already rendered layout text is parsed instead of
downloading the PDF.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from myroutine.config import Settings, routine_url_for
from myroutine.errors import CacheUnavailable, NoEntriesFound, RoutineError
from myroutine.model import ClassEntry
from myroutine.noticeboard import latest_routine_url
from myroutine.parse import file_text_source, parse_document
from myroutine.query import (
    batch_sections,
    faculty_initials,
    filter_by_batch_section,
    filter_by_room,
    filter_by_teacher,
    group_by_day,
)
from myroutine.render import print_week
from myroutine.stats import aggregate
from myroutine.storage import CacheStore


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if args.cache_file is None:
        return settings
    return replace(settings, cache_path=Path(args.cache_file))


def _source_url(args: argparse.Namespace) -> str:
    return (args.url or "").strip() or routine_url_for(args.department)


def _build_store(args: argparse.Namespace, settings: Settings) -> CacheStore:
    text_source = file_text_source(Path(args.text_file)) if args.text_file else None

    def parse(url: str) -> List[ClassEntry]:
        return parse_document(url, settings, text_source=text_source).entries

    return CacheStore(settings=settings, parse_fn=parse)


def _load_entries(args: argparse.Namespace, settings: Settings) -> List[ClassEntry]:
    store = _build_store(args, settings)
    return store.get_or_parse(args.department, _source_url(args), args.version)


def _show(entries: List[ClassEntry], title: str) -> int:
    if not entries:
        print(f"No classes found for {title}.")
        return 0
    print_week(group_by_day(entries), aggregate(entries), title=title)
    return 0


def _cmd_student(args: argparse.Namespace, settings: Settings) -> int:
    key = (args.batch_section or "").strip().upper()
    if not key:
        print("Please provide a batch_section (e.g. 71_I).")
        return 1
    entries = filter_by_batch_section(_load_entries(args, settings), key)
    code = _show(entries, f"Batch {key}")
    if entries:
        print("Teachers: " + ", ".join(faculty_initials(entries)))
    return code


def _cmd_teacher(args: argparse.Namespace, settings: Settings) -> int:
    initials = (args.initials or "").strip().upper()
    if not initials:
        print("Please provide teacher initials.")
        return 1
    entries = filter_by_teacher(_load_entries(args, settings), initials)
    code = _show(entries, f"Teacher {initials}")
    if entries:
        print("Sections: " + ", ".join(batch_sections(entries)))
    return code


def _cmd_room(args: argparse.Namespace, settings: Settings) -> int:
    room = (args.room or "").strip().upper()
    if not room:
        print("Please provide a room (e.g. KT-222).")
        return 1
    return _show(filter_by_room(_load_entries(args, settings), room), f"Room {room}")


def _cmd_sections(args: argparse.Namespace, settings: Settings) -> int:
    sections = batch_sections(_load_entries(args, settings))
    for s in sections:
        print(s)
    print(f"Total: {len(sections)}")
    return 0


def _cmd_parse(args: argparse.Namespace, settings: Settings) -> int:
    """
    Parse the routine without touching the cache.
    """
    text_source = file_text_source(Path(args.text_file)) if args.text_file else None
    result = parse_document(_source_url(args), settings, text_source=text_source)
    s = result.stats
    print(f"Classes: {s.total_classes}")
    print(f"Busiest day: {s.busiest_day} ({s.busiest_day_count})")
    print(f"Lightest day: {s.lightest_day} ({s.lightest_day_count})")
    print(f"Sections: {len(batch_sections(result.entries))}")
    print(f"Teachers: {len(faculty_initials(result.entries))}")
    uncertain = sum(1 for e in result.entries if e.low_confidence)
    if uncertain:
        print(f"Low-confidence entries: {uncertain}")
    return 0


def _cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    status = CacheStore(settings=settings).status(args.department)
    if not status.is_cached:
        print(f"{args.department}: not cached")
        return 0
    print(f"{args.department}: cached")
    print(f"  parsed at : {status.parsed_at.isoformat() if status.parsed_at else '-'}")
    print(f"  expires at: {status.expires_at.isoformat() if status.expires_at else '-'}")
    print(f"  classes   : {status.total_classes}")
    return 0


def _cmd_invalidate(args: argparse.Namespace, settings: Settings) -> int:
    removed = CacheStore(settings=settings).invalidate(args.department)
    print(f"Cache cleared for {args.department} ({removed} record(s) removed)")
    return 0


def _cmd_latest_url(args: argparse.Namespace, settings: Settings) -> int:
    url = latest_routine_url(args.department, timeout=settings.fetch_timeout)
    if url:
        print(url)
    else:
        print(f"No routine notice found, using default: {routine_url_for(args.department)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="myroutine", description="Class routine parser CLI")
    parser.add_argument("--department", "-d", type=str, default="cse", help="Department code (default: cse)")
    parser.add_argument("--url", type=str, default=None, help="Routine PDF URL (default: known URL of the department)")
    parser.add_argument("--version", type=str, default="1.0", help="Routine version used as cache key")
    parser.add_argument("--cache-file", type=str, default=None, help="Path of the JSON cache file")
    parser.add_argument("--text-file", type=str, default=None, help="Parse this layout text instead of the PDF")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (DEBUG-level) logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p_student = sub.add_parser("student", help="Weekly routine of a batch_section")
    p_student.add_argument("batch_section", type=str, help="Batch and section (e.g. 71_I)")

    p_teacher = sub.add_parser("teacher", help="Weekly routine of a teacher")
    p_teacher.add_argument("initials", type=str, help="Teacher initials (e.g. MB)")

    p_room = sub.add_parser("room", help="Weekly routine of a room")
    p_room.add_argument("room", type=str, help="Room code (e.g. KT-222)")

    sub.add_parser("sections", help="List all batch_sections in the routine")
    sub.add_parser("parse", help="Parse the routine (no cache) and print statistics")
    sub.add_parser("status", help="Show cache status of the department")
    sub.add_parser("invalidate", help="Clear the cached routine of the department")
    sub.add_parser("latest-url", help="Find the newest routine PDF on the noticeboard")

    return parser


COMMANDS = {
    "student": _cmd_student,
    "teacher": _cmd_teacher,
    "room": _cmd_room,
    "sections": _cmd_sections,
    "parse": _cmd_parse,
    "status": _cmd_status,
    "invalidate": _cmd_invalidate,
    "latest-url": _cmd_latest_url,
}


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    args.department = args.department.strip().lower()
    settings = _settings(args)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args, settings))
    except NoEntriesFound:
        print("The routine was read, but it contains no classes.")
        raise SystemExit(0)
    except CacheUnavailable as exc:
        print(f"Cache error: {exc}")
        raise SystemExit(1)
    except RoutineError as exc:
        print(f"Error: {exc}")
        raise SystemExit(1)

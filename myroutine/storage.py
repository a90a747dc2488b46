"""
Persistent cache of parsed routines.

This module manages the file:

    data/cache/routine_cache.json

Layout:
    {"records": [...], "entries": [...]}

One record row per (department, version). Entry rows point to their record
through record_id and carry the department as well, so a department's
classes can be filtered without going through the records.

Design rationale:
- parsing a routine PDF is slow, the routine changes a few times a semester
- a record is only written after a successful parse, never half-way
- a record is replaced as a whole, never amended
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from myroutine.config import Settings
from myroutine.errors import CacheUnavailable
from myroutine.model import CacheRecord, CacheStatus, ClassEntry
from myroutine.parse import parse_document

logger = logging.getLogger(__name__)

ParseFn = Callable[[str], List[ClassEntry]]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _default_parse(settings: Settings) -> ParseFn:
    def parse(url: str) -> List[ClassEntry]:
        return parse_document(url, settings).entries

    return parse


class CacheStore:
    """
    Memoizing front door of the parsing pipeline.

    Records expire `ttl` after they were parsed. At most `max_records` are
    kept; when there are more, the oldest-inserted ones are evicted.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        ttl: Optional[timedelta] = None,
        max_records: Optional[int] = None,
        parse_fn: Optional[ParseFn] = None,
        clock: Clock = _utcnow,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or Settings()
        self.path = Path(path) if path is not None else settings.cache_path
        self.ttl = ttl if ttl is not None else settings.cache_ttl
        self.max_records = max_records if max_records is not None else settings.max_records
        self.parse_fn = parse_fn or _default_parse(settings)
        self.clock = clock

        self._file_lock = threading.Lock()
        self._key_locks: Dict[Tuple[str, str], List[Any]] = {}
        self._key_locks_guard = threading.Lock()

    # -----------------------------------------------------------------------
    # File access
    # -----------------------------------------------------------------------

    def _load(self) -> List[CacheRecord]:
        # First run: no cache file yet
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CacheUnavailable(self.path, exc) from exc
        except (json.JSONDecodeError, UnicodeDecodeError):
            # a broken file is overwritten by the next successful parse
            logger.warning("Cache file %s is corrupted, ignoring its contents", self.path)
            return []

        entry_rows = data.get("entries", []) if isinstance(data, dict) else None
        record_rows = data.get("records", []) if isinstance(data, dict) else None
        if not isinstance(entry_rows, list) or not isinstance(record_rows, list):
            logger.warning("Cache file %s has an unexpected layout, ignoring its contents", self.path)
            return []

        entries_by_record: Dict[str, List[ClassEntry]] = {}
        for row in entry_rows:
            try:
                entries_by_record.setdefault(str(row["record_id"]), []).append(ClassEntry.from_dict(row))
            except (KeyError, TypeError):
                continue

        records: List[CacheRecord] = []
        for row in record_rows:
            try:
                record_id = str(row["record_id"])
                records.append(
                    CacheRecord(
                        record_id=record_id,
                        department=str(row["department"]),
                        source_url=str(row["source_url"]),
                        version=str(row["version"]),
                        parsed_at=datetime.fromisoformat(row["parsed_at"]),
                        expires_at=datetime.fromisoformat(row["expires_at"]),
                        entries=entries_by_record.get(record_id, []),
                    )
                )
            except (KeyError, TypeError, ValueError):
                continue
        return records

    def _save(self, records: List[CacheRecord]) -> None:
        payload: Dict[str, Any] = {"records": [], "entries": []}
        for r in records:
            payload["records"].append(
                {
                    "record_id": r.record_id,
                    "department": r.department,
                    "source_url": r.source_url,
                    "version": r.version,
                    "parsed_at": r.parsed_at.isoformat(),
                    "expires_at": r.expires_at.isoformat(),
                    "total_classes": r.total_classes,
                }
            )
            for e in r.entries:
                row = e.to_dict()
                row["record_id"] = r.record_id
                row["department"] = r.department
                payload["entries"].append(row)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".routine_cache.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CacheUnavailable(self.path, exc) from exc

    @contextmanager
    def _single_flight(self, key: Tuple[str, str]) -> Iterator[None]:
        """Hold the lock of one (department, version) while it is looked up or parsed."""
        with self._key_locks_guard:
            slot = self._key_locks.setdefault(key, [threading.Lock(), 0])
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._key_locks_guard:
                slot[1] -= 1
                # last waiter gone
                if slot[1] == 0:
                    del self._key_locks[key]

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def _find_valid(self, department: str, version: str) -> Optional[CacheRecord]:
        now = self.clock()
        with self._file_lock:
            records = self._load()
        for r in records:
            if r.department == department and r.version == version and not r.is_expired(now):
                return r
        return None

    def _store(self, record: CacheRecord) -> None:
        with self._file_lock:
            records = self._load()

            # a new parse supersedes every older record of the department
            records = [r for r in records if r.department != record.department]
            records.append(record)

            if len(records) > self.max_records:
                evicted = records[: len(records) - self.max_records]
                logger.info("Evicting %d cached routine(s)", len(evicted))
                records = records[len(evicted) :]

            self._save(records)

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def get_or_parse(self, department: str, source_url: str, version: str = "1.0") -> List[ClassEntry]:
        """
        Return cached entries for (department, version), parsing the routine
        when there is no valid record.

        Errors from the parse propagate and leave the cache untouched. If the
        cache file itself is unavailable, the fresh parse is returned anyway.
        """
        department = department.strip().lower()
        key = (department, version)

        # single-flight: concurrent callers for the same key wait for one parse
        with self._single_flight(key):
            try:
                cached = self._find_valid(department, version)
            except CacheUnavailable as exc:
                logger.warning("%s; parsing without cache", exc)
                return self.parse_fn(source_url)

            if cached is not None:
                logger.info("Using cached routine for %s v%s", department, version)
                return list(cached.entries)

            logger.info("Parsing routine for %s v%s from %s", department, version, source_url)
            entries = self.parse_fn(source_url)

            parsed_at = self.clock()
            record = CacheRecord(
                record_id=uuid.uuid4().hex,
                department=department,
                source_url=source_url,
                version=version,
                parsed_at=parsed_at,
                expires_at=parsed_at + self.ttl,
                entries=list(entries),
            )
            try:
                self._store(record)
            except CacheUnavailable as exc:
                logger.warning("%s; returning uncached result", exc)
            else:
                logger.info("Cached %d classes for %s v%s", record.total_classes, department, version)

            return list(record.entries)

    def invalidate(self, department: str) -> int:
        """Delete every record of a department, whatever its version."""
        department = department.strip().lower()
        with self._file_lock:
            records = self._load()
            kept = [r for r in records if r.department != department]
            removed = len(records) - len(kept)
            if removed:
                self._save(kept)

        logger.info("Cleared %d cached routine(s) for %s", removed, department)
        return removed

    def status(self, department: str) -> CacheStatus:
        department = department.strip().lower()
        now = self.clock()
        with self._file_lock:
            records = self._load()

        valid = [r for r in records if r.department == department and not r.is_expired(now)]
        if not valid:
            return CacheStatus(is_cached=False)

        latest = max(valid, key=lambda r: r.parsed_at)
        return CacheStatus(
            is_cached=True,
            parsed_at=latest.parsed_at,
            expires_at=latest.expires_at,
            total_classes=latest.total_classes,
        )


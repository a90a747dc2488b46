"""
Duplicate removal for one parse pass.

The same class cell is often rendered twice (repeated rows across page
breaks). Only exact duplicates on the composite key are dropped: one
section taught by two teachers, or in two rooms, stays as two entries.
"""

from __future__ import annotations

from typing import Iterable, List, Set

from myroutine.model import ClassEntry, EntryKey


class Deduplicator:
    def __init__(self) -> None:
        self._seen: Set[EntryKey] = set()
        self.entries: List[ClassEntry] = []

    def add(self, entry: ClassEntry) -> bool:
        """Keep the entry if its key is new. Returns whether it was kept."""
        if entry.key in self._seen:
            return False
        self._seen.add(entry.key)
        self.entries.append(entry)
        return True

    def extend(self, entries: Iterable[ClassEntry]) -> None:
        for entry in entries:
            self.add(entry)

    def __len__(self) -> int:
        return len(self.entries)

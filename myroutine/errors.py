"""
Error kinds raised by the routine pipeline and the cache.

- SourceFetchFailure and ExtractionFailure abort a parse
- NoEntriesFound means the parse worked but the routine had no classes
- CacheUnavailable means the cache file could not be read or written
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class RoutineError(Exception):
    """Base class for all errors raised by myroutine."""


class SourceFetchFailure(RoutineError):
    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Could not fetch routine document from {url}: {cause}")
        self.url = url
        self.cause = cause


class ExtractionFailure(RoutineError):
    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message if cause is None else f"{message}: {cause}")
        self.cause = cause


class NoEntriesFound(RoutineError):
    """
    The document was fetched and rendered, but no class entries were found.

    Not a broken pipeline: callers usually report an empty schedule.
    """

    def __init__(self, url: str) -> None:
        super().__init__(f"No class entries found in {url}")
        self.url = url


class CacheUnavailable(RoutineError):
    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Cache file {path} is unavailable: {cause}")
        self.path = path
        self.cause = cause

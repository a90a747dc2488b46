"""
Runtime configuration.

Defaults work out of the box. Settings.from_env() lets a deployment override
the cache location and limits through environment variables or a .env file:

    MYROUTINE_CACHE_FILE       path of the JSON cache file
    MYROUTINE_CACHE_TTL_DAYS   days a parsed routine stays valid (default 30)
    MYROUTINE_MAX_RECORDS      cached routines kept before eviction (default 32)
    MYROUTINE_FETCH_TIMEOUT    seconds to wait for the routine PDF (default 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from myroutine.courses import DEFAULT_COURSE_NAMES


PACKAGE_DIR = Path(__file__).resolve().parent

NOTICEBOARD_URL = "https://daffodilvarsity.edu.bd/noticeboard"

DEFAULT_ROUTINE_URLS: Mapping[str, str] = MappingProxyType(
    {
        "cse": "https://daffodilvarsity.edu.bd/noticeFile/cse-class-routine-spring-2026-v1-8d732090c2.pdf",
        "eee": "https://daffodilvarsity.edu.bd/noticeFile/eee-class-routine-spring-2026-v1.pdf",
        "swe": "https://daffodilvarsity.edu.bd/noticeFile/swe-class-routine-spring-2026-v1.pdf",
    }
)


def default_cache_path() -> Path:
    """
    Return the default location of the cache file inside the package.

    A function instead of a constant so tests can point elsewhere.
    """
    return PACKAGE_DIR / "data" / "cache" / "routine_cache.json"


@dataclass(frozen=True)
class Settings:
    cache_path: Path = field(default_factory=default_cache_path)
    cache_ttl_days: int = 30
    max_records: int = 32
    fetch_timeout: float = 30.0

    # Layout of the routine text
    anchor_token: str = "Course"
    lab_marker: str = "COM LAB"
    header_lookahead: int = 4

    course_names: Mapping[str, str] = field(default_factory=lambda: DEFAULT_COURSE_NAMES)

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(days=self.cache_ttl_days)

    @classmethod
    def from_env(cls) -> "Settings":
        # .env of the working directory, not of the installed package
        load_dotenv(find_dotenv(usecwd=True))

        defaults = cls()
        cache_file = os.getenv("MYROUTINE_CACHE_FILE")
        return cls(
            cache_path=Path(cache_file) if cache_file else defaults.cache_path,
            cache_ttl_days=int(os.getenv("MYROUTINE_CACHE_TTL_DAYS", defaults.cache_ttl_days)),
            max_records=int(os.getenv("MYROUTINE_MAX_RECORDS", defaults.max_records)),
            fetch_timeout=float(os.getenv("MYROUTINE_FETCH_TIMEOUT", defaults.fetch_timeout)),
        )


def routine_url_for(department: str) -> str:
    """Return the known routine URL of a department, falling back to CSE."""
    return DEFAULT_ROUTINE_URLS.get(department.strip().lower(), DEFAULT_ROUTINE_URLS["cse"])

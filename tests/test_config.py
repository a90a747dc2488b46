"""
Tests for runtime configuration.

Settings come from the environment first, then from a .env file in the
current working directory, then from the built-in defaults.
"""

import os
import tempfile
import unittest
from datetime import timedelta
from pathlib import Path
from unittest import mock

from myroutine.config import Settings, default_cache_path, routine_url_for
from myroutine.courses import DEFAULT_COURSE_NAMES
from myroutine.storage import CacheStore


class TestSettingsFromEnv(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self._old_cwd = os.getcwd()
        os.chdir(self.dir)

        env = mock.patch.dict(os.environ, {}, clear=True)
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self) -> None:
        os.chdir(self._old_cwd)
        self._tmp.cleanup()

    def test_defaults_without_environment(self) -> None:
        settings = Settings.from_env()
        self.assertEqual(settings.cache_path, default_cache_path())
        self.assertEqual(settings.cache_ttl_days, 30)
        self.assertEqual(settings.cache_ttl, timedelta(days=30))
        self.assertEqual(settings.max_records, 32)
        self.assertEqual(settings.fetch_timeout, 30.0)
        self.assertEqual(settings.course_names, DEFAULT_COURSE_NAMES)

    def test_environment_overrides(self) -> None:
        cache_file = self.dir / "elsewhere" / "cache.json"
        os.environ.update(
            {
                "MYROUTINE_CACHE_FILE": str(cache_file),
                "MYROUTINE_CACHE_TTL_DAYS": "7",
                "MYROUTINE_MAX_RECORDS": "3",
                "MYROUTINE_FETCH_TIMEOUT": "12.5",
            }
        )
        settings = Settings.from_env()
        self.assertEqual(settings.cache_path, cache_file)
        self.assertEqual(settings.cache_ttl_days, 7)
        self.assertEqual(settings.max_records, 3)
        self.assertEqual(settings.fetch_timeout, 12.5)

        store = CacheStore(settings=settings)
        self.assertEqual(store.path, cache_file)
        self.assertEqual(store.ttl, timedelta(days=7))
        self.assertEqual(store.max_records, 3)

    def test_env_file_in_working_directory_is_loaded(self) -> None:
        (self.dir / ".env").write_text("MYROUTINE_CACHE_TTL_DAYS=5\nMYROUTINE_MAX_RECORDS=4\n", encoding="utf-8")
        settings = Settings.from_env()
        self.assertEqual(settings.cache_ttl_days, 5)
        self.assertEqual(settings.max_records, 4)
        self.assertEqual(CacheStore(settings=settings).ttl, timedelta(days=5))

    def test_environment_wins_over_env_file(self) -> None:
        (self.dir / ".env").write_text("MYROUTINE_CACHE_TTL_DAYS=5\n", encoding="utf-8")
        os.environ["MYROUTINE_CACHE_TTL_DAYS"] = "9"
        self.assertEqual(Settings.from_env().cache_ttl_days, 9)


class TestSettingsDefaults(unittest.TestCase):
    def test_instances_share_the_read_only_course_table(self) -> None:
        a, b = Settings(), Settings()
        self.assertIs(a.course_names, DEFAULT_COURSE_NAMES)
        self.assertIs(b.course_names, DEFAULT_COURSE_NAMES)

    def test_course_names_can_be_injected(self) -> None:
        settings = Settings(course_names={"CSE112": "Computer Fundamentals"})
        self.assertEqual(settings.course_names["CSE112"], "Computer Fundamentals")

    def test_routine_url_falls_back_to_cse(self) -> None:
        self.assertEqual(routine_url_for(" EEE "), routine_url_for("eee"))
        self.assertEqual(routine_url_for("unknown"), routine_url_for("cse"))


if __name__ == "__main__":
    unittest.main()

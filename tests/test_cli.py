"""
Tests for CLI entry points.

These tests focus on:
- basic CLI argument validation
- the full student / status / invalidate flow against a temporary cache
  file and an already rendered routine text (no network)
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from myroutine.cli import main

ROUTINE = "\n".join(
    [
        "SATURDAY",
        "08:30-10:00  10:00-11:30",
        "      Course".ljust(28) + "Course",
        "KT-222CSE112(71_I)MB  KT-223MAT101(71_I)AST",
        "KT-224CSE113(71_J)NRK",
    ]
)


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        d = Path(self._tmp.name)
        self.text_file = d / "routine.txt"
        self.text_file.write_text(ROUTINE, encoding="utf-8")
        self.cache_file = d / "cache.json"
        self.base = ["--cache-file", str(self.cache_file), "--text-file", str(self.text_file)]

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple:
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main([*self.base, *argv])
        return ctx.exception.code, out.getvalue()

    def test_student_requires_batch_section(self) -> None:
        code, out = self._run("student", "")
        self.assertNotEqual(code, 0)

    def test_student_schedule(self) -> None:
        code, out = self._run("student", "71_i")
        self.assertEqual(code, 0)
        self.assertIn("CSE112", out)
        self.assertIn("MAT101", out)
        self.assertNotIn("CSE113", out)

    def test_sections(self) -> None:
        code, out = self._run("sections")
        self.assertEqual(code, 0)
        self.assertIn("71_I", out)
        self.assertIn("71_J", out)
        self.assertIn("Total: 2", out)

    def test_status_and_invalidate(self) -> None:
        self._run("sections")
        _, out = self._run("status")
        self.assertIn("cse: cached", out)

        code, _ = self._run("invalidate")
        self.assertEqual(code, 0)
        _, out = self._run("status")
        self.assertIn("cse: not cached", out)

    def test_parse_prints_stats(self) -> None:
        code, out = self._run("parse")
        self.assertEqual(code, 0)
        self.assertIn("Classes: 3", out)
        self.assertIn("Busiest day: Saturday (3)", out)

    def test_empty_routine_is_not_an_error(self) -> None:
        self.text_file.write_text("SATURDAY\nno classes today\n", encoding="utf-8")
        code, out = self._run("sections")
        self.assertEqual(code, 0)
        self.assertIn("no classes", out)
        self.assertFalse(self.cache_file.exists())


if __name__ == "__main__":
    unittest.main()

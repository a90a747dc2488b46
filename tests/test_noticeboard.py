import unittest
from unittest import mock

import requests

from myroutine.noticeboard import find_pdf_link, find_routine_notice, latest_routine_url

NOTICEBOARD_HTML = """
<html><body>
  <a href="/notice/101">Final Exam Routine Spring 2026 (CSE)</a>
  <a href="/notice/102">Class Routine Spring 2026 EEE Version 1</a>
  <a href="/notice/103">Class Routine Spring 2026 CSE V2</a>
  <a href="/notice/104">Class Routine Spring 2026 CSE V1</a>
</body></html>
"""

NOTICE_HTML = """
<html><body>
  <a href="/about">About</a>
  <a href="/noticeFile/cse-class-routine-spring-2026-v2.PDF">Download</a>
</body></html>
"""


class TestNoticeboardParsing(unittest.TestCase):
    def test_first_matching_notice_wins(self) -> None:
        url = find_routine_notice(NOTICEBOARD_HTML, "cse", base_url="https://daffodilvarsity.edu.bd/noticeboard")
        self.assertEqual(url, "https://daffodilvarsity.edu.bd/notice/103")

    def test_exam_routines_are_skipped(self) -> None:
        html = '<a href="/notice/1">Exam Routine CSE</a>'
        self.assertIsNone(find_routine_notice(html, "cse"))

    def test_unknown_department(self) -> None:
        self.assertIsNone(find_routine_notice(NOTICEBOARD_HTML, "law"))

    def test_pdf_link(self) -> None:
        url = find_pdf_link(NOTICE_HTML, "https://daffodilvarsity.edu.bd/notice/103")
        self.assertEqual(url, "https://daffodilvarsity.edu.bd/noticeFile/cse-class-routine-spring-2026-v2.PDF")


class TestLatestRoutineUrl(unittest.TestCase):
    @mock.patch("myroutine.noticeboard.requests.get")
    def test_follows_notice_to_pdf(self, get) -> None:
        board = mock.Mock(text=NOTICEBOARD_HTML)
        notice = mock.Mock(text=NOTICE_HTML)
        get.side_effect = [board, notice]
        url = latest_routine_url("cse")
        self.assertTrue(url.endswith("cse-class-routine-spring-2026-v2.PDF"))
        self.assertEqual(get.call_count, 2)

    @mock.patch("myroutine.noticeboard.requests.get", side_effect=requests.ConnectionError("down"))
    def test_network_error_gives_none(self, get) -> None:
        self.assertIsNone(latest_routine_url("cse"))


if __name__ == "__main__":
    unittest.main()

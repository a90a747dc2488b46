"""
Tests for document retrieval and text rendering.

No network and no real PDFs: requests.get and pdfplumber.open are mocked.
"""

import unittest
from unittest import mock

import requests

from myroutine import fetch
from myroutine.errors import ExtractionFailure, SourceFetchFailure


def _fake_pdf(*page_texts):
    pages = []
    for text in page_texts:
        page = mock.Mock()
        page.extract_text.return_value = text
        pages.append(page)
    pdf = mock.MagicMock()
    pdf.__enter__.return_value.pages = pages
    return pdf


class TestDownload(unittest.TestCase):
    @mock.patch("myroutine.fetch.requests.get")
    def test_returns_bytes(self, get) -> None:
        get.return_value.content = b"%PDF-1.4"
        get.return_value.raise_for_status.return_value = None
        self.assertEqual(fetch.download_document("https://example.org/r.pdf", timeout=5), b"%PDF-1.4")
        self.assertEqual(get.call_args.kwargs["timeout"], 5)

    @mock.patch("myroutine.fetch.requests.get", side_effect=requests.Timeout("slow"))
    def test_timeout_is_fetch_failure(self, get) -> None:
        with self.assertRaises(SourceFetchFailure) as ctx:
            fetch.download_document("https://example.org/r.pdf")
        self.assertIsInstance(ctx.exception.cause, requests.Timeout)
        self.assertIsInstance(ctx.exception.__cause__, requests.Timeout)

    @mock.patch("myroutine.fetch.requests.get")
    def test_http_error_is_fetch_failure(self, get) -> None:
        get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
        with self.assertRaises(SourceFetchFailure):
            fetch.download_document("https://example.org/missing.pdf")


class TestExtractLayoutText(unittest.TestCase):
    @mock.patch("myroutine.fetch.pdfplumber.open")
    def test_pages_are_joined(self, pdf_open) -> None:
        pdf_open.return_value = _fake_pdf("SATURDAY", "SUNDAY")
        self.assertEqual(fetch.extract_layout_text(b"%PDF"), "SATURDAY\nSUNDAY")

    @mock.patch("myroutine.fetch.pdfplumber.open")
    def test_empty_text_is_extraction_failure(self, pdf_open) -> None:
        pdf_open.return_value = _fake_pdf("", None)
        with self.assertRaises(ExtractionFailure):
            fetch.extract_layout_text(b"%PDF")

    @mock.patch("myroutine.fetch.pdfplumber.open", side_effect=ValueError("broken xref"))
    def test_renderer_error_is_extraction_failure(self, pdf_open) -> None:
        with self.assertRaises(ExtractionFailure) as ctx:
            fetch.extract_layout_text(b"not a pdf")
        self.assertIsInstance(ctx.exception.cause, ValueError)


if __name__ == "__main__":
    unittest.main()

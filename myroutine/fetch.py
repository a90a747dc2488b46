"""
Document retrieval (URL -> PDF bytes -> layout text).

The parser only ever sees text. This module downloads the routine PDF and
renders it with pdfplumber in layout mode, which keeps the horizontal
position of every word so time-slot columns can be told apart.

Network problems raise SourceFetchFailure, rendering problems raise
ExtractionFailure. Nothing here retries.
"""

from __future__ import annotations

import io
import logging
import time

import pdfplumber
import requests

from myroutine.errors import ExtractionFailure, SourceFetchFailure

logger = logging.getLogger(__name__)

USER_AGENT = "myroutine (class routine parser)"


def download_document(url: str, timeout: float = 30.0) -> bytes:
    started = time.monotonic()
    try:
        resp = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise SourceFetchFailure(url, exc) from exc

    logger.info("Downloaded %s (%d bytes, %.2fs)", url, len(resp.content), time.monotonic() - started)
    return resp.content


def extract_layout_text(data: bytes) -> str:
    """
    Render every page of a PDF to layout-preserving text.

    Pages are joined with newlines; an empty rendering counts as a failure.
    """
    pages = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text(layout=True) or "")
    except Exception as exc:
        raise ExtractionFailure("Could not render routine PDF to text", exc) from exc

    text = "\n".join(pages)
    if not text.strip():
        raise ExtractionFailure("Routine PDF rendered to empty text")

    logger.info("Rendered %d pages to %d characters of text", len(pages), len(text))
    return text


def fetch_layout_text(url: str, timeout: float = 30.0) -> str:
    return extract_layout_text(download_document(url, timeout=timeout))

"""
Noticeboard lookup (department -> URL of the newest routine PDF).

The university publishes each new routine version as a notice. The notice
list is scanned top to bottom (newest first) for a class-routine notice of
the department; the PDF link is then taken from the notice detail page.
"""

from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from myroutine.config import NOTICEBOARD_URL

logger = logging.getLogger(__name__)

DEPARTMENT_KEYWORDS: Dict[str, List[str]] = {
    "cse": ["CSE", "Computer Science"],
    "eee": ["EEE", "Electrical"],
    "swe": ["SWE", "Software Engineering"],
    "ags": ["AGS", "Agricultural"],
    "ce": ["CE", "Civil Engineering"],
    "mct": ["MCT", "Multimedia"],
    "ice": ["ICE", "Information and Communication"],
    "architecture": ["Architecture"],
}


def _is_routine_notice(text: str) -> bool:
    lower = text.lower()
    if "advising" in lower or "exam" in lower:
        return False
    return "routine" in lower or "class schedule" in lower


def find_routine_notice(html: str, department: str, base_url: str = NOTICEBOARD_URL) -> Optional[str]:
    """Return the absolute URL of the first routine notice of a department."""
    keywords = DEPARTMENT_KEYWORDS.get(department.strip().lower(), [])
    soup = BeautifulSoup(html, "html.parser")

    for a in soup.select("a[href]"):
        text = a.get_text(" ", strip=True)
        href = a.get("href")
        if not text or not href:
            continue
        if _is_routine_notice(text) and any(k in text for k in keywords):
            return urljoin(base_url, href)
    return None


def find_pdf_link(html: str, base_url: str) -> Optional[str]:
    soup = BeautifulSoup(html, "html.parser")
    for a in soup.select("a[href]"):
        href = a.get("href", "")
        if href.lower().endswith(".pdf"):
            return urljoin(base_url, href)
    return None


def latest_routine_url(department: str, timeout: float = 10.0) -> Optional[str]:
    """
    Look up the newest routine PDF of a department.

    Returns None when the noticeboard has no matching notice or cannot be
    reached; callers fall back to a known URL.
    """
    try:
        resp = requests.get(NOTICEBOARD_URL, timeout=timeout)
        resp.raise_for_status()
        notice_url = find_routine_notice(resp.text, department)
        if notice_url is None:
            logger.info("No routine notice found for department %s", department)
            return None

        resp = requests.get(notice_url, timeout=timeout)
        resp.raise_for_status()
        return find_pdf_link(resp.text, notice_url)
    except requests.RequestException as exc:
        logger.warning("Noticeboard lookup for %s failed: %s", department, exc)
        return None


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="myroutine.noticeboard", description="Find the newest routine PDF")
    p.add_argument("--department", "-d", type=str, default="cse", help="Department code (e.g. cse, eee, swe)")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    url = latest_routine_url(args.department)
    print(url if url else f"No routine found for {args.department}")


if __name__ == "__main__":
    main()

"""
Parsing (layout text -> class entries + stats).

Pipeline:
    TextSegmenter  -> (line, day state) for every line inside a day-block
    EntryExtractor -> candidate entries for that line
    Deduplicator   -> unique entries in document order
    aggregate      -> per-day statistics

Important rules (DO NOT CHANGE):
- 1 course match = 1 candidate entry
- a candidate is never dropped because its column could not be resolved
- lines that match nothing are skipped silently
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from myroutine.config import Settings
from myroutine.dedupe import Deduplicator
from myroutine.errors import NoEntriesFound
from myroutine.extract import EntryExtractor
from myroutine.fetch import fetch_layout_text
from myroutine.model import ClassEntry, ParseResult
from myroutine.segment import TextSegmenter
from myroutine.stats import aggregate

logger = logging.getLogger(__name__)

TextSource = Callable[[str], str]


def extract_entries(
    text: str,
    segmenter: Optional[TextSegmenter] = None,
    extractor: Optional[EntryExtractor] = None,
) -> List[ClassEntry]:
    segmenter = segmenter or TextSegmenter()
    extractor = extractor or EntryExtractor()

    unique = Deduplicator()
    candidates = 0
    for line, state in segmenter.segment(text):
        found = extractor.extract(line, state)
        candidates += len(found)
        unique.extend(found)

    logger.debug("Kept %d of %d candidate entries", len(unique), candidates)
    return unique.entries


def parse_text(text: str, settings: Optional[Settings] = None) -> ParseResult:
    """
    Parse routine layout text. Never raises for content problems: a text
    without any recognisable class simply gives an empty result.
    """
    settings = settings or Settings()
    segmenter = TextSegmenter(
        anchor_token=settings.anchor_token,
        lab_marker=settings.lab_marker,
        lookahead=settings.header_lookahead,
    )
    extractor = EntryExtractor(settings.course_names)

    entries = extract_entries(text, segmenter, extractor)
    return ParseResult(entries=entries, stats=aggregate(entries))


def parse_document(
    url: str,
    settings: Optional[Settings] = None,
    text_source: Optional[TextSource] = None,
) -> ParseResult:
    """
    Fetch, render and parse one routine document.

    Raises SourceFetchFailure / ExtractionFailure when the document cannot be
    turned into text, and NoEntriesFound when the text has no classes.
    """
    settings = settings or Settings()
    if text_source is None:
        text = fetch_layout_text(url, timeout=settings.fetch_timeout)
    else:
        text = text_source(url)

    result = parse_text(text, settings)
    if not result.entries:
        raise NoEntriesFound(url)

    logger.info(
        "Parsed %d classes from %s (busiest: %s)",
        result.stats.total_classes,
        url,
        result.stats.busiest_day,
    )
    return result


def file_text_source(path: Path) -> TextSource:
    """Text source that ignores the URL and reads an already rendered file."""

    def read(_url: str) -> str:
        return path.read_text(encoding="utf-8")

    return read


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="myroutine.parse", description="Parse routine layout text into JSON")
    p.add_argument("text_file", type=Path, help="Layout text file (e.g. output of pdftotext -layout)")
    p.add_argument("--out", type=Path, default=None, help="Write JSON here instead of stdout")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    result = parse_text(args.text_file.read_text(encoding="utf-8"))
    payload = {
        "entries": [e.to_dict() for e in result.entries],
        "stats": result.stats.to_dict(),
    }
    text = json.dumps(payload, ensure_ascii=False, indent=2)

    if args.out is None:
        print(text)
        return

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(text, encoding="utf-8")
    print(f"Parsing finished. {len(result.entries)} entries written to {args.out.resolve()}")


if __name__ == "__main__":
    main()

"""
Extraction runner orchestrator.

Runs the extractor on one page and narrates the outcome through an
activity feed: which strategy was used, which fields were found, and
whether anything usable came out at all.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from productlens.core.activity import ActivityEntry, ActivityFeed
from productlens.core.extract import ProductExtractor, ProductRecord
from productlens.core.logging import get_contextual_logger

NOTHING_FOUND_MESSAGE = "Could not extract any information from this page"
PREVIEW_LENGTH = 80


@dataclass
class ExtractionReport:
    """Outcome of a single runner invocation."""

    url: str
    strategy: str
    record: ProductRecord
    entries: list[ActivityEntry] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if at least one field was extracted."""
        return not self.record.is_empty

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "strategy": self.strategy,
            "record": self.record.to_dict(),
            "activity": [entry.to_dict() for entry in self.entries],
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


def _preview(value: str, limit: int = PREVIEW_LENGTH) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3].rstrip() + "..."


def _describe_source(url: str) -> str:
    try:
        host = urlparse(url).netloc if url else ""
    except ValueError:
        # Malformed URLs (e.g. an unclosed IPv6 bracket) are shown as given
        host = ""
    return host or url or "page"


class ExtractionRunner:
    """Coordinates extraction and activity reporting for single pages."""

    def __init__(
        self,
        extractor: ProductExtractor | None = None,
        feed: ActivityFeed | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            extractor: Product extractor (default: built-in strategies)
            feed: Activity feed to append to (default: a new feed)
        """
        self.extractor = extractor or ProductExtractor()
        self.feed = feed if feed is not None else ActivityFeed()

    def run(self, html: str, url: str) -> ExtractionReport:
        """Extract one page and report progress to the feed.

        Args:
            html: HTML content
            url: Source URL

        Returns:
            ExtractionReport with the record and the entries added by this run
        """
        start = time.perf_counter()
        first_entry = len(self.feed)

        log = get_contextual_logger("runner", url=url)
        log.debug("Starting extraction (%d bytes of HTML)", len(html or ""))

        strategy = self.extractor.select_strategy(url)
        log = log.with_context(strategy=strategy.name)
        log.debug("Selected %s strategy", strategy.name)

        self.feed.info(f"Analyzing {_describe_source(url)} with {strategy.label} strategy")

        record = self.extractor.extract(html, url)

        for name in record.found_fields:
            self.feed.success(f"Found {name}: {_preview(getattr(record, name))}")
        for name in record.missing_fields:
            self.feed.info(f"No {name} found")

        if record.is_empty:
            self.feed.warn(NOTHING_FOUND_MESSAGE)

        elapsed_ms = (time.perf_counter() - start) * 1000
        log.debug("Extraction finished in %.1f ms", elapsed_ms)

        return ExtractionReport(
            url=url,
            strategy=strategy.name,
            record=record,
            entries=self.feed.entries[first_entry:],
            elapsed_ms=elapsed_ms,
        )

"""
Product extraction dispatcher.

Parses the page, picks a strategy from the source URL, and resolves the
strategy's field chains into a ProductRecord.
"""

from __future__ import annotations

import logging

from .base import ProductRecord
from .document import parse_document
from .strategies import Strategy, StrategyRegistry, default_registry

logger = logging.getLogger(__name__)


class ProductExtractor:
    """Extract product records using a strategy registry.

    Stateless apart from the registry it is built with, so one instance
    can serve concurrent callers.
    """

    def __init__(self, registry: StrategyRegistry | None = None) -> None:
        """Initialize the extractor.

        Args:
            registry: Strategy table (default: built-in strategies)
        """
        self.registry = registry or default_registry()

    @property
    def name(self) -> str:
        return "product"

    def select_strategy(self, url: str | None) -> Strategy:
        """Select the strategy for a source URL (case-insensitive)."""
        return self.registry.select((url or "").lower())

    def extract(self, html: str | None, url: str | None = None) -> ProductRecord:
        """Extract a product record from HTML content.

        Never raises for any input; fields that cannot be located are None.

        Args:
            html: HTML content
            url: Source URL, used only to choose a strategy

        Returns:
            ProductRecord, possibly with every field None
        """
        strategy = self.select_strategy(url)
        doc = parse_document(html)
        record = strategy.apply(doc)

        logger.debug(
            "Extracted %d/3 fields with '%s' strategy",
            len(record.found_fields),
            strategy.name,
            extra={"url": url, "strategy": strategy.name},
        )
        return record


def extract_product_info(html: str | None, url: str | None = None) -> ProductRecord:
    """Extract a product record using the built-in strategies.

    Args:
        html: HTML content
        url: Source URL

    Returns:
        ProductRecord
    """
    return ProductExtractor().extract(html, url)

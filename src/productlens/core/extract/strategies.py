"""
Site extraction strategies and the strategy registry.

Each strategy bundles a URL match rule with one candidate chain per
product field. Selector vocabularies mirror third-party markup and will
drift as those sites change; a stale selector simply falls through to
the next candidate in its chain.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .base import PRODUCT_FIELDS, ProductRecord
from .document import ProductDocument
from .locators import CandidateChain, css, meta, resolve_chain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Strategy:
    """Named extraction recipe for one family of sites.

    A strategy with no URL fragments matches every URL and acts as the
    catch-all.
    """

    name: str
    title: CandidateChain
    price: CandidateChain
    description: CandidateChain
    url_fragments: tuple[str, ...] = ()
    display_name: str | None = None

    @property
    def is_catch_all(self) -> bool:
        return not self.url_fragments

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def matches(self, url: str) -> bool:
        """Check if a URL belongs to this strategy's site family.

        Matching is a case-insensitive substring test.
        """
        if self.is_catch_all:
            return True
        lowered = (url or "").lower()
        return any(fragment.lower() in lowered for fragment in self.url_fragments)

    def apply(self, doc: ProductDocument) -> ProductRecord:
        """Resolve all three field chains against a document."""
        values = {}
        for field_name in PRODUCT_FIELDS:
            value = resolve_chain(doc, getattr(self, field_name))
            logger.debug(
                "%s %s",
                field_name,
                "resolved" if value is not None else "unresolved",
                extra={"strategy": self.name, "field": field_name},
            )
            values[field_name] = value
        return ProductRecord(**values)


# =============================================================================
# Built-in Strategies
# =============================================================================


AMAZON = Strategy(
    name="amazon",
    display_name="Amazon",
    url_fragments=("amazon.",),
    title=(
        css("#productTitle"),
        meta("og:title"),
        css("title"),
    ),
    price=(
        css("#priceblock_ourprice"),
        css("#priceblock_dealprice"),
        css("#priceblock_saleprice"),
        css(".a-price .a-offscreen"),
        css("[data-a-color='price'] .a-offscreen"),
    ),
    description=(
        css("#productDescription"),
        css("#feature-bullets"),
        css("[data-feature-name='product-description']"),
        meta("og:description"),
    ),
)

FLIPKART = Strategy(
    name="flipkart",
    display_name="Flipkart",
    url_fragments=("flipkart.com",),
    title=(
        css("span.B_NuCI"),
        meta("og:title"),
        css("title"),
    ),
    price=(
        css("div._30jeq3"),
        css("div._1vC4OE"),
        css("[class*='price']"),
    ),
    description=(
        css("div._1AN87F"),
        css("div._1mXcCf"),
        css("div._2o-xpa"),
        meta("og:description"),
    ),
)

GENERIC = Strategy(
    name="generic",
    display_name="Generic",
    title=(
        meta("og:title"),
        css("title"),
    ),
    price=(
        css("[itemprop='price']"),
        css("[data-price]"),
        css(".price"),
        css(".product-price"),
        meta("product:price:amount"),
    ),
    description=(
        css("[itemprop='description']"),
        css(".product-description"),
        css("#description"),
        meta("og:description"),
    ),
)


# =============================================================================
# Registry
# =============================================================================


class StrategyRegistry:
    """Ordered strategy table with a catch-all terminator.

    Site strategies are tested in registration order; the first whose URL
    rule matches wins. The catch-all is always tested last, so every URL
    resolves to exactly one strategy.
    """

    def __init__(
        self,
        strategies: Iterable[Strategy] = (),
        fallback: Strategy = GENERIC,
    ) -> None:
        """Initialize the registry.

        Args:
            strategies: Site strategies in priority order
            fallback: Catch-all strategy used when nothing else matches
        """
        if not fallback.is_catch_all:
            raise ValueError(f"Fallback strategy '{fallback.name}' must not have URL fragments")

        self.fallback = fallback
        self._site_strategies: list[Strategy] = []
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: Strategy) -> None:
        """Add a site strategy after those already registered.

        Raises:
            ValueError: If the strategy has no URL fragments or its name is taken
        """
        if strategy.is_catch_all:
            raise ValueError(f"Strategy '{strategy.name}' needs at least one URL fragment")
        if strategy.name in self.names():
            raise ValueError(f"Strategy '{strategy.name}' is already registered")
        self._site_strategies.append(strategy)

    @property
    def strategies(self) -> list[Strategy]:
        """All strategies in evaluation order, catch-all last."""
        return [*self._site_strategies, self.fallback]

    def names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    def get(self, name: str) -> Strategy | None:
        for strategy in self.strategies:
            if strategy.name == name:
                return strategy
        return None

    def select(self, url: str) -> Strategy:
        """Pick the strategy for a source URL."""
        for strategy in self._site_strategies:
            if strategy.matches(url):
                return strategy
        return self.fallback

    def __len__(self) -> int:
        return len(self._site_strategies) + 1

    def __iter__(self):
        return iter(self.strategies)


def default_registry() -> StrategyRegistry:
    """Build a registry with the built-in site strategies."""
    return StrategyRegistry([AMAZON, FLIPKART], fallback=GENERIC)

"""
Field locators and fallback resolution.

A locator is a single extraction attempt against a document: either the
text of the first element matching a CSS selector, or the content of a
meta tag. A candidate chain is an ordered tuple of locators for one field.
Chains are resolved lazily, so later locators are never evaluated once an
earlier one yields a value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from productlens.core.normalize import normalize_whitespace

from .document import ProductDocument


class LocatorKind(str, Enum):
    """Where a locator looks for its value."""

    TEXT = "text"  # Element text content via CSS selector
    META = "meta"  # <meta name|property=...> content attribute


def text_at(doc: ProductDocument, selector: str) -> str | None:
    """Get normalized text of the first element matching a selector.

    Args:
        doc: Parsed document
        selector: CSS selector

    Returns:
        Normalized text, or None if nothing matched or the text is blank
    """
    return normalize_whitespace(doc.select_text(selector)) or None


def meta_at(doc: ProductDocument, key: str) -> str | None:
    """Get the normalized content of a meta tag by name, then property.

    Args:
        doc: Parsed document
        key: Meta name or property, e.g. "og:title"

    Returns:
        Normalized content, or None if the tag is missing or empty
    """
    return normalize_whitespace(doc.meta_content(key)) or None


@dataclass(frozen=True)
class Locator:
    """A single selector-based or meta-based lookup."""

    kind: LocatorKind
    value: str  # CSS selector or meta key

    def resolve(self, doc: ProductDocument) -> str | None:
        """Run this lookup against a document."""
        if self.kind == LocatorKind.META:
            return meta_at(doc, self.value)
        return text_at(doc, self.value)

    def __str__(self) -> str:
        if self.kind == LocatorKind.META:
            return f"meta[{self.value}]"
        return self.value


CandidateChain = tuple[Locator, ...]


def css(selector: str) -> Locator:
    """Shorthand for a text locator."""
    return Locator(LocatorKind.TEXT, selector)


def meta(key: str) -> Locator:
    """Shorthand for a meta locator."""
    return Locator(LocatorKind.META, key)


def first_present(candidates: Iterable[str | None]) -> str | None:
    """Return the first present value, or None if all are absent.

    Earlier candidates always win. The iterable is consumed only up to
    the first hit, so a generator of lookups is evaluated lazily.
    """
    for value in candidates:
        if value:
            return value
    return None


def resolve_chain(doc: ProductDocument, chain: Iterable[Locator]) -> str | None:
    """Resolve a candidate chain against a document.

    Args:
        doc: Parsed document
        chain: Locators in priority order

    Returns:
        Value of the first locator that succeeds, or None
    """
    return first_present(locator.resolve(doc) for locator in chain)

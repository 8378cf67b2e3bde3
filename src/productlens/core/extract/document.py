"""
Parsed document abstraction.

Extraction logic only needs two queries against a page: the text of the
first element matching a CSS selector, and the content of the first meta
tag with a given name or property. ProductDocument captures that
capability so locators do not depend on a concrete DOM library.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from cssselect import SelectorError
from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


class ProductDocument(ABC):
    """Read-only query interface over a parsed HTML page."""

    @abstractmethod
    def select_text(self, selector: str) -> str | None:
        """Get the raw text content of the first element matching a selector.

        Args:
            selector: CSS selector

        Returns:
            Raw (un-normalized) text, or None if nothing matched
        """

    @abstractmethod
    def meta_content(self, key: str) -> str | None:
        """Get the raw content of the first meta tag keyed by name, then property.

        Args:
            key: Value of the meta tag's name or property attribute

        Returns:
            Raw content attribute, or None if no such meta tag exists
        """


class LxmlDocument(ProductDocument):
    """ProductDocument backed by an lxml HTML tree."""

    def __init__(self, root: HtmlElement) -> None:
        self.root = root

    def select_text(self, selector: str) -> str | None:
        try:
            elements = self.root.cssselect(selector)
        except (SelectorError, etree.XPathError) as e:
            logger.debug("Invalid selector %r: %s", selector, e)
            return None

        if not elements:
            return None
        return elements[0].text_content()

    def meta_content(self, key: str) -> str | None:
        # XPath variables keep quotes in the key from breaking the query
        for attribute in ("name", "property"):
            elements = self.root.xpath(f"//meta[@{attribute}=$key]", key=key)
            if elements:
                return elements[0].get("content")
        return None


def parse_document(html: str | bytes | None) -> LxmlDocument:
    """Parse HTML into a queryable document.

    Parsing is tolerant: empty input, malformed markup, and documents
    carrying an encoding declaration all produce a document, possibly
    an empty one.

    Args:
        html: HTML content

    Returns:
        LxmlDocument wrapping the parsed tree
    """
    if isinstance(html, str):
        data = html.encode("utf-8", errors="replace")
    else:
        data = html or b""

    if not data.strip():
        return LxmlDocument(lxml_html.document_fromstring(EMPTY_DOCUMENT))

    # Parser instances must not be shared across threads. huge_tree lifts
    # libxml2 limits on nesting depth and text node size
    parser = lxml_html.HTMLParser(encoding="utf-8", huge_tree=True)
    try:
        root = lxml_html.document_fromstring(data, parser=parser)
    except (etree.LxmlError, ValueError) as e:
        logger.debug("Failed to parse HTML, using empty document: %s", e)
        root = lxml_html.document_fromstring(EMPTY_DOCUMENT)

    return LxmlDocument(root)

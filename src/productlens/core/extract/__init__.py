"""Product extraction: document parsing, locators, strategies, dispatch."""

from .base import PRODUCT_FIELDS, ProductRecord
from .dispatcher import ProductExtractor, extract_product_info
from .document import LxmlDocument, ProductDocument, parse_document
from .locators import (
    CandidateChain,
    Locator,
    LocatorKind,
    css,
    first_present,
    meta,
    meta_at,
    resolve_chain,
    text_at,
)
from .strategies import AMAZON, FLIPKART, GENERIC, Strategy, StrategyRegistry, default_registry

__all__ = [
    # Records
    "PRODUCT_FIELDS",
    "ProductRecord",
    # Documents
    "ProductDocument",
    "LxmlDocument",
    "parse_document",
    # Locators
    "CandidateChain",
    "Locator",
    "LocatorKind",
    "css",
    "meta",
    "text_at",
    "meta_at",
    "first_present",
    "resolve_chain",
    # Strategies
    "Strategy",
    "StrategyRegistry",
    "AMAZON",
    "FLIPKART",
    "GENERIC",
    "default_registry",
    # Dispatch
    "ProductExtractor",
    "extract_product_info",
]

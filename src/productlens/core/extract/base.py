"""
Extraction base classes and data structures.

Defines the product record produced by every strategy.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

PRODUCT_FIELDS = ("title", "price", "description")


@dataclass(frozen=True)
class ProductRecord:
    """Normalized product data recovered from a single page.

    Every field is independently optional. None means the field could not
    be located in the markup, which is an expected outcome rather than
    an error.
    """

    title: str | None = None
    price: str | None = None  # Display string, e.g. "$19.99"
    description: str | None = None

    @property
    def found_fields(self) -> list[str]:
        """Names of fields that were resolved."""
        return [name for name in PRODUCT_FIELDS if getattr(self, name) is not None]

    @property
    def missing_fields(self) -> list[str]:
        """Names of fields that could not be resolved."""
        return [name for name in PRODUCT_FIELDS if getattr(self, name) is None]

    @property
    def is_empty(self) -> bool:
        """Check if no field was resolved."""
        return not self.found_fields

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

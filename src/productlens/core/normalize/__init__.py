"""Text normalization for extracted values."""

from .text import normalize_whitespace

__all__ = [
    "normalize_whitespace",
]

"""CLI command modules."""

from . import strategies

__all__ = [
    "strategies",
]

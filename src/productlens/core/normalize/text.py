"""
Text normalization utilities.

Extracted values come from uncontrolled markup and are usually padded
with indentation, line breaks, and non-breaking spaces.
"""

from __future__ import annotations

import re

# U+FEFF (BOM) is not matched by \s
_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")


def normalize_whitespace(text: str | None) -> str:
    """Collapse whitespace runs to a single space and trim the result.

    Idempotent: normalizing already-normalized text returns it unchanged.

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Normalized text, possibly empty
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()

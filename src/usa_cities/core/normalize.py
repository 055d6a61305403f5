"""Case- and whitespace-insensitive comparison helpers.

The query engine compares names the same way everywhere, so the rules live
here rather than being repeated inline.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_ZIP_SEPARATOR_RE = re.compile(r"[,\s]+")


def fold(text: str) -> str:
    """Lowercase text for case-insensitive comparison."""
    return text.lower()


def folded_equals(left: str, right: str) -> bool:
    """Compare two strings ignoring case only (no trimming)."""
    return fold(left) == fold(right)


def folded_contains(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test. An empty needle always matches."""
    return fold(needle) in fold(haystack)


def normalize_state_code(state_code: str) -> str:
    """Uppercase a state code for exact comparison against table values."""
    return state_code.upper()


def collapse_whitespace(text: str) -> str:
    """Trim text and collapse internal runs of whitespace to one space."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def loose_equals(left: str, right: str) -> bool:
    """Compare two strings ignoring case and differences in whitespace.

    Example:
        >>> loose_equals("  Los   Angeles ", "los angeles")
        True
    """
    return fold(collapse_whitespace(left)) == fold(collapse_whitespace(right))


def split_zip_codes(value: str) -> tuple[str, ...]:
    """Split a ZIP code sub-list into its entries.

    Entries are separated by commas and/or whitespace. Empty entries are
    dropped and leading zeros are kept as-is.
    """
    return tuple(part for part in _ZIP_SEPARATOR_RE.split(value.strip()) if part)

"""Shared building blocks: errors, name normalization and the plugin factory.

Usage:
    from usa_cities.core import (
        DataUnavailableError,
        MalformedRecordError,
        PluginFactory,
        fold,
        loose_equals,
    )
"""

from __future__ import annotations

from usa_cities.core.errors import (
    PACKAGE_NAME,
    DataUnavailableError,
    MalformedRecordError,
    UsaCitiesError,
)
from usa_cities.core.factory import PluginFactory, normalize_name
from usa_cities.core.normalize import (
    collapse_whitespace,
    fold,
    folded_contains,
    folded_equals,
    loose_equals,
    normalize_state_code,
    split_zip_codes,
)

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "UsaCitiesError",
    "DataUnavailableError",
    "MalformedRecordError",
    # Factory
    "PluginFactory",
    "normalize_name",
    # Normalization
    "collapse_whitespace",
    "fold",
    "folded_contains",
    "folded_equals",
    "loose_equals",
    "normalize_state_code",
    "split_zip_codes",
]

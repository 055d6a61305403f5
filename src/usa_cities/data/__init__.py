"""Table sources for the cities, states and counties tables.

This package provides the static (built once) and on-demand (re-parsed per
load) table sources, an explicit caching wrapper, and the bundled sample
data files.
"""

from __future__ import annotations

from usa_cities.data.base import TABLE_MODELS, BaseTableSource
from usa_cities.data.cache import CachedTableSource
from usa_cities.data.factory import TableSourceFactory
from usa_cities.data.file_source import FlatFileTableSource
from usa_cities.data.static_source import StaticTableSource

__all__ = [
    "TABLE_MODELS",
    "BaseTableSource",
    "CachedTableSource",
    "FlatFileTableSource",
    "StaticTableSource",
    "TableSourceFactory",
]

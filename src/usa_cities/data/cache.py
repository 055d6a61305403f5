from __future__ import annotations

import logging

from usa_cities.core.constants import BASIC_CITIES, CITIES, COUNTIES, STATES, TABLE_NAMES
from usa_cities.models import BasicCity, City, County, GeoRecord, State
from usa_cities.protocols import TableSourceProtocol

logger = logging.getLogger(__name__)


class CachedTableSource:
    """Caller-owned memoization wrapper around another table source.

    The first load of each table is delegated to the wrapped source; later
    loads return the stored tuple until clear() is called. Nothing is shared
    between instances, so load timing and memory use stay with whoever
    created the cache.

    Example:
        >>> cache = CachedTableSource(FlatFileTableSource())
        >>> cities = cache.load_cities()   # parses us_cities.txt
        >>> cities is cache.load_cities()  # served from the cache
        True
        >>> cache.clear()
    """

    def __init__(self, source: TableSourceProtocol) -> None:
        """Initialize the cache.

        Args:
            source: Table source to delegate uncached loads to.
        """
        self._source = source
        self._tables: dict[str, tuple[GeoRecord, ...]] = {}

    @property
    def source(self) -> TableSourceProtocol:
        """Get the wrapped source."""
        return self._source

    def _get(self, table: str) -> tuple[GeoRecord, ...]:
        if table not in self._tables:
            loader = getattr(self._source, f"load_{table}")
            self._tables[table] = tuple(loader())
            logger.debug("Cached %s table (%d rows)", table, len(self._tables[table]))
        return self._tables[table]

    def load_cities(self) -> tuple[City, ...]:
        """Load the extended-schema cities table, from cache when possible."""
        return self._get(CITIES)  # type: ignore[return-value]

    def load_basic_cities(self) -> tuple[BasicCity, ...]:
        """Load the basic-schema cities table, from cache when possible."""
        return self._get(BASIC_CITIES)  # type: ignore[return-value]

    def load_states(self) -> tuple[State, ...]:
        """Load the states table, from cache when possible."""
        return self._get(STATES)  # type: ignore[return-value]

    def load_counties(self) -> tuple[County, ...]:
        """Load the counties table, from cache when possible."""
        return self._get(COUNTIES)  # type: ignore[return-value]

    def is_cached(self, table: str) -> bool:
        """Check whether a table is currently held by the cache."""
        return table in self._tables

    def clear(self, table: str | None = None) -> None:
        """Drop cached tables.

        Args:
            table: Table to drop. If None, drops every table.

        Raises:
            ValueError: If the table name is unknown.
        """
        if table is None:
            self._tables.clear()
            return
        if table not in TABLE_NAMES:
            available = ", ".join(TABLE_NAMES)
            raise ValueError(f"Unknown table: {table}. Available tables: {available}")
        self._tables.pop(table, None)

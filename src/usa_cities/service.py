from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from usa_cities.config import DatabaseConfig
from usa_cities.core.constants import BASIC_CITIES, CITIES, COUNTIES, STATES, TABLE_NAMES
from usa_cities.core.normalize import (
    collapse_whitespace,
    folded_contains,
    folded_equals,
    loose_equals,
    normalize_state_code,
)
from usa_cities.geo import miles_to_degrees, within_radius
from usa_cities.models import BasicCity, City, County, GeoRecord, State
from usa_cities.protocols import TableSourceProtocol

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


class CityDatabase:
    """Query facade over the cities, states and counties tables.

    Tables are loaded from the table source the first time a query needs
    them. When ``config.cache_tables`` is on, the database holds each table
    for its lifetime (the database instance is the cache); when it is off,
    every query loads its table again from the source.

    Every query returns a new list, so callers may modify results freely.
    Single-entity lookups return None when nothing matches.

    Example:
        >>> db = CityDatabase()
        >>> db.get_city("los angeles", "ca").county_name
        'Los Angeles'
        >>> [c.city_name for c in db.get_cities_by_zip("10001")]
        ['New York']

        # Re-parse flat files on every query
        >>> from usa_cities.config import DatabaseConfig
        >>> db = CityDatabase(config=DatabaseConfig(mode="on_demand"))
    """

    def __init__(
        self,
        source: TableSourceProtocol | None = None,
        *,
        config: DatabaseConfig | None = None,
    ) -> None:
        """Initialize the database.

        Args:
            source: Table source. Defaults to the source described by config.
            config: Loading configuration. Defaults to DatabaseConfig() read
                from the environment.
        """
        self._config = config or DatabaseConfig()
        self._source = source if source is not None else self._config.create_source()
        self._tables: dict[str, tuple[GeoRecord, ...]] = {}

    @property
    def source(self) -> TableSourceProtocol:
        """Get the table source."""
        return self._source

    @property
    def config(self) -> DatabaseConfig:
        """Get the loading configuration."""
        return self._config

    def _table(self, table: str) -> tuple[GeoRecord, ...]:
        if table in self._tables:
            return self._tables[table]

        rows = tuple(getattr(self._source, f"load_{table}")())
        if self._config.cache_tables:
            self._tables[table] = rows
            logger.debug("Holding %s table (%d rows)", table, len(rows))
        return rows

    def _cities(self) -> tuple[City, ...]:
        return self._table(CITIES)  # type: ignore[return-value]

    def _basic_cities(self) -> tuple[BasicCity, ...]:
        return self._table(BASIC_CITIES)  # type: ignore[return-value]

    def _states(self) -> tuple[State, ...]:
        return self._table(STATES)  # type: ignore[return-value]

    def _counties(self) -> tuple[County, ...]:
        return self._table(COUNTIES)  # type: ignore[return-value]

    def reload(self) -> None:
        """Drop held tables; the next query loads them from the source again."""
        self._tables.clear()

    # -------------------------------------------------------------------------
    # Full tables
    # -------------------------------------------------------------------------

    def get_all_cities(self) -> list[City]:
        """Get every city (extended schema), in table order."""
        return list(self._cities())

    def get_all_basic_cities(self) -> list[BasicCity]:
        """Get every city in the basic schema, in table order."""
        return list(self._basic_cities())

    def get_all_states(self) -> list[State]:
        """Get every state, in table order."""
        return list(self._states())

    def get_all_counties(self) -> list[County]:
        """Get every county, in table order."""
        return list(self._counties())

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def get_cities_by_state(self, state_code: str) -> list[City]:
        """Get cities in a state.

        Args:
            state_code: Two-letter state code, any case (e.g. "ca").

        Returns:
            Matching cities in table order; empty for unknown codes.
        """
        code = normalize_state_code(state_code)
        return [city for city in self._cities() if city.state_code == code]

    def get_cities_by_state_name(self, state_name: str) -> list[City]:
        """Get cities in a state, by full state name.

        The name is compared case-insensitively but is not trimmed.

        Args:
            state_name: Full state name (e.g. "new york").

        Returns:
            Matching cities in table order.
        """
        return [city for city in self._cities() if folded_equals(city.state_name, state_name)]

    def get_counties_by_state(self, state_code: str) -> list[County]:
        """Get counties in a state.

        Args:
            state_code: Two-letter state code, any case.

        Returns:
            Matching counties in table order.
        """
        code = normalize_state_code(state_code)
        return [county for county in self._counties() if county.state_code == code]

    def search_cities(self, term: str) -> list[City]:
        """Search cities by partial name, case-insensitively.

        An empty term matches every city.

        Args:
            term: Substring to look for in the city name.

        Returns:
            Matching cities in table order.
        """
        return [city for city in self._cities() if folded_contains(city.city_name, term)]

    def get_cities_by_zip(self, zip_code: str) -> list[City]:
        """Get cities that list a ZIP code.

        The ZIP code is compared literally: "02101" and "2101" differ, and
        partial ZIP codes never match.

        Args:
            zip_code: Five-digit ZIP code string.

        Returns:
            Matching cities in table order.
        """
        return [city for city in self._cities() if zip_code in city.zip_codes]

    def get_cities_nearby(self, lat: float, lng: float, radius_miles: float) -> list[City]:
        """Get cities within a radius of a point.

        Uses a flat-plane approximation (69 miles per degree); see
        usa_cities.geo. Cities without parsed coordinates are skipped.
        Results are in table order, not sorted by distance.

        Args:
            lat: Latitude of the center point.
            lng: Longitude of the center point.
            radius_miles: Search radius in miles. 0 matches only cities at
                exactly (lat, lng).

        Returns:
            Cities inside the radius.
        """
        radius = miles_to_degrees(radius_miles)
        return [
            city
            for city in self._cities()
            if city.latitude is not None
            and city.longitude is not None
            and within_radius(city.latitude, city.longitude, lat, lng, radius)
        ]

    def get_cities_by_county(self, county_name: str, state_code: str) -> list[City]:
        """Get cities in a county.

        County names are compared ignoring case and extra whitespace.

        Args:
            county_name: County name (e.g. "los angeles").
            state_code: Two-letter state code, any case.

        Returns:
            Matching cities in table order.
        """
        code = normalize_state_code(state_code)
        return [
            city
            for city in self._cities()
            if city.state_code == code and loose_equals(city.county_name, county_name)
        ]

    def get_cities_by_alias(self, alias: str) -> list[BasicCity]:
        """Get basic-schema cities by alias.

        Aliases are compared ignoring case and extra whitespace. A blank
        alias matches nothing.

        Args:
            alias: Alternate city name (e.g. "Hollywood").

        Returns:
            Matching cities in table order.
        """
        if not collapse_whitespace(alias):
            return []
        return [city for city in self._basic_cities() if loose_equals(city.alias, alias)]

    # -------------------------------------------------------------------------
    # Single lookups
    # -------------------------------------------------------------------------

    def get_city(self, city_name: str, state_code: str) -> City | None:
        """Get a city by exact name and state.

        Args:
            city_name: City name, compared case-insensitively.
            state_code: Two-letter state code, any case.

        Returns:
            The first matching city, or None.
        """
        code = normalize_state_code(state_code)
        return next(
            (
                city
                for city in self._cities()
                if city.state_code == code and folded_equals(city.city_name, city_name)
            ),
            None,
        )

    def get_county(self, county_name: str, state_code: str) -> County | None:
        """Get a county by name and state.

        Args:
            county_name: County name, compared ignoring case and whitespace.
            state_code: Two-letter state code, any case.

        Returns:
            The first matching county, or None.
        """
        code = normalize_state_code(state_code)
        return next(
            (
                county
                for county in self._counties()
                if county.state_code == code and loose_equals(county.county_name, county_name)
            ),
            None,
        )

    def get_state(self, state_code: str) -> State | None:
        """Get a state by its two-letter code.

        Args:
            state_code: State code, any case.

        Returns:
            The state, or None.
        """
        code = normalize_state_code(state_code)
        return next((state for state in self._states() if state.state_code == code), None)

    def get_state_by_name(self, state_name: str) -> State | None:
        """Get a state by its full name, case-insensitively.

        Args:
            state_name: Full state name (e.g. "California").

        Returns:
            The state, or None.
        """
        return next(
            (state for state in self._states() if folded_equals(state.state_name, state_name)),
            None,
        )

    # -------------------------------------------------------------------------
    # pandas integration
    # -------------------------------------------------------------------------

    def to_dataframe(self, table: str = CITIES) -> pd.DataFrame:
        """Export a table as a pandas DataFrame.

        Args:
            table: One of "cities", "basic_cities", "states", "counties".

        Returns:
            DataFrame with one column per record field.

        Raises:
            ValueError: If the table name is unknown.
        """
        if table not in TABLE_NAMES:
            available = ", ".join(TABLE_NAMES)
            raise ValueError(f"Unknown table: {table}. Available tables: {available}")

        from usa_cities.pandas_ext import records_to_dataframe

        return records_to_dataframe(self._table(table))


@lru_cache(maxsize=1)
def get_default_database() -> CityDatabase:
    """Get the shared database behind the module-level functions.

    Created on first use from DatabaseConfig() (i.e. the environment). Call
    get_default_database.cache_clear() to rebuild it after changing the
    environment.

    Returns:
        Shared CityDatabase instance.
    """
    return CityDatabase()


# -------------------------------------------------------------------------
# Module-level functions using the default database
# -------------------------------------------------------------------------


def load_cities() -> tuple[City, ...]:
    """Load the extended-schema cities table from the default source."""
    return get_default_database().source.load_cities()


def load_basic_cities() -> tuple[BasicCity, ...]:
    """Load the basic-schema cities table from the default source."""
    return get_default_database().source.load_basic_cities()


def load_states() -> tuple[State, ...]:
    """Load the states table from the default source."""
    return get_default_database().source.load_states()


def load_counties() -> tuple[County, ...]:
    """Load the counties table from the default source."""
    return get_default_database().source.load_counties()


def get_all_cities() -> list[City]:
    """Get every city. See CityDatabase.get_all_cities."""
    return get_default_database().get_all_cities()


def get_all_basic_cities() -> list[BasicCity]:
    """Get every basic-schema city. See CityDatabase.get_all_basic_cities."""
    return get_default_database().get_all_basic_cities()


def get_all_states() -> list[State]:
    """Get every state. See CityDatabase.get_all_states."""
    return get_default_database().get_all_states()


def get_all_counties() -> list[County]:
    """Get every county. See CityDatabase.get_all_counties."""
    return get_default_database().get_all_counties()


def get_cities_by_state(state_code: str) -> list[City]:
    """Get cities in a state. See CityDatabase.get_cities_by_state."""
    return get_default_database().get_cities_by_state(state_code)


def get_cities_by_state_name(state_name: str) -> list[City]:
    """Get cities by full state name. See CityDatabase.get_cities_by_state_name."""
    return get_default_database().get_cities_by_state_name(state_name)


def get_counties_by_state(state_code: str) -> list[County]:
    """Get counties in a state. See CityDatabase.get_counties_by_state."""
    return get_default_database().get_counties_by_state(state_code)


def search_cities(term: str) -> list[City]:
    """Search cities by partial name. See CityDatabase.search_cities."""
    return get_default_database().search_cities(term)


def get_city(city_name: str, state_code: str) -> City | None:
    """Get a city by name and state. See CityDatabase.get_city."""
    return get_default_database().get_city(city_name, state_code)


def get_cities_by_zip(zip_code: str) -> list[City]:
    """Get cities listing a ZIP code. See CityDatabase.get_cities_by_zip."""
    return get_default_database().get_cities_by_zip(zip_code)


def get_cities_nearby(lat: float, lng: float, radius_miles: float) -> list[City]:
    """Get cities near a point. See CityDatabase.get_cities_nearby."""
    return get_default_database().get_cities_nearby(lat, lng, radius_miles)


def get_cities_by_county(county_name: str, state_code: str) -> list[City]:
    """Get cities in a county. See CityDatabase.get_cities_by_county."""
    return get_default_database().get_cities_by_county(county_name, state_code)


def get_cities_by_alias(alias: str) -> list[BasicCity]:
    """Get basic-schema cities by alias. See CityDatabase.get_cities_by_alias."""
    return get_default_database().get_cities_by_alias(alias)


def get_county(county_name: str, state_code: str) -> County | None:
    """Get a county by name and state. See CityDatabase.get_county."""
    return get_default_database().get_county(county_name, state_code)


def get_state(state_code: str) -> State | None:
    """Get a state by code. See CityDatabase.get_state."""
    return get_default_database().get_state(state_code)


def get_state_by_name(state_name: str) -> State | None:
    """Get a state by full name. See CityDatabase.get_state_by_name."""
    return get_default_database().get_state_by_name(state_name)

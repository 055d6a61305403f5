"""usa-cities: a queryable in-memory dataset of U.S. cities, counties and states.

This package loads delimited flat files or pre-serialized records into
immutable tables and answers lookup, search and proximity queries:
- Static tables built once, or on-demand tables re-parsed on every load
- Lenient parsing by default, strict validation on request
- Explicit, caller-owned caching
- Optional pandas export

Quick Start:
    >>> import usa_cities
    >>> usa_cities.get_state("ny").state_name
    'New York'
    >>> city = usa_cities.get_city("Los Angeles", "CA")
    >>> city.zip_codes[:2]
    ('90001', '90012')
    >>> [c.city_name for c in usa_cities.get_cities_nearby(34.0522, -118.2437, 25)]
    ['Los Angeles', ...]

    # Your own data, parsed on every load
    >>> from usa_cities import CityDatabase, FlatFileTableSource
    >>> db = CityDatabase(FlatFileTableSource("/srv/geo"))
    >>> db.search_cities("spring")

    # ...or parsed once and kept
    >>> from usa_cities import CachedTableSource
    >>> db = CityDatabase(CachedTableSource(FlatFileTableSource("/srv/geo")))
"""

from __future__ import annotations

from usa_cities.config import DatabaseConfig
from usa_cities.core import (
    DataUnavailableError,
    MalformedRecordError,
    UsaCitiesError,
)
from usa_cities.data import (
    BaseTableSource,
    CachedTableSource,
    FlatFileTableSource,
    StaticTableSource,
    TableSourceFactory,
)
from usa_cities.models import BasicCity, City, County, Record, State
from usa_cities.pandas_ext import records_to_dataframe
from usa_cities.parsers import (
    BaseRecordParser,
    DelimitedParser,
    JSONRecordParser,
    ParserFactory,
    dump,
    parse,
)
from usa_cities.protocols import RecordParserProtocol, TableSourceProtocol
from usa_cities.service import (
    CityDatabase,
    get_all_basic_cities,
    get_all_cities,
    get_all_counties,
    get_all_states,
    get_cities_by_alias,
    get_cities_by_county,
    get_cities_by_state,
    get_cities_by_state_name,
    get_cities_by_zip,
    get_cities_nearby,
    get_city,
    get_counties_by_state,
    get_county,
    get_default_database,
    get_state,
    get_state_by_name,
    load_basic_cities,
    load_cities,
    load_counties,
    load_states,
    search_cities,
)

__version__ = "1.0.0"
__package_name__ = "usa-cities-database"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "CityDatabase",
    "DatabaseConfig",
    "get_default_database",
    # Models
    "BasicCity",
    "City",
    "County",
    "Record",
    "State",
    # Errors
    "UsaCitiesError",
    "DataUnavailableError",
    "MalformedRecordError",
    # Protocols
    "RecordParserProtocol",
    "TableSourceProtocol",
    # Parsers
    "BaseRecordParser",
    "DelimitedParser",
    "JSONRecordParser",
    "ParserFactory",
    "dump",
    "parse",
    # Table sources
    "BaseTableSource",
    "CachedTableSource",
    "FlatFileTableSource",
    "StaticTableSource",
    "TableSourceFactory",
    # Loaders
    "load_cities",
    "load_basic_cities",
    "load_states",
    "load_counties",
    # Queries
    "get_all_cities",
    "get_all_basic_cities",
    "get_all_states",
    "get_all_counties",
    "get_cities_by_state",
    "get_cities_by_state_name",
    "get_counties_by_state",
    "search_cities",
    "get_city",
    "get_cities_by_zip",
    "get_cities_nearby",
    "get_state",
    "get_state_by_name",
    "get_cities_by_county",
    "get_cities_by_alias",
    "get_county",
    # pandas integration
    "records_to_dataframe",
]

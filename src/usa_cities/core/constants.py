"""Centralized constants for the flat-file schemas and bundled data.

Header tuples list the fields in the order the bundled files use. Parsers
read headers dynamically, so these are used for writing files and for
documentation of the expected schema, not for positional parsing.
"""

from __future__ import annotations

DEFAULT_DELIMITER = "|"

# Approximate miles per degree of latitude (mid-latitude value)
MILES_PER_DEGREE = 69.0

# Table names, as accepted by CityDatabase.to_dataframe() and CachedTableSource
CITIES = "cities"
BASIC_CITIES = "basic_cities"
STATES = "states"
COUNTIES = "counties"
TABLE_NAMES: tuple[str, ...] = (CITIES, BASIC_CITIES, STATES, COUNTIES)

BASIC_CITY_HEADER: tuple[str, ...] = (
    "City",
    "State short",
    "State full",
    "County",
    "City alias",
)

CITY_HEADER: tuple[str, ...] = (
    "City",
    "State short",
    "State full",
    "County",
    "Latitude",
    "Longitude",
    "ZIP codes",
    "Population",
    "Density",
    "Timezone",
)

STATE_HEADER: tuple[str, ...] = ("state_id", "state_name")

COUNTY_HEADER: tuple[str, ...] = ("state_id", "state_name", "county_name")

# Bundled delimited files (on-demand mode), keyed by table name
FLAT_FILE_NAMES: dict[str, str] = {
    CITIES: "us_cities.txt",
    BASIC_CITIES: "us_cities_basic.txt",
    STATES: "us_states.txt",
    COUNTIES: "us_counties.txt",
}

# Bundled pre-serialized records (static mode), keyed by table name
JSON_FILE_NAMES: dict[str, str] = {
    CITIES: "cities.json",
    BASIC_CITIES: "cities_basic.json",
    STATES: "states.json",
    COUNTIES: "counties.json",
}

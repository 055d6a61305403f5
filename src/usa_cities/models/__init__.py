"""Record models for the cities, states and counties tables."""

from __future__ import annotations

from usa_cities.models.records import BasicCity, City, County, GeoRecord, State

# A parsed row: field name -> raw string value, in header order.
Record = dict[str, str]

__all__ = [
    "BasicCity",
    "City",
    "County",
    "GeoRecord",
    "Record",
    "State",
]

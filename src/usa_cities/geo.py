"""Planar proximity math for "nearby" queries.

Distances are measured on a flat latitude/longitude plane in degrees, with
one degree taken as 69 miles. This is a coarse filter: it over-counts
east-west distance away from the equator and is not a geodesic distance.
"""

from __future__ import annotations

import math

from usa_cities.core.constants import MILES_PER_DEGREE


def miles_to_degrees(radius_miles: float) -> float:
    """Convert a radius in miles to degrees (69 miles per degree)."""
    return radius_miles / MILES_PER_DEGREE


def planar_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Euclidean distance between two points, in degrees."""
    return math.sqrt((lat1 - lat2) ** 2 + (lng1 - lng2) ** 2)


def within_radius(
    lat: float,
    lng: float,
    center_lat: float,
    center_lng: float,
    radius_degrees: float,
) -> bool:
    """Check whether a point lies within radius_degrees of a center point.

    A radius of 0 matches only the center itself; NaN inputs never match.
    """
    return planar_distance(lat, lng, center_lat, center_lng) <= radius_degrees

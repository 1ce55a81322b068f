"""
Distance calculation using the Haversine formula.

Assumption
----------
Stops are ordered by great-circle (straight-line) distance, not by road
distance.  No routing engine (OSRM / Google Maps) is consulted, so the
service stays self-contained and deterministic.

Precondition
------------
Latitudes must lie in [-90, 90] and longitudes in [-180, 180] (decimal
degrees).  Values outside that range are not clamped or rejected: the
formula still returns a finite number, it just has no physical meaning.
Callers validate coordinates before they reach the engine.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math

from .entities import Location

EARTH_RADIUS_KM = 6_371.0


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push a past 1.0 for near-antipodal points.
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def distance_between(a: Location, b: Location) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)

from __future__ import annotations

import math
from collections.abc import Sequence

from fuel_finder.services.types import GeoPoint

EARTH_RADIUS_METERS = 6_371_000.0


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    lat1_rad = math.radians(a.latitude)
    lon1_rad = math.radians(a.longitude)
    lat2_rad = math.radians(b.latitude)
    lon2_rad = math.radians(b.longitude)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    h = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def cumulative_distance(points: Sequence[GeoPoint]) -> float:
    total = 0.0
    for index in range(1, len(points)):
        total += haversine_meters(points[index - 1], points[index])
    return total


def build_cumulative_meters(points: Sequence[GeoPoint]) -> list[float]:
    """Running distance from the first point, one entry per point."""
    if not points:
        return []
    cumulative = [0.0]
    for index in range(1, len(points)):
        cumulative.append(cumulative[-1] + haversine_meters(points[index - 1], points[index]))
    return cumulative

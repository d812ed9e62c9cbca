from __future__ import annotations

from collections.abc import Sequence

from fuel_finder.services.geo import cumulative_distance, haversine_meters
from fuel_finder.services.types import GeoPoint


def sample_route(points: Sequence[GeoPoint], count: int) -> list[GeoPoint]:
    """
    Place ``count`` points evenly by distance along ``points``.

    The first sample is the route start and, for ``count > 1``, the last one is
    the route end. Elevation is interpolated together with the coordinates.

    Args:
        points: Route vertices in traversal order
        count: Number of samples, at least 1

    Returns:
        List of exactly ``count`` sample points
    """
    if count < 1:
        raise ValueError("count must be at least 1")
    if not points:
        raise ValueError("Cannot sample an empty route")

    if count == 1:
        return [points[0]]

    total_distance = cumulative_distance(points)
    return [
        point_at_distance(points, (index * total_distance) / (count - 1))
        for index in range(count)
    ]


def point_at_distance(points: Sequence[GeoPoint], target_meters: float) -> GeoPoint:
    accumulated = 0.0

    for index in range(1, len(points)):
        start = points[index - 1]
        end = points[index]
        segment_distance = haversine_meters(start, end)

        if accumulated + segment_distance >= target_meters:
            if segment_distance == 0:
                return start
            ratio = (target_meters - accumulated) / segment_distance
            return GeoPoint(
                latitude=start.latitude + (end.latitude - start.latitude) * ratio,
                longitude=start.longitude + (end.longitude - start.longitude) * ratio,
                elevation=start.elevation + (end.elevation - start.elevation) * ratio,
            )

        accumulated += segment_distance

    # Past the end through rounding.
    return points[-1]

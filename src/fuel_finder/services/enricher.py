from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from django.conf import settings

from fuel_finder.services.geo import build_cumulative_meters, haversine_meters
from fuel_finder.services.overpass import OverpassClient
from fuel_finder.services.sampler import sample_route
from fuel_finder.services.types import EnrichedStation, GeoPoint, Track

logger = logging.getLogger(__name__)

EPSILON = 1e-6


class RouteEnricher:
    def __init__(
        self,
        station_client: OverpassClient | None = None,
        max_distance_meters: float | None = None,
        min_interval_km: float | None = None,
        max_interval_km: float | None = None,
    ) -> None:
        self.station_client = station_client or OverpassClient()
        self.max_distance_meters = max_distance_meters or float(settings.FUEL_MAX_DISTANCE_METERS)
        self.min_interval_km = min_interval_km or float(settings.FUEL_MIN_INTERVAL_KM)
        # Not used by sample_count.
        self.max_interval_km = max_interval_km or float(settings.FUEL_MAX_INTERVAL_KM)

    def sample_count(self, total_distance_meters: float) -> int:
        return max(1, math.floor(total_distance_meters / 1000.0 / self.min_interval_km + EPSILON))

    def enrich(self, track: Track) -> list[EnrichedStation]:
        points = track.points
        if not points:
            return []

        cumulative_meters = build_cumulative_meters(points)
        samples = sample_route(points, self.sample_count(cumulative_meters[-1]))

        enriched: list[EnrichedStation] = []
        for sample in samples:
            stations = self.station_client.find_fuel_stations(sample, self.max_distance_meters)
            if not stations:
                continue

            enriched.append(
                EnrichedStation(
                    station=stations[0],
                    distance_along_route=distance_along_route(points, sample, cumulative_meters),
                    sample_location=sample,
                )
            )

        logger.info(
            "Enriched %.1f km route: %d samples, %d stations",
            cumulative_meters[-1] / 1000.0,
            len(samples),
            len(enriched),
        )
        return sorted(enriched, key=lambda station: station.distance_along_route)


def distance_along_route(
    points: Sequence[GeoPoint],
    target: GeoPoint,
    cumulative_meters: Sequence[float] | None = None,
) -> float:
    """Distance from the route start to the vertex nearest ``target``.

    Ties go to the earliest vertex. Pass ``cumulative_meters`` to reuse a
    precomputed running distance for the same ``points``.
    """
    if not points:
        return 0.0
    if cumulative_meters is None:
        cumulative_meters = build_cumulative_meters(points)
    return cumulative_meters[_nearest_point_index(points, target)]


def _nearest_point_index(points: Sequence[GeoPoint], target: GeoPoint) -> int:
    best_index = 0
    best_distance = float("inf")
    for index, point in enumerate(points):
        distance = haversine_meters(point, target)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index

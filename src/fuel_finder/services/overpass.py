from __future__ import annotations

import logging
import math
from typing import Any

import httpx
from django.conf import settings

from fuel_finder.exceptions import ExternalServiceError
from fuel_finder.services.geo import haversine_meters
from fuel_finder.services.types import FuelStation, GeoPoint

logger = logging.getLogger(__name__)

UNNAMED_STATION = "Unnamed Fuel Station"
UNKNOWN_BRAND = "Unknown"


class StationCache:
    """Fuel station lookups keyed by a quantized query center.

    One instance belongs to one enrichment run. Entries are never evicted and
    failed lookups are never stored.
    """

    def __init__(self, precision: int = 3) -> None:
        self.precision = precision
        self._entries: dict[str, list[FuelStation]] = {}

    def key(self, center: GeoPoint, radius_meters: float) -> str:
        return (
            f"{center.latitude:.{self.precision}f},"
            f"{center.longitude:.{self.precision}f}@{radius_meters:g}"
        )

    def get(self, key: str) -> list[FuelStation] | None:
        stations = self._entries.get(key)
        if stations is None:
            return None
        return list(stations)

    def set(self, key: str, stations: list[FuelStation]) -> None:
        self._entries[key] = list(stations)

    def __len__(self) -> int:
        return len(self._entries)


class OverpassClient:
    def __init__(
        self,
        cache: StationCache | None = None,
        max_candidates: int | None = None,
    ) -> None:
        self.base_url = settings.OVERPASS_URL
        self.timeout = settings.OVERPASS_TIMEOUT_SECONDS
        self.query_timeout = settings.OVERPASS_QUERY_TIMEOUT_SECONDS
        self.user_agent = settings.OVERPASS_USER_AGENT
        self.max_candidates = max_candidates or settings.FUEL_MAX_CANDIDATES
        self.cache = cache if cache is not None else StationCache(settings.POI_CACHE_PRECISION)

    def find_fuel_stations(self, center: GeoPoint, radius_meters: float) -> list[FuelStation]:
        """Nearest fuel stations within ``radius_meters`` of ``center``, closest first.

        Upstream failures are logged and reported as an empty list.
        """
        cache_key = self.cache.key(center, radius_meters)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Station cache hit for %s", cache_key)
            return cached

        try:
            payload = self._fetch(center, radius_meters)
            stations = self._parse_stations(payload, center, radius_meters)
        except ExternalServiceError as exc:
            logger.warning(
                "Fuel station lookup near %.4f,%.4f failed: %s",
                center.latitude,
                center.longitude,
                exc,
            )
            return []

        stations = stations[: self.max_candidates]
        self.cache.set(cache_key, stations)
        return stations

    def build_query(self, center: GeoPoint, radius_meters: float) -> str:
        around = f"(around:{radius_meters:g},{center.latitude},{center.longitude})"
        return (
            f"[out:json][timeout:{self.query_timeout}];"
            "("
            f'node["amenity"="fuel"]{around};'
            f'way["amenity"="fuel"]{around};'
            ");"
            "out center;"
        )

    def _fetch(self, center: GeoPoint, radius_meters: float) -> Any:
        logger.debug(
            "Querying Overpass near %.4f,%.4f (radius %gm)",
            center.latitude,
            center.longitude,
            radius_meters,
        )
        try:
            response = httpx.post(
                self.base_url,
                data={"data": self.build_query(center, radius_meters)},
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.user_agent,
                },
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Overpass request failed: {exc}") from exc
        except ValueError as exc:
            raise ExternalServiceError("Overpass returned invalid JSON") from exc

    @staticmethod
    def _parse_stations(
        payload: Any, center: GeoPoint, radius_meters: float
    ) -> list[FuelStation]:
        if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
            raise ExternalServiceError("Overpass response has no element list")

        stations: list[FuelStation] = []
        for element in payload["elements"]:
            if not isinstance(element, dict):
                continue
            tags = element.get("tags")
            if not isinstance(tags, dict) or tags.get("amenity") != "fuel":
                continue

            location = _element_location(element)
            if location is None:
                continue

            distance = haversine_meters(center, location)
            if distance > radius_meters:
                continue

            stations.append(
                FuelStation(
                    station_id=_element_id(element),
                    name=str(tags.get("name") or UNNAMED_STATION),
                    brand=str(tags.get("brand") or UNKNOWN_BRAND),
                    location=location,
                    straight_line_distance=distance,
                )
            )

        return sorted(stations, key=lambda station: station.straight_line_distance)


def _element_location(element: dict[str, Any]) -> GeoPoint | None:
    # Ways carry a computed center instead of their own coordinate.
    source = element
    if element.get("lat") is None or element.get("lon") is None:
        source = element.get("center")
        if not isinstance(source, dict):
            return None

    try:
        latitude = float(source["lat"])
        longitude = float(source["lon"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    return GeoPoint(latitude=latitude, longitude=longitude)


def _element_id(element: dict[str, Any]) -> str:
    element_type = element.get("type")
    element_id = str(element.get("id", ""))
    if element_type:
        return f"{element_type}/{element_id}"
    return element_id

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    elevation: float = 0.0


@dataclass(slots=True, frozen=True)
class Track:
    name: str
    segments: list[list[GeoPoint]] = field(default_factory=list)

    @property
    def points(self) -> list[GeoPoint]:
        """Points of the first segment, the only one used for sampling."""
        if not self.segments:
            return []
        return self.segments[0]


@dataclass(slots=True, frozen=True)
class FuelStation:
    station_id: str
    name: str
    brand: str
    location: GeoPoint
    straight_line_distance: float


@dataclass(slots=True, frozen=True)
class EnrichedStation:
    station: FuelStation
    distance_along_route: float
    sample_location: GeoPoint


@dataclass(slots=True, frozen=True)
class EnrichmentResult:
    gpx_xml: str
    stations: list[EnrichedStation]
    sample_count: int
    total_distance_meters: float

    @property
    def total_distance_km(self) -> float:
        return round(self.total_distance_meters / 1000.0, 1)

from __future__ import annotations

import math
from collections.abc import Sequence

import gpxpy.gpx

from fuel_finder.services.types import EnrichedStation, Track

CREATOR = "GPX Fuel Finder"
DEFAULT_OUTPUT_NAME = "Enhanced Route"
WAYPOINT_SYMBOL = "Gas Station"
WAYPOINT_TYPE = "Fuel"


def render_gpx(
    original: Track,
    stations: list[EnrichedStation],
    other_tracks: Sequence[Track] = (),
) -> str:
    """Original track followed by one numbered waypoint per station.

    ``other_tracks`` are copied through after the original track unchanged.
    """
    gpx = gpxpy.gpx.GPX()
    gpx.creator = CREATOR

    for index, source in enumerate([original, *other_tracks]):
        fallback_name = DEFAULT_OUTPUT_NAME if index == 0 else None
        gpx.tracks.append(_build_track(source, fallback_name))

    for number, enriched in enumerate(stations, start=1):
        station = enriched.station
        distance_km = round_half_up(enriched.distance_along_route / 1000.0)
        gpx.waypoints.append(
            gpxpy.gpx.GPXWaypoint(
                latitude=station.location.latitude,
                longitude=station.location.longitude,
                name=f"⛽ #{number} {station.brand} ({distance_km}km)",
                description=f"{station.name} - {station.brand} - {distance_km}km from start",
                symbol=WAYPOINT_SYMBOL,
                type=WAYPOINT_TYPE,
            )
        )

    return gpx.to_xml(version="1.1")


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _build_track(source: Track, fallback_name: str | None) -> gpxpy.gpx.GPXTrack:
    track = gpxpy.gpx.GPXTrack(name=source.name or fallback_name)
    for segment_points in source.segments:
        segment = gpxpy.gpx.GPXTrackSegment()
        for point in segment_points:
            segment.points.append(
                gpxpy.gpx.GPXTrackPoint(
                    latitude=point.latitude,
                    longitude=point.longitude,
                    elevation=point.elevation,
                )
            )
        track.segments.append(segment)
    return track

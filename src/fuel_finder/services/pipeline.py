from __future__ import annotations

from collections.abc import Callable

from fuel_finder.exceptions import NoRouteDataError
from fuel_finder.schemas import EnrichmentOptions
from fuel_finder.services.enricher import RouteEnricher
from fuel_finder.services.geo import cumulative_distance
from fuel_finder.services.gpx_parser import parse_gpx
from fuel_finder.services.gpx_writer import render_gpx
from fuel_finder.services.overpass import OverpassClient
from fuel_finder.services.types import EnrichmentResult


class FuelFinderService:
    def __init__(self, station_client_factory: Callable[[], OverpassClient] | None = None) -> None:
        self.station_client_factory = station_client_factory or OverpassClient

    def process(self, gpx_text: str, options: EnrichmentOptions | None = None) -> EnrichmentResult:
        options = options or EnrichmentOptions()

        tracks = parse_gpx(gpx_text)
        if not tracks or not tracks[0].points:
            raise NoRouteDataError("No route points found in GPX file")
        track = tracks[0]

        # Fresh client per run so the station cache never outlives the request.
        enricher = RouteEnricher(
            station_client=self.station_client_factory(),
            max_distance_meters=options.max_distance,
            min_interval_km=options.min_interval,
            max_interval_km=options.max_interval,
        )
        stations = enricher.enrich(track)
        total_distance = cumulative_distance(track.points)

        return EnrichmentResult(
            gpx_xml=render_gpx(track, stations, other_tracks=tracks[1:]),
            stations=stations,
            sample_count=enricher.sample_count(total_distance),
            total_distance_meters=total_distance,
        )

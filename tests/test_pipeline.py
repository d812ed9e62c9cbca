from __future__ import annotations

import gpxpy
import pytest

from fuel_finder.exceptions import NoRouteDataError
from fuel_finder.schemas import EnrichmentOptions
from fuel_finder.services.pipeline import FuelFinderService
from fuel_finder.services.types import FuelStation, GeoPoint
from tests.helpers import gpx_document, straight_route


class StubClient:
    instances = 0

    def __init__(self) -> None:
        StubClient.instances += 1
        self.radii: list[float] = []

    def find_fuel_stations(self, center: GeoPoint, radius_meters: float) -> list[FuelStation]:
        self.radii.append(radius_meters)
        location = GeoPoint(latitude=center.latitude, longitude=center.longitude + 0.002)
        return [
            FuelStation(
                station_id="node/9",
                name="Stub",
                brand="BP",
                location=location,
                straight_line_distance=150.0,
            )
        ]


@pytest.mark.parametrize("content", ["", "<gpx></gpx>", "random text"])
def test_documents_without_points_raise_no_route_data(content: str) -> None:
    with pytest.raises(NoRouteDataError):
        FuelFinderService(station_client_factory=StubClient).process(content)


def test_process_returns_enhanced_gpx_and_summary() -> None:
    service = FuelFinderService(station_client_factory=StubClient)

    result = service.process(
        gpx_document(straight_route(120)),
        EnrichmentOptions(maxDistance=1200, minInterval=40),
    )

    assert result.sample_count == 3
    assert len(result.stations) == 3
    assert result.total_distance_km == pytest.approx(120.0)
    gpx = gpxpy.parse(result.gpx_xml)
    assert gpx.tracks[0].name == "Test Route"
    assert len(gpx.tracks[0].segments[0].points) == 121
    assert [waypoint.name for waypoint in gpx.waypoints] == [
        "⛽ #1 BP (0km)",
        "⛽ #2 BP (60km)",
        "⛽ #3 BP (120km)",
    ]


def test_each_run_gets_a_fresh_station_client() -> None:
    service = FuelFinderService(station_client_factory=StubClient)
    before = StubClient.instances

    service.process(gpx_document(straight_route(5)))
    service.process(gpx_document(straight_route(5)))

    assert StubClient.instances == before + 2


def test_default_options_use_settings(settings) -> None:
    settings.FUEL_MAX_DISTANCE_METERS = 1750
    clients: list[StubClient] = []

    def factory() -> StubClient:
        clients.append(StubClient())
        return clients[-1]

    FuelFinderService(station_client_factory=factory).process(gpx_document(straight_route(5)))

    assert clients[0].radii == [1750]


def test_additional_tracks_are_copied_but_only_the_first_is_enriched() -> None:
    first = "".join(f'<trkpt lat="{45 + i * 0.01}" lon="7.0"/>' for i in range(3))
    second = "".join(f'<trkpt lat="{50 + i * 0.01}" lon="9.0"/>' for i in range(4))
    content = (
        f"<gpx><trk><name>Main</name><trkseg>{first}</trkseg><trkseg>{second}</trkseg></trk>"
        f"<trk><name>Detour</name><trkseg>{second}</trkseg></trk></gpx>"
    )

    result = FuelFinderService(station_client_factory=StubClient).process(content)

    assert result.total_distance_km == pytest.approx(2.2, abs=0.1)
    assert result.sample_count == 1
    gpx = gpxpy.parse(result.gpx_xml)
    assert [track.name for track in gpx.tracks] == ["Main", "Detour"]
    assert [len(segment.points) for segment in gpx.tracks[0].segments] == [3, 4]
    assert len(gpx.tracks[1].segments[0].points) == 4

from __future__ import annotations

import pytest

from fuel_finder.services.geo import build_cumulative_meters, cumulative_distance, haversine_meters
from fuel_finder.services.types import GeoPoint
from tests.helpers import straight_route


def test_haversine_is_zero_for_identical_points() -> None:
    point = GeoPoint(latitude=48.8566, longitude=2.3522)

    assert haversine_meters(point, point) == 0.0


def test_haversine_matches_known_city_distance() -> None:
    paris = GeoPoint(latitude=48.8566, longitude=2.3522)
    london = GeoPoint(latitude=51.5074, longitude=-0.1278)

    distance = haversine_meters(paris, london)

    assert distance == pytest.approx(343_500, rel=0.01)
    assert haversine_meters(london, paris) == pytest.approx(distance)


def test_one_degree_of_latitude_on_mean_sphere() -> None:
    distance = haversine_meters(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))

    assert distance == pytest.approx(111_194.93, abs=0.01)


def test_cumulative_distance_handles_short_sequences() -> None:
    assert cumulative_distance([]) == 0.0
    assert cumulative_distance([GeoPoint(45.0, 7.0)]) == 0.0


def test_cumulative_distance_is_monotonic_as_points_are_added() -> None:
    points = [
        GeoPoint(45.0, 7.0),
        GeoPoint(45.01, 7.02),
        GeoPoint(45.01, 7.02),
        GeoPoint(44.99, 7.05),
        GeoPoint(45.03, 7.01),
    ]

    totals = [cumulative_distance(points[:size]) for size in range(2, len(points) + 1)]

    assert all(total >= 0 for total in totals)
    assert totals == sorted(totals)


def test_cumulative_meters_ends_at_total_distance() -> None:
    points = straight_route(10)

    cumulative = build_cumulative_meters(points)

    assert len(cumulative) == len(points)
    assert cumulative[0] == 0.0
    assert cumulative[-1] == pytest.approx(cumulative_distance(points))
    assert cumulative[-1] == pytest.approx(10_000, abs=0.5)

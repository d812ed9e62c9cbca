from __future__ import annotations

from fuel_finder.services.types import GeoPoint

# Meters per degree of latitude on the 6 371 km sphere.
METERS_PER_DEGREE_LAT = 111_194.92664455873


def straight_route(length_km: int, step_km: float = 1.0) -> list[GeoPoint]:
    """Points heading due north from (45, 7), ``step_km`` apart."""
    steps = int(length_km / step_km)
    return [
        GeoPoint(
            latitude=45.0 + (index * step_km * 1000.0) / METERS_PER_DEGREE_LAT,
            longitude=7.0,
            elevation=float(index),
        )
        for index in range(steps + 1)
    ]


def gpx_document(points: list[GeoPoint], name: str = "Test Route") -> str:
    body = "\n".join(
        f'      <trkpt lat="{point.latitude}" lon="{point.longitude}">'
        f"<ele>{point.elevation}</ele></trkpt>"
        for point in points
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
        f"  <trk>\n    <name>{name}</name>\n    <trkseg>\n{body}\n    </trkseg>\n  </trk>\n"
        "</gpx>\n"
    )


def overpass_element(
    element_id: int,
    latitude: float,
    longitude: float,
    *,
    name: str | None = "Station",
    brand: str | None = "Shell",
    element_type: str = "node",
) -> dict:
    tags = {"amenity": "fuel"}
    if name is not None:
        tags["name"] = name
    if brand is not None:
        tags["brand"] = brand
    element = {"type": element_type, "id": element_id, "tags": tags}
    if element_type == "way":
        element["center"] = {"lat": latitude, "lon": longitude}
    else:
        element["lat"] = latitude
        element["lon"] = longitude
    return element

"""Tolerant GPX point extraction.

Real-world exports disagree on attribute order, on whether points carry a
body, and on whether the route is stored as a track or a route. Instead of a
strict XML parse, each known point encoding is tried in a fixed order and the
first one that yields points wins. Points from different encodings are never
mixed within one parse.
"""

from __future__ import annotations

import html
import logging
import math
import re
from dataclasses import dataclass

from fuel_finder.services.types import GeoPoint, Track

logger = logging.getLogger(__name__)

DEFAULT_TRACK_NAME = "Route"

_LAT = r"""\blat\s*=\s*["'](?P<lat>[^"']+)["']"""
_LON = r"""\blon\s*=\s*["'](?P<lon>[^"']+)["']"""
_ELE = re.compile(r"<ele>\s*([^<]+?)\s*</ele>", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class PointEncoding:
    name: str
    pattern: re.Pattern[str]
    container: str
    segment: str | None = None


def _container(tag: str, first: str, second: str) -> re.Pattern[str]:
    return re.compile(
        rf"<{tag}\b[^>]*?{first}[^>]*?{second}[^>]*(?<!/)>(?P<body>.*?)</{tag}>",
        re.IGNORECASE | re.DOTALL,
    )


def _self_closing(tag: str, first: str, second: str) -> re.Pattern[str]:
    return re.compile(rf"<{tag}\b[^>]*?{first}[^>]*?{second}[^>]*/>", re.IGNORECASE)


def _either(tag: str, first: str, second: str) -> re.Pattern[str]:
    return re.compile(
        rf"<{tag}\b[^>]*?{first}[^>]*?{second}[^>]*?(?:/>|>(?P<body>.*?)</{tag}>)",
        re.IGNORECASE | re.DOTALL,
    )


ENCODINGS: tuple[PointEncoding, ...] = (
    PointEncoding("trkpt-lat-lon", _container("trkpt", _LAT, _LON), "trk", "trkseg"),
    PointEncoding("trkpt-lon-lat", _container("trkpt", _LON, _LAT), "trk", "trkseg"),
    PointEncoding("trkpt-lat-lon-empty", _self_closing("trkpt", _LAT, _LON), "trk", "trkseg"),
    PointEncoding("trkpt-lon-lat-empty", _self_closing("trkpt", _LON, _LAT), "trk", "trkseg"),
    PointEncoding("rtept-lat-lon", _either("rtept", _LAT, _LON), "rte"),
    PointEncoding("rtept-lon-lat", _either("rtept", _LON, _LAT), "rte"),
)

_HEADER_END = re.compile(r"<(?:trkseg|trkpt|rtept)\b", re.IGNORECASE)
_NAME = re.compile(r"<name>(.*?)</name>", re.IGNORECASE | re.DOTALL)


def parse_gpx(content: str) -> list[Track]:
    """Return the tracks found in ``content``; an empty list means no usable points.

    Tracks and segments follow the document's ``<trk>``/``<rte>`` and
    ``<trkseg>`` blocks. A document whose points sit outside such blocks
    yields a single track with a single segment.
    """
    for encoding in ENCODINGS:
        points = _extract_points(content, encoding)
        if not points:
            continue

        tracks = _split_tracks(content, encoding) or [
            Track(name=_block_name(content), segments=[points])
        ]
        logger.info(
            "Parsed %d points in %d tracks using %s encoding",
            len(points),
            len(tracks),
            encoding.name,
        )
        return tracks

    logger.info("No recognizable track or route points found")
    return []


def _split_tracks(content: str, encoding: PointEncoding) -> list[Track]:
    tracks: list[Track] = []
    for block in _blocks(content, encoding.container):
        if encoding.segment is None:
            chunks = [block]
        else:
            chunks = _blocks(block, encoding.segment) or [block]

        segments = [_extract_points(chunk, encoding) for chunk in chunks]
        segments = [points for points in segments if points]
        if segments:
            tracks.append(Track(name=_block_name(block), segments=segments))
    return tracks


def _blocks(content: str, tag: str) -> list[str]:
    pattern = re.compile(rf"<{tag}\b[^>]*>(.*?)</{tag}>", re.IGNORECASE | re.DOTALL)
    return pattern.findall(content)


def _extract_points(content: str, encoding: PointEncoding) -> list[GeoPoint]:
    points: list[GeoPoint] = []
    for match in encoding.pattern.finditer(content):
        latitude = _parse_float(match.group("lat"))
        longitude = _parse_float(match.group("lon"))
        if latitude is None or longitude is None:
            continue

        elevation = 0.0
        body = match.groupdict().get("body")
        if body:
            ele_match = _ELE.search(body)
            if ele_match:
                elevation = _parse_float(ele_match.group(1)) or 0.0

        points.append(GeoPoint(latitude=latitude, longitude=longitude, elevation=elevation))
    return points


def _parse_float(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _block_name(block: str) -> str:
    header_end = _HEADER_END.search(block)
    header = block[: header_end.start()] if header_end else block
    name_match = _NAME.search(header)
    if name_match:
        name = html.unescape(name_match.group(1)).strip()
        if name:
            return name
    return DEFAULT_TRACK_NAME

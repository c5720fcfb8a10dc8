"""Geohash encoding, decoding and neighbour lookup."""

from __future__ import annotations

from itertools import cycle

from geokit.box import Box
from geokit.constants import SRID
from geokit.geometry import Point

_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
_VALUES = {ch: i for i, ch in enumerate(_ALPHABET)}
MAX_PRECISION = 12


class _Interval:
    __slots__ = ("low", "high")

    def __init__(self, low: float, high: float) -> None:
        self.low = low
        self.high = high

    @property
    def mid(self) -> float:
        return (self.low + self.high) / 2


def geohash_encode(point: Point, precision: int, srid: SRID) -> str:
    """Geohash of ``point`` (x longitude, y latitude) with ``precision`` characters."""
    if not 0 <= precision <= MAX_PRECISION:
        raise ValueError(f"precision must be between 0 and {MAX_PRECISION}")
    lng = _Interval(-180.0, 180.0)
    lat = _Interval(-90.0, 90.0)
    axes = cycle(((lng, point.x), (lat, point.y)))
    chars = []
    for _ in range(precision):
        value = 0
        for _ in range(5):
            interval, coordinate = next(axes)
            mid = interval.mid
            if coordinate >= mid:
                value = value << 1 | 1
                interval.low = mid
            else:
                value <<= 1
                interval.high = mid
        chars.append(_ALPHABET[value])
    return "".join(chars)


def geohash_boundary(code: str, srid: SRID) -> Box:
    """The cell covered by ``code`` as a lon/lat box."""
    lng = _Interval(-180.0, 180.0)
    lat = _Interval(-90.0, 90.0)
    axes = cycle((lng, lat))
    for ch in code.lower():
        try:
            value = _VALUES[ch]
        except KeyError:
            raise ValueError(f"invalid geohash character {ch!r}") from None
        for shift in range(4, -1, -1):
            interval = next(axes)
            if value >> shift & 1:
                interval.low = interval.mid
            else:
                interval.high = interval.mid
    return Box(lng.low, lat.low, lng.high, lat.high)


def geohash_center(code: str, srid: SRID) -> Point:
    """Centre of the cell covered by ``code``."""
    box = geohash_boundary(code, srid)
    return Point((box.min_x + box.max_x) / 2, (box.min_y + box.max_y) / 2)


_DIRECTIONS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))


def _wrap_longitude(lng: float) -> float:
    return (lng + 180.0) % 360.0 - 180.0


def _clamp_latitude(lat: float) -> float:
    return max(-90.0, min(90.0, lat))


def geohash_neighbors(code: str, srid: SRID) -> list[str]:
    """The eight neighbouring cells in the order N, NE, E, SE, S, SW, W, NW."""
    box = geohash_boundary(code, srid)
    center = geohash_center(code, srid)
    lat_delta = box.max_y - box.min_y
    lng_delta = box.max_x - box.min_x
    return [
        geohash_encode(
            Point(
                _wrap_longitude(center.x + d_lng * lng_delta),
                _clamp_latitude(center.y + d_lat * lat_delta),
            ),
            len(code),
            srid,
        )
        for d_lat, d_lng in _DIRECTIONS
    ]
"""Measurements on geometries: distances, angles, areas, centroids and rotation."""

from __future__ import annotations

import math
from itertools import pairwise
from typing import Iterable, Iterator

from geokit.constants import INF, SRID
from geokit.geometry import (
    Geometry,
    LinearRing,
    LineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    coord_distance,
)
from geokit.relation import point_in_polygon
from geokit.vector import vector_between

_NAN_POINT = Point(math.nan, math.nan)


def get_azimuth(p1: Point, p2: Point, srid: SRID) -> float:
    """Initial bearing in degrees [0, 360) from ``p1`` to ``p2``; 0 unless lon/lat."""
    if srid != SRID.WGS84_GPS:
        return 0.0
    lon1 = p1.x * math.pi / 180
    lon2 = p2.x * math.pi / 180
    lat1 = p1.y * math.pi / 180
    lat2 = p2.y * math.pi / 180
    y = math.sin(lon2 - lon1) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        lon2 - lon1
    )
    bearing = math.atan2(y, x) * 180 / math.pi
    return math.fmod(bearing + 360, 360)


def angle_between(point1: Point, center: Point, point2: Point) -> float:
    """Angle in radians [0, 2π) at ``center`` from ``point1`` to ``point2``."""
    v = vector_between(point1, center)
    u = vector_between(point2, center)
    if v.length() * u.length() == 0:
        raise ValueError("some points is repeat")
    theta = math.atan2(u.y, u.x) - math.atan2(v.y, v.x)
    if theta < 0:
        theta += 2 * math.pi
    return theta


def quadrant_angle(point1: Point, point2: Point) -> float:
    """Angle of the direction from ``point1`` to ``point2`` measured from the x axis."""
    return angle_between(Point(point1.x + 0.0000001, point1.y), point1, point2)


def get_area(geometry: Geometry) -> float:
    """Area of a polygon or multipolygon; 0 for any other geometry."""
    if isinstance(geometry, Polygon):
        return abs(geometry.signed_area())
    if isinstance(geometry, MultiPolygon):
        return multi_polygon_area(geometry)
    return 0.0


def multi_polygon_area(multi_polygon: MultiPolygon) -> float:
    return sum((abs(polygon.signed_area()) for polygon in multi_polygon), 0.0)


def convexity(p1: Point, p2: Point, p3: Point) -> int:
    """Classify the vertex ``p2``: 0 convex, 1 concave, 2 straight."""
    res = math.sin(angle_between(p1, p2, p3))
    if res < 0:
        return 0
    if res > 0:
        return 1
    return 2


def euclidean_distance(p1: Point, p2: Point) -> float:
    return math.sqrt((p1.x - p2.x) * (p1.x - p2.x) + (p1.y - p2.y) * (p1.y - p2.y))


def point_distance(p1: Point, p2: Point, srid: SRID) -> float:
    """Haversine metres for lon/lat data, Euclidean distance otherwise."""
    if srid == SRID.WGS84_GPS:
        return coord_distance(p1, p2)
    return euclidean_distance(p1, p2)


def _projection(point: Point, p1: Point, p2: Point) -> tuple[float, float, float]:
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    denominator = dx * dx + dy * dy
    if denominator == 0:
        # A zero-length segment has no direction; the factor is undefined.
        return math.nan, dx, dy
    return ((point.x - p1.x) * dx + (point.y - p1.y) * dy) / denominator, dx, dy


def point_to_segment_distance(
    point: Point, p1: Point, p2: Point, srid: SRID
) -> tuple[float, Point]:
    """Distance to the segment ``p1``-``p2`` and the closest point on it."""
    u, dx, dy = _projection(point, p1, p2)
    if u < 0:
        closest = p1
    elif u > 1:
        closest = p2
    else:
        closest = Point(p1.x + u * dx, p1.y + u * dy)
    return point_distance(point, closest, srid), closest


def point_to_line_distance(
    point: Point, p1: Point, p2: Point, srid: SRID
) -> tuple[float, Point, float]:
    """Distance to the infinite line through ``p1`` and ``p2``, the foot and its factor.

    The factor is below 0 or above 1 when the foot lies beyond ``p1`` or ``p2``.
    """
    u, dx, dy = _projection(point, p1, p2)
    foot = Point(p1.x + u * dx, p1.y + u * dy)
    return point_distance(point, foot, srid), foot, u


def _closed_edges(ring: Iterable[Point] | None) -> Iterator[tuple[Point, Point]]:
    points = list(ring or [])[:-1]
    return zip(points, points[1:] + points[:1])


def _points_centroid(points: list[Point]) -> Point:
    if not points:
        return Point(0.0, 0.0)
    count = len(points)
    return Point(sum(p.x for p in points) / count, sum(p.y for p in points) / count)


def _polygon_centroid(polygon: Polygon) -> Point:
    ring = polygon.exterior_ring()
    if not ring:
        return _NAN_POINT
    cx = cy = signed = 0.0
    for a, b in _closed_edges(ring):
        cross = a.x * b.y - b.x * a.y
        cx += (a.x + b.x) * cross
        cy += (a.y + b.y) * cross
        signed += cross
    if signed == 0:
        return _NAN_POINT
    factor = 1 / (6 * signed / 2)
    return Point(cx * factor, cy * factor)


def centroid(geometry: Geometry) -> Point:
    """Centroid of a point, point set, line or polygon; (0, 0) for other kinds."""
    if isinstance(geometry, Point):
        return geometry
    if isinstance(geometry, MultiPoint):
        return _points_centroid(list(geometry))
    if isinstance(geometry, LineString):
        return linear_centroid(LinearRing.from_line(geometry))
    if isinstance(geometry, Polygon):
        return _polygon_centroid(geometry)
    return Point(0.0, 0.0)


def linear_centroid(ring: LinearRing) -> Point:
    """Centroid of the area enclosed by ``ring``; NaN coordinates if it is degenerate."""
    return _polygon_centroid(Polygon([ring]))


def point_polygon_distance(point: Point, polygon: Polygon, srid: SRID) -> float:
    """Distance to the polygon's exterior; 0 when the point is inside."""
    if point_in_polygon(point, polygon):
        return 0.0
    distance = INF
    for a, b in _closed_edges(polygon.exterior_ring()):
        segment_distance, _ = point_to_segment_distance(point, a, b, srid)
        distance = min(distance, segment_distance)
    return distance


def point_hit_line_string(
    point: Point, line: LineString, srid: SRID
) -> tuple[Point, int, float]:
    """Closest point on the line, the index of its segment and the distance."""
    distance, nearest_index, nearest = INF, 0, Point(0.0, 0.0)
    for index, (a, b) in enumerate(pairwise(line)):
        segment_distance, candidate = point_to_segment_distance(point, a, b, srid)
        if segment_distance < distance:
            distance, nearest_index, nearest = segment_distance, index, candidate
    return nearest, nearest_index, distance


def _truncate4(value: float) -> float:
    return math.trunc(value * 10000) / 10000


def rotate_cw(geometry: Geometry, center: Point, angle: float) -> Geometry | None:
    """Rotate a point or polygon clockwise by ``angle`` radians; None for other kinds.

    Coordinates of the result are truncated to four decimals.
    """
    if isinstance(geometry, Point):
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        x = (geometry.x - center.x) * cos_a + (geometry.y - center.y) * sin_a + center.x
        y = (center.x - geometry.x) * sin_a + (geometry.y - center.y) * cos_a + center.y
        return Point(_truncate4(x), _truncate4(y))
    if isinstance(geometry, Polygon):
        rotated = [rotate_cw(p, center, angle) for p in geometry.exterior_points()]
        return Polygon.from_points(*rotated)
    return None


def rotate_ccw(geometry: Geometry, center: Point, angle: float) -> Geometry | None:
    """Rotate a point or polygon counter-clockwise by ``angle`` radians."""
    return rotate_cw(geometry, center, -angle)


def _directed_hausdorff(source: LineString, target: LineString, srid: SRID) -> float:
    result = 0.0
    for p in source:
        nearest = min((point_distance(p, q, srid) for q in target), default=INF)
        if result < nearest and nearest != INF:
            result = nearest
    return result


def hausdorff_distance(line1: LineString, line2: LineString, srid: SRID) -> float:
    """Hausdorff distance between the vertices of two lines; INF if either has no length."""
    if line1.length() == 0 or line2.length() == 0:
        return INF
    return max(
        _directed_hausdorff(line1, line2, srid), _directed_hausdorff(line2, line1, srid)
    )
"""Planar geometry types: points, lines, rings, polygons and collections."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise
from typing import ClassVar

from geokit.constants import (
    COORD_PRECISION,
    EARTH_RADIUS_M,
    GeometryRelation,
    GeometryType,
)
from geokit.vector import LineSegment, segment_relation

CIRCLE_POLYGON_EDGE_COUNT = 24


class Geometry:
    """Base of every geometry; each kind names itself by ``geometry_type``."""

    __slots__ = ()
    geometry_type: ClassVar[GeometryType]


@dataclass(frozen=True)
class Point(Geometry):
    """A 2D point; for geographic data ``x`` is longitude and ``y`` latitude."""

    x: float
    y: float

    geometry_type: ClassVar[GeometryType] = GeometryType.POINT

    def buffer(self, width: float) -> Polygon | None:
        """Approximate a circle of radius ``width`` around the point."""
        if width < 0:
            return None
        points = _arc_points(self, 0.0, 2 * math.pi, width)
        return Polygon([LinearRing.from_points(*points)])

    def distance(self, other: Point) -> float:
        """Euclidean distance to ``other``."""
        return euclidean_dis(self, other)

    def equals(self, other: Point) -> bool:
        """Compare coordinates within COORD_PRECISION."""
        return (
            abs(self.x - other.x) < COORD_PRECISION
            and abs(self.y - other.y) < COORD_PRECISION
        )


def _arc_points(center: Point, start: float, end: float, radius: float) -> list[Point]:
    if radius < 0:
        return []
    gamma = 2 * math.pi / CIRCLE_POLYGON_EDGE_COUNT
    points = []
    phi = start
    while phi <= end:
        points.append(
            Point(center.x + radius * math.cos(phi), center.y + radius * math.sin(phi))
        )
        phi += gamma
    return points


def euclidean_dis(p1: Point, p2: Point) -> float:
    return math.sqrt((p1.x - p2.x) * (p1.x - p2.x) + (p1.y - p2.y) * (p1.y - p2.y))


def coord_distance(p1: Point, p2: Point) -> float:
    """Haversine distance in metres between two lon/lat points."""
    lat1 = p1.y * math.pi / 180.0
    lng1 = p1.x * math.pi / 180.0
    lat2 = p2.y * math.pi / 180.0
    lng2 = p2.x * math.pi / 180.0
    a = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lng2 - lng1) / 2) ** 2
    )
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)) * EARTH_RADIUS_M


def coord_great_circle(p1: Point, p2: Point) -> float:
    """Great-circle distance in metres by the spherical law of cosines."""
    lat1 = p1.y * math.pi / 180.0
    lng1 = p1.x * math.pi / 180.0
    lat2 = p2.y * math.pi / 180.0
    lng2 = p2.x * math.pi / 180.0
    return (
        math.acos(
            math.sin(lat1) * math.sin(lat2)
            + math.cos(lat1) * math.cos(lat2) * math.cos(lng2 - lng1)
        )
        * EARTH_RADIUS_M
    )


def destination_point(
    lat: float, lon: float, distance: float, bearing: float
) -> tuple[float, float]:
    """Travel ``distance`` metres along ``bearing`` degrees; return (lat, lon)."""
    delta = distance / EARTH_RADIUS_M
    theta = math.radians(bearing)
    phi1 = math.radians(lat)
    lambda1 = math.radians(lon)
    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(
        delta
    ) * math.cos(theta)
    phi2 = math.asin(sin_phi2)
    y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
    x = math.cos(delta) - math.sin(phi1) * math.sin(phi2)
    lambda2 = lambda1 + math.atan2(y, x)
    return math.degrees(phi2), math.fmod(math.degrees(lambda2) + 540, 360) - 180


def _path_length(points: list[Point]) -> float:
    return sum((a.distance(b) for a, b in pairwise(points)), 0.0)


class LineString(Geometry, list):
    """An ordered sequence of points."""

    geometry_type = GeometryType.LINE_STRING

    def verify(self) -> None:
        """Raise ValueError unless the line has at least two points."""
        if not self:
            raise ValueError("line has no point")
        if len(self) == 1:
            raise ValueError("line has only one point")

    def first_point(self) -> Point | None:
        return self[0] if len(self) >= 2 else None

    def end_point(self) -> Point | None:
        return self[-1] if len(self) >= 2 else None

    def get_point(self, index: int) -> Point | None:
        if index < 0:
            raise IndexError("line has no such position")
        if index > len(self) - 1:
            return None
        return self[index]

    def set_point(self, position: int, point: Point) -> None:
        """Replace the point at ``position``, or append when it is one past the end."""
        if position < 0 or len(self) < position:
            raise IndexError("line has no such position")
        if position == len(self):
            self.append(point)
        else:
            self[position] = point

    def insert_point(self, position: int, point: Point) -> None:
        if position < 0 or len(self) < position:
            raise IndexError("line has no such position")
        self.insert(position, point)

    def delete_point(self, position: int) -> None:
        if position < 0 or len(self) <= position:
            raise IndexError("line has no such position")
        del self[position]

    def length(self) -> float:
        return _path_length(self)

    def equals(self, other: LineString) -> bool:
        """Compare point by point within COORD_PRECISION."""
        return len(self) == len(other) and all(
            a.equals(b) for a, b in zip(self, other)
        )

    def to_ring(self) -> LinearRing:
        return LinearRing.from_line(self)

    def split_at(self, index: int) -> tuple[LineString, LineString]:
        """Split into two lines that share the point at ``index``."""
        return LineString(self[: index + 1]), LineString(self[index:])


class LinearRing(Geometry, list):
    """A closed line whose last point repeats the first."""

    geometry_type = GeometryType.LINE_STRING

    @classmethod
    def from_points(cls, *points: Point) -> LinearRing:
        return cls.from_line(LineString(points))

    @classmethod
    def from_line(cls, line: LineString) -> LinearRing:
        """Close ``line`` into a ring; raise ValueError if it has fewer than two points."""
        line = LineString(line)
        line.verify()
        first, last = line[0], line[-1]
        if first.equals(last):
            return cls(line)
        return cls([*line, first])

    def length(self) -> float:
        return _path_length(self)

    def to_line_string(self) -> LineString:
        return LineString(self)


class MultiPoint(Geometry, list):
    """A set of points."""

    geometry_type = GeometryType.MULTI_POINT


class MultiLineString(Geometry, list):
    """A set of line strings."""

    geometry_type = GeometryType.MULTI_LINE_STRING


class Polygon(Geometry, list):
    """An exterior ring followed by zero or more interior rings (holes)."""

    geometry_type = GeometryType.POLYGON

    @classmethod
    def from_points(cls, *points: Point) -> Polygon:
        return cls([LinearRing.from_points(*points)])

    def exterior_ring(self) -> LinearRing | None:
        return self[0] if self else None

    def set_exterior_ring(self, ring: LinearRing) -> None:
        if self:
            self[0] = ring
        else:
            self.append(ring)

    def interior_rings(self) -> list[LinearRing]:
        return list(self[1:])

    def add_interior_ring(self, ring: LinearRing) -> None:
        self.append(ring)

    def exterior_points(self) -> list[Point]:
        return list(self.exterior_ring() or [])

    def signed_area(self) -> float:
        """Shoelace area of the exterior ring; positive when counter-clockwise."""
        ring = self.exterior_ring()
        if not ring:
            return 0.0
        points = list(ring[: len(ring) - 1])
        area = 0.0
        for a, b in zip(points, points[1:] + points[:1]):
            area += a.x * b.y
            area -= a.y * b.x
        return area / 2

    def is_ccw(self) -> bool:
        return self.signed_area() > 0

    def self_intersects(self) -> bool:
        """Whether two non-adjacent edges of the exterior ring cross."""
        ring = self.exterior_ring() or []
        edges = list(pairwise(ring))
        stop = len(ring) - 2
        for i, (src0, src1) in enumerate(edges):
            for dst0, dst1 in edges[i + 1 : stop]:
                relation = segment_relation(
                    LineSegment(src0, src1), LineSegment(dst0, dst1)
                )
                if relation is GeometryRelation.INTERSECT:
                    return True
        return False

    def verify(self) -> None:
        """Raise ValueError if the polygon is not a valid lon/lat polygon."""
        ring = self.exterior_ring() or LinearRing()
        count = len(ring) - 1
        if count < 3:
            raise ValueError("polygon invaild, point less than 3")
        for point in ring[:count]:
            if point.x > 90.0 or point.x < -90 or point.y > 180.0 or point.y < -180.0:
                raise ValueError("lnglat invaild, lat[-90,90] lng[-180,180]")
        if abs(self.signed_area()) < 0.0000000001:
            raise ValueError("polygon invaild, area equal 0")
        if self.self_intersects():
            raise ValueError("polygon self-intersect")


class MultiPolygon(Geometry, list):
    """A set of polygons."""

    geometry_type = GeometryType.MULTI_POLYGON

    def add_polygon(self, polygon: Polygon) -> None:
        self.append(polygon)


class Collection(Geometry, list):
    """A heterogeneous collection of geometries."""

    geometry_type = GeometryType.COLLECTION
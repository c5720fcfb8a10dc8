"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable

from geokit.constants import INF
from geokit.geometry import (
    Geometry,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


@dataclass(frozen=True)
class Box:
    """A rectangle given by its minimum and maximum corners."""

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @classmethod
    def around(cls, point: Point, length_x: float, length_y: float) -> Box:
        """A box reaching ``length_x`` and ``length_y`` each way from ``point``."""
        return cls(
            point.x - length_x, point.y - length_y, point.x + length_x, point.y + length_y
        )

    def contains_point(self, point: Point) -> bool:
        """Whether ``point`` lies inside the box, boundary included."""
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def intersects(self, other: Box | None) -> bool:
        if other is None:
            return False
        return not (
            self.max_x < other.min_x
            or self.min_x > other.max_x
            or self.min_y > other.max_y
            or self.max_y < other.min_y
        )

    def union(self, other: Box) -> Box:
        return Box(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def size(self) -> float:
        """Area of the box."""
        return (self.max_x - self.min_x) * (self.max_y - self.min_y)

    def contains(self, other: Box) -> bool:
        """Whether ``other`` lies entirely within this box."""
        if self.min_x > other.min_x or other.max_x > self.max_x:
            return False
        if self.min_y > other.min_y or other.max_y > self.max_y:
            return False
        return True


def box_to_geometry(box: Box) -> Geometry:
    """Turn a box into a point, a line or a polygon, whichever it degenerates to."""
    p1 = Point(box.min_x, box.min_y)
    p2 = Point(box.min_x, box.max_y)
    p3 = Point(box.max_x, box.max_y)
    p4 = Point(box.max_x, box.min_y)
    if p1.equals(p3):
        return p1
    if p1.equals(p2):
        return LineString([p1, p3])
    if p2.equals(p3):
        return LineString([p1, p2])
    return Polygon([LinearRing.from_points(p1, p2, p3, p4)])


def _points_box(points: Iterable[Point]) -> Box:
    min_x, min_y, max_x, max_y = INF, INF, -INF, -INF
    for p in points:
        min_x = min(min_x, p.x)
        min_y = min(min_y, p.y)
        max_x = max(max_x, p.x)
        max_y = max(max_y, p.y)
    return Box(min_x, min_y, max_x, max_y)


def bounding_box(geometry: Geometry) -> Box:
    """Smallest box around the geometry; an empty Box for unsupported kinds."""
    if isinstance(geometry, Point):
        return _points_box([geometry])
    if isinstance(geometry, (MultiPoint, LineString)):
        return _points_box(geometry)
    if isinstance(geometry, MultiLineString):
        return _points_box(p for line in geometry for p in line)
    if isinstance(geometry, Polygon):
        return _points_box(geometry.exterior_points())
    if isinstance(geometry, MultiPolygon):
        return _points_box(p for poly in geometry for ring in poly for p in ring)
    return Box()


def box_union(*boxes: Box) -> Box:
    """Union of all boxes; an empty Box when none are given."""
    if not boxes:
        return Box()
    return reduce(Box.union, boxes)
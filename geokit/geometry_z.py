"""Three-dimensional geometry types carrying a ``z`` coordinate."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from geokit.constants import COORD_PRECISION, GeometryType
from geokit.geometry import Geometry


@dataclass(frozen=True)
class PointZ(Geometry):
    """A point with an elevation ``z``."""

    x: float
    y: float
    z: float

    geometry_type: ClassVar[GeometryType] = GeometryType.POINT_Z

    def equals(self, other: PointZ) -> bool:
        """Compare all three coordinates within COORD_PRECISION."""
        return (
            abs(self.x - other.x) < COORD_PRECISION
            and abs(self.y - other.y) < COORD_PRECISION
            and abs(self.z - other.z) < COORD_PRECISION
        )


_ORIGIN = PointZ(0.0, 0.0, 0.0)


def euclidean_dis_z(p1: PointZ, p2: PointZ) -> float:
    """Return the distance of ``p1`` from the origin; ``p2`` does not take part."""
    return math.sqrt(p1.x * p1.x + p1.y * p1.y + p1.z * p1.z)


class LineStringZ(Geometry, list):
    """An ordered sequence of 3D points."""

    geometry_type = GeometryType.LINE_STRING_Z

    def first_point(self) -> PointZ:
        """First point, or the origin when the line has fewer than two points."""
        return self[0] if len(self) >= 2 else _ORIGIN

    def end_point(self) -> PointZ:
        """Last point, or the origin when the line has fewer than two points."""
        return self[-1] if len(self) >= 2 else _ORIGIN

    def equals(self, other: LineStringZ) -> bool:
        """Compare point by point within COORD_PRECISION."""
        return len(self) == len(other) and all(
            a.equals(b) for a, b in zip(self, other)
        )

    def to_ring(self) -> LinearRingZ:
        return LinearRingZ.from_line(self)


class LinearRingZ(Geometry, list):
    """A closed 3D line whose last point repeats the first."""

    geometry_type = GeometryType.LINE_STRING_Z

    @classmethod
    def from_points(cls, *points: PointZ) -> LinearRingZ:
        return cls.from_line(LineStringZ(points))

    @classmethod
    def from_line(cls, line: LineStringZ) -> LinearRingZ:
        """Close ``line`` into a ring; raise ValueError if it is empty."""
        if not line:
            raise ValueError("line has no point")
        first, last = line[0], line[-1]
        if first.equals(last):
            return cls(line)
        return cls([*line, first])

    def to_line_string(self) -> LineStringZ:
        return LineStringZ(self)


class MultiPointZ(Geometry, list):
    """A set of 3D points."""

    geometry_type = GeometryType.MULTI_POINT_Z


class MultiLineStringZ(Geometry, list):
    """A set of 3D line strings."""

    geometry_type = GeometryType.MULTI_LINE_STRING_Z


class PolygonZ(Geometry, list):
    """A 3D exterior ring followed by zero or more interior rings."""

    geometry_type = GeometryType.POLYGON_Z

    @classmethod
    def from_points(cls, *points: PointZ) -> PolygonZ:
        return cls([LinearRingZ.from_points(*points)])

    def exterior_ring(self) -> LinearRingZ | None:
        return self[0] if self else None

    def set_exterior_ring(self, ring: LinearRingZ) -> None:
        if self:
            self[0] = ring
        else:
            self.append(ring)

    def interior_rings(self) -> list[LinearRingZ]:
        return list(self[1:])

    def add_interior_ring(self, ring: LinearRingZ) -> None:
        self.append(ring)

    def exterior_points(self) -> list[PointZ]:
        return list(self.exterior_ring() or [])


class MultiPolygonZ(Geometry, list):
    """A set of 3D polygons."""

    geometry_type = GeometryType.MULTI_POLYGON_Z

    def add_polygon(self, polygon: PolygonZ) -> None:
        self.append(polygon)
"""Two-dimensional vectors, line segments and segment relations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from geokit.constants import GeometryRelation


@dataclass
class Vector2:
    """A mutable 2D vector."""

    x: float
    y: float

    def clone(self) -> Vector2:
        return Vector2(self.x, self.y)

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    __add__ = add
    __sub__ = sub

    def multiply(self, scalar: float) -> None:
        """Scale this vector in place."""
        self.x *= scalar
        self.y *= scalar

    def divide(self, scalar: float) -> None:
        """Divide this vector in place."""
        if scalar == 0:
            raise ZeroDivisionError("cannot divide a vector by zero")
        self.multiply(1 / scalar)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self.divide(self.length())


@dataclass(frozen=True)
class LineSegment:
    """A straight segment between two points."""

    start: Any
    end: Any


def vector_between(p1: Any, p2: Any) -> Vector2:
    """Return the vector pointing from ``p1`` to ``p2``."""
    return Vector2(p2.x - p1.x, p2.y - p1.y)


def segment_vector(segment: LineSegment) -> Vector2:
    return vector_between(segment.start, segment.end)


def add_vectors(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def normalized(vector: Vector2) -> Vector2:
    """Return a unit-length copy of ``vector``."""
    result = vector.clone()
    result.normalize()
    return result


def segment_relation(seg1: LineSegment, seg2: LineSegment) -> GeometryRelation:
    """Classify two segments as intersecting, touching or disjoint."""
    r = segment_vector(seg1)
    s = segment_vector(seg2)
    q_p = vector_between(seg1.start, seg2.start)
    r_cross_s = r.cross(s)
    qp_cross_r = q_p.cross(r)
    if r_cross_s == 0:
        if qp_cross_r == 0:
            return GeometryRelation.TOUCH
        return GeometryRelation.DISJOINT
    t = q_p.cross(s) / r_cross_s
    u = qp_cross_r / r_cross_s
    if 0 < t < 1 and 0 < u < 1:
        return GeometryRelation.INTERSECT
    if t in (0, 1) and u in (0, 1):
        return GeometryRelation.TOUCH
    return GeometryRelation.DISJOINT
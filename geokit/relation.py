"""Point-in-polygon tests and relations between lines and polygons."""

from __future__ import annotations

from itertools import pairwise

from geokit.box import bounding_box
from geokit.constants import GeometryRelation, sign_with_tolerance
from geokit.geometry import LinearRing, LineString, Point, Polygon
from geokit.vector import LineSegment, segment_relation

_REPLACEABLE = (
    GeometryRelation.UNKNOWN,
    GeometryRelation.CONTAIN,
    GeometryRelation.DISJOINT,
)


def is_point_on_segment(p1: Point, p2: Point, point: Point) -> bool:
    """Whether ``point`` lies on the segment from ``p1`` to ``p2``."""
    collinear = (point.x - p1.x) * (p2.y - p1.y) == (p2.x - p1.x) * (point.y - p1.y)
    return collinear and bounding_box(LineString([p1, p2])).contains_point(point)


def point_in_polygon(point: Point, polygon: Polygon) -> bool:
    """Ray-casting test on the exterior ring; points on the boundary count as inside."""
    ring = polygon.exterior_ring() or []
    inside = False
    for p1, p2 in pairwise(ring):
        if is_point_on_segment(p1, p2, point):
            return True
        if (sign_with_tolerance(p1.y - point.y) > 0) != (
            sign_with_tolerance(p2.y - point.y) > 0
        ) and sign_with_tolerance(
            point.x - (point.y - p1.y) * (p1.x - p2.x) / (p1.y - p2.y) - p1.x
        ) < 0:
            inside = not inside
    return inside


def is_point_on_line(point: Point, line: LineString) -> bool:
    """Whether ``point`` lies on the line or on the segment joining its ends."""
    segments = list(pairwise(line))
    if line:
        segments.append((line[0], line[-1]))
    return any(is_point_on_segment(a, b, point) for a, b in segments)


def segment_polygon_relation(segment: LineSegment, polygon: Polygon) -> GeometryRelation:
    """Relation of a segment to a polygon's exterior."""
    ring = polygon.exterior_ring() or []
    on_boundary = False
    for start, end in list(pairwise(ring))[: len(ring) - 2]:
        relation = segment_relation(LineSegment(start, end), segment)
        if relation is GeometryRelation.INTERSECT:
            return GeometryRelation.INTERSECT
        if relation is GeometryRelation.TOUCH:
            on_boundary = True
    start_in = point_in_polygon(segment.start, polygon)
    end_in = point_in_polygon(segment.end, polygon)
    if start_in and end_in:
        return GeometryRelation.COVER if on_boundary else GeometryRelation.CONTAIN
    if not start_in and not end_in:
        return GeometryRelation.TOUCH if on_boundary else GeometryRelation.DISJOINT
    return GeometryRelation.UNKNOWN


def _segments_relation(segments, polygon: Polygon) -> GeometryRelation:
    current = GeometryRelation.UNKNOWN
    for start, end in segments:
        relation = segment_polygon_relation(LineSegment(start, end), polygon)
        if relation is GeometryRelation.INTERSECT:
            return GeometryRelation.INTERSECT
        if current in _REPLACEABLE:
            current = relation
    return current


def line_polygon_relation(line: LineString, polygon: Polygon) -> GeometryRelation:
    """Relation of a line string to a polygon."""
    return _segments_relation(pairwise(line), polygon)


def ring_polygon_relation(ring: LinearRing, polygon: Polygon) -> GeometryRelation:
    """Relation of a ring to a polygon, leaving out the ring's closing segment."""
    ring = ring or []
    return _segments_relation(list(pairwise(ring))[: len(ring) - 2], polygon)


def polygon_relation(poly1: Polygon, poly2: Polygon) -> GeometryRelation:
    """Relation of ``poly1``'s exterior ring to ``poly2``."""
    return ring_polygon_relation(poly1.exterior_ring(), poly2)


def line_relation(line1: LineString, line2: LineString) -> GeometryRelation:
    """INTERSECT if any segments of the two lines meet, otherwise DISJOINT."""
    for a1, a2 in pairwise(line1):
        for b1, b2 in pairwise(line2):
            relation = segment_relation(LineSegment(a1, a2), LineSegment(b1, b2))
            if relation is not GeometryRelation.DISJOINT:
                return GeometryRelation.INTERSECT
    return GeometryRelation.DISJOINT
"""Minimum-area bounding rectangle by rotating calipers over the convex hull."""

from __future__ import annotations

import math
import sys
from itertools import pairwise

from geokit.box import bounding_box, box_to_geometry
from geokit.calculation import centroid, get_area, rotate_ccw, rotate_cw
from geokit.convexhull import _sort_by_angle, convex_hull
from geokit.geometry import (
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def _coordinates(geometry: Geometry) -> list[Point]:
    if isinstance(geometry, (MultiPoint, LineString)):
        return list(geometry)
    if isinstance(geometry, MultiLineString):
        return [p for line in geometry for p in line]
    if isinstance(geometry, Polygon):
        return geometry.exterior_points()
    if isinstance(geometry, MultiPolygon):
        return [p for polygon in geometry for p in polygon.exterior_points()]
    return []


def mbr(geometry: Geometry) -> Polygon | None:
    """Smallest-area rectangle enclosing the geometry.

    A point yields an empty polygon; None is returned when the hull is
    degenerate or the rectangle collapses to a line.
    """
    if isinstance(geometry, Point):
        return Polygon()
    coords = _coordinates(geometry)
    hull = convex_hull(*coords)
    if hull is None:
        return None
    center = centroid(hull)
    if math.isnan(center.x) or math.isnan(center.y):
        return None
    min_area = sys.float_info.max
    min_angle = 0.0
    best = None
    for a, b in pairwise(_sort_by_angle(coords)):
        angle = math.atan2(b.y - a.y, b.x - a.x)
        rect = box_to_geometry(bounding_box(rotate_cw(hull, center, angle)))
        area = get_area(rect)
        if area < min_area:
            min_area, best, min_angle = area, rect, angle
    result = rotate_ccw(best, center, min_angle)
    if not isinstance(result, Polygon):
        return None
    return result
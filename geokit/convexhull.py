"""Convex hull of a point set by Graham scan."""

from __future__ import annotations

from functools import cmp_to_key

from geokit.geometry import Point, Polygon


def area2(a: Point, b: Point, c: Point) -> float:
    """Twice the signed area of triangle ``abc``; positive when counter-clockwise."""
    return (b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y)


def _is_left(p0: Point, p1: Point, p2: Point) -> bool:
    return area2(p0, p1, p2) >= 0


def _lowest_first(points: list[Point]) -> list[Point]:
    """Move the lowest point (rightmost on ties) to the front."""
    m = 0
    for i, p in enumerate(points):
        if p.y < points[m].y or (p.y == points[m].y and p.x > points[m].x):
            m = i
    points = list(points)
    points[0], points[m] = points[m], points[0]
    return points


def _sort_by_angle(points: list[Point]) -> list[Point]:
    """Order points around the lowest one by polar angle, nearer first on ties."""
    if not points:
        return []
    points = _lowest_first(points)
    pivot = points[0]

    def less(a: Point, b: Point) -> bool:
        area = area2(pivot, a, b)
        if area == 0:
            dx = abs(a.x - pivot.x) - abs(b.x - pivot.x)
            dy = abs(a.y - pivot.y) - abs(b.y - pivot.y)
            return dx < 0 or dy < 0
        return area > 0

    def compare(a: Point, b: Point) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    return [pivot, *sorted(points[1:], key=cmp_to_key(compare))]


def convex_hull(*points: Point) -> Polygon | None:
    """Convex hull of the points as a polygon, or None if fewer than three remain."""
    if len(points) < 3:
        return None
    ordered = _sort_by_angle(list(points))
    stack = ordered[:2]
    remaining = iter(ordered[2:])
    current = next(remaining, None)
    while current is not None:
        if len(stack) < 2 or _is_left(stack[-2], stack[-1], current):
            stack.append(current)
            current = next(remaining, None)
        else:
            stack.pop()
    if len(stack) < 3:
        return None
    return Polygon.from_points(*stack)
import pytest

from geokit.box import Box, bounding_box, box_to_geometry, box_union
from geokit.constants import INF
from geokit.geometry import (
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def test_around():
    assert Box.around(Point(2, 2), 10, 10) == Box(-8, -8, 12, 12)


def test_contains_point_includes_boundary():
    box = Box(0, 0, 4, 4)
    assert box.contains_point(Point(0, 0))
    assert box.contains_point(Point(4, 2))
    assert box.contains_point(Point(1, 1))
    assert not box.contains_point(Point(5, 1))


def test_intersects():
    a = Box(0, 0, 2, 2)
    assert a.intersects(Box(1, 1, 3, 3))
    assert a.intersects(Box(2, 2, 3, 3))
    assert not a.intersects(Box(3, 3, 4, 4))
    assert not a.intersects(None)


def test_union_contains_both():
    a = Box(0, 0, 2, 2)
    b = Box(1, -1, 5, 1)
    u = a.union(b)
    assert u.contains(a)
    assert u.contains(b)
    assert u == Box(0, -1, 5, 2)


def test_size():
    assert Box(0, 0, 2, 3).size() == 6


def test_contains():
    outer = Box(0, 0, 10, 10)
    assert outer.contains(Box(1, 1, 2, 2))
    assert outer.contains(outer)
    assert not outer.contains(Box(5, 5, 11, 6))


def test_box_to_geometry_point():
    assert box_to_geometry(Box(1, 1, 1, 1)) == Point(1, 1)


def test_box_to_geometry_horizontal_line():
    geom = box_to_geometry(Box(0, 1, 3, 1))
    assert isinstance(geom, LineString)
    assert list(geom) == [Point(0, 1), Point(3, 1)]


def test_box_to_geometry_vertical_line():
    geom = box_to_geometry(Box(2, 0, 2, 5))
    assert isinstance(geom, LineString)
    assert list(geom) == [Point(2, 0), Point(2, 5)]


def test_box_to_geometry_polygon_round_trip():
    box = Box(0, 0, 2, 2)
    geom = box_to_geometry(box)
    assert isinstance(geom, Polygon)
    assert geom.exterior_points() == [
        Point(0, 0),
        Point(0, 2),
        Point(2, 2),
        Point(2, 0),
        Point(0, 0),
    ]
    assert bounding_box(geom) == box


def test_bounding_box_point():
    assert bounding_box(Point(3, 4)) == Box(3, 4, 3, 4)


def test_bounding_box_line():
    line = LineString([Point(0, 0), Point(1, 2), Point(3, 1)])
    assert bounding_box(line) == Box(0, 0, 3, 2)


def test_bounding_box_multi_point():
    mp = MultiPoint([Point(-1, 5), Point(2, -3)])
    assert bounding_box(mp) == Box(-1, -3, 2, 5)


def test_bounding_box_multi_line():
    ml = MultiLineString(
        [LineString([Point(0, 0), Point(1, 1)]), LineString([Point(-2, 3), Point(4, 0)])]
    )
    assert bounding_box(ml) == Box(-2, 0, 4, 3)


def test_bounding_box_multi_polygon():
    p1 = Polygon.from_points(Point(0, 0), Point(1, 1), Point(2, 0))
    p2 = Polygon.from_points(Point(5, 5), Point(6, 7), Point(7, 5))
    assert bounding_box(MultiPolygon([p1, p2])) == Box(0, 0, 7, 7)


def test_bounding_box_empty_points():
    assert bounding_box(MultiPoint()) == Box(INF, INF, -INF, -INF)


def test_bounding_box_unsupported_is_empty_box():
    ring = LinearRing.from_points(Point(0, 0), Point(1, 1), Point(2, 0))
    assert bounding_box(ring) == Box()


def test_box_union_empty():
    assert box_union() == Box()


@pytest.mark.parametrize("count", [1, 2, 3])
def test_box_union_contains_all(count):
    boxes = [Box(i, -i, i + 1, i + 2) for i in range(count)]
    u = box_union(*boxes)
    assert all(u.contains(b) for b in boxes)
    assert u == Box(0, -(count - 1), count, count + 1)
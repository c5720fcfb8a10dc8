import math

import pytest

from geokit.constants import GeometryRelation
from geokit.geometry import Point
from geokit.vector import (
    LineSegment,
    Vector2,
    add_vectors,
    normalized,
    segment_relation,
    segment_vector,
    vector_between,
)


def test_add_then_sub_round_trip():
    a = Vector2(1.5, -2.0)
    b = Vector2(4.0, 0.25)
    assert a.add(b).sub(b) == a
    assert (a + b) - b == a


def test_add_vectors_matches_method():
    a = Vector2(1.0, 2.0)
    b = Vector2(-3.0, 5.0)
    assert add_vectors(a, b) == a.add(b)
    assert add_vectors(a, b) == add_vectors(b, a)


def test_clone_is_independent():
    v = Vector2(1.0, 2.0)
    c = v.clone()
    c.multiply(2)
    assert v == Vector2(1.0, 2.0)
    assert c == Vector2(2.0, 4.0)


def test_multiply_then_divide_round_trip():
    v = Vector2(3.0, -8.0)
    v.multiply(4)
    v.divide(4)
    assert v == Vector2(3.0, -8.0)


def test_divide_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vector2(1.0, 1.0).divide(0)


def test_normalize_zero_vector_raises():
    with pytest.raises(ZeroDivisionError):
        Vector2(0.0, 0.0).normalize()


def test_cross_is_antisymmetric():
    a = Vector2(2.0, 3.0)
    b = Vector2(-1.0, 7.0)
    assert a.cross(b) == -b.cross(a)
    assert a.cross(a) == 0


def test_dot_of_perpendicular_is_zero():
    a = Vector2(2.0, 3.0)
    b = Vector2(-3.0, 2.0)
    assert a.dot(b) == 0
    assert a.dot(a) == a.length_sq()


def test_length():
    assert Vector2(3.0, 4.0).length() == 5.0
    v = Vector2(1.7, -2.9)
    assert v.length() ** 2 == pytest.approx(v.length_sq())


def test_normalize_in_place_and_copy():
    v = Vector2(6.0, 2.0)
    unit = normalized(v)
    assert unit.length() == pytest.approx(1.0)
    assert v == Vector2(6.0, 2.0)
    assert unit.cross(v) == pytest.approx(0.0)
    v.normalize()
    assert v.length() == pytest.approx(1.0)


def test_vector_between_points():
    p1 = Point(1.0, 2.0)
    p2 = Point(4.5, -1.0)
    v = vector_between(p1, p2)
    assert Point(p1.x + v.x, p1.y + v.y) == p2


def test_segment_vector():
    seg = LineSegment(Point(1.0, 1.0), Point(3.0, 2.0))
    assert segment_vector(seg) == vector_between(seg.start, seg.end)


@pytest.mark.parametrize(
    "seg1, seg2, expected",
    [
        (((0, 0), (2, 2)), ((0, 2), (2, 0)), GeometryRelation.INTERSECT),
        (((0, 0), (1, 1)), ((1, 1), (2, 0)), GeometryRelation.TOUCH),
        (((0, 0), (1, 0)), ((0, 1), (1, 1)), GeometryRelation.DISJOINT),
        (((0, 0), (2, 0)), ((1, 0), (3, 0)), GeometryRelation.TOUCH),
        (((0, 0), (1, 0)), ((5, 0), (6, 0)), GeometryRelation.TOUCH),
        (((0, 0), (1, 0)), ((5, 1), (5, 2)), GeometryRelation.DISJOINT),
    ],
)
def test_segment_relation(seg1, seg2, expected):
    s1 = LineSegment(Point(*seg1[0]), Point(*seg1[1]))
    s2 = LineSegment(Point(*seg2[0]), Point(*seg2[1]))
    assert segment_relation(s1, s2) is expected


def test_segment_relation_is_symmetric_for_crossing():
    s1 = LineSegment(Point(0, 0), Point(4, 4))
    s2 = LineSegment(Point(4, 0), Point(0, 2))
    assert segment_relation(s1, s2) is segment_relation(s2, s1)
    assert not math.isnan(segment_vector(s1).cross(segment_vector(s2)))
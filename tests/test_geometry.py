import pytest

from geokit.constants import COORD_PRECISION, GeometryType
from geokit.geometry import (
    Collection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    coord_distance,
    coord_great_circle,
    destination_point,
    euclidean_dis,
)


def square(x0=0.0, y0=0.0, size=1.0):
    return Polygon.from_points(
        Point(x0, y0), Point(x0 + size, y0), Point(x0 + size, y0 + size), Point(x0, y0 + size)
    )


def test_geometry_type_names():
    geoms = [
        Point(0, 0),
        MultiPoint(),
        LineString(),
        MultiLineString(),
        Polygon(),
        MultiPolygon(),
        Collection(),
    ]
    assert [g.geometry_type.value for g in geoms] == [
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    ]
    assert Point(0, 0).geometry_type is GeometryType.POINT


def test_point_distance():
    a, b = Point(0.0, 0.0), Point(3.0, 4.0)
    assert a.distance(b) == 5.0
    assert a.distance(b) == b.distance(a) == euclidean_dis(a, b)


def test_point_equals_tolerance():
    p = Point(1.0, 1.0)
    assert p.equals(Point(1.0 + COORD_PRECISION / 10, 1.0))
    assert not p.equals(Point(1.0 + COORD_PRECISION * 10, 1.0))
    assert not p.equals(Point(1.0, 1.0 + COORD_PRECISION * 10))


def test_buffer_negative_width():
    assert Point(0, 0).buffer(-1) is None


def test_buffer_circle():
    center = Point(2.0, 3.0)
    poly = center.buffer(5)
    ring = poly.exterior_ring()
    assert len(poly) == 1
    assert ring[0].equals(ring[-1])
    assert len(ring) > 20
    for point in ring:
        assert center.distance(point) == pytest.approx(5)


def test_coord_distance_properties():
    a, b = Point(112.95, 22.95), Point(113.05, 23.05)
    assert coord_distance(a, a) == 0
    assert coord_distance(a, b) == pytest.approx(coord_distance(b, a))
    assert coord_distance(a, b) == pytest.approx(coord_great_circle(a, b), rel=1e-6)


def test_destination_point_round_trip():
    lat, lon = destination_point(30.0, 120.0, 10000.0, 45.0)
    assert coord_distance(Point(120.0, 30.0), Point(lon, lat)) == pytest.approx(10000.0, rel=1e-6)
    assert lat > 30.0 and lon > 120.0


def test_destination_point_zero_distance():
    lat, lon = destination_point(30.0, 120.0, 0.0, 90.0)
    assert lat == pytest.approx(30.0)
    assert lon == pytest.approx(120.0)


def test_line_verify_errors():
    with pytest.raises(ValueError, match="no point"):
        LineString().verify()
    with pytest.raises(ValueError, match="only one point"):
        LineString([Point(0, 0)]).verify()


def test_first_and_end_point():
    assert LineString([Point(0, 0)]).first_point() is None
    assert LineString([Point(0, 0)]).end_point() is None
    line = LineString([Point(0, 0), Point(1, 1), Point(2, 0)])
    assert line.first_point() == Point(0, 0)
    assert line.end_point() == Point(2, 0)


def test_get_point():
    line = LineString([Point(0, 0), Point(1, 1)])
    assert line.get_point(1) == Point(1, 1)
    assert line.get_point(2) is None
    with pytest.raises(IndexError):
        line.get_point(-1)


def test_set_point():
    line = LineString([Point(0, 0), Point(1, 1)])
    line.set_point(0, Point(5, 5))
    line.set_point(2, Point(7, 7))
    assert line == [Point(5, 5), Point(1, 1), Point(7, 7)]
    with pytest.raises(IndexError):
        line.set_point(5, Point(0, 0))


def test_insert_and_delete_point():
    line = LineString([Point(0, 0), Point(2, 2)])
    line.insert_point(1, Point(1, 1))
    assert line == [Point(0, 0), Point(1, 1), Point(2, 2)]
    line.delete_point(1)
    assert line == [Point(0, 0), Point(2, 2)]
    with pytest.raises(IndexError):
        line.delete_point(2)
    with pytest.raises(IndexError):
        line.insert_point(3, Point(9, 9))


def test_line_length_is_sum_of_segments():
    pts = [Point(0, 0), Point(1, 2), Point(2, 2), Point(2, 5)]
    line = LineString(pts)
    assert line.length() == pytest.approx(
        pts[0].distance(pts[1]) + pts[1].distance(pts[2]) + pts[2].distance(pts[3])
    )


def test_line_equals():
    a = LineString([Point(0, 0), Point(1, 1)])
    b = LineString([Point(0, 0), Point(1, 1 + COORD_PRECISION / 10)])
    assert a.equals(b)
    assert not a.equals(LineString([Point(0, 0), Point(1, 2)]))
    assert not a.equals(LineString([Point(0, 0)]))


def test_line_reverse_twice_is_identity():
    line = LineString([Point(0, 0), Point(1, 2), Point(3, 4)])
    original = LineString(line)
    line.reverse()
    assert line[0] == original[-1]
    line.reverse()
    assert line == original


def test_split_at_shares_point():
    line = LineString([Point(0, 0), Point(1, 1), Point(2, 0), Point(3, 1)])
    first, second = line.split_at(1)
    assert first[-1] == second[0] == line[1]
    assert LineString(first + second[1:]) == line
    assert isinstance(first, LineString) and isinstance(second, LineString)


def test_ring_closes_open_line():
    line = LineString([Point(0, 0), Point(1, 1), Point(2, 0)])
    ring = line.to_ring()
    assert len(ring) == len(line) + 1
    assert ring[0] == ring[-1]
    assert ring.to_line_string()[: len(line)] == line


def test_ring_keeps_closed_line():
    ring = LinearRing.from_points(Point(0, 0), Point(1, 1), Point(2, 0), Point(0, 0))
    assert len(ring) == 4
    with pytest.raises(ValueError):
        LinearRing.from_points(Point(0, 0))


def test_ring_perimeter():
    assert square().exterior_ring().length() == 4.0


def test_polygon_rings():
    poly = square()
    hole = LinearRing.from_points(Point(0.2, 0.2), Point(0.4, 0.2), Point(0.4, 0.4))
    assert poly.interior_rings() == []
    poly.add_interior_ring(hole)
    assert poly.interior_rings() == [hole]
    assert poly.exterior_points() == list(poly.exterior_ring())
    new_ring = square(5, 5).exterior_ring()
    poly.set_exterior_ring(new_ring)
    assert poly.exterior_ring() == new_ring
    empty = Polygon()
    assert empty.exterior_ring() is None
    assert empty.exterior_points() == []
    empty.set_exterior_ring(new_ring)
    assert empty.exterior_ring() == new_ring


def test_signed_area_and_orientation():
    poly = square()
    reversed_poly = Polygon.from_points(*reversed(poly.exterior_points()))
    assert poly.signed_area() == 1.0
    assert reversed_poly.signed_area() == -poly.signed_area()
    assert poly.is_ccw()
    assert not reversed_poly.is_ccw()
    assert Polygon().signed_area() == 0


def test_self_intersects():
    bowtie = Polygon.from_points(Point(0, 0), Point(4, 4), Point(4, 0), Point(0, 2))
    assert bowtie.self_intersects()
    assert not square().self_intersects()


def test_polygon_verify_errors():
    with pytest.raises(ValueError, match="less than 3"):
        Polygon.from_points(Point(0, 0), Point(1, 1)).verify()
    with pytest.raises(ValueError, match="lnglat"):
        square(100, 0).verify()
    with pytest.raises(ValueError, match="area"):
        Polygon.from_points(Point(0, 0), Point(1, 1), Point(2, 2)).verify()
    with pytest.raises(ValueError, match="self-intersect"):
        Polygon.from_points(Point(0, 0), Point(4, 4), Point(4, 0), Point(0, 2)).verify()
    with pytest.raises(ValueError):
        Polygon().verify()


def test_multi_polygon_add():
    multi = MultiPolygon()
    multi.add_polygon(square())
    multi.add_polygon(square(3, 3))
    assert len(multi) == 2
    assert multi[1].exterior_ring()[0] == Point(3, 3)
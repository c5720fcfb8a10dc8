import math

import pytest

from geokit.calculation import (
    angle_between,
    centroid,
    convexity,
    euclidean_distance,
    get_area,
    get_azimuth,
    hausdorff_distance,
    linear_centroid,
    multi_polygon_area,
    point_distance,
    point_hit_line_string,
    point_polygon_distance,
    point_to_line_distance,
    point_to_segment_distance,
    quadrant_angle,
    rotate_ccw,
    rotate_cw,
)
from geokit.constants import INF, SRID
from geokit.geometry import (
    LinearRing,
    LineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    coord_distance,
)


def _triangle():
    return Polygon([LinearRing.from_line(LineString([Point(0, 0), Point(1, 1), Point(2, 0)]))])


def _square(x0=0.0, y0=0.0, size=2.0):
    return Polygon.from_points(
        Point(x0, y0), Point(x0 + size, y0), Point(x0 + size, y0 + size), Point(x0, y0 + size)
    )


def test_azimuth_from_source_points_is_north_east():
    p1 = Point(112.95067837273719, 22.956205800445613)
    p2 = Point(113.0495284775218, 23.045253006300054)
    azimuth = get_azimuth(p1, p2, SRID.WGS84_GPS)
    assert 0 < azimuth < 90


def test_azimuth_cardinal_directions():
    assert get_azimuth(Point(0, 0), Point(0, 1), SRID.WGS84_GPS) == pytest.approx(0.0)
    assert get_azimuth(Point(0, 0), Point(1, 0), SRID.WGS84_GPS) == pytest.approx(90.0)
    assert get_azimuth(Point(0, 0), Point(0, -1), SRID.WGS84_GPS) == pytest.approx(180.0)


def test_azimuth_is_zero_for_projected_srid():
    assert get_azimuth(Point(0, 0), Point(1, 1), SRID.WGS84_PSEUDO_MERCATOR) == 0


def test_centroid_of_triangle():
    c = centroid(_triangle())
    assert c.x == pytest.approx(1.0)
    assert c.y == pytest.approx(1 / 3)


def test_centroid_of_line_matches_closed_ring():
    line = LineString([Point(0, 0), Point(1, 1), Point(2, 0)])
    assert centroid(line) == linear_centroid(LinearRing.from_line(line))


def test_centroid_of_points_and_multipoint():
    assert centroid(Point(3, 4)) == Point(3, 4)
    assert centroid(MultiPoint([Point(0, 0), Point(2, 4)])) == Point(1, 2)
    assert centroid(MultiPoint()) == Point(0, 0)


def test_centroid_of_degenerate_polygon_is_nan():
    flat = Polygon.from_points(Point(0, 0), Point(1, 0), Point(2, 0))
    c = centroid(flat)
    assert math.isnan(c.x) is True
    assert math.isnan(c.y) is True


def test_rotate_point_ccw_by_45_degrees():
    rotated = rotate_ccw(Point(1, 1), Point(0, 0), 45.0 / 180.0 * math.pi)
    assert rotated.x == 0
    assert rotated.y == 1.4142


def test_rotate_polygon_ccw_keeps_ring_closed():
    triangle = Polygon.from_points(Point(0, 0), Point(1, 1), Point(2, 0))
    rotated = rotate_ccw(triangle, Point(0, 0), 45.0 / 180.0 * math.pi)
    ring = rotated.exterior_ring()
    assert isinstance(rotated, Polygon)
    assert len(ring) == 4
    assert ring[0] == Point(0, 0)
    assert ring[0] == ring[-1]


def test_rotate_cw_undoes_rotate_ccw():
    point = Point(3, 0)
    there = rotate_ccw(point, Point(0, 0), math.pi / 2)
    back = rotate_cw(there, Point(0, 0), math.pi / 2)
    assert back.x == pytest.approx(3, abs=1e-3)
    assert back.y == pytest.approx(0, abs=1e-3)


def test_rotate_unsupported_geometry_returns_none():
    assert rotate_cw(LineString([Point(0, 0), Point(1, 1)]), Point(0, 0), 1.0) is None


def test_hausdorff_of_source_lines():
    line1 = LineString([Point(0, 0), Point(1, 1), Point(2, 0)])
    line2 = LineString([Point(0, 0), Point(1, 1), Point(3, 0)])
    assert hausdorff_distance(line1, line2, SRID.WGS84_PSEUDO_MERCATOR) == pytest.approx(1.0)


def test_hausdorff_with_zero_length_line_is_inf():
    line1 = LineString([Point(0, 0), Point(0, 0)])
    line2 = LineString([Point(0, 0), Point(1, 1)])
    assert hausdorff_distance(line1, line2, SRID.WGS84_PSEUDO_MERCATOR) == INF


def test_area_of_triangle():
    assert get_area(_triangle()) == pytest.approx(1.0)


def test_area_of_square():
    polygon = Polygon([LinearRing.from_points(Point(100, 100), Point(200, 100), Point(200, 200), Point(100, 200))])
    assert get_area(polygon) == pytest.approx(10000.0)


def test_area_of_multipolygon_and_other_geometries():
    multi = MultiPolygon([_square(), _square(10, 10, 1)])
    assert multi_polygon_area(multi) == pytest.approx(5.0)
    assert get_area(multi) == pytest.approx(5.0)
    assert get_area(Point(1, 1)) == 0


def test_distance_with_projected_srid_is_euclidean():
    p1 = Point(153.101112401, 27.797998206)
    p2 = Point(200, 200)
    assert point_distance(p1, p2, SRID.WGS84_UTM_ZONE_50N) == euclidean_distance(p1, p2)


def test_distance_with_gps_srid_is_haversine():
    p1 = Point(113.0, 23.0)
    p2 = Point(113.1, 23.1)
    assert point_distance(p1, p2, SRID.WGS84_GPS) == coord_distance(p1, p2)


def test_line_length_equals_distance_of_two_points():
    p1 = Point(153.101112401, 27.797998206)
    p2 = Point(200, 200)
    assert LineString([p1, p2]).length() == pytest.approx(euclidean_distance(p1, p2))


def test_point_to_line_distance_source_case():
    dist, foot, factor = point_to_line_distance(
        Point(1, 2), Point(0, 0), Point(2, 5), SRID.WGS84_UTM_ZONE_44N
    )
    assert factor == pytest.approx(12 / 29)
    assert foot.x == pytest.approx(24 / 29)
    assert foot.y == pytest.approx(60 / 29)
    assert dist == pytest.approx(1 / math.sqrt(29))


def test_point_to_line_distance_beyond_end():
    dist, foot, factor = point_to_line_distance(
        Point(3, 0), Point(0, 0), Point(1, 0), SRID.WGS84_PSEUDO_MERCATOR
    )
    assert factor == pytest.approx(3.0)
    assert foot == Point(3, 0)
    assert dist == 0


def test_point_to_segment_distance_clamps_to_end():
    dist, closest = point_to_segment_distance(
        Point(3, 0), Point(0, 0), Point(1, 0), SRID.WGS84_PSEUDO_MERCATOR
    )
    assert closest == Point(1, 0)
    assert dist == pytest.approx(2.0)


def test_angle_between_and_repeated_points():
    assert angle_between(Point(1, 0), Point(0, 0), Point(0, 1)) == pytest.approx(math.pi / 2)
    with pytest.raises(ValueError):
        angle_between(Point(0, 0), Point(0, 0), Point(1, 1))


def test_quadrant_angle_straight_up():
    assert quadrant_angle(Point(0, 0), Point(0, 1)) == pytest.approx(math.pi / 2)


def test_convexity():
    assert convexity(Point(1, 0), Point(0, 0), Point(0, 1)) == 1
    assert convexity(Point(0, 1), Point(0, 0), Point(1, 0)) == 0
    assert convexity(Point(1, 0), Point(0, 0), Point(2, 0)) == 2
    with pytest.raises(ValueError):
        convexity(Point(1, 1), Point(1, 1), Point(2, 0))


def test_point_polygon_distance():
    square = _square()
    assert point_polygon_distance(Point(1, 1), square, SRID.WGS84_PSEUDO_MERCATOR) == 0
    assert point_polygon_distance(Point(3, 1), square, SRID.WGS84_PSEUDO_MERCATOR) == pytest.approx(1.0)


def test_point_hit_line_string():
    line = LineString([Point(0, 0), Point(2, 0), Point(2, 2)])
    nearest, index, distance = point_hit_line_string(Point(3, 1), line, SRID.WGS84_PSEUDO_MERCATOR)
    assert nearest == Point(2, 1)
    assert index == 1
    assert distance == pytest.approx(1.0)
# geokit

A small, dependency-free library for working with 2D (and simple 3D)
geometries in plain Python.

## What it covers

- **Geometry types** (`geokit.geometry`): `Point`, `LineString`,
  `LinearRing`, `Polygon`, `MultiPoint`, `MultiLineString`, `MultiPolygon`,
  `Collection`. Points are frozen dataclasses; the other types are lists.
  `geokit.geometry_z` has `PointZ`, `LineStringZ`, `LinearRingZ`,
  `MultiPointZ`, `MultiLineStringZ`, `PolygonZ` and `MultiPolygonZ`.
- **WKT** (`geokit.wkt`): `decode` reads POINT, MULTIPOINT, LINESTRING,
  MULTILINESTRING, POLYGON and MULTIPOLYGON, in 2D or 3D; `encode` writes
  every geometry type above except `Collection`, for which it returns an
  empty string.
- **GeoJSON** (`geokit.geojson`, `geokit.feature`): `marshal_geo` writes any
  2D or 3D geometry as a GeoJSON geometry; `unmarshal_geo` reads Point,
  LineString and Polygon. `Feature` and `FeatureCollection` serialise to
  and from JSON, and `Feature` has typed property accessors
  (`property_int`, `property_must_string` and so on).
- **Measurements** (`geokit.calculation`): `get_area`, `centroid`,
  `get_azimuth`, `point_distance` (haversine metres for `SRID.WGS84_GPS`,
  Euclidean otherwise), `point_to_segment_distance`,
  `point_to_line_distance`, `point_polygon_distance`,
  `point_hit_line_string`, `hausdorff_distance`, `angle_between`,
  `convexity`, `rotate_cw` and `rotate_ccw`.
- **Relations** (`geokit.relation`): `point_in_polygon`,
  `is_point_on_segment`, `is_point_on_line`, `segment_polygon_relation`,
  `line_polygon_relation`, `ring_polygon_relation`, `polygon_relation` and
  `line_relation`. Segment intersection is `geokit.vector.segment_relation`;
  results are `geokit.constants.GeometryRelation` members.
- **Algorithms**: convex hull (`geokit.convexhull.convex_hull`), minimum
  bounding rectangle (`geokit.mbr.mbr`), Douglas–Peucker simplification
  (`geokit.simplify.douglas_peucker_simplify`) and bounding boxes
  (`geokit.box.Box`, `bounding_box`, `box_to_geometry`, `box_union`).
  `Point.buffer` approximates a circle with a 24-sided polygon.
- **Spatial index** (`geokit.rtree`): `RTree` holding `Spatial` records,
  with bulk loading, intersection search, search and deletion by id,
  upsert and k-nearest-neighbour queries.
- **Coordinate tools**: geohash encoding, cell boundary, centre and the
  eight neighbours (`geokit.geohash`); UTM conversion (`geokit.utm`);
  WGS84 / GCJ-02 / BD-09 conversion (`geokit.lonlat`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Reading WKT and measuring a polygon:

```python
from geokit import wkt
from geokit.calculation import centroid, get_area

square = wkt.decode("POLYGON((100 100,200 100,200 200,100 200,100 100))")
print(get_area(square))               # 10000.0
print(wkt.encode(centroid(square)))   # POINT(150 150)
```

Building geometries directly:

```python
from geokit.box import bounding_box
from geokit.convexhull import convex_hull
from geokit.geometry import Point, Polygon

triangle = Polygon.from_points(Point(0, 0), Point(1, 1), Point(2, 0))
print(triangle.is_ccw())
print(bounding_box(triangle))

hull = convex_hull(Point(0, 0), Point(0, 0.5), Point(1, 1), Point(0, 3), Point(0, 2))
print(wkt.encode(hull))
```

Point-in-polygon (points on the boundary count as inside):

```python
from geokit.relation import point_in_polygon

print(point_in_polygon(Point(0.5, 0.5), triangle))
```

Distances pick the formula from the spatial reference:

```python
from geokit.calculation import point_distance
from geokit.constants import SRID

print(point_distance(Point(113.0, 23.0), Point(113.1, 23.1), SRID.WGS84_GPS))
```

An R-tree:

```python
from geokit.box import Box
from geokit.rtree import RTree, Spatial

tree = RTree.from_spatials(
    Spatial("1", None, Point(0, 0)),
    Spatial("2", None, Point(1, 1)),
    Spatial("3", None, Point(2, 1)),
)
print([s.id for s in tree.search_intersect(Box.around(Point(2, 2), 10, 10))])
tree.delete_by_id("3")
print(len(tree))
print([s.id for s in tree.nearest_neighbors(1, Point(0.9, 0.9))])
```

GeoJSON features:

```python
from geokit.feature import Feature, unmarshal_feature

feature = Feature.from_geometry(Point(1, 2))
feature.set_property("name", "origin")
print(feature.to_json())

parsed = unmarshal_feature('{"type": "Feature", "geometry": null, "properties": {"n": 1.5}}')
print(parsed.property_must_int("n"))   # 1
```

Coordinate conversions:

```python
from geokit.geohash import geohash_encode
from geokit.lonlat import gcj02_to_bd09, wgs84_to_gcj02
from geokit.utm import from_lat_lon

lon, lat = wgs84_to_gcj02(113.3, 23.1)
print(gcj02_to_bd09(lon, lat))
print(from_lat_lon(20, 120, True))
print(geohash_encode(Point(113.444956, 23.167870), 12, SRID.WGS84_GPS))
```

## Errors

Malformed WKT raises `geokit.wkt.WKTError`; out-of-range UTM input raises
`geokit.utm.UTMInputError`; GeoJSON that cannot be converted, including the
MultiPoint, MultiLineString and MultiPolygon types on reading, raises
`geokit.geojson.GeoJSONError` (an unknown geometry type reads as `None`).
Invalid lines and polygons raise `ValueError` from `verify`. All three
error classes are subclasses of `ValueError`.

## What it does not do

- It is a library only; there is no command-line tool.
- Grid indexing is by geohash alone; S2 cells are not supported.
- Buffers exist only for points; lines and polygons cannot be buffered.
- WKT `GEOMETRYCOLLECTION` and `EMPTY` geometries are not read or written.
"""Geometry toolkit: types, WKT and GeoJSON, relations, measurements, R-tree, geohash and coordinate conversions."""

__version__ = "0.1.0"

__all__ = [
    "box",
    "calculation",
    "constants",
    "convexhull",
    "feature",
    "geohash",
    "geojson",
    "geometry",
    "geometry_z",
    "lonlat",
    "mbr",
    "relation",
    "rtree",
    "simplify",
    "utm",
    "vector",
    "wkt",
]
"""Conversion between geometries and GeoJSON geometry objects."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from geokit.geometry import (
    Geometry,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geokit.geometry_z import (
    LinearRingZ,
    LineStringZ,
    MultiLineStringZ,
    MultiPointZ,
    MultiPolygonZ,
    PointZ,
    PolygonZ,
)


class GeoJSONError(ValueError):
    """Raised when a geometry or a GeoJSON document cannot be converted."""


@dataclass
class GeoJson:
    """A GeoJSON geometry object with raw coordinate data."""

    type: str = ""
    coordinates: Any = None
    geometries: Any = None
    crs: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The object as a JSON-ready dictionary, leaving out empty members."""
        result: dict[str, Any] = {"type": self.type}
        if self.coordinates is not None:
            result["coordinates"] = self.coordinates
        if self.geometries is not None:
            result["geometries"] = self.geometries
        if self.crs:
            result["crs"] = self.crs
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GeoJson:
        """Build the object from a decoded JSON mapping."""
        if not isinstance(data, Mapping):
            raise GeoJSONError(f"not a valid geometry object, got {data!r}")
        geometry_type = data.get("type", "")
        if not isinstance(geometry_type, str):
            raise GeoJSONError(f"geometry type must be a string, got {geometry_type!r}")
        crs = data.get("crs")
        if crs is not None and not isinstance(crs, Mapping):
            raise GeoJSONError(f"crs must be an object, got {crs!r}")
        return cls(
            type=geometry_type,
            coordinates=data.get("coordinates"),
            geometries=data.get("geometries"),
            crs=dict(crs) if crs is not None else None,
        )


def convert_point(point: Point) -> list[float]:
    return [float(point.x), float(point.y)]


def convert_point_z(point: PointZ) -> list[float]:
    return [float(point.x), float(point.y), float(point.z)]


def convert_point_set(geometry: Geometry) -> list[list[float]]:
    """Coordinates of a line string or a multipoint."""
    if not isinstance(geometry, (LineString, MultiPoint)):
        raise GeoJSONError(
            "could not parsing geometry besides linestring and multipoint"
        )
    return [convert_point(p) for p in geometry]


def convert_point_z_set(geometry: Geometry) -> list[list[float]]:
    """Coordinates of a 3D line string or a 3D multipoint."""
    if not isinstance(geometry, (LineStringZ, MultiPointZ)):
        raise GeoJSONError(
            "could not parsing geometry besides linestring and multipoint"
        )
    return [convert_point_z(p) for p in geometry]


def convert_path_set(geometry: Geometry) -> list[list[list[float]]]:
    """Coordinates of a multilinestring or of a polygon's rings."""
    if not isinstance(geometry, (MultiLineString, Polygon)):
        raise GeoJSONError(
            "could not parsing geometry besides multilinestring and polygon"
        )
    return [convert_point_set(LineString(line)) for line in geometry]


def convert_path_z_set(geometry: Geometry) -> list[list[list[float]]]:
    """Coordinates of a 3D multilinestring or of a 3D polygon's rings."""
    if not isinstance(geometry, (MultiLineStringZ, PolygonZ)):
        raise GeoJSONError(
            "could not parsing geometry besides multilinestring and polygon"
        )
    return [convert_point_z_set(LineStringZ(line)) for line in geometry]


def convert_polygon_set(geometry: Geometry) -> list[list[list[list[float]]]]:
    """Coordinates of a multipolygon."""
    if not isinstance(geometry, MultiPolygon):
        raise GeoJSONError("could not parsing geometry besides multipolygon")
    return [
        convert_path_set(p if isinstance(p, Polygon) else Polygon(p)) for p in geometry
    ]


def convert_polygon_z_set(geometry: Geometry) -> list[list[list[list[float]]]]:
    """Coordinates of a 3D multipolygon."""
    if not isinstance(geometry, MultiPolygonZ):
        raise GeoJSONError("could not parsing geometry besides multipolygon")
    return [
        convert_path_z_set(p if isinstance(p, PolygonZ) else PolygonZ(p))
        for p in geometry
    ]


_ENCODERS: tuple[tuple[type, str, Callable[[Any], Any]], ...] = (
    (Point, "Point", convert_point),
    (PointZ, "Point", convert_point_z),
    (MultiPoint, "MultiPoint", convert_point_set),
    (MultiPointZ, "MultiPoint", convert_point_z_set),
    (LineString, "LineString", convert_point_set),
    (LineStringZ, "LineString", convert_point_z_set),
    (MultiLineString, "MultiLineString", convert_path_set),
    (MultiLineStringZ, "MultiLineString", convert_path_z_set),
    (Polygon, "Polygon", convert_path_set),
    (PolygonZ, "Polygon", convert_path_z_set),
    (MultiPolygon, "MultiPolygon", convert_polygon_set),
    (MultiPolygonZ, "MultiPolygon", convert_polygon_z_set),
)


def _to_geojson(geometry: Geometry) -> GeoJson:
    for kind, name, convert in _ENCODERS:
        if isinstance(geometry, kind):
            return GeoJson(type=name, coordinates=convert(geometry))
    raise GeoJSONError("no such type")


def marshal_geo(geometry: Geometry) -> str:
    """Encode a geometry as a GeoJSON geometry string."""
    return json.dumps(_to_geojson(geometry).to_dict(), separators=(",", ":"))


def _position(data: Any) -> list[float]:
    if not isinstance(data, (list, tuple)):
        raise GeoJSONError(f"not a valid position, got {data!r}")
    result = []
    for coord in data:
        if isinstance(coord, bool) or not isinstance(coord, (int, float)):
            raise GeoJSONError(f"not a valid coordinate, got {coord!r}")
        result.append(float(coord))
    return result


def _positions(data: Any) -> list[list[float]]:
    if not isinstance(data, (list, tuple)):
        raise GeoJSONError(f"not a valid set of positions, got {data!r}")
    return [_position(p) for p in data]


def _paths(data: Any) -> list[list[list[float]]]:
    if not isinstance(data, (list, tuple)):
        raise GeoJSONError(f"not a valid path, got {data!r}")
    return [_positions(p) for p in data]


def _point(position: list[float]) -> Point:
    if len(position) < 2:
        raise GeoJSONError(f"position needs two coordinates, got {position!r}")
    return Point(position[0], position[1])


def _point_z(position: list[float]) -> PointZ:
    if len(position) < 3:
        raise GeoJSONError(f"position needs three coordinates, got {position!r}")
    return PointZ(position[0], position[1], position[2])


def _has_z(positions: list[list[float]]) -> bool:
    return any(len(p) == 3 for p in positions)


def unmarshal_geo(geojson: GeoJson | Mapping[str, Any]) -> Geometry | None:
    """Decode a GeoJSON geometry; None for a type the reader does not know.

    Points, line strings and polygons are read, in 2D or 3D; the multi-part
    types raise GeoJSONError.
    """
    if not isinstance(geojson, GeoJson):
        geojson = GeoJson.from_dict(geojson)
    kind = geojson.type
    if kind == "Point":
        position = _position(geojson.coordinates)
        return _point_z(position) if len(position) == 3 else _point(position)
    if kind == "LineString":
        positions = _positions(geojson.coordinates)
        if _has_z(positions):
            return LineStringZ(_point_z(p) for p in positions)
        return LineString(_point(p) for p in positions)
    if kind == "Polygon":
        paths = _paths(geojson.coordinates)
        if any(_has_z(path) for path in paths):
            return PolygonZ(LinearRingZ(_point_z(p) for p in path) for path in paths)
        return Polygon(LinearRing(_point(p) for p in path) for path in paths)
    if kind in ("MultiPoint", "MultiLineString", "MultiPolygon"):
        raise GeoJSONError(f"{kind} is not supported")
    return None
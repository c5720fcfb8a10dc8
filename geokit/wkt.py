"""Reading and writing geometries as well-known text."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Iterable

from geokit.geometry import (
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geokit.geometry_z import (
    LineStringZ,
    MultiLineStringZ,
    MultiPointZ,
    MultiPolygonZ,
    PointZ,
    PolygonZ,
)


class WKTError(ValueError):
    """Raised when well-known text cannot be decoded."""


_PATH_RE = re.compile(
    r"(\ *[(]\ *(?:\ *(?:[-0-9.Ee]+[ ]+[-0-9.Ee]+)[, ]*\ *)*\ *[)])[, ]*"
)
_POLYGON_RE = re.compile(
    r"([(](?:\ *[(]\ *(?:\ *(?:[-0-9.]+[ ]+[-0-9.]+)[, ]*\ *)*\ *[)][, ]*)*[)])"
)
_GEOMETRY_RE = re.compile(r"([A-Z]+)\s*[(]\s*(\(*.+\)*)\s*[)]")


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise WKTError(f"invalid number {text!r}") from None


def _parse_coordinates(parts: list[str]) -> tuple[float, float]:
    if len(parts) < 2:
        raise WKTError(f"expected at least two coordinates, got {' '.join(parts)!r}")
    return _parse_float(parts[0]), _parse_float(parts[1])


def point_from_wkt(text: str) -> Point | PointZ:
    """Decode the body of a POINT, e.g. ``"1 2"`` or ``"1 2 3"``."""
    parts = text.strip(" ").split(" ")
    x, y = _parse_coordinates(parts)
    if len(parts) == 3:
        return PointZ(x, y, _parse_float(parts[2]))
    return Point(x, y)


def multi_point_from_wkt(text: str) -> MultiPoint | MultiPointZ:
    """Decode the body of a MULTIPOINT."""
    body = text.lstrip("(").rstrip(")").strip(" ")
    points = MultiPoint()
    points_z = MultiPointZ()
    for term in body.split(","):
        parts = term.lstrip("(").rstrip(")").split(" ")
        x, y = _parse_coordinates(parts)
        if len(parts) == 3:
            points_z.append(PointZ(x, y, _parse_float(parts[2])))
        else:
            points.append(Point(x, y))
    if points:
        return points
    if points_z:
        return points_z
    raise WKTError("multipoint is empty")


def line_string_from_wkt(text: str) -> LineString | LineStringZ:
    """Decode a coordinate list such as ``"(1 2,3 4)"``."""
    body = text.lstrip("(").rstrip(")")
    line = LineString()
    line_z = LineStringZ()
    for term in body.split(","):
        parts = term.strip(" ").split(" ")
        x, y = _parse_coordinates(parts)
        if len(parts) == 3:
            line_z.append(PointZ(x, y, _parse_float(parts[2])))
        elif len(parts) == 2:
            line.append(Point(x, y))
    if line:
        return line
    if line_z:
        return line_z
    raise WKTError("linestring is empty")


def _paths(text: str) -> Iterable[LineString | LineStringZ]:
    for match in _PATH_RE.finditer(text):
        yield line_string_from_wkt(match.group(1))


def multi_line_string_from_wkt(text: str) -> MultiLineString | MultiLineStringZ:
    """Decode the body of a MULTILINESTRING."""
    lines = MultiLineString()
    lines_z = MultiLineStringZ()
    for line in _paths(text):
        if isinstance(line, LineString):
            lines.append(line)
        else:
            lines_z.append(line)
    if lines:
        return lines
    if lines_z:
        return lines_z
    raise WKTError("multilinestring is empty")


def polygon_from_wkt(text: str) -> Polygon | PolygonZ:
    """Decode the body of a POLYGON; each ring is closed if it is not already."""
    polygon = Polygon()
    polygon_z = PolygonZ()
    for line in _paths(text):
        if isinstance(line, LineString):
            polygon.append(line.to_ring())
        else:
            polygon_z.append(line.to_ring())
    if polygon:
        return polygon
    if polygon_z:
        return polygon_z
    raise WKTError("polygon is empty")


def multi_polygon_from_wkt(text: str) -> MultiPolygon | MultiPolygonZ:
    """Decode the body of a MULTIPOLYGON."""
    polygons = MultiPolygon()
    polygons_z = MultiPolygonZ()
    for match in _POLYGON_RE.finditer(text):
        polygon = polygon_from_wkt(match.group(1))
        if isinstance(polygon, Polygon):
            polygons.append(polygon)
        else:
            polygons_z.append(polygon)
    if polygons:
        return polygons
    if polygons_z:
        return polygons_z
    raise WKTError("multipolygon is empty")


_DECODERS = {
    "MULTIPOLYGON": multi_polygon_from_wkt,
    "POLYGON": polygon_from_wkt,
    "MULTILINESTRING": multi_line_string_from_wkt,
    "LINESTRING": line_string_from_wkt,
    "MULTIPOINT": multi_point_from_wkt,
    "POINT": point_from_wkt,
}


def decode(text: str) -> Geometry:
    """Decode a WKT string into a geometry; raise WKTError if it is malformed."""
    text = text.strip(" ").replace(", ", ",")
    match = _GEOMETRY_RE.search(text)
    if match is None:
        raise WKTError("wkt format is error")
    decoder = _DECODERS.get(match.group(1))
    if decoder is None:
        raise WKTError("wkt format is error")
    return decoder(match.group(2))


def _format_float(value: float) -> str:
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_xy(x: float, y: float) -> str:
    """Format a 2D coordinate pair in plain decimal notation."""
    return f"{_format_float(x)} {_format_float(y)}"


def format_xyz(x: float, y: float, z: float) -> str:
    """Format a 3D coordinate triple in plain decimal notation."""
    return f"{_format_float(x)} {_format_float(y)} {_format_float(z)}"


def _path(points: Iterable[Point]) -> str:
    return "(" + ",".join(format_xy(p.x, p.y) for p in points) + ")"


def _path_z(points: Iterable[PointZ]) -> str:
    return "(" + ",".join(format_xyz(p.x, p.y, p.z) for p in points) + ")"


def _paths_text(lines: Iterable[Iterable[Point]]) -> str:
    return "(" + ",".join(_path(line) for line in lines) + ")"


def _paths_z_text(lines: Iterable[Iterable[PointZ]]) -> str:
    return "(" + ",".join(_path_z(line) for line in lines) + ")"


def encode(geometry: Geometry) -> str:
    """Encode a geometry as WKT; an empty string for unsupported kinds."""
    if isinstance(geometry, Point):
        return f"POINT({format_xy(geometry.x, geometry.y)})"
    if isinstance(geometry, PointZ):
        return f"POINT({format_xyz(geometry.x, geometry.y, geometry.z)})"
    if isinstance(geometry, MultiPoint):
        return f"MULTIPOINT{_path(geometry)}"
    if isinstance(geometry, MultiPointZ):
        return f"MULTIPOINT{_path_z(geometry)}"
    if isinstance(geometry, LineString):
        return f"LINESTRING{_path(geometry)}"
    if isinstance(geometry, LineStringZ):
        return f"LINESTRING{_path_z(geometry)}"
    if isinstance(geometry, MultiLineString):
        return f"MULTILINESTRING{_paths_text(geometry)}"
    if isinstance(geometry, MultiLineStringZ):
        return f"MULTILINESTRING{_paths_z_text(geometry)}"
    if isinstance(geometry, Polygon):
        return f"POLYGON{_paths_text(geometry)}"
    if isinstance(geometry, PolygonZ):
        return f"POLYGON{_paths_z_text(geometry)}"
    if isinstance(geometry, MultiPolygon):
        return (
            "MULTIPOLYGON(" + ",".join(_paths_text(p) for p in geometry) + ")"
        )
    if isinstance(geometry, MultiPolygonZ):
        return (
            "MULTIPOLYGON(" + ",".join(_paths_z_text(p) for p in geometry) + ")"
        )
    return ""
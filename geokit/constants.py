"""Shared constants, enumerations and tolerance helpers."""

from enum import Enum, IntEnum

COORD_PRECISION = 0.000001
INF = float(1 << 31)
EARTH_RADIUS_M = 6371000
EARTH_RADIUS_KM = 6371


class GeometryRelation(IntEnum):
    """Spatial relation between two geometries."""

    UNKNOWN = 0
    DISJOINT = 1
    CONTAIN = 2
    EQUAL = 3
    TOUCH = 4
    COVER = 5
    INTERSECT = 6


class GeoStringType(IntEnum):
    """Text encodings a geometry may be stored in."""

    GEOJSON = 0
    WKT = 1
    POIJSON = 2


class GeometryType(str, Enum):
    """Names of the geometry kinds."""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    COLLECTION = "GeometryCollection"
    POINT_Z = "PointZ"
    MULTI_POINT_Z = "MultiPointZ"
    LINE_STRING_Z = "LineStringZ"
    MULTI_LINE_STRING_Z = "MultiLineStringZ"
    POLYGON_Z = "PolygonZ"
    MULTI_POLYGON_Z = "MultiPolygonZ"
    COLLECTION_Z = "GeometryCollectionZ"


class SRID(IntEnum):
    """Spatial reference identifiers understood by the library."""

    WGS84_GPS = 4326
    WGS84_PSEUDO_MERCATOR = 3857
    WGS84_UTM_ZONE_44N = 32644
    WGS84_UTM_ZONE_45N = 32645
    WGS84_UTM_ZONE_46N = 32646
    WGS84_UTM_ZONE_47N = 32647
    WGS84_UTM_ZONE_48N = 32648
    WGS84_UTM_ZONE_49N = 32649
    WGS84_UTM_ZONE_50N = 32650
    WGS84_UTM_ZONE_51N = 32651
    WGS84_UTM_ZONE_52N = 32652
    WGS84_UTM_ZONE_53N = 32653


def sign_with_tolerance(value: float) -> int:
    """Return -1, 0 or 1, treating values within COORD_PRECISION of zero as zero."""
    if abs(value) < COORD_PRECISION:
        return 0
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0
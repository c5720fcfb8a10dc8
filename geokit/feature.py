"""GeoJSON features, feature collections and typed property access."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from geokit.geojson import GeoJSONError, GeoJson, marshal_geo
from geokit.geometry import Geometry

_SEPARATORS = (",", ":")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class Feature:
    """A GeoJSON feature: a geometry with properties."""

    id: Any = None
    type: str = "Feature"
    bbox: list[float] | None = None
    geometry_json: GeoJson | None = None
    properties: dict[str, Any] | None = None
    crs: dict[str, Any] | None = None
    geometry: Geometry | None = None

    @classmethod
    def from_geometry(cls, geometry: Geometry) -> Feature:
        """A feature for ``geometry`` with no properties."""
        try:
            geometry_json = GeoJson.from_dict(json.loads(marshal_geo(geometry)))
        except GeoJSONError:
            geometry_json = GeoJson()
        return cls(geometry_json=geometry_json, properties={}, geometry=geometry)

    def to_dict(self) -> dict[str, Any]:
        """The feature as a JSON-ready dictionary; empty properties become null."""
        result: dict[str, Any] = {}
        if self.id is not None:
            result["id"] = self.id
        result["type"] = "Feature"
        if self.bbox:
            result["bbox"] = self.bbox
        result["geometry"] = (
            self.geometry_json.to_dict() if self.geometry_json is not None else None
        )
        result["properties"] = self.properties or None
        if self.crs:
            result["crs"] = self.crs
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=_SEPARATORS)

    def set_property(self, key: str, value: Any) -> None:
        if self.properties is None:
            self.properties = {}
        self.properties[key] = value

    def _get(self, key: str) -> Any:
        return (self.properties or {}).get(key)

    def property_bool(self, key: str) -> bool:
        value = self._get(key)
        if isinstance(value, bool):
            return value
        raise GeoJSONError(f"type assertion of `{key}` to bool failed")

    def property_int(self, key: str) -> int:
        """The property as an int; floats are truncated."""
        value = self._get(key)
        if _is_number(value):
            return int(value)
        raise GeoJSONError(f"type assertion of `{key}` to int failed")

    def property_float(self, key: str) -> float:
        value = self._get(key)
        if _is_number(value):
            return float(value)
        raise GeoJSONError(f"type assertion of `{key}` to float64 failed")

    def property_string(self, key: str) -> str:
        value = self._get(key)
        if isinstance(value, str):
            return value
        raise GeoJSONError(f"type assertion of `{key}` to string failed")

    def property_must_bool(self, key: str, default: bool = False) -> bool:
        try:
            return self.property_bool(key)
        except GeoJSONError:
            return default

    def property_must_int(self, key: str, default: int = 0) -> int:
        try:
            return self.property_int(key)
        except GeoJSONError:
            return default

    def property_must_float(self, key: str, default: float = 0.0) -> float:
        try:
            return self.property_float(key)
        except GeoJSONError:
            return default

    def property_must_string(self, key: str, default: str = "") -> str:
        try:
            return self.property_string(key)
        except GeoJSONError:
            return default


@dataclass
class FeatureCollection:
    """A GeoJSON feature collection."""

    type: str = "FeatureCollection"
    bbox: list[float] | None = None
    features: list[Feature] | None = field(default_factory=list)
    crs: dict[str, Any] | None = None

    def add_feature(self, feature: Feature) -> FeatureCollection:
        if self.features is None:
            self.features = []
        self.features.append(feature)
        return self

    def to_dict(self) -> dict[str, Any]:
        """The collection as a JSON-ready dictionary; features is always a list."""
        result: dict[str, Any] = {"type": "FeatureCollection"}
        if self.bbox:
            result["bbox"] = self.bbox
        result["features"] = [f.to_dict() for f in self.features or []]
        if self.crs:
            result["crs"] = self.crs
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=_SEPARATORS)


def _load(data: str | bytes) -> Any:
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise GeoJSONError(str(exc)) from exc


def _optional_mapping(data: Mapping[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise GeoJSONError(f"`{key}` must be an object, got {value!r}")
    return dict(value)


def _bbox(data: Mapping[str, Any]) -> list[float] | None:
    value = data.get("bbox")
    if value is None:
        return None
    if not isinstance(value, list) or not all(_is_number(v) for v in value):
        raise GeoJSONError(f"bounding box not usable, got {value!r}")
    return [float(v) for v in value]


def _type(data: Mapping[str, Any]) -> str:
    value = data.get("type", "")
    if not isinstance(value, str):
        raise GeoJSONError(f"type must be a string, got {value!r}")
    return value


def _feature_from_dict(data: Any) -> Feature:
    if not isinstance(data, Mapping):
        raise GeoJSONError(f"not a valid feature, got {data!r}")
    geometry = data.get("geometry")
    return Feature(
        id=data.get("id"),
        type=_type(data),
        bbox=_bbox(data),
        geometry_json=GeoJson.from_dict(geometry) if geometry is not None else None,
        properties=_optional_mapping(data, "properties"),
        crs=_optional_mapping(data, "crs"),
    )


def unmarshal_feature(data: str | bytes) -> Feature:
    """Decode a GeoJSON feature document."""
    return _feature_from_dict(_load(data))


def unmarshal_feature_collection(data: str | bytes) -> FeatureCollection:
    """Decode a GeoJSON feature collection document."""
    decoded = _load(data)
    if not isinstance(decoded, Mapping):
        raise GeoJSONError(f"not a valid feature collection, got {decoded!r}")
    features = decoded.get("features")
    if features is None:
        parsed = None
    elif isinstance(features, list):
        parsed = [_feature_from_dict(f) for f in features]
    else:
        raise GeoJSONError(f"features must be a list, got {features!r}")
    return FeatureCollection(
        type=_type(decoded),
        bbox=_bbox(decoded),
        features=parsed,
        crs=_optional_mapping(decoded, "crs"),
    )
"""
Decoding JSON values to GeoJSON objects, and encoding them back.

Decoding is strict and fail-fast. The ``"type"`` member of the outermost object is
inspected first, and decoding then descends into features and geometries. The first
structural defect that is encountered raises a ``DecodeError``, and no partially
decoded object is ever returned.

Encoding is total and canonical. Since every object was validated when it was
constructed, encoding never fails, and ``to_value(from_value(to_value(obj)))``
always equals ``to_value(obj)``. Original documents are not reproduced byte by byte:

 - the ``"type"`` member always comes first
 - positions are always encoded as floats
 - optional members that are absent are omitted, except for a feature's ``"geometry"``,
   which is ``null`` for unlocated features

References:
    - https://tools.ietf.org/html/rfc7946
"""

import copy
import json
import logging
from json import JSONDecodeError
from typing import Any

from geojson_codec.crs import Crs, crs_from_value, crs_to_value
from geojson_codec.error import (
    InvalidIdError,
    MalformedJsonError,
    UnknownGeometryTypeError,
    UnknownTopLevelTypeError,
    WrongObjectTypeError,
    WrongTypeError,
)
from geojson_codec.feature import (
    FEATURE_COLLECTION_MEMBERS,
    FEATURE_MEMBERS,
    Feature,
    FeatureCollection,
    FeatureId,
    GeoJson,
)
from geojson_codec.geometry import (
    GEOMETRY_COLLECTION_MEMBERS,
    GEOMETRY_MEMBERS,
    GEOMETRY_TYPES,
    Bbox,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geojson_codec.spatial import GeoJsonDict, Spatial
from geojson_codec.value import (
    JsonObject,
    JsonValue,
    as_array,
    as_f64_array,
    as_object,
    as_str,
    get_member,
    is_number,
    kind_of,
)


__docformat__ = "google"
__all__ = (
    "from_value",
    "to_value",
    "loads",
    "dumps",
    "geojson_from_value",
    "geojson_to_value",
    "geometry_from_value",
    "geometry_to_value",
    "feature_from_value",
    "feature_to_value",
    "feature_collection_from_value",
    "feature_collection_to_value",
)


_logger = logging.getLogger(__name__)


def loads(text: str | bytes) -> GeoJson:
    """
    Decode a GeoJSON document.

    Raises:
        MalformedJsonError: if ``text`` is not valid JSON, or bytes that cannot be decoded
        DecodeError: if the document is not well-formed GeoJSON
    """
    try:
        value = json.loads(text)
    except (JSONDecodeError, UnicodeDecodeError) as err:
        raise MalformedJsonError(cause=err) from err

    obj = geojson_from_value(value)
    _logger.debug(f"decoded {type(obj).__name__} document")
    return obj


def dumps(obj: GeoJson, **kwargs: Any) -> str:
    """
    Encode a GeoJSON document.

    Args:
        obj: a geometry, feature, or feature collection
        **kwargs: passed on to ``json.dumps()``, f.e. ``indent``
    """
    return json.dumps(to_value(obj), **kwargs)


def geojson_from_value(value: JsonValue) -> GeoJson:
    """
    Decode the root object of a GeoJSON document.

    Raises:
        MissingFieldError: if the ``"type"`` member or any other mandatory member is missing
        WrongTypeError: if ``value`` is not a JSON object, or any member has the wrong kind
        UnknownTopLevelTypeError: if ``"type"`` names neither a geometry, nor a
                                  feature (collection)
        DecodeError: if any of the contained objects are not well-formed
    """
    obj = as_object(value, "geojson")
    type_name = _type_of(obj)

    match type_name:
        case "Feature":
            return _feature_from_object(obj)
        case "FeatureCollection":
            return _feature_collection_from_object(obj)
        case _ if type_name in GEOMETRY_TYPES:
            return _geometry_from_object(obj, type_name)
        case _:
            raise UnknownTopLevelTypeError(type_name=type_name)


def geojson_to_value(obj: GeoJson) -> GeoJsonDict:
    """Encode a geometry, feature, or feature collection."""
    match obj:
        case Geometry():
            return geometry_to_value(obj)
        case Feature():
            return feature_to_value(obj)
        case FeatureCollection():
            return feature_collection_to_value(obj)
        case _:
            msg = f"expected a GeoJSON object, got {type(obj).__name__}"
            raise TypeError(msg)


from_value = geojson_from_value
"""Alias of ``geojson_from_value()``."""

to_value = geojson_to_value
"""Alias of ``geojson_to_value()``."""


def geometry_from_value(value: JsonValue, field: str = "geometry") -> Geometry:
    """
    Decode a geometry object.

    Args:
        value: the JSON value to decode
        field: the member ``value`` was read from, used in error messages

    Raises:
        MissingFieldError: if the ``"type"``, ``"coordinates"``, or ``"geometries"``
                           member is missing
        WrongTypeError: if ``value`` is not a JSON object, or any member has the wrong kind
        UnknownGeometryTypeError: if ``"type"`` is not one of the seven geometry types
        InvalidPositionError: if a position does not have two or three finite numbers
        TooFewPositionsError: if a line string or linear ring is too short
        UnclosedRingError: if a linear ring is not closed
        InvalidBboxError: if the ``"bbox"`` member has the wrong number of values
        UnknownCrsTypeError: if the ``"crs"`` member has an unknown type
    """
    obj = as_object(value, field)
    return _geometry_from_object(obj, _type_of(obj))


def _geometry_from_object(obj: JsonObject, type_name: str) -> Geometry:
    match type_name:
        case "Point":
            return Point(coordinates=_coordinates(obj, depth=0), **_geometry_members(obj))
        case "MultiPoint":
            return MultiPoint(coordinates=_coordinates(obj, depth=1), **_geometry_members(obj))
        case "LineString":
            return LineString(coordinates=_coordinates(obj, depth=1), **_geometry_members(obj))
        case "MultiLineString":
            return MultiLineString(
                coordinates=_coordinates(obj, depth=2), **_geometry_members(obj)
            )
        case "Polygon":
            return Polygon(coordinates=_coordinates(obj, depth=2), **_geometry_members(obj))
        case "MultiPolygon":
            return MultiPolygon(coordinates=_coordinates(obj, depth=3), **_geometry_members(obj))
        case "GeometryCollection":
            geometries = tuple(
                geometry_from_value(item, "geometries")
                for item in as_array(get_member(obj, "geometries", "array"), "geometries")
            )
            return GeometryCollection(
                geometries=geometries,
                bbox=_bbox(obj),
                crs=_crs(obj),
                foreign_members=_foreign_members(obj, GEOMETRY_COLLECTION_MEMBERS),
            )
        case _:
            raise UnknownGeometryTypeError(type_name=type_name)


def _coordinates(obj: JsonObject, depth: int) -> Any:
    """
    Read the ``"coordinates"`` member as nested tuples.

    Args:
        obj: a geometry object
        depth: the number of array levels above the positions, f.e. zero for points,
               and three for multi-polygons
    """
    return _nested(get_member(obj, "coordinates", "array"), depth)


def _nested(value: JsonValue, depth: int) -> Any:
    if depth == 0:
        return as_f64_array(value, "coordinates")
    return tuple(_nested(item, depth - 1) for item in as_array(value, "coordinates"))


def _geometry_members(obj: JsonObject) -> dict[str, Any]:
    return {
        "bbox": _bbox(obj),
        "crs": _crs(obj),
        "foreign_members": _foreign_members(obj, GEOMETRY_MEMBERS),
    }


def geometry_to_value(geometry: Geometry) -> GeoJsonDict:
    """Encode a geometry object."""
    mapping: GeoJsonDict

    match geometry:
        case GeometryCollection(geometries=geometries):
            mapping = {
                "type": "GeometryCollection",
                "geometries": [geometry_to_value(geom) for geom in geometries],
            }
        case (
            Point(coordinates=coords)
            | MultiPoint(coordinates=coords)
            | LineString(coordinates=coords)
            | MultiLineString(coordinates=coords)
            | Polygon(coordinates=coords)
            | MultiPolygon(coordinates=coords)
        ):
            mapping = {
                "type": geometry.type,
                "coordinates": _lists(coords),
            }
        case _:
            msg = f"expected a geometry, got {type(geometry).__name__}"
            raise TypeError(msg)

    return _with_members(mapping, geometry)


def _lists(coords: Any) -> Any:
    """Turn nested tuples of coordinates into nested lists."""
    if isinstance(coords, tuple):
        return [_lists(c) for c in coords]
    return coords


def feature_from_value(value: JsonValue, field: str = "feature") -> Feature:
    """
    Decode a feature object.

    Args:
        value: the JSON value to decode
        field: the member ``value`` was read from, used in error messages

    Raises:
        MissingFieldError: if the ``"type"`` member is missing
        WrongTypeError: if ``value`` is not a JSON object, if ``"geometry"`` or ``"properties"``
                        are neither objects nor ``null``, or any other member has the wrong kind
        WrongObjectTypeError: if ``value`` is not a ``"Feature"``
        InvalidIdError: if ``"id"`` is neither a string nor a number
        DecodeError: if the geometry is not well-formed
    """
    obj = as_object(value, field)
    type_name = _type_of(obj)
    if type_name != "Feature":
        raise WrongObjectTypeError(expected="Feature", actual=type_name)
    return _feature_from_object(obj)


def _feature_from_object(obj: JsonObject) -> Feature:
    return Feature(
        id=_feature_id(obj),
        geometry=_feature_geometry(obj),
        properties=_feature_properties(obj),
        bbox=_bbox(obj),
        crs=_crs(obj),
        foreign_members=_foreign_members(obj, FEATURE_MEMBERS),
    )


def _feature_id(obj: JsonObject) -> FeatureId | None:
    if "id" not in obj:
        return None
    value = obj["id"]
    if isinstance(value, str) or is_number(value):
        return value  # type: ignore[return-value]
    raise InvalidIdError(actual=kind_of(value))


def _feature_geometry(obj: JsonObject) -> Geometry | None:
    # a missing member and 'null' are treated the same
    value = obj.get("geometry")
    if value is None:
        return None
    if not isinstance(value, dict):
        raise WrongTypeError(field="geometry", expected="object or null", actual=kind_of(value))
    return geometry_from_value(value, "geometry")


def _feature_properties(obj: JsonObject) -> dict[str, JsonValue] | None:
    value = obj.get("properties")
    if value is None:
        return None
    if not isinstance(value, dict):
        raise WrongTypeError(field="properties", expected="object or null", actual=kind_of(value))
    return value


def feature_to_value(feature: Feature) -> GeoJsonDict:
    """Encode a feature object."""
    mapping: GeoJsonDict = {"type": "Feature"}

    if feature.id is not None:
        mapping["id"] = feature.id

    mapping["geometry"] = (
        None if feature.geometry is None else geometry_to_value(feature.geometry)
    )

    if feature.properties is not None:
        mapping["properties"] = copy.deepcopy(feature.properties)

    return _with_members(mapping, feature)


def feature_collection_from_value(
    value: JsonValue,
    field: str = "feature collection",
) -> FeatureCollection:
    """
    Decode a feature collection object.

    Args:
        value: the JSON value to decode
        field: the member ``value`` was read from, used in error messages

    Raises:
        MissingFieldError: if the ``"type"`` or ``"features"`` member is missing
        WrongTypeError: if ``value`` is not a JSON object, or any member has the wrong kind
        WrongObjectTypeError: if ``value`` is not a ``"FeatureCollection"``, or if any of
                              its ``"features"`` is not a ``"Feature"``
        DecodeError: if any of the features is not well-formed
    """
    obj = as_object(value, field)
    type_name = _type_of(obj)
    if type_name != "FeatureCollection":
        raise WrongObjectTypeError(expected="FeatureCollection", actual=type_name)
    return _feature_collection_from_object(obj)


def _feature_collection_from_object(obj: JsonObject) -> FeatureCollection:
    features = tuple(
        feature_from_value(item, "features")
        for item in as_array(get_member(obj, "features", "array"), "features")
    )
    return FeatureCollection(
        features=features,
        bbox=_bbox(obj),
        crs=_crs(obj),
        foreign_members=_foreign_members(obj, FEATURE_COLLECTION_MEMBERS),
    )


def feature_collection_to_value(collection: FeatureCollection) -> GeoJsonDict:
    """Encode a feature collection object."""
    mapping: GeoJsonDict = {
        "type": "FeatureCollection",
        "features": [feature_to_value(feature) for feature in collection.features],
    }
    return _with_members(mapping, collection)


def _type_of(obj: JsonObject) -> str:
    return as_str(get_member(obj, "type", "string"), "type")


def _bbox(obj: JsonObject) -> Bbox | None:
    if "bbox" not in obj:
        return None
    # the number of values is checked when constructing the object
    return as_f64_array(obj["bbox"], "bbox")


def _crs(obj: JsonObject) -> Crs | None:
    value = obj.get("crs")
    if value is None:
        return None
    return crs_from_value(value)


def _foreign_members(obj: JsonObject, known: frozenset[str]) -> dict[str, JsonValue] | None:
    foreign = {k: v for k, v in obj.items() if k not in known}
    return foreign or None


def _with_members(mapping: GeoJsonDict, obj: Spatial) -> GeoJsonDict:
    """Add the optional ``bbox``, ``crs``, and foreign members of ``obj`` to its encoding."""
    bbox: Bbox | None = getattr(obj, "bbox", None)
    crs: Crs | None = getattr(obj, "crs", None)
    foreign_members: dict[str, JsonValue] | None = getattr(obj, "foreign_members", None)

    if bbox is not None:
        mapping["bbox"] = list(bbox)

    if crs is not None:
        mapping["crs"] = crs_to_value(crs)

    # foreign members never use the name of a defined member
    for key, value in (foreign_members or {}).items():
        mapping[key] = copy.deepcopy(value)

    return mapping

import json
import re

from geojson_codec import GeoJsonError
from geojson_codec.codec import from_value, loads
from geojson_codec.conversion import to_shapely
import geojson_codec.error
from geojson_codec.error import (
    ConversionError,
    DecodeError,
    EmptyGeometryError,
    InvalidBboxError,
    InvalidGeometryError,
    InvalidIdError,
    InvalidPositionError,
    MalformedJsonError,
    MissingFieldError,
    TooFewPositionsError,
    UnclosedRingError,
    UnknownCrsTypeError,
    UnknownGeometryTypeError,
    UnknownTopLevelTypeError,
    UnsupportedDimensionalityError,
    WrongObjectTypeError,
    WrongTypeError,
    is_conversion_err,
    is_decode_err,
    is_invalid_geometry,
)
from geojson_codec.geometry import Point, Polygon

import pytest


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize(
    ("err", "expected"),
    [
        (
            MissingFieldError(field="coordinates", expected="array"),
            "missing member 'coordinates' (expected array)",
        ),
        (
            WrongTypeError(field="bbox", expected="array", actual="string"),
            "'bbox' must be array, not string",
        ),
        (
            UnknownGeometryTypeError(type_name="Circle"),
            "unknown geometry type 'Circle'",
        ),
        (
            UnknownTopLevelTypeError(type_name="Topology"),
            "unknown GeoJSON object type 'Topology'",
        ),
        (
            UnknownCrsTypeError(type_name="EPSG"),
            "unknown crs type 'EPSG'",
        ),
        (
            WrongObjectTypeError(expected="Feature", actual="Point"),
            "expected a Feature object, got 'Point'",
        ),
        (
            InvalidIdError(actual="boolean"),
            "feature id must be a string or number, not boolean",
        ),
        (
            InvalidBboxError(length=5),
            "bbox must have 4 or 6 values, got 5",
        ),
        (
            InvalidPositionError(position=(1.0,), reason="has 1 values instead of 2 or 3"),
            "invalid position (1.0,): has 1 values instead of 2 or 3",
        ),
        (
            TooFewPositionsError(kind="LineString", minimum=2, actual=1),
            "LineString needs at least 2 positions, got 1",
        ),
        (
            UnclosedRingError(first=(0.0, 0.0), last=(0.0, 1.0)),
            "linear ring is not closed: starts at (0.0, 0.0), ends at (0.0, 1.0)",
        ),
        (
            EmptyGeometryError(kind="Polygon"),
            "cannot convert an empty Polygon",
        ),
        (
            UnsupportedDimensionalityError(kind="Point", reason="has z values"),
            "cannot convert Point: has z values",
        ),
    ],
)
def test_error_messages(err, expected):
    assert str(err) == expected
    assert isinstance(err, GeoJsonError)


@pytest.mark.xdist_group(name="fast")
def test_malformed_json_message():
    with pytest.raises(MalformedJsonError) as exc_info:
        _ = loads("{")
    assert str(exc_info.value).startswith("malformed JSON: ")
    assert isinstance(exc_info.value.cause, json.JSONDecodeError)


@pytest.mark.xdist_group(name="fast")
def test_decode_errors():
    values = [
        {"type": "Point"},
        {"type": "Point", "coordinates": "1, 2"},
        {"type": "Circle", "coordinates": [1, 2]},
        {"type": "Feature", "id": None},
        {"type": "Point", "coordinates": [1]},
        {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1]]]},
    ]
    for value in values:
        with pytest.raises(GeoJsonError) as exc_info:
            _ = from_value(value)
        err = exc_info.value
        assert is_decode_err(err)
        assert not is_conversion_err(err)


@pytest.mark.xdist_group(name="fast")
def test_invalid_geometry_errors():
    for ctor, kwargs in [
        (Point, {"coordinates": (1.0,)}),
        (Polygon, {"coordinates": (((0, 0), (1, 1), (0, 0)),)}),
        (Polygon, {"coordinates": (((0, 0), (1, 0), (1, 1), (0, 1)),)}),
    ]:
        with pytest.raises(InvalidGeometryError) as exc_info:
            _ = ctor(**kwargs)
        assert is_invalid_geometry(exc_info.value)
        assert is_decode_err(exc_info.value)

    assert not is_invalid_geometry(MissingFieldError(field="type", expected="string"))


@pytest.mark.xdist_group(name="fast")
def test_conversion_errors():
    with pytest.raises(ConversionError) as exc_info:
        _ = to_shapely(Point(coordinates=(0.0, 0.0, 0.0)))
    assert is_conversion_err(exc_info.value)
    assert not is_decode_err(exc_info.value)

    with pytest.raises(ConversionError) as exc_info:
        _ = to_shapely(Polygon(coordinates=()))
    assert is_conversion_err(exc_info.value)


@pytest.mark.xdist_group(name="fast")
def test_is_err_of_none():
    assert not is_decode_err(None)
    assert not is_invalid_geometry(None)
    assert not is_conversion_err(None)


@pytest.mark.xdist_group(name="fast")
def test_hierarchy():
    assert issubclass(DecodeError, GeoJsonError)
    assert issubclass(ConversionError, GeoJsonError)
    assert issubclass(InvalidGeometryError, DecodeError)
    assert not issubclass(ConversionError, DecodeError)


@pytest.mark.xdist_group(name="fast")
def test_hierarchy_diagram():
    module = geojson_codec.error
    doc = module.__doc__ or ""
    drawn = set(re.findall(r"[A-Z]\w+Error", doc))
    error_names = {name for name in module.__all__ if name.endswith("Error")}
    assert drawn == error_names

    # base classes are drawn in parentheses
    classes = [getattr(module, name) for name in error_names]
    for cls in classes:
        is_base = any(other is not cls and issubclass(other, cls) for other in classes)
        assert (f"({cls.__name__})" in doc) == is_base, cls.__name__

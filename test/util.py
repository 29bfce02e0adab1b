import json
from pathlib import Path

from geojson_codec import Feature, FeatureCollection, GeoJson, Geometry
from geojson_codec.codec import dumps, from_value, loads, to_value

import geojson
import shapely.geometry


DATA_DIR = Path(__file__).resolve().parent / "data"


def load_data(name: str) -> dict:
    with (DATA_DIR / name).open(encoding="utf-8") as file:
        return json.load(file)


def verify_geojson(obj: GeoJson) -> None:
    """Assert that ``obj`` round-trips, and that its encoding is valid GeoJSON."""
    msg = repr(obj)

    assert isinstance(obj, Geometry | Feature | FeatureCollection), msg

    value = to_value(obj)
    assert value["type"] == _type_name(obj), msg
    assert next(iter(value)) == "type", msg

    # decode(encode(g)) == g
    assert from_value(value) == obj, msg

    # encode(decode(encode(g))) == encode(g)
    assert to_value(from_value(value)) == value, msg

    text = dumps(obj)
    assert loads(text) == obj, msg
    assert json.loads(text) == value, msg

    assert geojson.loads(text).is_valid, msg  # valid GeoJSON

    assert obj.geojson == value, msg
    assert obj.__geo_interface__ == value, msg

    if isinstance(obj, Geometry) and not obj.is_empty:
        try:
            _ = shapely.geometry.shape(obj)
        except BaseException as err:
            raise AssertionError(f"{msg}: bad __geo_interface__: {err}")

    assert str(obj), msg  # just test this doesn't raise
    assert repr(obj), msg  # just test this doesn't raise


def _type_name(obj: GeoJson) -> str:
    if isinstance(obj, Geometry):
        return obj.type
    return type(obj).__name__

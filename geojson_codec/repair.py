"""
Opt-in repairs of JSON values that are not quite well-formed GeoJSON.

Decoding never repairs anything. If you have to deal with producers that write
open polygon rings, run ``close_rings()`` on the JSON value before decoding it:

```python
obj = from_value(close_rings(json.loads(text)))
```
"""

import copy
import logging

from geojson_codec.value import JsonValue


__docformat__ = "google"
__all__ = ("close_rings",)


_logger = logging.getLogger(__name__)


def close_rings(value: JsonValue) -> JsonValue:
    """
    Close the open linear rings of all polygons in a JSON value.

    A ring is closed by appending a copy of its first position. This descends into
    features, feature collections, and geometry collections. Anything that is malformed
    is left as it is, so that decoding the result reports the defect.

    Args:
        value: any JSON value; it is not modified

    Returns:
        a deep copy of ``value`` with closed rings
    """
    value = copy.deepcopy(value)
    _close(value)
    return value


def _close(value: JsonValue) -> None:
    if not isinstance(value, dict):
        return

    # lists in the copy can be shared between geometries, and are never modified in place
    match value.get("type"):
        case "Polygon" if isinstance(value.get("coordinates"), list):
            value["coordinates"] = _closed_polygon(value["coordinates"])
        case "MultiPolygon" if isinstance(value.get("coordinates"), list):
            value["coordinates"] = [_closed_polygon(poly) for poly in value["coordinates"]]
        case "GeometryCollection":
            for geom in _items(value.get("geometries")):
                _close(geom)
        case "Feature":
            _close(value.get("geometry"))
        case "FeatureCollection":
            for feature in _items(value.get("features")):
                _close(feature)
        case _:
            pass


def _closed_polygon(rings: JsonValue) -> JsonValue:
    if not isinstance(rings, list):
        return rings
    return [_closed_ring(ring) for ring in rings]


def _closed_ring(ring: JsonValue) -> JsonValue:
    if not isinstance(ring, list) or not ring or ring[0] == ring[-1]:
        return ring
    _logger.debug(f"close ring starting at {ring[0]!r}")
    return [*ring, copy.copy(ring[0])]


def _items(value: JsonValue) -> list[JsonValue]:
    return value if isinstance(value, list) else []

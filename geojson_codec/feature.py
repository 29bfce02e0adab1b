"""Features, feature collections, and the top-level ``GeoJson`` union."""

import copy
import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final, TypeAlias

from geojson_codec.crs import Crs
from geojson_codec.error import InvalidIdError
from geojson_codec.geometry import (
    Bbox,
    Geometry,
    Position,
    check_bbox,
    check_foreign_members,
    positions,
)
from geojson_codec.spatial import Spatial
from geojson_codec.value import JsonValue, is_number, kind_of


__docformat__ = "google"
__all__ = (
    "Feature",
    "FeatureCollection",
    "FeatureId",
    "FEATURE_MEMBERS",
    "FEATURE_COLLECTION_MEMBERS",
    "GeoJson",
    "all_positions",
    "compute_bbox",
)


FeatureId: TypeAlias = str | int | float
"""A feature identifier is either a string or a number."""

FEATURE_MEMBERS: Final[frozenset[str]] = frozenset(
    ("type", "id", "geometry", "properties", "bbox", "crs")
)
"""The members defined for feature objects; any other member is a foreign member."""

FEATURE_COLLECTION_MEMBERS: Final[frozenset[str]] = frozenset(("type", "features", "bbox", "crs"))
"""The members defined for feature collection objects; any other member is a foreign member."""


@dataclass(kw_only=True, slots=True, frozen=True, repr=False)
class Feature(Spatial):
    """
    A spatially bounded thing.

    A feature without location has no geometry. Decoding a feature with a ``null``
    geometry member and a feature without geometry member yields the same object,
    which is always encoded with ``"geometry": null``.

    Attributes:
        id: an optional identifier, either string or number
        geometry: the feature's geometry, or ``None`` if the feature is unlocated
        properties: arbitrary JSON members describing the feature, or ``None``;
                    the feature keeps a deep copy of them
        bbox: an optional bounding box
        crs: an optional coordinate reference system (not part of RFC 7946)
        foreign_members: members of the feature object that are not defined by the format,
                         or ``None`` if there are none

    Features compare by value, but are not hashable.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.2
    """

    id: FeatureId | None = None
    geometry: Geometry | None = None
    properties: dict[str, JsonValue] | None = None
    bbox: Bbox | None = None
    crs: Crs | None = None
    foreign_members: dict[str, JsonValue] | None = None

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.id is not None and not (isinstance(self.id, str) or is_number(self.id)):
            raise InvalidIdError(actual=kind_of(self.id))
        if self.geometry is not None and not isinstance(self.geometry, Geometry):
            msg = f"expected a geometry, got {type(self.geometry).__name__}"
            raise TypeError(msg)
        if self.properties is not None:
            object.__setattr__(self, "properties", copy.deepcopy(self.properties))
        if self.bbox is not None:
            object.__setattr__(self, "bbox", check_bbox(self.bbox))
        foreign_members = check_foreign_members(self.foreign_members, FEATURE_MEMBERS, "Feature")
        object.__setattr__(self, "foreign_members", foreign_members)

    def prop(self, key: str, default: JsonValue = None) -> JsonValue:
        """Get the property value for the given key, or ``default`` if there is no such property."""
        if not self.properties:
            return default
        return self.properties.get(key, default)

    def __repr__(self) -> str:
        geom = self.geometry.type if self.geometry is not None else None
        return f"{type(self).__name__}(id={self.id!r}, geometry={geom})"


@dataclass(kw_only=True, slots=True, frozen=True, repr=False)
class FeatureCollection(Spatial):
    """
    An ordered collection of features.

    Attributes:
        features: the features in this collection
        bbox: an optional bounding box
        crs: an optional coordinate reference system (not part of RFC 7946)
        foreign_members: members of the collection object that are not defined by the format,
                         or ``None`` if there are none

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.3
    """

    features: tuple[Feature, ...]
    bbox: Bbox | None = None
    crs: Crs | None = None
    foreign_members: dict[str, JsonValue] | None = None

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        features = tuple(self.features)
        for feature in features:
            if not isinstance(feature, Feature):
                msg = f"expected a feature, got {type(feature).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "features", features)
        if self.bbox is not None:
            object.__setattr__(self, "bbox", check_bbox(self.bbox))
        foreign_members = check_foreign_members(
            self.foreign_members, FEATURE_COLLECTION_MEMBERS, "FeatureCollection"
        )
        object.__setattr__(self, "foreign_members", foreign_members)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{len(self.features)} features>)"


GeoJson: TypeAlias = Geometry | Feature | FeatureCollection
"""
The root object of a GeoJSON document.

References:
    - https://tools.ietf.org/html/rfc7946#section-3
"""


def all_positions(obj: GeoJson) -> Iterator[Position]:
    """Iterates over all positions of a geometry, feature, or feature collection."""
    match obj:
        case Geometry():
            yield from positions(obj)
        case Feature(geometry=None):
            return
        case Feature(geometry=geom):
            yield from positions(geom)
        case FeatureCollection(features=features):
            for feature in features:
                yield from all_positions(feature)
        case _:
            raise AssertionError(obj)


def compute_bbox(obj: GeoJson) -> Bbox | None:
    """
    Compute the bounding box that encloses all positions of ``obj``.

    The ``bbox`` members of ``obj`` and its children are ignored.

    Returns:
        - ``None`` if there are no positions.
        - ``(min_x, min_y, max_x, max_y)`` if any position has no z value.
        - ``(min_x, min_y, min_z, max_x, max_y, max_z)`` otherwise.
    """
    lo = [math.inf, math.inf, math.inf]
    hi = [-math.inf, -math.inf, -math.inf]
    dims = 3
    found = False

    for pos in all_positions(obj):
        found = True
        dims = min(dims, len(pos))
        for i, v in enumerate(pos):
            lo[i] = min(lo[i], v)
            hi[i] = max(hi[i], v)

    if not found:
        return None

    return (*lo[:dims], *hi[:dims])

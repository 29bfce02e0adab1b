"""
The seven GeoJSON geometry types.

Geometries are immutable value objects: coordinates are stored as (nested) tuples
of float tuples, and their structural invariants are checked when they are constructed.
This means that decoding a JSON value and building a geometry programmatically reject
exactly the same coordinates, with the same exceptions.

References:
    - https://tools.ietf.org/html/rfc7946#section-3.1
"""

import copy
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Final, TypeAlias

from geojson_codec.crs import Crs
from geojson_codec.error import (
    InvalidBboxError,
    InvalidPositionError,
    TooFewPositionsError,
    UnclosedRingError,
)
from geojson_codec.spatial import Spatial
from geojson_codec.value import JsonValue, as_f64_array, is_number


__docformat__ = "google"
__all__ = (
    "Position",
    "Bbox",
    "Geometry",
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "GEOMETRY_TYPES",
    "POSITION_DIMENSIONS",
    "BBOX_LENGTHS",
    "MIN_LINE_POSITIONS",
    "MIN_RING_POSITIONS",
    "GEOMETRY_MEMBERS",
    "GEOMETRY_COLLECTION_MEMBERS",
    "check_position",
    "check_line",
    "check_ring",
    "check_bbox",
    "check_foreign_members",
    "positions",
)


Position: TypeAlias = tuple[float, ...]
"""
A single coordinate tuple ``(x, y)`` or ``(x, y, z)``.

For geographic coordinates, this is ``(longitude, latitude)`` or
``(longitude, latitude, elevation)``, in that order.

References:
    - https://tools.ietf.org/html/rfc7946#section-3.1.1
"""

Bbox: TypeAlias = tuple[float, ...]
"""
An axis-aligned bounding box ``(min_x, min_y, max_x, max_y)`` or
``(min_x, min_y, min_z, max_x, max_y, max_z)``.

The order of the values is not checked.

References:
    - https://tools.ietf.org/html/rfc7946#section-5
"""

GEOMETRY_TYPES: Final[tuple[str, ...]] = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
)
"""The ``"type"`` values of geometry objects."""

POSITION_DIMENSIONS: Final[tuple[int, ...]] = (2, 3)
"""The allowed number of values in a position."""

BBOX_LENGTHS: Final[tuple[int, ...]] = (4, 6)
"""The allowed number of values in a bounding box."""

MIN_LINE_POSITIONS: Final[int] = 2
"""The minimum number of positions in a line string."""

MIN_RING_POSITIONS: Final[int] = 4
"""The minimum number of positions in a linear ring, including the closing one."""

GEOMETRY_MEMBERS: Final[frozenset[str]] = frozenset(("type", "coordinates", "bbox", "crs"))
"""The members defined for geometry objects; any other member is a foreign member."""

GEOMETRY_COLLECTION_MEMBERS: Final[frozenset[str]] = frozenset(
    ("type", "geometries", "bbox", "crs")
)
"""The members defined for geometry collection objects; any other member is a foreign member."""


def check_position(position: Iterable[float]) -> Position:
    """
    Validate a position, and return it as tuple of floats.

    Raises:
        InvalidPositionError: if ``position`` is not a sequence of two or three finite numbers
    """
    try:
        values = tuple(position)
    except TypeError:
        raise InvalidPositionError(position=position, reason="not a sequence") from None

    if len(values) not in POSITION_DIMENSIONS:
        reason = f"has {len(values)} values instead of 2 or 3"
        raise InvalidPositionError(position=values, reason=reason)

    if not all(is_number(v) for v in values):
        raise InvalidPositionError(position=values, reason="values must be numbers")

    floats = tuple(float(v) for v in values)
    if not all(math.isfinite(v) for v in floats):
        raise InvalidPositionError(position=values, reason="values must be finite")

    return floats


def check_line(coordinates: Iterable[Iterable[float]]) -> tuple[Position, ...]:
    """
    Validate the coordinates of a line string.

    Raises:
        InvalidPositionError: if any of the positions is invalid
        TooFewPositionsError: if there are less than two positions
    """
    line = tuple(check_position(pos) for pos in coordinates)
    if len(line) < MIN_LINE_POSITIONS:
        raise TooFewPositionsError(kind="LineString", minimum=MIN_LINE_POSITIONS, actual=len(line))
    return line


def check_ring(coordinates: Iterable[Iterable[float]]) -> tuple[Position, ...]:
    """
    Validate the coordinates of a linear ring.

    A linear ring is a closed line string with four or more positions, where the first
    and last positions are equivalent. Rings that are not closed are rejected, and not
    closed implicitly.

    Raises:
        InvalidPositionError: if any of the positions is invalid
        TooFewPositionsError: if there are less than four positions
        UnclosedRingError: if the first and last positions differ

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.6
    """
    ring = tuple(check_position(pos) for pos in coordinates)
    if len(ring) < MIN_RING_POSITIONS:
        raise TooFewPositionsError(kind="LinearRing", minimum=MIN_RING_POSITIONS, actual=len(ring))
    if ring[0] != ring[-1]:
        raise UnclosedRingError(first=ring[0], last=ring[-1])
    return ring


def check_bbox(bbox: Iterable[float]) -> Bbox:
    """
    Validate a bounding box, and return it as tuple of floats.

    Only the number of values is checked; the values themselves are passed through.

    Raises:
        WrongTypeError: if any of the values is not a number
        InvalidBboxError: if there are not 4 or 6 values
    """
    values = as_f64_array(tuple(bbox), "bbox")
    if len(values) not in BBOX_LENGTHS:
        raise InvalidBboxError(length=len(values))
    return values


def check_foreign_members(
    members: Mapping[str, JsonValue] | None,
    defined: frozenset[str],
    kind: str,
) -> dict[str, JsonValue] | None:
    """
    Validate the foreign members of an object, and return a copy that the object owns.

    Args:
        members: the foreign members, or ``None``
        defined: the names of the members defined for this kind of object
        kind: the kind of object, used in the error message

    Returns:
        a deep copy of ``members``, or ``None`` if there are none

    Raises:
        ValueError: if a foreign member has the name of a defined member
    """
    if not members:
        return None

    reserved = sorted(defined.intersection(members))
    if reserved:
        names = ", ".join(repr(name) for name in reserved)
        msg = f"{kind} cannot have foreign members named {names}"
        raise ValueError(msg)

    return copy.deepcopy(dict(members))


@dataclass(kw_only=True, slots=True, frozen=True)
class Geometry(Spatial):
    """
    Base class of the seven geometry types.

    Geometry types are a closed set: ``Point``, ``MultiPoint``, ``LineString``,
    ``MultiLineString``, ``Polygon``, ``MultiPolygon``, and ``GeometryCollection``.

    Attributes:
        bbox: an optional bounding box
        crs: an optional coordinate reference system (not part of RFC 7946)
        foreign_members: members of the geometry object that are not defined by the format,
                         or ``None`` if there are none. Their names must differ from the
                         defined members, and the geometry keeps a deep copy of them.

    Geometries compare by value, but are not hashable.
    """

    bbox: Bbox | None = None
    crs: Crs | None = None
    foreign_members: dict[str, JsonValue] | None = None

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.bbox is not None:
            object.__setattr__(self, "bbox", check_bbox(self.bbox))
        defined = (
            GEOMETRY_COLLECTION_MEMBERS
            if isinstance(self, GeometryCollection)
            else GEOMETRY_MEMBERS
        )
        foreign_members = check_foreign_members(self.foreign_members, defined, self.type)
        object.__setattr__(self, "foreign_members", foreign_members)
        self._check_coordinates()

    def _check_coordinates(self) -> None:
        raise NotImplementedError

    @property
    def type(self) -> str:
        """The geometry's ``"type"`` value, f.e. ``"Point"``."""
        return type(self).__name__

    @property
    def has_z(self) -> bool:
        """``True`` if any of the geometry's positions has a z value."""
        return any(len(pos) == 3 for pos in positions(self))

    @property
    def is_empty(self) -> bool:
        """``True`` if this geometry has no positions at all."""
        return next(positions(self), None) is None


@dataclass(kw_only=True, slots=True, frozen=True)
class Point(Geometry):
    """
    A single position.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.2
    """

    coordinates: Position

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        object.__setattr__(self, "coordinates", check_position(self.coordinates))


@dataclass(kw_only=True, slots=True, frozen=True)
class MultiPoint(Geometry):
    """
    Any number of positions.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.3
    """

    coordinates: tuple[Position, ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        coords = tuple(check_position(pos) for pos in self.coordinates)
        object.__setattr__(self, "coordinates", coords)


@dataclass(kw_only=True, slots=True, frozen=True)
class LineString(Geometry):
    """
    Two or more positions.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.4
    """

    coordinates: tuple[Position, ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        object.__setattr__(self, "coordinates", check_line(self.coordinates))


@dataclass(kw_only=True, slots=True, frozen=True)
class MultiLineString(Geometry):
    """
    Any number of line strings.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.5
    """

    coordinates: tuple[tuple[Position, ...], ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        coords = tuple(check_line(line) for line in self.coordinates)
        object.__setattr__(self, "coordinates", coords)


@dataclass(kw_only=True, slots=True, frozen=True)
class Polygon(Geometry):
    """
    Any number of linear rings.

    If there is more than one ring, the first one is the exterior ring,
    and the others are holes. RFC 7946 recommends exterior rings to be
    counterclockwise and holes to be clockwise, but ring orientation is not checked.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.6
    """

    coordinates: tuple[tuple[Position, ...], ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        coords = tuple(check_ring(ring) for ring in self.coordinates)
        object.__setattr__(self, "coordinates", coords)


@dataclass(kw_only=True, slots=True, frozen=True)
class MultiPolygon(Geometry):
    """
    Any number of polygons.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.7
    """

    coordinates: tuple[tuple[tuple[Position, ...], ...], ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        coords = tuple(tuple(check_ring(ring) for ring in poly) for poly in self.coordinates)
        object.__setattr__(self, "coordinates", coords)


@dataclass(kw_only=True, slots=True, frozen=True)
class GeometryCollection(Geometry):
    """
    Any number of geometries, including other geometry collections.

    References:
        - https://tools.ietf.org/html/rfc7946#section-3.1.8
    """

    geometries: tuple[Geometry, ...]

    __hash__ = None  # type: ignore[assignment]

    def _check_coordinates(self) -> None:
        geometries = tuple(self.geometries)
        for geom in geometries:
            if not isinstance(geom, Geometry):
                msg = f"expected a geometry, got {type(geom).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "geometries", geometries)


def positions(geometry: Geometry) -> Iterator[Position]:
    """Iterates over all positions of a geometry, descending into geometry collections."""
    match geometry:
        case Point(coordinates=pos):
            yield pos
        case MultiPoint(coordinates=coords) | LineString(coordinates=coords):
            yield from coords
        case MultiLineString(coordinates=coords) | Polygon(coordinates=coords):
            for line in coords:
                yield from line
        case MultiPolygon(coordinates=coords):
            for poly in coords:
                for ring in poly:
                    yield from ring
        case GeometryCollection(geometries=geometries):
            for geom in geometries:
                yield from positions(geom)
        case _:
            raise AssertionError(geometry)

"""
Conversion between GeoJSON geometries and Shapely geometries.

Shapely works on the Cartesian plane, and most of its algorithms ignore z values.
Converting a geometry with z values to Shapely therefore has to be explicit:
either by dropping them with ``drop_z=True``, or by keeping them with ``keep_z=True``.

References:
    - https://shapely.readthedocs.io/en/stable/manual.html
"""

import logging
from collections.abc import Iterable

from geojson_codec.error import EmptyGeometryError, UnsupportedDimensionalityError
from geojson_codec.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
    positions,
)

import shapely.geometry
from shapely.geometry.base import BaseGeometry


__docformat__ = "google"
__all__ = (
    "to_shapely",
    "from_shapely",
)


_logger = logging.getLogger(__name__)


def to_shapely(geometry: Geometry, *, drop_z: bool = False, keep_z: bool = False) -> BaseGeometry:
    """
    Convert a geometry to its Shapely counterpart.

    Every geometry type maps to the Shapely type of the same name. Geometry collections
    are converted recursively.

    Args:
        geometry: the geometry to convert
        drop_z: convert to a 2D geometry, even if ``geometry`` has z values
        keep_z: convert to a 3D geometry if ``geometry`` has z values

    Raises:
        ValueError: if both ``drop_z`` and ``keep_z`` are set
        UnsupportedDimensionalityError: if ``geometry`` has z values, but neither ``drop_z``
                                        nor ``keep_z`` is set; or if ``keep_z`` is set,
                                        but positions with and without z values are mixed
        EmptyGeometryError: if ``geometry`` contains a polygon without any rings
    """
    if drop_z and keep_z:
        msg = "'drop_z' and 'keep_z' are mutually exclusive"
        raise ValueError(msg)

    if geometry.has_z and not keep_z:
        if not drop_z:
            reason = "has z values; use 'drop_z' or 'keep_z'"
            raise UnsupportedDimensionalityError(kind=geometry.type, reason=reason)
        _logger.debug(f"drop z values of {geometry.type}")

    return _to_shapely(geometry, keep_z=keep_z)


def _to_shapely(geometry: Geometry, *, keep_z: bool) -> BaseGeometry:
    dims = _dimensions(geometry) if keep_z else 2

    match geometry:
        case Point(coordinates=pos):
            return shapely.geometry.Point(pos[:dims])
        case MultiPoint(coordinates=coords):
            return shapely.geometry.MultiPoint(_trim(coords, dims))
        case LineString(coordinates=coords):
            return shapely.geometry.LineString(_trim(coords, dims))
        case MultiLineString(coordinates=lines):
            return shapely.geometry.MultiLineString([_trim(line, dims) for line in lines])
        case Polygon(coordinates=rings):
            return _polygon(rings, dims)
        case MultiPolygon(coordinates=polys):
            return shapely.geometry.MultiPolygon([_polygon(rings, dims) for rings in polys])
        case GeometryCollection(geometries=geometries):
            return shapely.geometry.GeometryCollection(
                [_to_shapely(geom, keep_z=keep_z) for geom in geometries]
            )
        case _:
            raise AssertionError(geometry)


def _dimensions(geometry: Geometry) -> int:
    """The number of dimensions of a geometry that is not a collection."""
    if isinstance(geometry, GeometryCollection):
        return 2  # unused, each child is checked on its own

    dims = {len(pos) for pos in positions(geometry)}
    if len(dims) > 1:
        reason = "mixes positions with and without z values"
        raise UnsupportedDimensionalityError(kind=geometry.type, reason=reason)

    return dims.pop() if dims else 2


def _trim(coords: Iterable[Position], dims: int) -> list[Position]:
    return [pos[:dims] for pos in coords]


def _polygon(rings: tuple[tuple[Position, ...], ...], dims: int) -> shapely.geometry.Polygon:
    # Shapely polygons without exterior are empty, which we do not allow
    if not rings:
        raise EmptyGeometryError(kind="Polygon")

    exterior, *holes = rings
    return shapely.geometry.Polygon(
        shell=_trim(exterior, dims),
        holes=[_trim(hole, dims) for hole in holes],
    )


def from_shapely(geom: BaseGeometry) -> Geometry:
    """
    Convert a Shapely geometry to its GeoJSON counterpart.

    Every Shapely type maps to the geometry type of the same name, except for ``LinearRing``,
    which does not exist in GeoJSON, and is converted to a ``LineString``.
    z values are kept if ``geom`` has them.

    Raises:
        EmptyGeometryError: if ``geom`` is an empty point, line string, linear ring, or polygon,
                            or contains one
        InvalidGeometryError: if ``geom`` has coordinates that are invalid in GeoJSON,
                              f.e. a line string with a single position
        TypeError: if ``geom`` is not a Shapely geometry
    """
    match geom:
        case shapely.geometry.Point():
            return Point(coordinates=_point_coords(geom))
        case shapely.geometry.LineString():
            # this includes LinearRing
            return LineString(coordinates=_line_coords(geom))
        case shapely.geometry.Polygon():
            return Polygon(coordinates=_polygon_coords(geom))
        case shapely.geometry.MultiPoint():
            return MultiPoint(coordinates=[_point_coords(point) for point in geom.geoms])
        case shapely.geometry.MultiLineString():
            return MultiLineString(coordinates=[_line_coords(line) for line in geom.geoms])
        case shapely.geometry.MultiPolygon():
            return MultiPolygon(coordinates=[_polygon_coords(poly) for poly in geom.geoms])
        case shapely.geometry.GeometryCollection():
            return GeometryCollection(geometries=[from_shapely(g) for g in geom.geoms])
        case _:
            msg = f"expected a Shapely geometry, got {type(geom).__name__}"
            raise TypeError(msg)


def _point_coords(point: shapely.geometry.Point) -> Position:
    if point.is_empty:
        raise EmptyGeometryError(kind="Point")
    return tuple(point.coords[0])


def _line_coords(line: shapely.geometry.LineString) -> tuple[Position, ...]:
    if line.is_empty:
        raise EmptyGeometryError(kind=line.geom_type)
    return tuple(line.coords)


def _polygon_coords(poly: shapely.geometry.Polygon) -> tuple[tuple[Position, ...], ...]:
    if poly.is_empty:
        raise EmptyGeometryError(kind="Polygon")
    return (
        tuple(poly.exterior.coords),
        *(tuple(hole.coords) for hole in poly.interiors),
    )

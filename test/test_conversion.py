import logging

from geojson_codec.conversion import from_shapely, to_shapely
from geojson_codec.error import EmptyGeometryError, UnsupportedDimensionalityError
from geojson_codec.geometry import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

import pytest
import shapely
import shapely.geometry


SQUARE = ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0))
HOLE = ((1.0, 1.0), (1.0, 2.0), (2.0, 2.0), (2.0, 1.0), (1.0, 1.0))

GEOMETRIES_2D = [
    Point(coordinates=(1.0, 2.0)),
    MultiPoint(coordinates=()),
    MultiPoint(coordinates=((1.0, 2.0), (3.0, 4.0))),
    LineString(coordinates=((0.0, 0.0), (1.0, 1.0), (2.0, 0.0))),
    MultiLineString(coordinates=()),
    MultiLineString(coordinates=(((0.0, 0.0), (1.0, 1.0)), ((2.0, 2.0), (3.0, 3.0)))),
    Polygon(coordinates=(SQUARE,)),
    Polygon(coordinates=(SQUARE, HOLE)),
    MultiPolygon(coordinates=()),
    MultiPolygon(coordinates=((SQUARE, HOLE), (SQUARE,))),
    GeometryCollection(geometries=()),
    GeometryCollection(
        geometries=(
            Point(coordinates=(1.0, 2.0)),
            Polygon(coordinates=(SQUARE,)),
            GeometryCollection(geometries=(LineString(coordinates=((0.0, 0.0), (1.0, 1.0))),)),
        )
    ),
]


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize("geometry", GEOMETRIES_2D, ids=lambda g: g.type)
def test_round_trip_2d(geometry):
    shape = to_shapely(geometry)
    assert shape.geom_type == geometry.type
    assert not shape.has_z
    assert from_shapely(shape) == geometry


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize("geometry", GEOMETRIES_2D, ids=lambda g: g.type)
def test_shape_from_geo_interface(geometry):
    if geometry.is_empty:
        pytest.skip("shape() cannot build every kind of empty geometry")
    assert shapely.geometry.shape(geometry).wkt == to_shapely(geometry).wkt


@pytest.mark.xdist_group(name="fast")
def test_polygon_with_hole():
    shape = to_shapely(Polygon(coordinates=(SQUARE, HOLE)))
    assert isinstance(shape, shapely.geometry.Polygon)
    assert len(shape.interiors) == 1
    assert shape.area == 15.0
    assert shape.contains(shapely.geometry.Point(3.0, 3.0))
    assert not shape.contains(shapely.geometry.Point(1.5, 1.5))


@pytest.mark.xdist_group(name="fast")
def test_z_values_are_not_dropped_silently():
    point = Point(coordinates=(1.0, 2.0, 3.0))

    with pytest.raises(UnsupportedDimensionalityError) as exc_info:
        _ = to_shapely(point)
    assert exc_info.value.kind == "Point"

    shape = to_shapely(point, drop_z=True)
    assert not shape.has_z
    assert shape.wkt == "POINT (1 2)"
    assert from_shapely(shape) == Point(coordinates=(1.0, 2.0))

    shape = to_shapely(point, keep_z=True)
    assert shape.has_z
    assert from_shapely(shape) == point

    with pytest.raises(ValueError):
        _ = to_shapely(point, drop_z=True, keep_z=True)


@pytest.mark.xdist_group(name="fast")
def test_keep_z():
    line = LineString(coordinates=((0.0, 0.0, 10.0), (1.0, 1.0, 20.0)))
    shape = to_shapely(line, keep_z=True)
    assert list(shape.coords) == [(0.0, 0.0, 10.0), (1.0, 1.0, 20.0)]
    assert from_shapely(shape) == line

    # 2D geometries stay 2D
    line = LineString(coordinates=((0.0, 0.0), (1.0, 1.0)))
    assert not to_shapely(line, keep_z=True).has_z

    # the dimensions of collection members are checked one by one
    collection = GeometryCollection(
        geometries=(
            Point(coordinates=(0.0, 0.0)),
            Point(coordinates=(1.0, 1.0, 1.0)),
        )
    )
    shape = to_shapely(collection, keep_z=True)
    assert len(shape.geoms) == 2
    assert shape.geoms[1].has_z


@pytest.mark.xdist_group(name="fast")
def test_mixed_dimensions():
    multi_point = MultiPoint(coordinates=((0.0, 0.0), (1.0, 1.0, 1.0)))

    with pytest.raises(UnsupportedDimensionalityError, match="mixes positions"):
        _ = to_shapely(multi_point, keep_z=True)

    shape = to_shapely(multi_point, drop_z=True)
    assert from_shapely(shape) == MultiPoint(coordinates=((0.0, 0.0), (1.0, 1.0)))


@pytest.mark.xdist_group(name="fast")
def test_polygon_without_rings():
    with pytest.raises(EmptyGeometryError) as exc_info:
        _ = to_shapely(Polygon(coordinates=()))
    assert exc_info.value.kind == "Polygon"

    with pytest.raises(EmptyGeometryError):
        _ = to_shapely(MultiPolygon(coordinates=((SQUARE,), ())))


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize(
    "shape",
    [
        shapely.geometry.Point(),
        shapely.geometry.LineString(),
        shapely.geometry.Polygon(),
    ],
    ids=["Point", "LineString", "Polygon"],
)
def test_empty_shapes(shape):
    with pytest.raises(EmptyGeometryError):
        _ = from_shapely(shape)


@pytest.mark.xdist_group(name="fast")
def test_linear_ring():
    ring = shapely.geometry.LinearRing([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])
    line = from_shapely(ring)
    assert isinstance(line, LineString)
    assert line.coordinates == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0))


@pytest.mark.xdist_group(name="fast")
def test_from_wkt():
    shape = shapely.from_wkt("MULTIPOLYGON (((0 0, 4 0, 4 4, 0 4, 0 0)), ((5 5, 6 5, 6 6, 5 5)))")
    multi_polygon = from_shapely(shape)
    assert isinstance(multi_polygon, MultiPolygon)
    assert len(multi_polygon.coordinates) == 2
    assert multi_polygon.coordinates[0] == (SQUARE,)
    assert to_shapely(multi_polygon).equals(shape)


@pytest.mark.xdist_group(name="fast")
def test_not_a_shape():
    with pytest.raises(TypeError):
        _ = from_shapely("POINT (1 2)")


@pytest.mark.xdist_group(name="fast")
def test_drop_z_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="geojson_codec"):
        _ = to_shapely(Point(coordinates=(1.0, 2.0, 3.0)), drop_z=True)
    assert "drop z values of Point" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="geojson_codec"):
        _ = to_shapely(Point(coordinates=(1.0, 2.0)), drop_z=True)
    assert caplog.text == ""

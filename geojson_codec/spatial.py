"""Basic definitions for GeoJSON objects."""

from typing import Any, TypeAlias


__docformat__ = "google"
__all__ = (
    "GeoJsonDict",
    "Spatial",
)


GeoJsonDict: TypeAlias = dict[str, Any]
"""A dictionary representing a GeoJSON object."""


class Spatial:
    """
    Base class for geometries, features and feature collections.

    Objects of this class have the ``__geo_interface__`` property following a protocol
    [proposed](https://gist.github.com/sgillies/2217756) by Sean Gillies, which can make
    it easier to use spatial data in other Python software. An example of this is the ``shape()``
    function that builds Shapely geometries from any object with the ``__geo_interface__`` property.
    """

    __slots__ = ()

    @property
    def geojson(self) -> GeoJsonDict:
        """
        A mapping of this object, using the GeoJSON format.

        This is the canonical encoding produced by ``geojson_codec.codec.to_value()``.

        References:
            - https://tools.ietf.org/html/rfc7946#section-3
        """
        from geojson_codec.codec import to_value

        return to_value(self)  # type: ignore[arg-type]

    @property
    def __geo_interface__(self) -> GeoJsonDict:
        """Same as ``geojson``."""
        return self.geojson

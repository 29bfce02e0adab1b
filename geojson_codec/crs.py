"""
Coordinate reference system objects.

RFC 7946 removed the ``crs`` member: all GeoJSON coordinates are expected to be
``CRS:84`` longitude/latitude pairs. Documents written against the 2008 specification
may still carry one though, so it is decoded and re-encoded as-is. No coordinates are
ever transformed.

References:
    - https://geojson.org/geojson-spec.html#coordinate-reference-system-objects
    - https://tools.ietf.org/html/rfc7946#section-4
"""

from dataclasses import dataclass
from typing import TypeAlias

from geojson_codec.error import UnknownCrsTypeError
from geojson_codec.value import JsonObject, JsonValue, as_object, as_str, get_member


__docformat__ = "google"
__all__ = (
    "Crs",
    "NamedCrs",
    "LinkedCrs",
    "crs_from_value",
    "crs_to_value",
)


@dataclass(kw_only=True, slots=True, frozen=True)
class NamedCrs:
    """
    A CRS identified by name, f.e. ``"urn:ogc:def:crs:OGC:1.3:CRS84"``.

    Attributes:
        name: the CRS name
    """

    name: str


@dataclass(kw_only=True, slots=True, frozen=True)
class LinkedCrs:
    """
    A CRS defined at a URI.

    Attributes:
        href: a dereferenceable URI
        type: an optional hint at the format of the linked CRS parameters, f.e. ``"proj4"``
    """

    href: str
    type: str | None = None


Crs: TypeAlias = NamedCrs | LinkedCrs
"""Either a named or a linked CRS."""


def crs_from_value(value: JsonValue) -> Crs:
    """
    Decode the value of a ``crs`` member.

    Raises:
        MissingFieldError: if ``type`` or ``properties`` is missing, or ``name``/``href``
                           is missing in ``properties``
        WrongTypeError: if any of the members has the wrong kind
        UnknownCrsTypeError: if ``type`` is neither ``"name"`` nor ``"link"``
    """
    obj = as_object(value, "crs")
    type_name = as_str(get_member(obj, "type", "string"), "type")
    properties = as_object(get_member(obj, "properties", "object"), "properties")

    match type_name:
        case "name":
            return NamedCrs(name=as_str(get_member(properties, "name", "string"), "name"))
        case "link":
            href = as_str(get_member(properties, "href", "string"), "href")
            link_type = properties.get("type")
            return LinkedCrs(
                href=href,
                type=None if link_type is None else as_str(link_type, "type"),
            )
        case _:
            raise UnknownCrsTypeError(type_name=type_name)


def crs_to_value(crs: Crs) -> JsonObject:
    """Encode a CRS as value of a ``crs`` member."""
    match crs:
        case NamedCrs(name=name):
            return {"type": "name", "properties": {"name": name}}
        case LinkedCrs(href=href, type=None):
            return {"type": "link", "properties": {"href": href}}
        case LinkedCrs(href=href, type=link_type):
            return {"type": "link", "properties": {"href": href, "type": link_type}}
        case _:
            raise AssertionError(crs)

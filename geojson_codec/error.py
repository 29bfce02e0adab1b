"""
Error types.

```
                          (GeoJsonError)
                                ╷
              ┌─────────────────┴──────────────────────┐
              ╵                                        ╵
        (DecodeError)                          (ConversionError)
              ╷                                        ╷
              ├── MalformedJsonError                   ├── EmptyGeometryError
              ├── MissingFieldError                    └── UnsupportedDimensionalityError
              ├── WrongTypeError
              ├── WrongObjectTypeError
              ├── UnknownGeometryTypeError
              ├── UnknownTopLevelTypeError
              ├── UnknownCrsTypeError
              ├── InvalidIdError
              ├── InvalidBboxError
              └── (InvalidGeometryError)
                          ╷
                          ├── InvalidPositionError
                          ├── TooFewPositionsError
                          └── UnclosedRingError
```
"""

from dataclasses import dataclass
from typing import Any, TypeGuard


__docformat__ = "google"
__all__ = (
    "GeoJsonError",
    "DecodeError",
    "MalformedJsonError",
    "MissingFieldError",
    "WrongTypeError",
    "UnknownGeometryTypeError",
    "UnknownTopLevelTypeError",
    "UnknownCrsTypeError",
    "WrongObjectTypeError",
    "InvalidIdError",
    "InvalidBboxError",
    "InvalidGeometryError",
    "InvalidPositionError",
    "TooFewPositionsError",
    "UnclosedRingError",
    "ConversionError",
    "EmptyGeometryError",
    "UnsupportedDimensionalityError",
    "is_decode_err",
    "is_invalid_geometry",
    "is_conversion_err",
)


class GeoJsonError(Exception):
    """Base exception for GeoJSON objects that cannot be decoded or converted."""


class DecodeError(GeoJsonError):
    """
    Base exception for JSON values that are not well-formed GeoJSON.

    Decoding is fail-fast: the first structural defect encountered aborts decoding,
    and no partially decoded object is returned.
    """


@dataclass(kw_only=True)
class MalformedJsonError(DecodeError):
    """
    The input text is not JSON at all.

    Attributes:
        cause: the exception raised by the JSON parser, or a ``UnicodeDecodeError``
               if the input bytes are not valid UTF-8, UTF-16 or UTF-32
    """

    cause: ValueError

    def __str__(self) -> str:
        return f"malformed JSON: {self.cause}"


@dataclass(kw_only=True)
class MissingFieldError(DecodeError):
    """
    A mandatory member is missing from a JSON object.

    Attributes:
        field: the name of the missing member
        expected: the kind of JSON value that was expected, f.e. ``"array"``
    """

    field: str
    expected: str

    def __str__(self) -> str:
        return f"missing member '{self.field}' (expected {self.expected})"


@dataclass(kw_only=True)
class WrongTypeError(DecodeError):
    """
    A JSON value is present, but of the wrong kind.

    Attributes:
        field: the name of the member the value was read from
        expected: the kind of JSON value that was expected, f.e. ``"array"``
        actual: the kind of JSON value that was found, f.e. ``"string"``
    """

    field: str
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"'{self.field}' must be {self.expected}, not {self.actual}"


@dataclass(kw_only=True)
class UnknownGeometryTypeError(DecodeError):
    """
    The ``"type"`` member of a geometry does not name one of the seven geometry types.

    Attributes:
        type_name: the offending ``"type"`` value
    """

    type_name: str

    def __str__(self) -> str:
        return f"unknown geometry type {self.type_name!r}"


@dataclass(kw_only=True)
class UnknownTopLevelTypeError(DecodeError):
    """
    The ``"type"`` member of a document root names neither a geometry nor a feature (collection).

    Attributes:
        type_name: the offending ``"type"`` value
    """

    type_name: str

    def __str__(self) -> str:
        return f"unknown GeoJSON object type {self.type_name!r}"


@dataclass(kw_only=True)
class UnknownCrsTypeError(DecodeError):
    """
    The ``"type"`` member of a ``crs`` object is neither ``"name"`` nor ``"link"``.

    Attributes:
        type_name: the offending ``"type"`` value
    """

    type_name: str

    def __str__(self) -> str:
        return f"unknown crs type {self.type_name!r}"


@dataclass(kw_only=True)
class WrongObjectTypeError(DecodeError):
    """
    A GeoJSON object of a specific type was expected in this place, but another one was found.

    This is raised f.e. when the ``features`` of a feature collection contain a geometry.

    Attributes:
        expected: the expected ``"type"`` value
        actual: the ``"type"`` value that was found
    """

    expected: str
    actual: str

    def __str__(self) -> str:
        return f"expected a {self.expected} object, got {self.actual!r}"


@dataclass(kw_only=True)
class InvalidIdError(DecodeError):
    """
    The ``"id"`` member of a feature is neither a string nor a number.

    Attributes:
        actual: the kind of JSON value that was found
    """

    actual: str

    def __str__(self) -> str:
        return f"feature id must be a string or number, not {self.actual}"


@dataclass(kw_only=True)
class InvalidBboxError(DecodeError):
    """
    A ``"bbox"`` member does not have 2*n numbers, with n being 2 or 3.

    Attributes:
        length: the number of values in the bounding box
    """

    length: int

    def __str__(self) -> str:
        return f"bbox must have 4 or 6 values, got {self.length}"


class InvalidGeometryError(DecodeError):
    """
    Base exception for coordinates that violate a structural invariant of their geometry type.

    These errors are raised both when decoding JSON values and when constructing
    geometries programmatically.
    """


@dataclass(kw_only=True)
class InvalidPositionError(InvalidGeometryError):
    """
    A position does not have two or three finite numbers.

    Attributes:
        position: the offending position
        reason: what is wrong with it
    """

    position: Any
    reason: str

    def __str__(self) -> str:
        return f"invalid position {self.position!r}: {self.reason}"


@dataclass(kw_only=True)
class TooFewPositionsError(InvalidGeometryError):
    """
    A line string or linear ring has less positions than required.

    Attributes:
        kind: ``"LineString"`` or ``"LinearRing"``
        minimum: the minimum number of positions
        actual: the number of positions that were found
    """

    kind: str
    minimum: int
    actual: int

    def __str__(self) -> str:
        return f"{self.kind} needs at least {self.minimum} positions, got {self.actual}"


@dataclass(kw_only=True)
class UnclosedRingError(InvalidGeometryError):
    """
    The first and last positions of a linear ring differ.

    Rings are never closed implicitly; use ``geojson_codec.repair.close_rings()``
    before decoding if that is what you want.

    Attributes:
        first: the first position of the ring
        last: the last position of the ring
    """

    first: tuple[float, ...]
    last: tuple[float, ...]

    def __str__(self) -> str:
        return f"linear ring is not closed: starts at {self.first}, ends at {self.last}"


class ConversionError(GeoJsonError):
    """Base exception for geometries that cannot be converted to or from Shapely geometries."""


@dataclass(kw_only=True)
class EmptyGeometryError(ConversionError):
    """
    The target geometry type cannot be empty, but the source geometry is.

    Attributes:
        kind: the geometry type that cannot be empty
    """

    kind: str

    def __str__(self) -> str:
        return f"cannot convert an empty {self.kind}"


@dataclass(kw_only=True)
class UnsupportedDimensionalityError(ConversionError):
    """
    The geometry has z coordinates that the conversion cannot preserve.

    Attributes:
        kind: the geometry type that was converted
        reason: why the coordinates are not supported
    """

    kind: str
    reason: str

    def __str__(self) -> str:
        return f"cannot convert {self.kind}: {self.reason}"


def is_decode_err(err: GeoJsonError | None) -> TypeGuard[DecodeError]:
    """``True`` if this is a ``DecodeError``."""
    return isinstance(err, DecodeError)


def is_invalid_geometry(err: GeoJsonError | None) -> TypeGuard[InvalidGeometryError]:
    """``True`` if this is a ``DecodeError`` caused by invalid coordinates."""
    return isinstance(err, InvalidGeometryError)


def is_conversion_err(err: GeoJsonError | None) -> TypeGuard[ConversionError]:
    """``True`` if this is a ``ConversionError``."""
    return isinstance(err, ConversionError)

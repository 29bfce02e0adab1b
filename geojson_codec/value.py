"""
Typed access to generic JSON values.

JSON values are the builtin Python objects produced by ``json.loads()``:
``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` and ``dict``.
The functions in this module extract values of an expected kind, and raise
``MissingFieldError`` or ``WrongTypeError`` naming the member they were read from.
"""

from typing import TypeAlias, Union

from geojson_codec.error import MissingFieldError, WrongTypeError


__docformat__ = "google"
__all__ = (
    "JsonValue",
    "JsonObject",
    "kind_of",
    "get_member",
    "as_object",
    "as_array",
    "as_str",
    "as_number",
    "as_f64_array",
    "is_number",
)


JsonValue: TypeAlias = Union[
    None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]
]
"""Any value of a JSON document."""

JsonObject: TypeAlias = dict[str, JsonValue]
"""A JSON object."""


def kind_of(value: JsonValue) -> str:
    """The name of the JSON kind of ``value``, as used in error messages."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list() | tuple():
            return "array"
        case dict():
            return "object"
        case _:
            return type(value).__name__


def is_number(value: JsonValue) -> bool:
    """``True`` if ``value`` is a JSON number (booleans are not numbers)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def get_member(obj: JsonObject, name: str, expected: str) -> JsonValue:
    """
    Get a mandatory member of a JSON object.

    Args:
        obj: a JSON object
        name: the member's name
        expected: the kind of value that is expected, used in the error message

    Raises:
        MissingFieldError: if there is no such member
    """
    try:
        return obj[name]
    except KeyError:
        raise MissingFieldError(field=name, expected=expected) from None


def as_object(value: JsonValue, field: str) -> JsonObject:
    """
    Returns ``value`` if it is a JSON object.

    Raises:
        WrongTypeError: if ``value`` is of any other kind
    """
    if not isinstance(value, dict):
        raise WrongTypeError(field=field, expected="object", actual=kind_of(value))
    return value


def as_array(value: JsonValue, field: str) -> list[JsonValue]:
    """
    Returns ``value`` if it is a JSON array.

    Tuples are accepted as well, since they are what ``json.dumps()`` encodes as arrays too.

    Raises:
        WrongTypeError: if ``value`` is of any other kind
    """
    if not isinstance(value, list | tuple):
        raise WrongTypeError(field=field, expected="array", actual=kind_of(value))
    return list(value)


def as_str(value: JsonValue, field: str) -> str:
    """
    Returns ``value`` if it is a JSON string.

    Raises:
        WrongTypeError: if ``value`` is of any other kind
    """
    if not isinstance(value, str):
        raise WrongTypeError(field=field, expected="string", actual=kind_of(value))
    return value


def as_number(value: JsonValue, field: str) -> float:
    """
    Returns ``value`` as float if it is a JSON number.

    Raises:
        WrongTypeError: if ``value`` is of any other kind
    """
    if not is_number(value):
        raise WrongTypeError(field=field, expected="number", actual=kind_of(value))
    return float(value)  # type: ignore[arg-type]


def as_f64_array(value: JsonValue, field: str) -> tuple[float, ...]:
    """
    Returns ``value`` as tuple of floats if it is a JSON array of numbers.

    Raises:
        WrongTypeError: if ``value`` is not an array, or if any of its items is not a number
    """
    return tuple(as_number(item, field) for item in as_array(value, field))

"""Shared field logic for STAC models.

Every document kind routes its "type" field through check_type(), in both
directions, so that the kinds stay distinguishable on the untyped wire.
Fields a model does not know about are captured by split_extra_fields()
and merged back by merge_extra_fields().
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from stacmodel.errors import StructureError, TypeMismatchError

_MISSING = object()


def check_type(actual: Any, expected: str) -> str:
    """Accept only an exact, case-sensitive discriminator match.

    Args:
        actual: The discriminator found on the wire or in memory.
        expected: The kind's fixed constant.

    Returns:
        The discriminator.

    Raises:
        TypeMismatchError: If actual != expected.
    """
    if not isinstance(actual, str) or actual != expected:
        raise TypeMismatchError(expected, actual)
    return actual


def ensure_mapping(data: Any, field: str = "<root>") -> Mapping[str, Any]:
    """Raise StructureError unless data is a JSON object."""
    if not isinstance(data, Mapping):
        raise StructureError(field, f"expected an object, got {type(data).__name__}")
    return data


def require(data: Mapping[str, Any], key: str, *types: type) -> Any:
    """Get a required field, checking its JSON type.

    Args:
        data: The JSON object.
        key: Field name.
        *types: Accepted Python types (none means any).

    Raises:
        StructureError: If the field is missing or has the wrong type.
    """
    value = data.get(key, _MISSING)
    if value is _MISSING:
        raise StructureError(key, "required field is missing")
    return _check_field_type(key, value, types)


def optional(data: Mapping[str, Any], key: str, *types: type, default: Any = None) -> Any:
    """Get an optional field; null and absent both yield default."""
    value = data.get(key)
    if value is None:
        return default
    return _check_field_type(key, value, types)


def _check_field_type(key: str, value: Any, types: tuple[type, ...]) -> Any:
    # bool is an int subclass; never accept it where a number is expected
    if types and (
        not isinstance(value, types) or (isinstance(value, bool) and bool not in types)
    ):
        expected = " or ".join(t.__name__ for t in types)
        raise StructureError(key, f"expected {expected}, got {type(value).__name__}")
    return value


def string_list(data: Mapping[str, Any], key: str) -> list[str] | None:
    """Get an optional list of strings."""
    values = optional(data, key, list)
    if values is None:
        return None
    for value in values:
        if not isinstance(value, str):
            raise StructureError(key, f"expected a list of strings, got {value!r}")
    return list(values)


def number_list(value: Any, key: str) -> list[float]:
    """Check a list of JSON numbers (used for bboxes)."""
    if not isinstance(value, list):
        raise StructureError(key, f"expected a list of numbers, got {type(value).__name__}")
    for number in value:
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise StructureError(key, f"expected a list of numbers, got {number!r}")
    return list(value)


def split_extra_fields(data: Mapping[str, Any], known: Iterable[str]) -> dict[str, Any]:
    """Return a deep copy of every member of data not named in known."""
    known_set = set(known)
    return {key: copy.deepcopy(value) for key, value in data.items() if key not in known_set}


def merge_extra_fields(result: dict[str, Any], extra_fields: Mapping[str, Any]) -> dict[str, Any]:
    """Merge extra fields into a serialized dict.

    Known fields win: an extra field can never shadow a modelled one.
    """
    for key, value in extra_fields.items():
        if key not in result:
            result[key] = copy.deepcopy(value)
    return result

"""Polymorphic STAC values.

A Value is one of Item, Catalog, Collection or ItemCollection. Use these
functions when the kind of a document is not known before parsing:

    from stacmodel.value import from_json, to_json

    value = from_json(data)
    if isinstance(value, Item):
        ...
    text = to_json(value)

Dispatch peeks the "type" field and hands the whole document to the
matching kind's from_dict(), which checks the discriminator again. A bare
JSON array is a list of items.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar, Union

from stacmodel.constants import (
    CATALOG_TYPE,
    COLLECTION_TYPE,
    ITEM_COLLECTION_TYPE,
    ITEM_TYPE,
)
from stacmodel.errors import InvalidJsonError, StructureError, TypeMismatchError, UnknownTypeError
from stacmodel.models import Catalog, Collection, Item, ItemCollection

logger = logging.getLogger(__name__)

Value = Union[Item, Catalog, Collection, ItemCollection]

T = TypeVar("T", Item, Catalog, Collection, ItemCollection)

# Discriminator -> concrete kind
VALUE_TYPES: dict[str, type[Value]] = {
    ITEM_TYPE: Item,
    CATALOG_TYPE: Catalog,
    COLLECTION_TYPE: Collection,
    ITEM_COLLECTION_TYPE: ItemCollection,
}


def peek_type(data: Any) -> str:
    """Return a document's discriminator without parsing the rest.

    Raises:
        StructureError: If data is not an object or has no string "type".
    """
    if not isinstance(data, dict):
        raise StructureError("<root>", f"expected an object, got {type(data).__name__}")
    value_type = data.get("type")
    if value_type is None:
        raise StructureError("type", "required field is missing")
    if not isinstance(value_type, str):
        raise StructureError("type", f"expected str, got {type(value_type).__name__}")
    return value_type


def from_dict(data: Any) -> Value:
    """Parse a JSON value of unknown kind.

    Args:
        data: A JSON object, or a JSON array of item objects.

    Returns:
        The matching model instance.

    Raises:
        UnknownTypeError: If "type" names no known kind.
        StructureError: If "type" is missing or the document is malformed.
        TypeMismatchError: If a nested document has the wrong kind.
    """
    if isinstance(data, list):
        logger.debug("Parsing JSON array of %d items as an ItemCollection", len(data))
        return ItemCollection.from_dict(data)

    value_type = peek_type(data)
    cls = VALUE_TYPES.get(value_type)
    if cls is None:
        raise UnknownTypeError(value_type)
    logger.debug("Dispatching '%s' document to %s", value_type, cls.__name__)
    return cls.from_dict(data)


def to_dict(value: Value) -> dict[str, Any]:
    """Serialize any value to its native JSON shape."""
    return value.to_dict()


def from_json(text: str | bytes, location: str | None = None) -> Value:
    """Parse JSON text of unknown kind.

    Args:
        text: JSON text or bytes.
        location: Where the text came from, used in error messages only.

    Raises:
        InvalidJsonError: If text is not JSON.
    """
    return from_dict(loads(text, location))


def to_json(value: Value, *, indent: int | None = 2) -> str:
    """Serialize any value to JSON text."""
    return json.dumps(value.to_dict(), indent=indent, ensure_ascii=False)


def loads(text: str | bytes, location: str | None = None) -> Any:
    """json.loads() raising InvalidJsonError on bad input."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJsonError(str(e), location) from e


def into(value: Value, cls: type[T]) -> T:
    """Narrow a value to an expected kind.

    Raises:
        TypeMismatchError: If value is not an instance of cls.
    """
    if not isinstance(value, cls):
        raise TypeMismatchError(_type_name(cls), value.type)
    return value


def parse_as(data: Any, cls: type[T]) -> T:
    """Parse data as a specific kind, checking its discriminator."""
    return cls.from_dict(data)


def _type_name(cls: type[Value]) -> str:
    for name, kind in VALUE_TYPES.items():
        if kind is cls:
            return name
    return cls.__name__

"""ItemCollection: an ordered page of Items.

Serialized as a GeoJSON FeatureCollection. A bare JSON array of items is
also accepted when parsing, and is written back as a FeatureCollection.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from stacmodel.constants import ITEM_COLLECTION_TYPE
from stacmodel.errors import StructureError
from stacmodel.models.base import (
    check_type,
    merge_extra_fields,
    require,
    split_extra_fields,
)
from stacmodel.models.href import HrefMixin
from stacmodel.models.item import Item
from stacmodel.models.link import Link, LinksMixin, parse_links


@dataclass
class ItemCollection(HrefMixin, LinksMixin):
    """A sequence of STAC Items.

    Attributes:
        features: The items, in order.
        links: Links (e.g., "next" pages of a search).
        extra_fields: Foreign members such as "numberMatched", preserved
            verbatim.
        type: Always "FeatureCollection".
        href: Where this page was read from (never serialized).
    """

    features: list[Item] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    extra_fields: dict[str, Any] = field(default_factory=dict)
    type: str = field(default=ITEM_COLLECTION_TYPE, init=False)
    href: str | None = field(default=None, init=False, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.features)

    def __getitem__(self, index: int) -> Item:
        return self.features[index]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON FeatureCollection."""
        result: dict[str, Any] = {
            "type": check_type(self.type, ITEM_COLLECTION_TYPE),
            "features": [item.to_dict() for item in self.features],
        }
        if self.links:
            result["links"] = [link.to_dict() for link in self.links]
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | list[Any]) -> ItemCollection:
        """Create ItemCollection from a FeatureCollection dict or a list of items.

        Raises:
            TypeMismatchError: If a dict's "type" is not "FeatureCollection",
                or a feature is not an Item.
            StructureError: If a required field is missing or malformed.
        """
        if isinstance(data, list):
            return cls(features=[Item.from_dict(item) for item in data])
        if not isinstance(data, dict):
            raise StructureError(
                "<root>", f"expected an object or array, got {type(data).__name__}"
            )
        check_type(require(data, "type"), ITEM_COLLECTION_TYPE)
        return cls(
            features=[Item.from_dict(item) for item in require(data, "features", list)],
            links=parse_links(data),
            extra_fields=split_extra_fields(data, ("type", "features", "links")),
        )

"""Catalog dataclass for STAC Catalog metadata.

A Catalog is a logical group of other catalogs, collections and items,
connected through its links.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stacmodel.constants import CATALOG_TYPE, STAC_VERSION
from stacmodel.models.base import (
    check_type,
    ensure_mapping,
    merge_extra_fields,
    optional,
    require,
    split_extra_fields,
    string_list,
)
from stacmodel.models.extensions import ExtensionsMixin
from stacmodel.models.href import HrefMixin
from stacmodel.models.link import Link, LinksMixin, parse_links

_CATALOG_FIELDS = (
    "type",
    "stac_version",
    "stac_extensions",
    "id",
    "title",
    "description",
    "links",
)


@dataclass
class Catalog(HrefMixin, LinksMixin, ExtensionsMixin):
    """STAC Catalog metadata model.

    Attributes:
        id: Catalog identifier.
        description: Catalog description (required by STAC).
        title: Human-readable title (optional).
        links: STAC links to children, items and self.
        stac_extensions: Declared extension schema URIs.
        stac_version: STAC spec version.
        extra_fields: Foreign members, preserved verbatim.
        type: Always "Catalog".
        href: Where this catalog was read from (never serialized).
    """

    id: str
    description: str
    title: str | None = None
    links: list[Link] = field(default_factory=list)
    stac_extensions: list[str] | None = None
    stac_version: str = STAC_VERSION
    extra_fields: dict[str, Any] = field(default_factory=dict)
    type: str = field(default=CATALOG_TYPE, init=False)
    href: str | None = field(default=None, init=False, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict.

        Raises:
            TypeMismatchError: If self.type was changed from "Catalog".
        """
        result: dict[str, Any] = {
            "type": check_type(self.type, CATALOG_TYPE),
            "stac_version": self.stac_version,
        }
        if self.stac_extensions is not None:
            result["stac_extensions"] = list(self.stac_extensions)
        result["id"] = self.id
        if self.title is not None:
            result["title"] = self.title
        result["description"] = self.description
        result["links"] = [link.to_dict() for link in self.links]
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Catalog:
        """Create Catalog from dict.

        Raises:
            TypeMismatchError: If "type" is not "Catalog".
            StructureError: If a required field is missing or malformed.
        """
        data = ensure_mapping(data)
        check_type(require(data, "type"), CATALOG_TYPE)
        return cls(
            id=require(data, "id", str),
            description=require(data, "description", str),
            title=optional(data, "title", str),
            links=parse_links(data),
            stac_extensions=string_list(data, "stac_extensions"),
            stac_version=require(data, "stac_version", str),
            extra_fields=split_extra_fields(data, _CATALOG_FIELDS),
        )

"""Item dataclass for STAC Item metadata.

An Item is a GeoJSON Feature describing one spatiotemporal asset.
It has geometry, bbox, datetime, and assets per the STAC spec, plus any
foreign members the document carries.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from stacmodel.constants import ITEM_TYPE, STAC_VERSION
from stacmodel.errors import StructureError
from stacmodel.models.asset import Asset, assets_from_dict, assets_to_dict
from stacmodel.models.base import (
    check_type,
    ensure_mapping,
    merge_extra_fields,
    number_list,
    optional,
    require,
    split_extra_fields,
    string_list,
)
from stacmodel.models.extensions import ExtensionsMixin
from stacmodel.models.href import HrefMixin
from stacmodel.models.link import Link, LinksMixin, parse_links

_ITEM_FIELDS = (
    "type",
    "stac_version",
    "stac_extensions",
    "id",
    "geometry",
    "bbox",
    "properties",
    "links",
    "assets",
    "collection",
)


def _now_utc() -> str:
    """Current UTC time as an RFC 3339 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _default_properties() -> dict[str, Any]:
    return {"datetime": _now_utc()}


def _parse_geometry(value: Any) -> dict[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        raise StructureError("geometry", "expected a GeoJSON geometry object or null")
    return value


def _parse_bbox(value: Any) -> list[float] | None:
    if value is None:
        return None
    bbox = number_list(value, "bbox")
    if len(bbox) not in (4, 6):
        raise StructureError("bbox", f"bbox must have 4 or 6 elements, got {len(bbox)}")
    return bbox


@dataclass
class Item(HrefMixin, LinksMixin, ExtensionsMixin):
    """STAC Item metadata model.

    Attributes:
        id: Item identifier, unique within its catalog.
        geometry: GeoJSON geometry, or None.
        bbox: Bounding box [west, south, east, north] (or 6 values with
            elevation), or None.
        properties: Open mapping, conventionally holding "datetime".
        links: STAC links, in document order.
        assets: Assets keyed by name.
        collection: Id of the parent collection (optional).
        stac_extensions: Declared extension schema URIs.
        stac_version: STAC spec version.
        extra_fields: Foreign members, preserved verbatim.
        type: Always "Feature".
        href: Where this item was read from (never serialized).
    """

    id: str
    geometry: dict[str, Any] | None = None
    bbox: list[float] | None = None
    properties: dict[str, Any] = field(default_factory=_default_properties)
    links: list[Link] = field(default_factory=list)
    assets: dict[str, Asset] = field(default_factory=dict)
    collection: str | None = None
    stac_extensions: list[str] | None = None
    stac_version: str = STAC_VERSION
    extra_fields: dict[str, Any] = field(default_factory=dict)
    type: str = field(default=ITEM_TYPE, init=False)
    href: str | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def datetime(self) -> datetime | None:
        """The "datetime" property parsed as a datetime, if set."""
        value = self.properties.get("datetime")
        if value is None:
            return None
        return datetime.fromisoformat(value)

    @datetime.setter
    def datetime(self, value: datetime | None) -> None:
        if value is None:
            self.properties["datetime"] = None
        else:
            self.properties["datetime"] = value.isoformat().replace("+00:00", "Z")

    def add_asset(self, key: str, asset: Asset) -> None:
        """Add or replace the asset stored under key."""
        self.assets[key] = asset

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict.

        Raises:
            TypeMismatchError: If self.type was changed from "Feature".
        """
        result: dict[str, Any] = {
            "type": check_type(self.type, ITEM_TYPE),
            "stac_version": self.stac_version,
        }
        if self.stac_extensions is not None:
            result["stac_extensions"] = list(self.stac_extensions)
        result["id"] = self.id
        result["geometry"] = copy.deepcopy(self.geometry)
        if self.bbox is not None:
            result["bbox"] = list(self.bbox)
        result["properties"] = copy.deepcopy(self.properties)
        result["links"] = [link.to_dict() for link in self.links]
        result["assets"] = assets_to_dict(self.assets)
        if self.collection is not None:
            result["collection"] = self.collection
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        """Create Item from dict.

        Raises:
            TypeMismatchError: If "type" is not "Feature".
            StructureError: If a required field is missing or malformed.
        """
        data = ensure_mapping(data)
        check_type(require(data, "type"), ITEM_TYPE)
        return cls(
            id=require(data, "id", str),
            geometry=copy.deepcopy(_parse_geometry(data.get("geometry"))),
            bbox=_parse_bbox(data.get("bbox")),
            properties=copy.deepcopy(require(data, "properties", dict)),
            links=parse_links(data),
            assets=assets_from_dict(data.get("assets")),
            collection=optional(data, "collection", str),
            stac_extensions=string_list(data, "stac_extensions"),
            stac_version=require(data, "stac_version", str),
            extra_fields=split_extra_fields(data, _ITEM_FIELDS),
        )

"""Collection dataclass for STAC Collection metadata.

A Collection shares every field with a Catalog and adds fields describing
the whole dataset: extent, license, providers, keywords, summaries and
collection-level assets. It is deliberately not a Catalog subclass, so the
two kinds never match each other's isinstance checks.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from stacmodel.constants import COLLECTION_TYPE, DEFAULT_LICENSE, GLOBAL_BBOX, STAC_VERSION
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

_COLLECTION_FIELDS = (
    "type",
    "stac_version",
    "stac_extensions",
    "id",
    "title",
    "description",
    "keywords",
    "license",
    "providers",
    "extent",
    "summaries",
    "links",
    "assets",
)


@dataclass
class Provider:
    """A data provider.

    Attributes:
        name: Provider name.
        description: What the provider did with the data.
        roles: Provider roles (licensor, producer, processor, host).
        url: Provider URL.
        extra_fields: Members not modelled above, preserved verbatim.
    """

    name: str
    description: str | None = None
    roles: list[str] | None = None
    url: str | None = None
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            result["description"] = self.description
        if self.roles is not None:
            result["roles"] = list(self.roles)
        if self.url is not None:
            result["url"] = self.url
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Provider:
        """Create Provider from dict."""
        data = ensure_mapping(data, "providers")
        return cls(
            name=require(data, "name", str),
            description=optional(data, "description", str),
            roles=string_list(data, "roles"),
            url=optional(data, "url", str),
            extra_fields=split_extra_fields(data, ("name", "description", "roles", "url")),
        )


@dataclass
class SpatialExtent:
    """Spatial extent with bounding boxes.

    Attributes:
        bbox: List of bounding boxes. The first one covers the whole
            collection; each is [west, south, east, north] or 6 values.
        extra_fields: Members not modelled above, preserved verbatim.
    """

    bbox: list[list[float]] = field(default_factory=lambda: [list(GLOBAL_BBOX)])
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return merge_extra_fields({"bbox": [list(box) for box in self.bbox]}, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpatialExtent:
        """Create SpatialExtent from dict."""
        data = ensure_mapping(data, "extent.spatial")
        boxes = []
        for box in require(data, "bbox", list):
            box = number_list(box, "extent.spatial.bbox")
            if len(box) not in (4, 6):
                raise StructureError(
                    "extent.spatial.bbox", f"bbox must have 4 or 6 elements, got {len(box)}"
                )
            boxes.append(box)
        return cls(bbox=boxes, extra_fields=split_extra_fields(data, ("bbox",)))


@dataclass
class TemporalExtent:
    """Temporal extent with intervals.

    Attributes:
        interval: List of [start, end] pairs of RFC 3339 strings; either end
            may be None for an open interval.
        extra_fields: Members not modelled above, preserved verbatim.
    """

    interval: list[list[str | None]] = field(default_factory=lambda: [[None, None]])
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return merge_extra_fields(
            {"interval": [list(pair) for pair in self.interval]}, self.extra_fields
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemporalExtent:
        """Create TemporalExtent from dict."""
        data = ensure_mapping(data, "extent.temporal")
        intervals = []
        for pair in require(data, "interval", list):
            if (
                not isinstance(pair, list)
                or len(pair) != 2
                or not all(value is None or isinstance(value, str) for value in pair)
            ):
                raise StructureError(
                    "extent.temporal.interval", f"expected [start, end] strings, got {pair!r}"
                )
            intervals.append(list(pair))
        return cls(interval=intervals, extra_fields=split_extra_fields(data, ("interval",)))


@dataclass
class Extent:
    """Spatial and temporal extent.

    Attributes:
        spatial: Spatial extent with bboxes.
        temporal: Temporal extent with intervals.
        extra_fields: Members not modelled above, preserved verbatim.
    """

    spatial: SpatialExtent = field(default_factory=SpatialExtent)
    temporal: TemporalExtent = field(default_factory=TemporalExtent)
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result = {
            "spatial": self.spatial.to_dict(),
            "temporal": self.temporal.to_dict(),
        }
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Extent:
        """Create Extent from dict."""
        data = ensure_mapping(data, "extent")
        return cls(
            spatial=SpatialExtent.from_dict(require(data, "spatial")),
            temporal=TemporalExtent.from_dict(require(data, "temporal")),
            extra_fields=split_extra_fields(data, ("spatial", "temporal")),
        )


@dataclass
class Collection(HrefMixin, LinksMixin, ExtensionsMixin):
    """STAC Collection metadata model.

    Attributes:
        id: Collection identifier.
        description: Collection description (required by STAC).
        title: Human-readable title (optional).
        keywords: Search keywords.
        license: SPDX license identifier, "various" or "proprietary".
        providers: Data providers.
        extent: Spatial and temporal extent (defaults to the whole globe,
            open in time).
        summaries: Aggregated item properties.
        links: STAC links.
        assets: Collection-level assets keyed by name.
        stac_extensions: Declared extension schema URIs.
        stac_version: STAC spec version.
        extra_fields: Foreign members, preserved verbatim.
        type: Always "Collection".
        href: Where this collection was read from (never serialized).
    """

    id: str
    description: str
    title: str | None = None
    keywords: list[str] | None = None
    license: str = DEFAULT_LICENSE
    providers: list[Provider] | None = None
    extent: Extent = field(default_factory=Extent)
    summaries: dict[str, Any] | None = None
    links: list[Link] = field(default_factory=list)
    assets: dict[str, Asset] | None = None
    stac_extensions: list[str] | None = None
    stac_version: str = STAC_VERSION
    extra_fields: dict[str, Any] = field(default_factory=dict)
    type: str = field(default=COLLECTION_TYPE, init=False)
    href: str | None = field(default=None, init=False, repr=False, compare=False)

    def add_asset(self, key: str, asset: Asset) -> None:
        """Add or replace the asset stored under key."""
        if self.assets is None:
            self.assets = {}
        self.assets[key] = asset

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict.

        Raises:
            TypeMismatchError: If self.type was changed from "Collection".
        """
        result: dict[str, Any] = {
            "type": check_type(self.type, COLLECTION_TYPE),
            "stac_version": self.stac_version,
        }
        if self.stac_extensions is not None:
            result["stac_extensions"] = list(self.stac_extensions)
        result["id"] = self.id
        if self.title is not None:
            result["title"] = self.title
        result["description"] = self.description
        if self.keywords is not None:
            result["keywords"] = list(self.keywords)
        result["license"] = self.license
        if self.providers is not None:
            result["providers"] = [p.to_dict() for p in self.providers]
        result["extent"] = self.extent.to_dict()
        if self.summaries is not None:
            result["summaries"] = copy.deepcopy(self.summaries)
        result["links"] = [link.to_dict() for link in self.links]
        if self.assets is not None:
            result["assets"] = assets_to_dict(self.assets)
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Collection:
        """Create Collection from dict.

        Raises:
            TypeMismatchError: If "type" is not "Collection".
            StructureError: If a required field is missing or malformed.
        """
        data = ensure_mapping(data)
        check_type(require(data, "type"), COLLECTION_TYPE)

        providers = None
        if data.get("providers") is not None:
            providers = [Provider.from_dict(p) for p in require(data, "providers", list)]

        assets = None
        if data.get("assets") is not None:
            assets = assets_from_dict(data["assets"])

        return cls(
            id=require(data, "id", str),
            description=require(data, "description", str),
            title=optional(data, "title", str),
            keywords=string_list(data, "keywords"),
            license=require(data, "license", str),
            providers=providers,
            extent=Extent.from_dict(require(data, "extent")),
            summaries=copy.deepcopy(optional(data, "summaries", dict)),
            links=parse_links(data),
            assets=assets,
            stac_extensions=string_list(data, "stac_extensions"),
            stac_version=require(data, "stac_version", str),
            extra_fields=split_extra_fields(data, _COLLECTION_FIELDS),
        )

"""Data models for STAC documents.

This module exports all model classes. Models are dataclasses with
to_dict()/from_dict() JSON conversion that keeps unknown fields intact.
"""

from __future__ import annotations

from stacmodel.models.asset import Asset
from stacmodel.models.catalog import Catalog
from stacmodel.models.collection import (
    Collection,
    Extent,
    Provider,
    SpatialExtent,
    TemporalExtent,
)
from stacmodel.models.extensions import ExtensionsMixin
from stacmodel.models.href import HrefMixin, href_to_url, is_absolute_href, resolve_href
from stacmodel.models.item import Item
from stacmodel.models.item_collection import ItemCollection
from stacmodel.models.link import Link, LinksMixin

__all__ = [
    # Documents
    "Catalog",
    "Collection",
    "Item",
    "ItemCollection",
    # Collection parts
    "Extent",
    "Provider",
    "SpatialExtent",
    "TemporalExtent",
    # References
    "Asset",
    "Link",
    # Capabilities
    "ExtensionsMixin",
    "HrefMixin",
    "LinksMixin",
    "href_to_url",
    "is_absolute_href",
    "resolve_href",
]

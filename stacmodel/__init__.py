"""stacmodel - Typed SpatioTemporal Asset Catalog (STAC) documents.

Items, Catalogs, Collections and ItemCollections as dataclasses that
round-trip through JSON without losing fields they do not model.
"""

from stacmodel.constants import (
    CATALOG_TYPE,
    COLLECTION_TYPE,
    ITEM_COLLECTION_TYPE,
    ITEM_TYPE,
    STAC_VERSION,
)
from stacmodel.errors import StacError
from stacmodel.io import read, read_json, write
from stacmodel.models import (
    Asset,
    Catalog,
    Collection,
    Extent,
    Item,
    ItemCollection,
    Link,
    Provider,
    SpatialExtent,
    TemporalExtent,
    href_to_url,
)
from stacmodel.value import Value, from_dict, from_json, to_dict, to_json

__all__ = [
    "Asset",
    "CATALOG_TYPE",
    "COLLECTION_TYPE",
    "Catalog",
    "Collection",
    "Extent",
    "ITEM_COLLECTION_TYPE",
    "ITEM_TYPE",
    "Item",
    "ItemCollection",
    "Link",
    "Provider",
    "STAC_VERSION",
    "SpatialExtent",
    "StacError",
    "TemporalExtent",
    "Value",
    "from_dict",
    "from_json",
    "href_to_url",
    "read",
    "read_json",
    "to_dict",
    "to_json",
    "write",
]

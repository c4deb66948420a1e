"""Shared constants for stacmodel.

Discriminator values are fixed by the STAC specification and compared
case-sensitively.
"""

from __future__ import annotations

# STAC version written by newly constructed objects
STAC_VERSION: str = "1.0.0"

# Discriminator ("type" field) values, one per document kind
ITEM_TYPE: str = "Feature"
CATALOG_TYPE: str = "Catalog"
COLLECTION_TYPE: str = "Collection"
ITEM_COLLECTION_TYPE: str = "FeatureCollection"

# Link relation types that describe the catalog hierarchy itself
ROOT_REL: str = "root"
SELF_REL: str = "self"
PARENT_REL: str = "parent"
CHILD_REL: str = "child"
ITEM_REL: str = "item"
COLLECTION_REL: str = "collection"

STRUCTURAL_RELS: frozenset[str] = frozenset(
    {ROOT_REL, SELF_REL, PARENT_REL, CHILD_REL, ITEM_REL, COLLECTION_REL}
)

# Default license for new collections
DEFAULT_LICENSE: str = "proprietary"

# Global extent used by new collections: [west, south, east, north]
GLOBAL_BBOX: tuple[float, float, float, float] = (-180.0, -90.0, 180.0, 90.0)

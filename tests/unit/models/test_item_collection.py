"""Unit tests for ItemCollection."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from stacmodel.errors import StructureError, TypeMismatchError
from stacmodel.models import Item, ItemCollection


class TestItemCollection:
    """Tests for parsing and serializing item pages."""

    @pytest.mark.unit
    def test_parse_feature_collection(self, item_collection_dict: dict[str, Any]) -> None:
        """A FeatureCollection parses into items, links and extras."""
        page = ItemCollection.from_dict(item_collection_dict)

        assert len(page) == 2
        assert [item.id for item in page] == ["item-a", "item-b"]
        assert page[1].properties["datetime"] is None
        assert page.extra_fields == {"numberMatched": 2, "numberReturned": 2}
        next_link = page.link("next")
        assert next_link is not None
        assert next_link.extra_fields == {"method": "GET"}

    @pytest.mark.unit
    def test_round_trip(self, item_collection_dict: dict[str, Any]) -> None:
        """A FeatureCollection round-trips structurally."""
        assert ItemCollection.from_dict(item_collection_dict).to_dict() == item_collection_dict

    @pytest.mark.unit
    def test_parse_bare_array(self, items_array_path: Path) -> None:
        """A JSON array of items is accepted."""
        data = json.loads(items_array_path.read_text())

        page = ItemCollection.from_dict(data)

        assert len(page) == 2
        assert all(isinstance(item, Item) for item in page)

    @pytest.mark.unit
    def test_bare_array_writes_feature_collection(self, items_array_path: Path) -> None:
        """An array is written back as a FeatureCollection."""
        data = json.loads(items_array_path.read_text())

        result = ItemCollection.from_dict(data).to_dict()

        assert result == {"type": "FeatureCollection", "features": data}

    @pytest.mark.unit
    def test_empty_collection(self) -> None:
        """An empty page serializes without links."""
        assert ItemCollection().to_dict() == {"type": "FeatureCollection", "features": []}

    @pytest.mark.unit
    def test_wrong_type_raises(self) -> None:
        """Only FeatureCollection is accepted."""
        with pytest.raises(TypeMismatchError):
            ItemCollection.from_dict({"type": "Catalog", "features": []})

    @pytest.mark.unit
    def test_non_item_feature_raises(self) -> None:
        """Every feature must be an Item."""
        with pytest.raises(TypeMismatchError):
            ItemCollection.from_dict(
                {"type": "FeatureCollection", "features": [{"type": "Catalog"}]}
            )

    @pytest.mark.unit
    def test_missing_features_raises(self) -> None:
        """features is required."""
        with pytest.raises(StructureError):
            ItemCollection.from_dict({"type": "FeatureCollection"})

    @pytest.mark.unit
    def test_scalar_raises(self) -> None:
        """A scalar is neither an object nor an array."""
        with pytest.raises(StructureError):
            ItemCollection.from_dict("items")  # type: ignore[arg-type]

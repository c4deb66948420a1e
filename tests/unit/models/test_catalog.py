"""Unit tests for the Catalog dataclass."""

from __future__ import annotations

from typing import Any

import pytest

from stacmodel.errors import StructureError, TypeMismatchError
from stacmodel.models import Catalog, Collection, Link


class TestCatalog:
    """Tests for Catalog creation and serialization."""

    @pytest.mark.unit
    def test_create_catalog(self) -> None:
        """Catalog needs an id and a description."""
        catalog = Catalog(id="root", description="Root catalog")

        assert catalog.type == "Catalog"
        assert catalog.title is None
        assert catalog.links == []

    @pytest.mark.unit
    def test_to_dict_minimal(self) -> None:
        """Minimal catalog serializes with fixed key order."""
        data = Catalog(id="root", description="Root catalog").to_dict()

        assert data == {
            "type": "Catalog",
            "stac_version": "1.0.0",
            "id": "root",
            "description": "Root catalog",
            "links": [],
        }
        assert list(data) == ["type", "stac_version", "id", "description", "links"]

    @pytest.mark.unit
    def test_round_trip(self, catalog_dict: dict[str, Any]) -> None:
        """A real catalog document round-trips structurally."""
        catalog = Catalog.from_dict(catalog_dict)

        assert catalog.title == "Example Catalog"
        assert len(catalog.child_links()) == 2
        assert len(catalog.item_links()) == 1
        assert catalog.to_dict() == catalog_dict

    @pytest.mark.unit
    def test_collection_document_is_rejected(self, collection_dict: dict[str, Any]) -> None:
        """A Collection is never parsed as a Catalog."""
        with pytest.raises(TypeMismatchError) as exc_info:
            Catalog.from_dict(collection_dict)

        assert exc_info.value.actual == "Collection"

    @pytest.mark.unit
    def test_missing_description_raises(self, catalog_dict: dict[str, Any]) -> None:
        """description is required."""
        del catalog_dict["description"]

        with pytest.raises(StructureError) as exc_info:
            Catalog.from_dict(catalog_dict)

        assert exc_info.value.field == "description"

    @pytest.mark.unit
    def test_wrong_field_type_raises(self, catalog_dict: dict[str, Any]) -> None:
        """id must be a string."""
        catalog_dict["id"] = 42

        with pytest.raises(StructureError):
            Catalog.from_dict(catalog_dict)

    @pytest.mark.unit
    def test_foreign_members_round_trip(self) -> None:
        """Unknown members survive parse and serialize."""
        data = {
            "type": "Catalog",
            "stac_version": "1.0.0",
            "id": "c",
            "description": "d",
            "links": [],
            "conformsTo": ["https://api.stacspec.org/v1.0.0/core"],
        }

        catalog = Catalog.from_dict(data)

        assert catalog.extra_fields == {"conformsTo": ["https://api.stacspec.org/v1.0.0/core"]}
        assert catalog.to_dict() == data

    @pytest.mark.unit
    def test_catalog_is_not_a_collection(self) -> None:
        """The two kinds never match each other's isinstance checks."""
        catalog = Catalog(id="c", description="d")
        collection = Collection(id="c", description="d")

        assert not isinstance(catalog, Collection)
        assert not isinstance(collection, Catalog)


class TestCatalogLinks:
    """Tests for link helpers on a Catalog."""

    @pytest.mark.unit
    def test_set_link_replaces_relation(self) -> None:
        """set_link() keeps exactly one link of a relation."""
        catalog = Catalog(id="c", description="d")
        catalog.add_link(Link.root("./a.json"))
        catalog.add_link(Link.root("./b.json"))
        catalog.set_link(Link.root("./c.json"))

        roots = list(catalog.iter_links("root"))
        assert len(roots) == 1
        assert roots[0].href == "./c.json"

    @pytest.mark.unit
    def test_remove_structural_links(self, catalog_dict: dict[str, Any]) -> None:
        """Structural relations are removed, others stay."""
        catalog = Catalog.from_dict(catalog_dict)
        catalog.add_link(Link("https://example.org/license", "license"))

        removed = catalog.remove_structural_links()

        assert len(removed) == 5
        assert [link.rel for link in catalog.links] == ["license"]

    @pytest.mark.unit
    def test_self_link(self, catalog_dict: dict[str, Any]) -> None:
        """self_link() finds the self relation."""
        catalog = Catalog.from_dict(catalog_dict)

        self_link = catalog.self_link()
        assert self_link is not None
        assert self_link.href.startswith("https://")
        assert catalog.parent_link() is None

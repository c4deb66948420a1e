"""Unit tests for Collection and its extent/provider parts.

Tests cover:
- Default extent and license
- Provider, SpatialExtent and TemporalExtent parsing
- Round trips of a full Collection document
- Distinguishing Collection from Catalog
"""

from __future__ import annotations

from typing import Any

import pytest

from stacmodel.errors import StructureError, TypeMismatchError
from stacmodel.models import (
    Asset,
    Collection,
    Extent,
    Provider,
    SpatialExtent,
    TemporalExtent,
)


class TestExtent:
    """Tests for Extent, SpatialExtent and TemporalExtent."""

    @pytest.mark.unit
    def test_default_extent_is_global_and_open(self) -> None:
        """Defaults cover the whole globe with an open interval."""
        extent = Extent()

        assert extent.spatial.bbox == [[-180.0, -90.0, 180.0, 90.0]]
        assert extent.temporal.interval == [[None, None]]

    @pytest.mark.unit
    def test_defaults_are_not_shared(self) -> None:
        """Each Extent gets its own lists."""
        a = Extent()
        b = Extent()
        a.spatial.bbox.append([0.0, 0.0, 1.0, 1.0])

        assert len(b.spatial.bbox) == 1

    @pytest.mark.unit
    def test_spatial_extent_accepts_3d_boxes(self) -> None:
        """6-element boxes carry elevation."""
        extent = SpatialExtent.from_dict({"bbox": [[0, 0, -10, 1, 1, 10]]})

        assert extent.bbox == [[0, 0, -10, 1, 1, 10]]

    @pytest.mark.unit
    def test_spatial_extent_rejects_bad_box(self) -> None:
        """A 5-element box is malformed."""
        with pytest.raises(StructureError):
            SpatialExtent.from_dict({"bbox": [[0, 0, 1, 1, 1]]})

    @pytest.mark.unit
    def test_temporal_extent_rejects_bad_interval(self) -> None:
        """Intervals are [start, end] pairs."""
        with pytest.raises(StructureError):
            TemporalExtent.from_dict({"interval": [["2020-01-01T00:00:00Z"]]})

    @pytest.mark.unit
    def test_temporal_extent_keeps_foreign_members(self) -> None:
        """Unknown members on nested objects round-trip."""
        data = {"interval": [[None, "2020-01-01T00:00:00Z"]], "resolution": "P1D"}

        extent = TemporalExtent.from_dict(data)

        assert extent.extra_fields == {"resolution": "P1D"}
        assert extent.to_dict() == data

    @pytest.mark.unit
    def test_extent_requires_spatial(self) -> None:
        """spatial is required."""
        with pytest.raises(StructureError) as exc_info:
            Extent.from_dict({"temporal": {"interval": [[None, None]]}})

        assert exc_info.value.field == "spatial"


class TestProvider:
    """Tests for Provider."""

    @pytest.mark.unit
    def test_provider_round_trip(self) -> None:
        """Providers keep known and unknown members."""
        data = {"name": "ACME", "roles": ["host"], "contact": {"email": "a@b.c"}}

        provider = Provider.from_dict(data)

        assert provider.name == "ACME"
        assert provider.roles == ["host"]
        assert provider.to_dict() == data

    @pytest.mark.unit
    def test_provider_requires_name(self) -> None:
        """name is required."""
        with pytest.raises(StructureError):
            Provider.from_dict({"url": "https://example.org"})


class TestCollection:
    """Tests for Collection."""

    @pytest.mark.unit
    def test_create_collection_defaults(self) -> None:
        """A new collection has the default license and extent."""
        collection = Collection(id="c", description="d")

        assert collection.type == "Collection"
        assert collection.license == "proprietary"
        assert collection.assets is None
        assert collection.providers is None

    @pytest.mark.unit
    def test_to_dict_minimal(self) -> None:
        """Unset optional fields are not written."""
        data = Collection(id="c", description="d").to_dict()

        assert list(data) == [
            "type",
            "stac_version",
            "id",
            "description",
            "license",
            "extent",
            "links",
        ]

    @pytest.mark.unit
    def test_parse_full_collection(self, collection_dict: dict[str, Any]) -> None:
        """Every modelled field is populated from a real document."""
        collection = Collection.from_dict(collection_dict)

        assert collection.id == "simple-collection"
        assert collection.license == "CC-BY-4.0"
        assert collection.keywords == ["example", "simple"]
        assert collection.providers is not None
        assert collection.providers[0].extra_fields == {"contact": {"email": "info@remotedata.io"}}
        assert collection.summaries is not None
        assert collection.summaries["platform"] == ["cool_sat1", "cool_sat2"]
        assert collection.extent.temporal.extra_fields == {"resolution": "P1D"}
        assert collection.assets is not None
        assert collection.assets["thumbnail"].has_role("thumbnail")
        assert collection.extra_fields == {"sci:doi": "10.5061/dryad.s2v81.2"}

    @pytest.mark.unit
    def test_round_trip(self, collection_dict: dict[str, Any]) -> None:
        """A full Collection document round-trips structurally."""
        assert Collection.from_dict(collection_dict).to_dict() == collection_dict

    @pytest.mark.unit
    def test_catalog_document_is_rejected(self, catalog_dict: dict[str, Any]) -> None:
        """A Catalog is never parsed as a Collection."""
        with pytest.raises(TypeMismatchError):
            Collection.from_dict(catalog_dict)

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["license", "extent", "description"])
    def test_missing_required_field_raises(
        self, collection_dict: dict[str, Any], field: str
    ) -> None:
        """license, extent and description are required."""
        del collection_dict[field]

        with pytest.raises(StructureError) as exc_info:
            Collection.from_dict(collection_dict)

        assert exc_info.value.field == field

    @pytest.mark.unit
    def test_add_asset_creates_mapping(self) -> None:
        """add_asset() works on a collection without assets."""
        collection = Collection(id="c", description="d")
        collection.add_asset("thumbnail", Asset(href="./thumb.png", roles=["thumbnail"]))

        assert collection.to_dict()["assets"] == {
            "thumbnail": {"href": "./thumb.png", "roles": ["thumbnail"]}
        }

    @pytest.mark.unit
    def test_summaries_are_copied(self, collection_dict: dict[str, Any]) -> None:
        """Parsed summaries do not alias the input."""
        collection = Collection.from_dict(collection_dict)
        assert collection.summaries is not None
        collection.summaries["platform"].append("cool_sat3")

        assert collection_dict["summaries"]["platform"] == ["cool_sat1", "cool_sat2"]

    @pytest.mark.unit
    def test_output_summaries_do_not_alias(self, collection_dict: dict[str, Any]) -> None:
        """Editing serialized summaries leaves the collection unchanged."""
        collection = Collection.from_dict(collection_dict)

        data = collection.to_dict()
        data["summaries"]["platform"].append("cool_sat3")
        data["summaries"]["injected"] = 1

        assert collection.summaries == collection_dict["summaries"]

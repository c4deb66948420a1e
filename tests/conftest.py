"""Shared pytest fixtures for stacmodel tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


# =============================================================================
# Fixture Directory Access
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def stac_dir(fixtures_dir: Path) -> Path:
    """Directory of example STAC documents."""
    return fixtures_dir / "stac"


def _load(path: Path) -> Any:
    return json.loads(path.read_text())


# =============================================================================
# STAC Documents
# =============================================================================


@pytest.fixture
def simple_item_path(stac_dir: Path) -> Path:
    """Path to a minimal Item."""
    return stac_dir / "simple-item.json"


@pytest.fixture
def simple_item_dict(simple_item_path: Path) -> dict[str, Any]:
    return _load(simple_item_path)


@pytest.fixture
def extended_item_dict(stac_dir: Path) -> dict[str, Any]:
    """Item with extensions, foreign members and nested unknown fields."""
    return _load(stac_dir / "extended-item.json")


@pytest.fixture
def catalog_path(stac_dir: Path) -> Path:
    return stac_dir / "catalog.json"


@pytest.fixture
def catalog_dict(catalog_path: Path) -> dict[str, Any]:
    return _load(catalog_path)


@pytest.fixture
def collection_dict(stac_dir: Path) -> dict[str, Any]:
    """Collection with providers, summaries, assets and foreign members."""
    return _load(stac_dir / "collection.json")


@pytest.fixture
def item_collection_dict(stac_dir: Path) -> dict[str, Any]:
    """FeatureCollection page with a "next" link."""
    return _load(stac_dir / "item-collection.json")


@pytest.fixture
def items_array_path(stac_dir: Path) -> Path:
    """Bare JSON array of items."""
    return stac_dir / "items-array.json"


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point config lookups at an empty temp file and clear STACMODEL_* vars."""
    import os

    for key in list(os.environ):
        if key.startswith("STACMODEL_"):
            monkeypatch.delenv(key)
    config_path = tmp_path / "stacmodel.yaml"
    monkeypatch.setenv("STACMODEL_CONFIG", str(config_path))
    yield config_path

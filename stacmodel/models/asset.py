"""Asset dataclass for STAC asset metadata.

An asset is a named reference to a downloadable file. Documents own a
dict of assets keyed by name; dict order is the serialized order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stacmodel.errors import StructureError
from stacmodel.models.base import (
    ensure_mapping,
    merge_extra_fields,
    optional,
    require,
    split_extra_fields,
    string_list,
)

_ASSET_FIELDS = ("href", "title", "description", "type", "roles")


@dataclass
class Asset:
    """A STAC asset (file reference).

    Attributes:
        href: Asset URL or relative path.
        title: Human-readable title.
        description: Longer description.
        media_type: Media type (JSON key "type", e.g. "image/tiff").
        roles: Asset roles (e.g., ["data"], ["thumbnail"]).
        extra_fields: Members not modelled above, preserved verbatim.
    """

    href: str
    title: str | None = None
    description: str | None = None
    media_type: str | None = None
    roles: list[str] | None = None
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def add_role(self, role: str) -> None:
        """Add a role unless it is already present."""
        if self.roles is None:
            self.roles = []
        if role not in self.roles:
            self.roles.append(role)

    def has_role(self, role: str) -> bool:
        return role in (self.roles or [])

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {"href": self.href}
        if self.title is not None:
            result["title"] = self.title
        if self.description is not None:
            result["description"] = self.description
        if self.media_type is not None:
            result["type"] = self.media_type
        if self.roles is not None:
            result["roles"] = list(self.roles)
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Asset:
        """Create Asset from dict."""
        data = ensure_mapping(data, "assets")
        return cls(
            href=require(data, "href", str),
            title=optional(data, "title", str),
            description=optional(data, "description", str),
            media_type=optional(data, "type", str),
            roles=string_list(data, "roles"),
            extra_fields=split_extra_fields(data, _ASSET_FIELDS),
        )


def assets_to_dict(assets: dict[str, Asset]) -> dict[str, Any]:
    """Serialize an asset mapping, preserving key order."""
    return {key: asset.to_dict() for key, asset in assets.items()}


def assets_from_dict(data: Any) -> dict[str, Asset]:
    """Parse an asset mapping; null or absent yields an empty dict."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise StructureError("assets", f"expected an object, got {type(data).__name__}")
    return {key: Asset.from_dict(value) for key, value in data.items()}

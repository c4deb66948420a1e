"""Link dataclass and the Links capability.

Links connect catalogs, collections, items, and external resources.
Every document kind owns an ordered list of links and gets the same
lookup, mutation and resolution helpers from LinksMixin.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pystac import MediaType

from stacmodel.constants import (
    CHILD_REL,
    COLLECTION_REL,
    ITEM_REL,
    PARENT_REL,
    ROOT_REL,
    SELF_REL,
    STRUCTURAL_RELS,
)
from stacmodel.models.base import (
    ensure_mapping,
    merge_extra_fields,
    optional,
    require,
    split_extra_fields,
)
from stacmodel.models.href import is_absolute_href, resolve_href

_LINK_FIELDS = ("href", "rel", "type", "title")


@dataclass
class Link:
    """A STAC link object.

    Attributes:
        href: Link URL or relative path.
        rel: Link relationship (e.g., "self", "root", "child", "item").
        media_type: Media type of linked resource (JSON key "type").
        title: Human-readable link title (optional).
        extra_fields: Members not modelled above, preserved verbatim.
    """

    href: str
    rel: str
    media_type: str | None = None
    title: str | None = None
    extra_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def root(cls, href: str) -> Link:
        """Create a root link."""
        return cls(href, ROOT_REL, media_type=MediaType.JSON.value)

    @classmethod
    def parent(cls, href: str) -> Link:
        """Create a parent link."""
        return cls(href, PARENT_REL, media_type=MediaType.JSON.value)

    @classmethod
    def child(cls, href: str) -> Link:
        """Create a child link."""
        return cls(href, CHILD_REL, media_type=MediaType.JSON.value)

    @classmethod
    def item(cls, href: str) -> Link:
        """Create an item link."""
        return cls(href, ITEM_REL, media_type=MediaType.GEOJSON.value)

    @classmethod
    def collection(cls, href: str) -> Link:
        """Create a collection link."""
        return cls(href, COLLECTION_REL, media_type=MediaType.JSON.value)

    @classmethod
    def self_href(cls, href: str) -> Link:
        """Create a self link."""
        return cls(href, SELF_REL, media_type=MediaType.JSON.value)

    def is_root(self) -> bool:
        return self.rel == ROOT_REL

    def is_self(self) -> bool:
        return self.rel == SELF_REL

    def is_parent(self) -> bool:
        return self.rel == PARENT_REL

    def is_child(self) -> bool:
        return self.rel == CHILD_REL

    def is_item(self) -> bool:
        return self.rel == ITEM_REL

    def is_structural(self) -> bool:
        """True for links that describe the catalog hierarchy."""
        return self.rel in STRUCTURAL_RELS

    def is_absolute(self) -> bool:
        """True if href is an absolute URL or filesystem path."""
        return is_absolute_href(self.href)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict.

        Returns:
            Dict with non-None fields only, followed by extra fields.
        """
        result: dict[str, Any] = {
            "rel": self.rel,
            "href": self.href,
        }
        if self.media_type is not None:
            result["type"] = self.media_type
        if self.title is not None:
            result["title"] = self.title
        return merge_extra_fields(result, self.extra_fields)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Link:
        """Create Link from dict.

        Raises:
            StructureError: If href or rel is missing or not a string.
        """
        data = ensure_mapping(data, "links")
        return cls(
            href=require(data, "href", str),
            rel=require(data, "rel", str),
            media_type=optional(data, "type", str),
            title=optional(data, "title", str),
            extra_fields=split_extra_fields(data, _LINK_FIELDS),
        )


class LinksMixin:
    """Links capability shared by every document kind.

    Operates on ``self.links`` (ordered) and ``self.href``. None of the
    mutation helpers are atomic across calls.
    """

    links: list[Link]
    href: str | None

    def link(self, rel: str) -> Link | None:
        """Return the first link with this relation, or None."""
        return next(self.iter_links(rel), None)

    def iter_links(self, rel: str | None = None) -> Iterator[Link]:
        """Iterate over links in order, optionally filtered by relation."""
        for link in self.links:
            if rel is None or link.rel == rel:
                yield link

    def root_link(self) -> Link | None:
        return self.link(ROOT_REL)

    def self_link(self) -> Link | None:
        return self.link(SELF_REL)

    def parent_link(self) -> Link | None:
        return self.link(PARENT_REL)

    def child_links(self) -> list[Link]:
        return list(self.iter_links(CHILD_REL))

    def item_links(self) -> list[Link]:
        return list(self.iter_links(ITEM_REL))

    def add_link(self, link: Link) -> None:
        """Append a link, keeping any existing links with the same relation."""
        self.links.append(link)

    def set_link(self, link: Link) -> None:
        """Replace every link with link.rel by this single link."""
        self.remove_links(link.rel)
        self.links.append(link)

    def remove_links(self, rel: str) -> list[Link]:
        """Remove and return every link with this relation."""
        removed = [link for link in self.links if link.rel == rel]
        self.links[:] = [link for link in self.links if link.rel != rel]
        return removed

    def remove_relative_links(self) -> list[Link]:
        """Remove and return every link whose href is relative."""
        removed = [link for link in self.links if not link.is_absolute()]
        self.links[:] = [link for link in self.links if link.is_absolute()]
        return removed

    def remove_structural_links(self) -> list[Link]:
        """Remove and return self/root/parent/child/item/collection links."""
        removed = [link for link in self.links if link.is_structural()]
        self.links[:] = [link for link in self.links if not link.is_structural()]
        return removed

    def resolve_link_href(self, link: Link | str) -> str:
        """Resolve a link's href against this object's href.

        Args:
            link: A Link, or a relation name (its first link is used).

        Returns:
            Absolute URL or filesystem path.

        Raises:
            KeyError: If a relation name is given and no such link exists.
            UnresolvedHrefError: If the href is relative and self.href is None.
            InvalidLocationError: If an href cannot be parsed.
        """
        if isinstance(link, str):
            found = self.link(link)
            if found is None:
                raise KeyError(f"No link with rel '{link}'")
            link = found
        return resolve_href(self.href, link.href)

    def make_relative_links_absolute(self) -> None:
        """Rewrite every relative link href as an absolute one, in place.

        All hrefs are resolved before any is written, so a failure leaves
        the links untouched.
        """
        resolved = [resolve_href(self.href, link.href) for link in self.links]
        for link, href in zip(self.links, resolved):
            link.href = href


def parse_links(data: Mapping[str, Any]) -> list[Link]:
    """Parse the "links" member; absent or null yields an empty list."""
    return [Link.from_dict(link) for link in optional(data, "links", list, default=[])]

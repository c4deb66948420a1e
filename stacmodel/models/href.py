"""Href capability and relative href resolution.

A document's href is the location it was read from. It is side-band
metadata: it is never serialized and never part of equality.

Resolution rules (resolve_href):
- an absolute URL is returned unchanged
- a relative href needs a base; no base raises UnresolvedHrefError
- against a URL base, RFC 3986 reference resolution applies; object store
  schemes (s3, gs, az) get the same path arithmetic
- against a filesystem base, absolute paths are returned unchanged and
  relative paths are joined to the base's directory and normalized
"""

from __future__ import annotations

import os
import posixpath
from urllib.parse import urljoin, urlsplit, urlunsplit, uses_relative

from stacmodel.errors import InvalidLocationError, UnresolvedHrefError


def href_to_url(href: str) -> str | None:
    """Return href if it is an absolute URL, else None.

    Single-letter schemes are Windows drive letters (C:/data/item.json),
    so they are treated as paths.

    Raises:
        InvalidLocationError: If href cannot be parsed at all.
    """
    try:
        parts = urlsplit(href)
    except ValueError as e:
        raise InvalidLocationError(href, str(e)) from e
    if len(parts.scheme) > 1:
        if parts.scheme in ("http", "https") and not parts.netloc:
            raise InvalidLocationError(href, "URL has no host")
        return href
    return None


def is_absolute_href(href: str) -> bool:
    """True for absolute URLs and absolute filesystem paths."""
    return href_to_url(href) is not None or os.path.isabs(href) or href.startswith("/")


def resolve_href(base: str | None, href: str) -> str:
    """Resolve href against base.

    Args:
        base: The owning document's href, or None if unknown.
        href: A link or asset href.

    Returns:
        An absolute URL or filesystem path.

    Raises:
        InvalidLocationError: If href (or base) is not a valid location.
        UnresolvedHrefError: If href is relative and base is None.
    """
    if not href:
        raise InvalidLocationError(href, "href is empty")
    if href_to_url(href) is not None:
        return href
    if base is None:
        raise UnresolvedHrefError(href)
    if not base:
        raise InvalidLocationError(base, "base href is empty")

    if href_to_url(base) is not None:
        try:
            return _join_url(base, href)
        except ValueError as e:
            raise InvalidLocationError(href, str(e)) from e

    if os.path.isabs(href) or href.startswith("/"):
        return href
    if "/" in base and "\\" not in base:
        # Keep POSIX separators for hrefs written in STAC documents
        return posixpath.normpath(posixpath.join(posixpath.dirname(base), href))
    return os.path.normpath(os.path.join(os.path.dirname(base), href))


def _join_url(base: str, href: str) -> str:
    base_parts = urlsplit(base)
    if base_parts.scheme.lower() in uses_relative:
        return urljoin(base, href)

    # urljoin returns href unchanged for schemes it does not know (s3, gs, az)
    parts = urlsplit(href)
    if parts.netloc:
        return f"{base_parts.scheme}:{href}"
    if not parts.path:
        path = base_parts.path
        query = parts.query or base_parts.query
    else:
        if parts.path.startswith("/"):
            path = parts.path
        else:
            path = posixpath.join(posixpath.dirname(base_parts.path), parts.path)
        path = posixpath.normpath("/" + path.lstrip("/"))
        if parts.path.endswith("/") and path != "/":
            path += "/"
        query = parts.query
    return urlunsplit((base_parts.scheme, base_parts.netloc, path, query, parts.fragment))


class HrefMixin:
    """Href capability shared by every document kind.

    Classes using this mixin declare an ``href`` dataclass field with
    ``init=False, repr=False, compare=False``.
    """

    href: str | None

    def get_href(self) -> str | None:
        """Return the location this object was read from, if known."""
        return self.href

    def set_href(self, href: str | os.PathLike[str]) -> None:
        """Remember where this object lives."""
        self.href = os.fspath(href)

    def clear_href(self) -> None:
        """Forget this object's location."""
        self.href = None

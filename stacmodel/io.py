"""Read and write STAC documents.

Reading goes through a TransportRegistry that maps location schemes to
transports. Local files are always readable; network and object store
locations (http, https, s3, gs, az) are read with obstore when the
"network" setting is on. A location whose scheme has no transport fails
with UnsupportedLocationError before any I/O is attempted.

Basic Usage:
    from stacmodel.io import read

    item = read("data/simple-item.json")
    item.get_href()  # absolute path of data/simple-item.json

    # Parse straight into an expected kind
    catalog = read("https://example.org/catalog.json", Catalog)

Custom transports:
    registry = TransportRegistry()
    registry.register("file", FileTransport())
    registry.register("mem", MyTransport())
    value = read("mem://catalog.json", registry=registry)
"""

from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from urllib.parse import unquote, urlsplit

import obstore as obs
from obstore.store import from_url

from stacmodel.config import get_setting
from stacmodel.errors import InvalidLocationError, ReadError, UnsupportedLocationError
from stacmodel.value import T, Value, from_dict, loads, to_json

logger = logging.getLogger(__name__)

# Schemes served by ObjectStoreTransport
NETWORK_SCHEMES: tuple[str, ...] = ("http", "https", "s3", "gs", "az")


@dataclass(frozen=True)
class FetchResult:
    """Bytes fetched by a transport.

    Attributes:
        data: Raw document bytes.
        href: Resolved location (absolute path, or the URL read).
    """

    data: bytes
    href: str


@runtime_checkable
class Transport(Protocol):
    """Fetches the bytes behind a location."""

    def fetch(self, location: str) -> FetchResult:
        """Fetch location.

        Raises:
            ReadError: If the location cannot be read.
        """
        ...


class FileTransport:
    """Reads local paths and file:// URLs."""

    def fetch(self, location: str) -> FetchResult:
        path = _file_path(location)
        href = os.path.abspath(path)
        logger.debug("Reading file %s", href)
        try:
            data = Path(href).read_bytes()
        except OSError as e:
            raise ReadError(location, e) from e
        return FetchResult(data=data, href=href)


class ObjectStoreTransport:
    """Reads http(s), s3, gs and az locations with obstore.

    Credentials and regions are discovered by obstore from the usual
    environment variables and config files.
    """

    def __init__(self, timeout: str | None = None) -> None:
        """Create a transport.

        Args:
            timeout: Request timeout, e.g. "30s" (defaults to the
                "http_timeout" setting).
        """
        self.timeout = get_setting("http_timeout", value=timeout)

    def fetch(self, location: str) -> FetchResult:
        try:
            store_url, key = parse_object_store_url(location)
        except ValueError as e:
            raise InvalidLocationError(location, str(e)) from e
        logger.debug("Fetching %s from %s", key, store_url)
        try:
            store = from_url(store_url, client_options={"timeout": self.timeout})
            result = obs.get(store, key)
            data = bytes(result.bytes())
        except Exception as e:
            raise ReadError(location, e) from e
        return FetchResult(data=data, href=location)


def parse_object_store_url(url: str) -> tuple[str, str]:
    """Split a location into (store_url, key).

    Schemes are matched case-insensitively.

    Examples:
        s3://bucket/prefix/item.json -> (s3://bucket, prefix/item.json)
        gs://bucket/item.json -> (gs://bucket, item.json)
        az://account/container/item.json -> (az://account/container, item.json)
        https://example.org/stac/item.json -> (https://example.org/stac/, item.json)

    Raises:
        ValueError: If the URL scheme is not supported, or an http(s) URL
            carries a query string or fragment (obstore requests the path
            only, so a signed URL would silently lose its token).
    """
    scheme, sep, rest = url.partition("://")
    scheme = scheme.lower()
    if not sep:
        raise ValueError(f"Unsupported URL scheme: {url}")

    if scheme in ("s3", "gs"):
        parts = rest.split("/", 1)
        prefix = parts[1] if len(parts) > 1 else ""
        return f"{scheme}://{parts[0]}", prefix

    elif scheme == "az":
        parts = rest.split("/", 2)
        if len(parts) < 2:
            raise ValueError(f"Invalid Azure URL: {url}. Expected az://account/container/path")
        account, container = parts[0], parts[1]
        prefix = parts[2] if len(parts) > 2 else ""
        return f"az://{account}/{container}", prefix

    elif scheme in ("https", "http"):
        parts = urlsplit(url)
        if parts.query or parts.fragment:
            raise ValueError(f"Query strings and fragments are not supported: {url}")
        directory, name = posixpath.split(parts.path)
        directory = directory.rstrip("/") + "/"
        return f"{scheme}://{parts.netloc}{directory}", name

    else:
        raise ValueError(f"Unsupported URL scheme: {url}")


def _file_path(location: str) -> str:
    if location.startswith("file://"):
        return unquote(urlsplit(location).path)
    return location


def location_scheme(location: str) -> str:
    """Lowercase scheme of a location; bare paths are "file"."""
    try:
        scheme = urlsplit(location).scheme
    except ValueError as e:
        raise InvalidLocationError(location, str(e)) from e
    # Single letters are Windows drive letters (C:\\...)
    if len(scheme) <= 1:
        return "file"
    return scheme.lower()


class TransportRegistry:
    """Routes location schemes to transports.

    Example:
        registry = TransportRegistry()
        registry.register("file", FileTransport())
        registry.supported_schemes()  # ['file']
        registry.fetch("https://example.org/item.json")  # UnsupportedLocationError
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._transports: dict[str, Transport] = {}

    def register(self, scheme: str, transport: Transport, *, override: bool = False) -> None:
        """Register a transport for a scheme.

        Args:
            scheme: Location scheme (case-insensitive), "file" for paths.
            transport: Object with a fetch(location) method.
            override: If True, allow replacing an existing registration.

        Raises:
            ValueError: If scheme is already registered and override=False.
        """
        scheme_lower = scheme.lower()
        if scheme_lower in self._transports and not override:
            raise ValueError(
                f"Scheme '{scheme}' is already registered. Use override=True to replace."
            )
        self._transports[scheme_lower] = transport

    def unregister(self, scheme: str) -> bool:
        """Remove a scheme; returns False if it was not registered."""
        return self._transports.pop(scheme.lower(), None) is not None

    def supported_schemes(self) -> list[str]:
        """Sorted list of registered schemes."""
        return sorted(self._transports)

    def resolve(self, location: str) -> Transport:
        """Find the transport for a location.

        Raises:
            UnsupportedLocationError: If no transport handles the scheme.
        """
        scheme = location_scheme(location)
        transport = self._transports.get(scheme)
        if transport is None:
            raise UnsupportedLocationError(location, scheme)
        return transport

    def fetch(self, location: str) -> FetchResult:
        """Fetch a location with its scheme's transport."""
        return self.resolve(location).fetch(location)


def default_registry(network: bool | None = None) -> TransportRegistry:
    """Build the standard registry.

    Args:
        network: Register network transports (defaults to the "network"
            setting).
    """
    registry = TransportRegistry()
    registry.register("file", FileTransport())
    if get_setting("network", value=network):
        transport = ObjectStoreTransport()
        for scheme in NETWORK_SCHEMES:
            registry.register(scheme, transport)
    else:
        logger.debug("Network transports disabled")
    return registry


def read_json(
    location: str | os.PathLike[str],
    *,
    registry: TransportRegistry | None = None,
) -> Any:
    """Read a location and return the parsed JSON value."""
    data, _ = _fetch_json(os.fspath(location), registry)
    return data


def _fetch_json(location: str, registry: TransportRegistry | None) -> tuple[Any, str]:
    if registry is None:
        # Settings are only consulted when a network location is requested
        if location_scheme(location) in NETWORK_SCHEMES:
            registry = default_registry()
        else:
            registry = default_registry(network=False)
    result = registry.fetch(location)
    return loads(result.data, result.href), result.href


def read(
    location: str | os.PathLike[str],
    cls: type[T] | None = None,
    *,
    registry: TransportRegistry | None = None,
) -> Value:
    """Read a STAC document and remember where it came from.

    Args:
        location: Filesystem path or URL.
        cls: Expected kind (Item, Catalog, Collection, ItemCollection); if
            omitted the kind is taken from the document's "type".
        registry: Transports to use (defaults to default_registry()).

    Returns:
        The parsed object, with its href set to the resolved location.

    Raises:
        UnsupportedLocationError: If no transport handles the location.
        ReadError: If the transport fails.
        ParseError: If the document is not valid JSON or not valid STAC.
    """
    data, href = _fetch_json(os.fspath(location), registry)
    value = cls.from_dict(data) if cls is not None else from_dict(data)
    value.set_href(href)
    logger.debug("Read %s from %s", type(value).__name__, href)
    return value


def write(
    value: Value,
    path: str | os.PathLike[str],
    *,
    indent: int | None = 2,
    set_href: bool = False,
) -> Path:
    """Write a STAC object as JSON to a local file.

    Args:
        value: Object to serialize.
        path: Destination file; parent directories are created.
        indent: JSON indentation (None for compact output).
        set_href: If True, point the object's href at the written file.

    Returns:
        The absolute path written.
    """
    text = to_json(value, indent=indent)
    dest = Path(path).absolute()
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(text + "\n", encoding="utf-8")
    if set_href:
        value.set_href(dest)
    logger.debug("Wrote %s to %s", type(value).__name__, dest)
    return dest

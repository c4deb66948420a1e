"""Extension set capability.

Tracks the schema URIs listed in ``stac_extensions``. The URIs are not
interpreted here; the validator maps each one to a schema document.
An absent list (None) and an empty list are kept distinct so that both
round-trip unchanged.
"""

from __future__ import annotations


class ExtensionsMixin:
    """Set semantics over ``self.stac_extensions``, keeping wire order."""

    stac_extensions: list[str] | None

    def extensions(self) -> list[str]:
        return list(self.stac_extensions or [])

    def has_extension(self, uri: str) -> bool:
        return uri in (self.stac_extensions or [])

    def add_extension(self, uri: str) -> None:
        """Declare an extension; adding a declared one is a no-op."""
        if self.stac_extensions is None:
            self.stac_extensions = []
        if uri not in self.stac_extensions:
            self.stac_extensions.append(uri)

    def remove_extension(self, uri: str) -> None:
        """Drop an extension; removing an undeclared one is a no-op."""
        if self.stac_extensions and uri in self.stac_extensions:
            self.stac_extensions.remove(uri)

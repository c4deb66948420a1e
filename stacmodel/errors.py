"""Structured error codes for stacmodel.

All errors follow the format STAC-{category}{number}:
- STAC-PRS*: Parse errors (discriminator, structure, JSON)
- STAC-HRF*: Href resolution errors
- STAC-IO*: I/O boundary errors
- STAC-VAL*: Validation errors
- STAC-CFG*: Configuration errors
"""

from __future__ import annotations

from typing import Any


class StacError(Exception):
    """Base class for all stacmodel errors.

    All errors have:
    - code: Structured error code (e.g., STAC-PRS001)
    - message: Human-readable error message
    """

    code: str = "STAC-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a stacmodel error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Parse Errors (STAC-PRS*)
class ParseError(StacError):
    """Base class for errors raised while turning JSON into models."""

    code = "STAC-PRS000"


class TypeMismatchError(ParseError):
    """Raised when a document's "type" field is not the expected constant.

    Error code: STAC-PRS001

    Raised both when parsing and when serializing an object whose
    discriminator was changed in memory.
    """

    code = "STAC-PRS001"

    def __init__(self, expected: str, actual: Any) -> None:
        super().__init__(
            f"type field must be '{expected}', got: '{actual}'",
            expected=expected,
            actual=actual,
        )


class StructureError(ParseError):
    """Raised when a required field is missing or has the wrong shape.

    Error code: STAC-PRS002
    """

    code = "STAC-PRS002"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid field '{field}': {reason}", field=field, reason=reason)


class UnknownTypeError(StructureError):
    """Raised when a discriminator matches none of the known document kinds.

    Error code: STAC-PRS003
    """

    code = "STAC-PRS003"

    def __init__(self, actual: Any) -> None:
        super().__init__("type", f"unknown STAC object type '{actual}'")
        self.actual = actual
        self.context["actual"] = actual


class InvalidJsonError(ParseError):
    """Raised when document bytes are not valid JSON.

    Error code: STAC-PRS004
    """

    code = "STAC-PRS004"

    def __init__(self, reason: str, location: str | None = None) -> None:
        where = f" in {location}" if location else ""
        super().__init__(f"Invalid JSON{where}: {reason}", reason=reason, location=location)


# Href Errors (STAC-HRF*)
class HrefError(StacError):
    """Base class for href resolution errors."""

    code = "STAC-HRF000"


class UnresolvedHrefError(HrefError):
    """Raised when a relative href is resolved against an object with no href.

    Error code: STAC-HRF001
    """

    code = "STAC-HRF001"

    def __init__(self, href: str) -> None:
        super().__init__(
            f"Cannot resolve relative href '{href}': the owning object has no href",
            href=href,
        )


class InvalidLocationError(HrefError):
    """Raised when an href or location string cannot be parsed.

    Error code: STAC-HRF002
    """

    code = "STAC-HRF002"

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Invalid location '{location}': {reason}", location=location, reason=reason
        )


# I/O Errors (STAC-IO*)
class IOBoundaryError(StacError):
    """Base class for errors raised while fetching document bytes."""

    code = "STAC-IO000"


class UnsupportedLocationError(IOBoundaryError):
    """Raised when no transport is registered for a location's scheme.

    Error code: STAC-IO001
    """

    code = "STAC-IO001"

    def __init__(self, location: str, scheme: str) -> None:
        super().__init__(
            f"No transport available for scheme '{scheme}' (location: {location})",
            location=location,
            scheme=scheme,
        )


class ReadError(IOBoundaryError):
    """Raised when a transport fails to fetch a location.

    Error code: STAC-IO002
    """

    code = "STAC-IO002"

    def __init__(self, location: str, original_error: Exception) -> None:
        super().__init__(
            f"Failed to read {location}: {original_error}",
            location=location,
            original_error_type=type(original_error).__name__,
            original_error_message=str(original_error),
        )
        # Keep original exception for programmatic access (not serialized)
        self.original_exception = original_error


# Validation Errors (STAC-VAL*)
class ValidationFailedError(StacError):
    """Raised when a document fails JSON-Schema validation.

    Error code: STAC-VAL001
    """

    code = "STAC-VAL001"

    def __init__(self, object_id: str | None, validation_errors: list[str]) -> None:
        error_count = len(validation_errors)
        errors_summary = "; ".join(validation_errors[:3])
        if error_count > 3:
            errors_summary += f"... and {error_count - 3} more"
        super().__init__(
            f"Validation failed for '{object_id}': {errors_summary}",
            object_id=object_id,
            validation_errors=validation_errors,
        )


# Configuration Errors (STAC-CFG*)
class ConfigError(StacError):
    """Base class for configuration-related errors."""

    code = "STAC-CFG000"


class ConfigParseError(ConfigError):
    """Raised when a configuration file cannot be parsed.

    Error code: STAC-CFG001
    """

    code = "STAC-CFG001"

    def __init__(self, path: str, parse_error: str) -> None:
        super().__init__(
            f"Failed to parse config file {path}: {parse_error}",
            path=path,
            parse_error=parse_error,
        )

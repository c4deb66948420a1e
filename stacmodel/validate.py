"""JSON-Schema validation of STAC objects.

Each object is checked against the core schema for its kind and against
the schema behind every URI in its ``stac_extensions``. Schemas are
fetched through an injected callable, so tests and offline users can
supply their own:

    from stacmodel.validate import Validator

    validator = Validator(fetch=my_schemas.__getitem__)
    report = validator.validate(item)
    if not report.passed:
        for result in report.errors:
            print(result.path, result.message)

The default fetcher reads schemas with stacmodel.io.read_json.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.exceptions import NoSuchResource
from referencing.jsonschema import DRAFT7

from stacmodel.config import get_setting
from stacmodel.errors import StacError, ValidationFailedError
from stacmodel.io import read_json
from stacmodel.models import Catalog, Collection, Item, ItemCollection
from stacmodel.value import Value

logger = logging.getLogger(__name__)

SchemaFetcher = Callable[[str], dict[str, Any]]

# Kind -> path segment of the core schema
_SPEC_NAMES: dict[type, str] = {
    Item: "item",
    Catalog: "catalog",
    Collection: "collection",
}


@dataclass(frozen=True)
class ValidationResult:
    """Result of checking one object against one schema.

    Attributes:
        schema_uri: The schema that was applied.
        passed: Whether the object satisfied it.
        message: Human-readable description of the result.
        object_id: Id of the object checked.
        path: JSON path of the violating member, for failures.
    """

    schema_uri: str
    passed: bool
    message: str
    object_id: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: dict[str, Any] = {
            "schema_uri": self.schema_uri,
            "passed": self.passed,
            "message": self.message,
        }
        if self.object_id is not None:
            d["object_id"] = self.object_id
        if self.path is not None:
            d["path"] = self.path
        return d


@dataclass
class ValidationReport:
    """Aggregate of all validation results.

    Attributes:
        results: List of individual validation results.
    """

    results: list[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no schema was violated."""
        return all(r.passed for r in self.results)

    @property
    def errors(self) -> list[ValidationResult]:
        """Return only failed results."""
        return [r for r in self.results if not r.passed]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "passed": self.passed,
            "error_count": len(self.errors),
            "results": [r.to_dict() for r in self.results],
        }


def _default_fetch(uri: str) -> dict[str, Any]:
    data = read_json(uri)
    if not isinstance(data, dict):
        raise ValueError(f"Schema at {uri} is not a JSON object")
    return data


class Validator:
    """Validates STAC objects, caching every schema it fetches."""

    def __init__(
        self,
        fetch: SchemaFetcher | None = None,
        schema_base_url: str | None = None,
    ) -> None:
        """Create a validator.

        Args:
            fetch: Callable mapping a schema URI to the parsed schema.
            schema_base_url: Root of the core STAC schemas (defaults to the
                "schema_base_url" setting).
        """
        self._fetch = fetch if fetch is not None else _default_fetch
        base_url = get_setting("schema_base_url", value=schema_base_url)
        self.schema_base_url = str(base_url).rstrip("/")
        self._schemas: dict[str, dict[str, Any]] = {}
        self._registry: Registry = Registry(retrieve=self._retrieve)

    def core_schema_uri(self, value: Item | Catalog | Collection) -> str:
        """URI of the core schema for an object's kind and STAC version."""
        name = _SPEC_NAMES[type(value)]
        return (
            f"{self.schema_base_url}/v{value.stac_version}/"
            f"{name}-spec/json-schema/{name}.json"
        )

    def schema_uris(self, value: Item | Catalog | Collection) -> list[str]:
        """Core schema first, then one schema per declared extension."""
        return [self.core_schema_uri(value), *value.extensions()]

    def get_schema(self, uri: str) -> dict[str, Any]:
        """Fetch a schema once and serve it from the cache afterwards."""
        if uri not in self._schemas:
            logger.debug("Fetching schema %s", uri)
            self._schemas[uri] = self._fetch(uri)
        return self._schemas[uri]

    def _retrieve(self, uri: str) -> Resource:
        try:
            contents = self.get_schema(uri)
        except (StacError, ValueError, KeyError) as e:
            raise NoSuchResource(ref=uri) from e
        return Resource.from_contents(contents, default_specification=DRAFT7)

    def validate(self, value: Value) -> ValidationReport:
        """Check an object (or every item of an ItemCollection).

        Returns:
            A report with one passing result per schema satisfied and one
            failing result per violation.
        """
        objects = list(value.features) if isinstance(value, ItemCollection) else [value]
        report = ValidationReport()
        for obj in objects:
            report.results.extend(self._validate_one(obj))
        return report

    def _validate_one(self, value: Item | Catalog | Collection) -> list[ValidationResult]:
        instance = value.to_dict()
        results: list[ValidationResult] = []
        uris = self.schema_uris(value)
        for uri in uris:
            schema = self.get_schema(uri)
            # Schemas without $schema are taken as draft 7
            validator_cls = validator_for(schema, default=Draft7Validator)
            validator = validator_cls(schema, registry=self._registry)
            errors = sorted(validator.iter_errors(instance), key=lambda e: e.json_path)
            if not errors:
                results.append(
                    ValidationResult(uri, True, f"Valid against {uri}", object_id=value.id)
                )
                continue
            for error in errors:
                results.append(
                    ValidationResult(
                        uri,
                        False,
                        error.message,
                        object_id=value.id,
                        path=error.json_path,
                    )
                )
        logger.debug("Validated %s against %d schemas", value.id, len(uris))
        return results


def validate(value: Value, *, validator: Validator | None = None) -> ValidationReport:
    """Validate an object with a (default) Validator."""
    if validator is None:
        validator = Validator()
    return validator.validate(value)


def ensure_valid(value: Value, *, validator: Validator | None = None) -> None:
    """Validate an object, raising on any violation.

    Raises:
        ValidationFailedError: If any schema is violated.
    """
    report = validate(value, validator=validator)
    if not report.passed:
        object_id = getattr(value, "id", None)
        raise ValidationFailedError(
            object_id, [f"{r.path}: {r.message}" for r in report.errors]
        )

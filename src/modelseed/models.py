"""Data models and type definitions."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from modelseed.exceptions import DescriptorError

# Descriptor keys accepted in snake_case as well as the camelCase blueprint form
KEY_ALIASES = {
    "primary_key": "primaryKey",
    "min_length": "minLength",
    "max_length": "maxLength",
}

IDENTIFIER_FIELDS = frozenset({"id", "_id"})


def _as_bound(attribute: str, key: str, value: Any) -> Callable[[], Any] | None:
    """Normalize a before/after bound into a zero-argument callable."""
    if value is None:
        return None
    if callable(value):
        return value
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise DescriptorError(attribute, f"'{key}' is not an ISO date: {value!r}") from e
    if isinstance(value, (date, datetime)):
        return lambda: value
    raise DescriptorError(attribute, f"'{key}' must be a callable or a date, got {value!r}")


@dataclass(frozen=True)
class AttributeDescriptor:
    """
    Normalized attribute metadata.

    A raw descriptor is either a bare type name (shorthand) or a mapping of
    blueprint keys (full). Both forms resolve to this record once, before
    any generator sees them.

    Attributes:
        name: Attribute name
        type: Lower-cased type name, or None when the mapping declares none
        model: Target model of a to-one relation
        collection: Target model of a to-many relation
        primary_key: Whether the store assigns this value
        size: Bit-width hint for numerics
        min: Lower numeric bound
        max: Upper numeric bound
        min_length: Length of the short random sequence
        max_length: Length of the long random sequence
        enum: Allowed literal values, in declaration order
        before: Callable returning the lower date bound
        after: Callable returning the upper date bound
        email: Shape strings as email addresses
        url: Shape strings as URLs
        urlish: Shape strings as URL paths
        is_float: Draw reals instead of integers
        shorthand: Whether the raw descriptor was a bare type name
    """

    name: str
    type: str | None = None
    model: str | None = None
    collection: str | None = None
    primary_key: bool = False
    size: int | None = None
    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    enum: tuple[Any, ...] | None = None
    before: Callable[[], Any] | None = None
    after: Callable[[], Any] | None = None
    email: bool = False
    url: bool = False
    urlish: bool = False
    is_float: bool = False
    shorthand: bool = False

    @classmethod
    def parse(cls, name: str, raw: Any) -> "AttributeDescriptor":
        """
        Resolve a raw descriptor into an AttributeDescriptor.

        Args:
            name: Attribute name
            raw: Bare type-name string or mapping of descriptor keys

        Returns:
            Normalized descriptor

        Raises:
            DescriptorError: If raw is neither a string nor a mapping

        Example:
            >>> AttributeDescriptor.parse("email", "EMAIL").type
            'email'
            >>> AttributeDescriptor.parse("age", {"type": "integer", "min": 18}).min
            18
        """
        if isinstance(raw, AttributeDescriptor):
            return raw
        if isinstance(raw, str):
            return cls(name=name, type=raw.lower(), shorthand=True)
        if not isinstance(raw, Mapping):
            raise DescriptorError(
                name, f"expected a type name or mapping, got {type(raw).__name__}"
            )

        fields = {KEY_ALIASES.get(key, key): value for key, value in raw.items()}
        type_name = fields.get("type")
        enum = fields.get("enum")

        return cls(
            name=name,
            type=type_name.lower() if isinstance(type_name, str) else None,
            model=fields.get("model") or None,
            collection=fields.get("collection") or None,
            primary_key=bool(fields.get("primaryKey")),
            size=fields.get("size"),
            min=fields.get("min"),
            max=fields.get("max"),
            min_length=fields.get("minLength"),
            max_length=fields.get("maxLength"),
            enum=tuple(enum) if enum else None,
            before=_as_bound(name, "before", fields.get("before")),
            after=_as_bound(name, "after", fields.get("after")),
            email=bool(fields.get("email")),
            url=bool(fields.get("url")),
            urlish=bool(fields.get("urlish")),
            is_float=bool(fields.get("float")),
        )

    @property
    def is_relation(self) -> bool:
        """Whether this attribute references another model."""
        return bool(self.model or self.collection)

    @property
    def is_identifier(self) -> bool:
        """Whether this attribute is an identifier field the store owns."""
        return self.name in IDENTIFIER_FIELDS


@dataclass
class AssociationUpdate:
    """
    One planned relation update.

    Attributes:
        model: Model owning the record being updated
        attribute: Relation attribute being set
        target: Referenced model name
        selector: Store selector for the record, e.g. {"id": 3}
        value: Peer identifier (to-one) or list of identifiers (to-many)
    """

    model: str
    attribute: str
    target: str
    selector: dict[str, Any]
    value: Any = None


@dataclass
class AssociationOutcome:
    """Result of one association update."""

    update: AssociationUpdate
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SeedResult:
    """
    Everything a seeding run produced.

    Attributes:
        payloads: Generated payloads per model, before persistence
        created: Persisted records per model, as returned by the store
        associations: One outcome per relation update issued
    """

    payloads: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    created: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    associations: list[AssociationOutcome] = field(default_factory=list)

    @property
    def failed_associations(self) -> list[AssociationOutcome]:
        return [outcome for outcome in self.associations if not outcome.ok]

    def counts(self) -> dict[str, int]:
        """Number of created records per model."""
        return {model: len(records) for model, records in self.created.items()}

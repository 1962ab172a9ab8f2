"""Payload builder: one generated record per call."""

import logging
from collections.abc import Mapping
from typing import Any

from modelseed.generators.registry import GeneratorRegistry, get_registry
from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource, coerce_source

logger = logging.getLogger(__name__)


class PayloadBuilder:
    """
    Build record payloads from attribute definitions.

    Identifier fields ('id', '_id') and relation attributes are never part
    of a payload: the store assigns identifiers and relations are filled in
    after creation. Numeric primary keys are left to the store as well.
    Attributes whose type has no registered generator are silently omitted.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        registry: GeneratorRegistry | None = None,
    ):
        """
        Initialize PayloadBuilder.

        Args:
            rng: Shared randomness source (unseeded source if omitted)
            registry: Generator registry (global registry if omitted)
        """
        self.rng = coerce_source(rng)
        self.registry = registry or get_registry()

    def build(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        """
        Generate one payload.

        Args:
            attributes: Attribute name -> raw descriptor (shorthand or mapping)

        Returns:
            Attribute name -> generated value

        Raises:
            DescriptorError: If a descriptor is malformed
        """
        descriptors = [AttributeDescriptor.parse(name, raw) for name, raw in attributes.items()]
        return self.build_from_descriptors(descriptors)

    def build_from_descriptors(self, descriptors: list[AttributeDescriptor]) -> dict[str, Any]:
        payload: dict[str, Any] = {}

        for descriptor in descriptors:
            # Relations and identifiers are resolved after creation
            if descriptor.is_relation or descriptor.is_identifier:
                continue

            generator = self.registry.resolve(descriptor.type)
            if generator is None:
                logger.debug(
                    f"No generator for type {descriptor.type!r}, "
                    f"omitting attribute '{descriptor.name}'"
                )
                continue

            if generator.skips_primary_keys and descriptor.primary_key:
                continue

            payload[descriptor.name] = generator.generate(descriptor, self.rng)

        return payload

    def build_many(self, attributes: Mapping[str, Any], count: int) -> list[dict[str, Any]]:
        """Generate `count` payloads from the same definitions."""
        descriptors = [AttributeDescriptor.parse(name, raw) for name, raw in attributes.items()]
        return [self.build_from_descriptors(descriptors) for _ in range(count)]


def build_payload(
    attributes: Mapping[str, Any],
    rng: RandomSource | None = None,
    registry: GeneratorRegistry | None = None,
) -> dict[str, Any]:
    """
    Generate one payload from attribute definitions.

    Example:
        >>> payload = build_payload({
        ...     "id": {"type": "integer", "primaryKey": True},
        ...     "name": "string",
        ... })
        >>> sorted(payload)
        ['name']
    """
    return PayloadBuilder(rng, registry).build(attributes)

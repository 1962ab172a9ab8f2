"""Base generator interface."""

from abc import ABC, abstractmethod
from typing import Any

from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource


class BaseGenerator(ABC):
    """
    Base class for value generators.

    A generator maps one attribute descriptor of its domain to one random
    value. Subclass this and register it to support a new type name.

    Example:
        >>> class SlugGenerator(BaseGenerator):
        ...     def generate(self, descriptor, rng):
        ...         return f"{descriptor.name}-{rng.integer(1, 9999)}"
        >>>
        >>> register_generator("slug", SlugGenerator)
    """

    # Numeric generators leave primary keys to the store
    skips_primary_keys: bool = False

    @abstractmethod
    def generate(self, descriptor: AttributeDescriptor, rng: RandomSource) -> Any:
        """
        Generate a value for an attribute.

        Args:
            descriptor: Normalized attribute descriptor
            rng: Shared randomness source for the run

        Returns:
            Generated value appropriate for the attribute
        """
        pass

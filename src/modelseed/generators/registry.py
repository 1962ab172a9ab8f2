"""Generator registry mapping type names to generator classes."""

from modelseed.generators.base import BaseGenerator
from modelseed.generators.boolean import BooleanGenerator
from modelseed.generators.numeric import NumericGenerator
from modelseed.generators.string import StringGenerator
from modelseed.generators.temporal import TemporalGenerator

BUILTIN_GENERATORS: dict[str, type] = {
    "string": StringGenerator,
    "text": StringGenerator,
    "email": StringGenerator,
    "integer": NumericGenerator,
    "float": NumericGenerator,
    "smallint": NumericGenerator,
    "serial": NumericGenerator,
    "bigint": NumericGenerator,
    "decimal": NumericGenerator,
    "numeric": NumericGenerator,
    "real": NumericGenerator,
    "date": TemporalGenerator,
    "time": TemporalGenerator,
    "datetime": TemporalGenerator,
    "boolean": BooleanGenerator,
}


class GeneratorRegistry:
    """Registry of generator classes by (lower-case) type name."""

    def __init__(self, generators: dict[str, type] | None = None):
        self._generators: dict[str, type] = {}
        for name, generator_class in (generators or {}).items():
            self.register(name, generator_class)
        self._instances: dict[type, BaseGenerator] = {}

    def register(self, name: str, generator_class: type) -> None:
        """
        Register a generator for a type name.

        Args:
            name: Type name as it appears in descriptors (case-insensitive)
            generator_class: Class implementing generate(descriptor, rng)

        Raises:
            ValueError: If generator_class has no callable generate
        """
        if not callable(getattr(generator_class, "generate", None)):
            raise ValueError(
                f"Cannot register {generator_class.__name__} for '{name}': "
                f"it must have a 'generate' method."
            )
        self._generators[name.lower()] = generator_class

    def get(self, name: str | None) -> type | None:
        """
        Get generator class by type name.

        Returns:
            Generator class or None if the type is not recognized
        """
        if name is None:
            return None
        return self._generators.get(name.lower())

    def resolve(self, name: str | None) -> BaseGenerator | None:
        """
        Get a shared generator instance for a type name.

        Returns:
            Generator instance or None if the type is not recognized
        """
        generator_class = self.get(name)
        if generator_class is None:
            return None
        if generator_class not in self._instances:
            self._instances[generator_class] = generator_class()
        return self._instances[generator_class]

    def list_generators(self) -> list[str]:
        """
        List all registered type names.

        Returns:
            List of type names
        """
        return list(self._generators.keys())

    def clear(self) -> None:
        """Remove every registration, built-ins included."""
        self._generators.clear()
        self._instances.clear()

    def reset(self) -> None:
        """Restore the built-in generators only."""
        self.clear()
        self._generators.update(BUILTIN_GENERATORS)


def default_registry() -> GeneratorRegistry:
    """New registry holding only the built-in generators."""
    return GeneratorRegistry(BUILTIN_GENERATORS)


# Process-wide registry used by PayloadBuilder when none is injected
_registry = default_registry()


def get_registry() -> GeneratorRegistry:
    return _registry


def register_generator(name: str, generator_class: type) -> None:
    """
    Register a generator for a type name (user-facing API).

    Args:
        name: Type name
        generator_class: Generator class with generate() method

    Example:
        >>> from modelseed import BaseGenerator, register_generator
        >>>
        >>> class UUIDGenerator(BaseGenerator):
        ...     def generate(self, descriptor, rng):
        ...         return str(rng.faker.uuid4())
        >>>
        >>> register_generator("uuid", UUIDGenerator)
    """
    _registry.register(name, generator_class)


def get_generator(name: str) -> type | None:
    """
    Get a registered generator class.

    Returns:
        Generator class or None if not found
    """
    return _registry.get(name)


def list_generators() -> list[str]:
    """
    List all registered type names.

    Returns:
        List of type names
    """
    return _registry.list_generators()


def reset_generators() -> None:
    """Restore the built-in generators (for testing)."""
    _registry.reset()

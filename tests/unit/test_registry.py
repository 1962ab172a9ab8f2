"""Tests for the generator registry."""

import pytest

from modelseed.generators import (
    BaseGenerator,
    BooleanGenerator,
    GeneratorRegistry,
    NumericGenerator,
    StringGenerator,
    TemporalGenerator,
    default_registry,
    get_generator,
    list_generators,
    register_generator,
    reset_generators,
)


class ConstantGenerator(BaseGenerator):
    def generate(self, descriptor, rng):
        return "constant"


class NoGenerate:
    pass


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("string", StringGenerator),
        ("email", StringGenerator),
        ("integer", NumericGenerator),
        ("float", NumericGenerator),
        ("date", TemporalGenerator),
        ("time", TemporalGenerator),
        ("datetime", TemporalGenerator),
        ("boolean", BooleanGenerator),
    ],
)
def test_builtin_mapping(type_name, expected):
    assert default_registry().get(type_name) is expected


def test_lookup_is_case_insensitive():
    assert default_registry().get("DateTime") is TemporalGenerator


def test_unknown_type_returns_none():
    registry = default_registry()

    assert registry.get("geometry") is None
    assert registry.get(None) is None
    assert registry.resolve("geometry") is None


def test_resolve_reuses_instances():
    registry = default_registry()

    first = registry.resolve("string")
    assert isinstance(first, StringGenerator)
    assert registry.resolve("email") is first


def test_register_rejects_class_without_generate():
    registry = GeneratorRegistry()

    with pytest.raises(ValueError, match="must have a 'generate' method"):
        registry.register("broken", NoGenerate)


def test_clear_and_reset():
    registry = default_registry()
    registry.register("constant", ConstantGenerator)

    registry.clear()
    assert registry.list_generators() == []

    registry.reset()
    assert "constant" not in registry.list_generators()
    assert registry.get("string") is StringGenerator


def test_global_registration_and_reset():
    register_generator("Constant", ConstantGenerator)

    assert get_generator("constant") is ConstantGenerator
    assert "constant" in list_generators()

    reset_generators()

    assert get_generator("constant") is None

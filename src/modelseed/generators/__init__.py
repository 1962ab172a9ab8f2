"""Value generators for each attribute domain."""

from modelseed.generators.base import BaseGenerator
from modelseed.generators.boolean import BooleanGenerator
from modelseed.generators.numeric import NumericGenerator, safe_magnitude
from modelseed.generators.registry import (
    GeneratorRegistry,
    default_registry,
    get_generator,
    get_registry,
    list_generators,
    register_generator,
    reset_generators,
)
from modelseed.generators.string import StringGenerator
from modelseed.generators.temporal import TemporalGenerator

__all__ = [
    "BaseGenerator",
    "BooleanGenerator",
    "GeneratorRegistry",
    "NumericGenerator",
    "StringGenerator",
    "TemporalGenerator",
    "default_registry",
    "get_generator",
    "get_registry",
    "list_generators",
    "register_generator",
    "reset_generators",
    "safe_magnitude",
]

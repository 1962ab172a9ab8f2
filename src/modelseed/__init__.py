"""
modelseed - Schema-Driven Development Data Seeding

Generates fake records for every model of a schema, persists them, then
wires up to-one and to-many relations between the created records.
"""

from modelseed.associations import AssociationResolver
from modelseed.builder import PayloadBuilder, build_payload
from modelseed.generators.base import BaseGenerator
from modelseed.generators.registry import (
    list_generators,
    register_generator,
    reset_generators,
)
from modelseed.lifecycle import Host, Signal
from modelseed.models import AssociationOutcome, AttributeDescriptor, SeedResult
from modelseed.orchestrator import SeedOrchestrator
from modelseed.randomness import RandomSource
from modelseed.schema import ModelDefinition, Schema
from modelseed.seeder import Seeder

__version__ = "0.1.0"

__all__ = [
    "AssociationOutcome",
    "AssociationResolver",
    "AttributeDescriptor",
    "BaseGenerator",
    "Host",
    "ModelDefinition",
    "PayloadBuilder",
    "RandomSource",
    "Schema",
    "SeedOrchestrator",
    "SeedResult",
    "Seeder",
    "Signal",
    "build_payload",
    "list_generators",
    "register_generator",
    "reset_generators",
]

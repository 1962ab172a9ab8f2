"""Seed generation orchestrator."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

from modelseed.associations import COLLECTION_SIZE, AssociationResolver
from modelseed.backends.base import Backend
from modelseed.builder import PayloadBuilder
from modelseed.exceptions import PersistenceError
from modelseed.generators.registry import GeneratorRegistry
from modelseed.models import SeedResult
from modelseed.randomness import RandomSource, coerce_source
from modelseed.schema import Schema

logger = logging.getLogger(__name__)


def _check_iterations(iterations: int) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
        raise ValueError(f"iterations must be a positive integer, got {iterations!r}")
    return iterations


class SeedOrchestrator:
    """
    Orchestrate a seeding run across every model of a schema.

    A run has three phases:
        1. generate `iterations` payloads per non-junction model
        2. bulk-create each model's batch concurrently and wait for all
        3. resolve relations on the created records

    A failed create aborts the run before phase 3. Records created for
    other models are kept.
    """

    def __init__(
        self,
        backend: Backend,
        rng: RandomSource | None = None,
        registry: GeneratorRegistry | None = None,
        max_workers: int | None = None,
        collection_size: int = COLLECTION_SIZE,
    ):
        """
        Initialize orchestrator.

        Args:
            backend: Store receiving creates and updates
            rng: Shared randomness source for generation and picks
            registry: Generator registry (global registry if omitted)
            max_workers: Thread pool size for creates and updates
            collection_size: Peers picked per to-many relation
        """
        self.backend = backend
        self.rng = coerce_source(rng)
        self.builder = PayloadBuilder(self.rng, registry)
        self.resolver = AssociationResolver(
            backend, self.rng, collection_size=collection_size, max_workers=max_workers
        )
        self.max_workers = max_workers

    def build_payloads(self, schema: Schema, iterations: int) -> dict[str, list[dict[str, Any]]]:
        """
        Generate payloads for every seedable model.

        Returns:
            Model name -> list of `iterations` payloads
        """
        _check_iterations(iterations)
        return {
            model.name: self.builder.build_many(model.attributes, iterations)
            for model in schema.seedable()
        }

    def persist(
        self, schema: Schema, payloads: dict[str, list[dict[str, Any]]]
    ) -> dict[str, list[dict[str, Any]]]:
        """
        Bulk-create every model's payloads concurrently.

        Waits until all creates have settled, successful or not.

        Returns:
            Model name -> created records

        Raises:
            PersistenceError: For the first failed model, in schema order
        """
        if not payloads:
            return {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                name: executor.submit(self.backend.create, schema[name], batch)
                for name, batch in payloads.items()
            }
            wait(futures.values())

        created: dict[str, list[dict[str, Any]]] = {}
        for name, future in futures.items():
            error = future.exception()
            if error is not None:
                raise PersistenceError(name, error) from error
            created[name] = future.result()

        return created

    def run(self, schema: Schema, iterations: int) -> SeedResult:
        """
        Execute a full seeding run.

        Args:
            schema: Models to seed
            iterations: Payloads per model

        Returns:
            SeedResult with payloads, created records and association outcomes

        Raises:
            ValueError: If iterations is not a positive integer
            PersistenceError: If any bulk create failed (associations skipped)
        """
        payloads = self.build_payloads(schema, iterations)
        logger.info(
            f"Generated {iterations} payloads for each of {len(payloads)} models"
        )

        created = self.persist(schema, payloads)
        associations = self.resolver.resolve(created, schema)

        return SeedResult(payloads=payloads, created=created, associations=associations)

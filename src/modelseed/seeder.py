"""Seeder: the component a host registers to seed its store on startup."""

import logging

from modelseed.backends.base import Backend
from modelseed.config import SeedConfig
from modelseed.exceptions import DescriptorError, ModelSeedError, PersistenceError
from modelseed.generators.registry import GeneratorRegistry
from modelseed.lifecycle import Host
from modelseed.models import SeedResult
from modelseed.orchestrator import SeedOrchestrator
from modelseed.randomness import RandomSource, coerce_source
from modelseed.schema import Schema

logger = logging.getLogger(__name__)

CAPABILITY_NAME = "seeder"
START_SIGNAL = "database_started"


class Seeder:
    """
    Seed every model of a host's schema with fake records.

    Register with a host to seed once, when the host fires
    "database_started" with its schema and backend. Seeding only happens
    when the configured environment is "development"; otherwise the run is
    skipped with an informational log line. A failed run is logged, never
    raised to the host.

    Example:
        >>> host = Host()
        >>> seeder = Seeder().set_iterations(5)
        >>> seeder.register(host)
        >>> host.emit("database_started", schema, backend)
    """

    def __init__(
        self,
        config: SeedConfig | None = None,
        rng: RandomSource | None = None,
        registry: GeneratorRegistry | None = None,
    ):
        self.config = config or SeedConfig()
        self.rng = coerce_source(rng)
        self.registry = registry
        self.iterations = self.config.iterations
        self.last_result: SeedResult | None = None

    def set_iterations(self, iterations: int | str) -> "Seeder":
        """
        Set how many records of each model to create.

        Args:
            iterations: Positive integer (numeric strings are accepted)

        Returns:
            Self for chaining

        Raises:
            ValueError: If iterations is not a positive integer
        """
        value = int(iterations)
        if value < 1:
            raise ValueError(f"iterations must be a positive integer, got {iterations!r}")
        self.iterations = value
        return self

    def register(self, host: Host) -> None:
        """
        Register with a host.

        Serves this seeder as the "seeder" capability and subscribes to the
        single "database_started" signal.
        """
        host.reply(CAPABILITY_NAME, self)
        host.once(START_SIGNAL, self.seed)

    def should_seed(self) -> bool:
        return self.config.is_enabled()

    def seed(self, schema: Schema, backend: Backend) -> SeedResult | None:
        """
        Run a seeding pass if the environment allows it.

        Args:
            schema: Models to seed
            backend: Store receiving creates and updates

        Returns:
            SeedResult, or None when skipped or when the run failed
        """
        if not self.should_seed():
            logger.info(
                f"Environment is {self.config.environment!r}, not "
                f"{self.config.required_environment!r}; not seeding the database"
            )
            return None

        logger.info("Seeding the database with fake data")
        orchestrator = SeedOrchestrator(
            backend,
            rng=self.rng,
            registry=self.registry,
            max_workers=self.config.max_workers,
            collection_size=self.config.collection_size,
        )

        try:
            result = orchestrator.run(schema, self.iterations)
        except PersistenceError as e:
            logger.error(f"Finished seeding the database with an error: {e.cause}")
            logger.debug("Seeding failure details", exc_info=e)
            return None
        except DescriptorError as e:
            logger.error(f"Could not generate seed payloads: {e}")
            return None
        except ModelSeedError as e:
            logger.error(f"Finished seeding the database with an error: {e}")
            return None
        except Exception as e:
            # Registered generators can raise anything
            logger.error(f"Seeding aborted by an unexpected error: {e!r}")
            logger.debug("Seeding failure details", exc_info=e)
            return None

        failed = len(result.failed_associations)
        logger.info(
            f"Finished seeding: {sum(result.counts().values())} records across "
            f"{len(result.created)} models, {len(result.associations) - failed} "
            f"associations set, {failed} failed"
        )
        self.last_result = result
        return result

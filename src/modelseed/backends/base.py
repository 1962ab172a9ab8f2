"""Backend interface consumed by the seeder."""

from abc import ABC, abstractmethod
from typing import Any

from modelseed.schema import ModelDefinition


class Backend(ABC):
    """
    Persistence operations the host store provides.

    Both operations raise on failure. They may be called concurrently from
    worker threads, for disjoint record sets.
    """

    @abstractmethod
    def create(
        self, model: ModelDefinition, payloads: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """
        Bulk-create records.

        Args:
            model: Model being seeded
            payloads: Generated payloads (no identifiers, no relations)

        Returns:
            Created records, each carrying its assigned identifier
        """

    @abstractmethod
    def update(
        self, model: ModelDefinition, selector: dict[str, Any], patch: dict[str, Any]
    ) -> None:
        """
        Update the records matching selector.

        Args:
            model: Model owning the records
            selector: Attribute equality filter, e.g. {"id": 3}
            patch: Attribute name -> new value
        """

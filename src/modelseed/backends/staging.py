"""Staging backend - in-memory store for testing without a database."""

import threading
from typing import Any

from modelseed.backends.base import Backend
from modelseed.exceptions import RecordNotFoundError
from modelseed.schema import ModelDefinition


class StagingBackend(Backend):
    """
    In-memory backend for seeding without a database.

    Simulates store behavior:
    - Assigns the primary key (sequential integers starting from 1 per model)
    - Applies updates to matching records
    - Stores data in memory (not database)

    Use case: Fast unit tests, dry runs, previewing a seeding run.
    """

    def __init__(self):
        """Initialize staging backend with empty state."""
        self._data: dict[str, list[dict[str, Any]]] = {}
        self._pk_sequences: dict[str, int] = {}
        self._lock = threading.Lock()

    def create(
        self, model: ModelDefinition, payloads: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """
        Simulate bulk create (assign PKs, store in memory).

        Returns:
            Copies of the stored records including the primary key
        """
        if not payloads:
            return []

        pk = model.primary_key
        created = []
        with self._lock:
            next_pk = self._pk_sequences.get(model.name, 1)
            rows = self._data.setdefault(model.name, [])
            for payload in payloads:
                record = dict(payload)
                record[pk] = next_pk
                next_pk += 1
                rows.append(record)
                created.append(dict(record))
            self._pk_sequences[model.name] = next_pk

        return created

    def update(
        self, model: ModelDefinition, selector: dict[str, Any], patch: dict[str, Any]
    ) -> None:
        """
        Apply patch to every stored record matching selector.

        Raises:
            RecordNotFoundError: If no record matches
        """
        with self._lock:
            matched = [
                row
                for row in self._data.get(model.name, [])
                if all(row.get(key) == value for key, value in selector.items())
            ]
            if not matched:
                raise RecordNotFoundError(model.name, selector)
            for row in matched:
                row.update(patch)

    def get_data(self, model_name: str) -> list[dict[str, Any]]:
        """
        Get in-memory data for inspection.

        Args:
            model_name: Model name

        Returns:
            List of record dicts for the model
        """
        with self._lock:
            return [dict(row) for row in self._data.get(model_name, [])]

    def clear(self) -> None:
        """Clear all in-memory data and sequences."""
        with self._lock:
            self._data.clear()
            self._pk_sequences.clear()

"""Association resolver: fills relation attributes after records exist."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from modelseed.backends.base import Backend
from modelseed.exceptions import AssociationError, MissingPrimaryKeyError
from modelseed.models import AssociationOutcome, AssociationUpdate
from modelseed.randomness import RandomSource, coerce_source
from modelseed.schema import Schema

logger = logging.getLogger(__name__)

# Peers picked for each to-many relation
COLLECTION_SIZE = 3


class AssociationResolver:
    """
    Point relation attributes of created records at random peer records.

    - to-one (`model`): one peer identifier
    - to-many (`collection`): `collection_size` peer identifiers, picked
      independently with replacement

    All picks are made up front on the shared randomness source; the updates
    then run concurrently and are joined. A failed update never aborts the
    others and is reported only through its outcome.
    """

    def __init__(
        self,
        backend: Backend,
        rng: RandomSource | None = None,
        collection_size: int = COLLECTION_SIZE,
        max_workers: int | None = None,
    ):
        self.backend = backend
        self.rng = coerce_source(rng)
        self.collection_size = collection_size
        self.max_workers = max_workers

    def plan(
        self, created: dict[str, list[dict[str, Any]]], schema: Schema
    ) -> list[AssociationOutcome]:
        """
        Compute every relation update.

        Args:
            created: Model name -> created records
            schema: Schema the records were created from

        Returns:
            One pending outcome per relation attribute per created record.
            Outcomes that already carry an error (no primary key on the record,
            or no resolvable peer) must not be issued.
        """
        planned: list[AssociationOutcome] = []
        peers: dict[str, list[Any]] = {}

        for model in schema.seedable():
            relations = model.relations
            if not relations:
                continue

            pk = model.primary_key
            for record in created.get(model.name, []):
                for relation in relations:
                    target = relation.model or relation.collection
                    update = AssociationUpdate(
                        model=model.name,
                        attribute=relation.name,
                        target=target,
                        selector={pk: record.get(pk)},
                    )

                    if record.get(pk) is None:
                        planned.append(
                            AssociationOutcome(update, MissingPrimaryKeyError(model.name, pk))
                        )
                        continue

                    if target not in peers:
                        peers[target] = self._peer_ids(created, schema, target)
                    peer_ids = peers[target]
                    if not peer_ids:
                        planned.append(
                            AssociationOutcome(
                                update, AssociationError(model.name, relation.name, target)
                            )
                        )
                        continue

                    if relation.model:
                        update.value = self.rng.pick(peer_ids)
                    else:
                        update.value = self.rng.sample_with_replacement(
                            peer_ids, self.collection_size
                        )
                    planned.append(AssociationOutcome(update))

        return planned

    def _peer_ids(
        self, created: dict[str, list[dict[str, Any]]], schema: Schema, target: str
    ) -> list[Any]:
        peer_model = schema.get(target)
        if peer_model is None or peer_model.junction_table:
            return []
        peer_pk = peer_model.primary_key
        return [record[peer_pk] for record in created.get(target, []) if peer_pk in record]

    def _apply(self, outcome: AssociationOutcome, schema: Schema) -> AssociationOutcome:
        update = outcome.update
        try:
            self.backend.update(
                schema[update.model], update.selector, {update.attribute: update.value}
            )
        except Exception as e:
            outcome.error = e
        return outcome

    def resolve(
        self, created: dict[str, list[dict[str, Any]]], schema: Schema
    ) -> list[AssociationOutcome]:
        """
        Plan and issue all relation updates, then wait for every one.

        Returns:
            Outcomes in plan order; failed ones carry their error
        """
        outcomes = self.plan(created, schema)
        pending = [outcome for outcome in outcomes if outcome.ok]

        if pending:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(self._apply, outcome, schema) for outcome in pending]
                for future in futures:
                    future.result()

        for outcome in outcomes:
            if not outcome.ok:
                logger.debug(
                    f"Association {outcome.update.model}.{outcome.update.attribute} "
                    f"-> {outcome.update.target} failed: {outcome.error}"
                )

        return outcomes

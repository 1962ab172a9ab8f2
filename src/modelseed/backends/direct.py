"""Direct backend - writes seed records to PostgreSQL."""

import threading
from typing import Any

from psycopg import Connection, sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from modelseed.backends.base import Backend
from modelseed.exceptions import RecordNotFoundError
from modelseed.schema import ModelDefinition


def _adapt(value: Any) -> Any:
    """Wrap mapping values for JSON columns; lists adapt to arrays natively."""
    if isinstance(value, dict):
        return Jsonb(value)
    return value


class DirectBackend(Backend):
    """
    Persist seed records with INSERT/UPDATE statements.

    Uses PostgreSQL's RETURNING clause to capture store-assigned values
    (identity/serial primary keys, defaults) after insertion. Calls arriving
    from worker threads are serialized on the shared connection and each one
    commits its own transaction.
    """

    def __init__(self, conn: Connection, schema: str = "public", batch_size: int = 100):
        """
        Initialize backend.

        Args:
            conn: PostgreSQL connection
            schema: Schema name for qualified table names
            batch_size: Number of rows per INSERT statement
        """
        self.conn = conn
        self.schema = schema
        self.batch_size = batch_size
        self._lock = threading.Lock()

    def _table(self, model: ModelDefinition) -> sql.Identifier:
        return sql.Identifier(self.schema, model.table_name)

    def create(
        self, model: ModelDefinition, payloads: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """
        Insert payloads and return the complete rows.

        Args:
            model: Model being seeded
            payloads: Row data (without identifiers or relations)

        Returns:
            List of complete rows including generated columns
        """
        if not payloads:
            return []

        # Payloads built from the same definitions share their keys
        columns = list(payloads[0].keys())
        if not columns:
            return self._insert_defaults(model, len(payloads))

        created: list[dict[str, Any]] = []
        with self._lock:
            try:
                with self.conn.cursor(row_factory=dict_row) as cur:
                    for i in range(0, len(payloads), self.batch_size):
                        batch = payloads[i : i + self.batch_size]

                        single_placeholder = sql.SQL("({})").format(
                            sql.SQL(", ").join([sql.Placeholder()] * len(columns))
                        )
                        query = sql.SQL("INSERT INTO {} ({}) VALUES {} RETURNING *").format(
                            self._table(model),
                            sql.SQL(", ").join(map(sql.Identifier, columns)),
                            sql.SQL(", ").join([single_placeholder] * len(batch)),
                        )

                        # Flatten values: [row1_col1, row1_col2, row2_col1, ...]
                        values = [_adapt(row.get(col)) for row in batch for col in columns]

                        cur.execute(query, values)
                        created.extend(cur.fetchall())
                self.conn.commit()
            except Exception:
                self.conn.rollback()
                raise

        return created

    def _insert_defaults(self, model: ModelDefinition, count: int) -> list[dict[str, Any]]:
        """Insert rows that carry no generated attributes."""
        query = sql.SQL("INSERT INTO {} DEFAULT VALUES RETURNING *").format(self._table(model))

        created = []
        with self._lock:
            try:
                with self.conn.cursor(row_factory=dict_row) as cur:
                    for _ in range(count):
                        cur.execute(query)
                        created.append(cur.fetchone())
                self.conn.commit()
            except Exception:
                self.conn.rollback()
                raise
        return created

    def update(
        self, model: ModelDefinition, selector: dict[str, Any], patch: dict[str, Any]
    ) -> None:
        """
        Update matching rows.

        Raises:
            RecordNotFoundError: If no row matches selector
        """
        query = sql.SQL("UPDATE {} SET {} WHERE {}").format(
            self._table(model),
            sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(col), sql.Placeholder())
                for col in patch
            ),
            sql.SQL(" AND ").join(
                sql.SQL("{} = {}").format(sql.Identifier(col), sql.Placeholder())
                for col in selector
            ),
        )
        values = [_adapt(v) for v in patch.values()] + list(selector.values())

        with self._lock:
            try:
                with self.conn.cursor() as cur:
                    cur.execute(query, values)
                    rowcount = cur.rowcount
                self.conn.commit()
            except Exception:
                self.conn.rollback()
                raise

        if rowcount == 0:
            raise RecordNotFoundError(model.name, selector)

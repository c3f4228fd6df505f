"""Multi-row INSERT composition and execution."""

import logging
from functools import lru_cache
from typing import Sequence

from svloader.errors import DbWriteError
from svloader.service import DatabaseService
from svloader.types import Row

logger = logging.getLogger(__name__)


def quote_table(table: str) -> str:
    """Wrap the table name in backticks. The name is not otherwise escaped."""
    return f"`{table}`"


def compose_insert(table: str, rows: Sequence[Row]) -> str:
    """Build one INSERT with every field pasted verbatim into the SQL text.

    >>> compose_insert("t", [['"1"', '"Alice"'], ['"2"', '"Bob"']])
    'INSERT INTO `t` VALUES ("1","Alice"),("2","Bob");'
    """
    if not rows:
        raise ValueError("Cannot compose an INSERT for an empty batch")
    values = ",".join("(" + ",".join(row) + ")" for row in rows)
    return f"INSERT INTO {quote_table(table)} VALUES {values};"


@lru_cache(maxsize=64)
def _row_placeholders(width: int, placeholder: str) -> str:
    return "(" + ",".join([placeholder] * width) + ")"


def compose_parameterized_insert(
    table: str, rows: Sequence[Row], placeholder: str = "%s"
) -> tuple[str, list[str]]:
    """Build one INSERT with a bind marker per field.

    Returns the SQL text and the flat parameter list, in row order. Rows may
    differ in width; each gets as many markers as it has fields.
    """
    if not rows:
        raise ValueError("Cannot compose an INSERT for an empty batch")
    values = ",".join(_row_placeholders(len(row), placeholder) for row in rows)
    params = [field for row in rows for field in row]
    return f"INSERT INTO {quote_table(table)} VALUES {values};", params


class BatchWriter:
    """Sends each batch as a single INSERT over one service.

    Every batch runs in its own transaction, so a rejected batch leaves the
    ones before it committed.
    """

    def __init__(self, service: DatabaseService, table: str, parameterized: bool = False):
        self._service = service
        self._table = table
        self._parameterized = parameterized
        self.batches_attempted = 0

    def write(self, rows: Sequence[Row]) -> None:
        """Insert rows. Raises DbWriteError if composing or executing fails."""
        self.batches_attempted += 1
        batch_number = self.batches_attempted
        try:
            if self._parameterized:
                sql, params = compose_parameterized_insert(
                    self._table, rows, self._service.placeholder
                )
            else:
                sql, params = compose_insert(self._table, rows), None
            with self._service.transaction():
                self._service.execute(sql, params)
        except Exception as e:
            raise DbWriteError(
                f"Batch {batch_number} ({len(rows)} rows) into `{self._table}` failed: {e}",
                batch_number=batch_number,
                row_count=len(rows),
            ) from e
        logger.debug("Batch %d: inserted %d rows into %s", batch_number, len(rows), self._table)

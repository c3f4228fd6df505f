"""Bounded row buffer that flushes to a BatchWriter."""

import logging
import threading
from typing import Callable

from svloader.errors import DbWriteError, IngestCancelled
from svloader.ingestion.result import IngestResult
from svloader.ingestion.writer import BatchWriter
from svloader.types import Batch, Row

logger = logging.getLogger(__name__)


class BatchAccumulator:
    """Collects rows and hands them to the writer batch_size at a time.

    One list is reused for the whole ingest: it is cleared after every flush,
    whether the write succeeded or not, so no row is ever sent twice.
    """

    def __init__(
        self,
        writer: BatchWriter,
        batch_size: int,
        result: IngestResult,
        on_progress: Callable[[str], None] = print,
        best_effort: bool = False,
        cancel_event: threading.Event | None = None,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._writer = writer
        self._batch_size = batch_size
        self._result = result
        self._on_progress = on_progress
        self._best_effort = best_effort
        self._cancel_event = cancel_event
        self._rows: Batch = []

    def __len__(self) -> int:
        return len(self._rows)

    def append(self, row: Row) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._batch_size:
            self._check_cancelled()
            self._result.rows_submitted += len(self._rows)
            self._on_progress(f"Processing batch {self._result.rows_submitted}")
            self._flush()

    def finish(self) -> None:
        """Flush whatever is left after the last full batch."""
        if not self._rows:
            return
        self._check_cancelled()
        size = len(self._rows)
        self._on_progress(f"Processing remaining {size}")
        self._result.rows_submitted += size
        self._flush()

    def _check_cancelled(self) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise IngestCancelled(f"Cancelled with {len(self._rows)} rows pending")

    def _flush(self) -> None:
        self._result.batches_submitted += 1
        try:
            self._writer.write(self._rows)
        except DbWriteError as e:
            if not self._best_effort:
                raise
            logger.error("%s", e, exc_info=True)
            self._result.record_write_failure(e)
        finally:
            self._rows.clear()

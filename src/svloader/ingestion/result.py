"""Outcome of one ingest call."""

from dataclasses import dataclass, field
from pathlib import Path

from svloader.errors import DbWriteError, IngestError


@dataclass
class IngestResult:
    """Counters and errors of one ingest.

    rows_submitted counts rows handed to the database, including those of
    batches that were rejected; rows_written counts only accepted ones.
    """

    table: str
    file_path: str | Path
    rows_submitted: int = 0
    rows_failed: int = 0
    batches_submitted: int = 0
    batches_failed: int = 0
    errors: list[IngestError] = field(default_factory=list)
    cancelled: bool = False

    @property
    def rows_written(self) -> int:
        return self.rows_submitted - self.rows_failed

    @property
    def ok(self) -> bool:
        return not self.errors and not self.cancelled

    def record_write_failure(self, error: DbWriteError) -> None:
        self.rows_failed += error.row_count
        self.batches_failed += 1
        self.errors.append(error)

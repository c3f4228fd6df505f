"""Ingest settings and the presets of the convenience entry points."""

from dataclasses import dataclass
from pathlib import Path

from svloader.errors import ConfigError

DEFAULT_ENCODING = "UTF-8"
DEFAULT_BATCH_SIZE = 200_000
TAB = "\t"
COMMA = ","


@dataclass(frozen=True)
class IngestConfig:
    """Everything one ingest needs besides the database target.

    Attributes:
        table: Destination table. Wrapped in backticks, not otherwise escaped.
        file_path: Source file.
        encoding: Codec label of the file, e.g. "UTF-8" or "latin-1".
        delimiter: Field separator, matched verbatim. Multi-character
            separators are allowed and matched as a whole.
        ignore_first_row: Discard the first line (a header).
        enforce_double_quotes: Strip every '"' from each line, then wrap every
            field in double quotes.
        batch_size: Rows per INSERT statement and database round-trip.
        best_effort: Log and record errors instead of raising; failed batches
            do not stop the ingest.
        parameterized: Send values as bound parameters instead of pasting them
            into the SQL text. Fields are then not wrapped in quotes.
    """

    table: str
    file_path: str | Path
    encoding: str = DEFAULT_ENCODING
    delimiter: str = TAB
    ignore_first_row: bool = False
    enforce_double_quotes: bool = True
    batch_size: int = DEFAULT_BATCH_SIZE
    best_effort: bool = False
    parameterized: bool = False

    def __post_init__(self) -> None:
        if not self.table:
            raise ConfigError("table must be a non-empty name")
        if not self.delimiter:
            raise ConfigError("delimiter must not be empty")
        if not self.encoding:
            raise ConfigError("encoding must not be empty")
        # bool is an int subclass; reject it along with non-ints.
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
            raise ConfigError(f"batch_size must be an int, got {self.batch_size!r}")
        if self.batch_size < 1:
            raise ConfigError(f"batch_size must be positive, got {self.batch_size}")

    @classmethod
    def tsv(cls, table: str, file_path: str | Path, header: bool = True) -> "IngestConfig":
        """UTF-8, tab-separated, quotes enforced, 200k rows per batch."""
        return cls(table, file_path, DEFAULT_ENCODING, TAB, header, True, DEFAULT_BATCH_SIZE)

    @classmethod
    def csv(cls, table: str, file_path: str | Path, header: bool = True) -> "IngestConfig":
        """UTF-8, comma-separated, quotes enforced, 200k rows per batch."""
        return cls(table, file_path, DEFAULT_ENCODING, COMMA, header, True, DEFAULT_BATCH_SIZE)

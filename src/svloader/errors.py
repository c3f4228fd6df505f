"""Exceptions raised by the ingest pipeline."""


class IngestError(Exception):
    """Base class for every error raised by svloader."""


class ConfigError(IngestError, ValueError):
    """An ingest or connection setting is invalid."""


class DatabaseConnectionError(IngestError):
    """The database connection could not be opened."""


class IngestIOError(IngestError):
    """The source file could not be opened or read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SourceNotFoundError(IngestIOError):
    """The source file does not exist or is not a regular file."""


class SourceDecodeError(IngestIOError):
    """The source file is not valid text under the declared encoding."""


class SourceReadError(IngestIOError):
    """An OS-level error occurred while opening or reading the source file."""


class DbWriteError(IngestError):
    """A batch INSERT was rejected by the server."""

    def __init__(self, message: str, batch_number: int, row_count: int):
        super().__init__(message)
        self.batch_number = batch_number
        self.row_count = row_count


class IngestCancelled(IngestError):
    """The ingest was stopped through its cancel event."""

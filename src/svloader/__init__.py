"""svloader: append separated-value files to MySQL tables in batches."""

from svloader.errors import (
    ConfigError,
    DatabaseConnectionError,
    DbWriteError,
    IngestCancelled,
    IngestError,
    IngestIOError,
    SourceDecodeError,
    SourceNotFoundError,
    SourceReadError,
)
from svloader.factory import create_service
from svloader.ingestion import IngestConfig, IngestResult, SVIngestor, ingest
from svloader.service import DatabaseService
from svloader.settings import ConnectionSettings

__all__ = [
    "ConfigError",
    "ConnectionSettings",
    "DatabaseConnectionError",
    "DatabaseService",
    "DbWriteError",
    "IngestCancelled",
    "IngestConfig",
    "IngestError",
    "IngestIOError",
    "IngestResult",
    "SVIngestor",
    "SourceDecodeError",
    "SourceNotFoundError",
    "SourceReadError",
    "create_service",
    "ingest",
]

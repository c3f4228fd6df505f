"""Batched ingestion of separated-value files."""

from svloader.ingestion.accumulator import BatchAccumulator
from svloader.ingestion.config import IngestConfig
from svloader.ingestion.orchestrator import IngestState, SVIngestor, ingest
from svloader.ingestion.normalizer import normalize_line
from svloader.ingestion.reader import LineReader
from svloader.ingestion.result import IngestResult
from svloader.ingestion.writer import BatchWriter, compose_insert, compose_parameterized_insert

__all__ = [
    "BatchAccumulator",
    "BatchWriter",
    "IngestConfig",
    "IngestResult",
    "IngestState",
    "LineReader",
    "SVIngestor",
    "compose_insert",
    "compose_parameterized_insert",
    "ingest",
    "normalize_line",
]

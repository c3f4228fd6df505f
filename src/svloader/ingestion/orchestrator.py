"""Ingest orchestrator: file in, multi-row INSERTs out."""

import enum
import logging
import threading
from pathlib import Path
from typing import Callable

from svloader.errors import IngestCancelled, IngestError
from svloader.factory import create_service
from svloader.ingestion.accumulator import BatchAccumulator
from svloader.ingestion.config import DEFAULT_BATCH_SIZE, DEFAULT_ENCODING, TAB, IngestConfig
from svloader.ingestion.normalizer import normalize_line
from svloader.ingestion.reader import LineReader
from svloader.ingestion.result import IngestResult
from svloader.ingestion.writer import BatchWriter
from svloader.service import DatabaseService
from svloader.settings import ConnectionSettings

logger = logging.getLogger(__name__)

Target = str | ConnectionSettings


class IngestState(enum.Enum):
    IDLE = "idle"
    OPENING = "opening"
    STREAMING = "streaming"
    DRAINING = "draining"
    CLOSING = "closing"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SVIngestor:
    """Loads separated-value files into existing tables of one database.

    Nothing is opened at construction. Each ingest opens its own connection
    and file handle and closes both (file first) before returning, whether
    it succeeded or not.

    Errors raise by default. With best_effort=True they are logged with a
    stack trace and recorded on the returned IngestResult instead, and a
    rejected batch does not stop the batches after it.
    """

    def __init__(
        self,
        target: Target,
        *,
        service_factory: Callable[[Target], DatabaseService] = create_service,
        on_progress: Callable[[str], None] | None = None,
    ):
        self._target = target
        self._service_factory = service_factory
        self._on_progress = on_progress or print
        self.state = IngestState.IDLE

    def _progress(self, message: str) -> None:
        logger.debug("%s", message)
        self._on_progress(message)

    def ingest(
        self,
        table: str,
        file_path: str | Path,
        encoding: str = DEFAULT_ENCODING,
        delimiter: str = TAB,
        ignore_first_row: bool = False,
        enforce_double_quotes: bool = True,
        batch_size: int = DEFAULT_BATCH_SIZE,
        *,
        best_effort: bool = False,
        parameterized: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> IngestResult:
        """Append every data row of file_path to table."""
        config = IngestConfig(
            table=table,
            file_path=file_path,
            encoding=encoding,
            delimiter=delimiter,
            ignore_first_row=ignore_first_row,
            enforce_double_quotes=enforce_double_quotes,
            batch_size=batch_size,
            best_effort=best_effort,
            parameterized=parameterized,
        )
        return self.run(config, cancel_event=cancel_event)

    def ingest_tsv_with_header(self, table: str, file_path: str | Path) -> IngestResult:
        return self.run(IngestConfig.tsv(table, file_path, header=True))

    def ingest_tsv_without_header(self, table: str, file_path: str | Path) -> IngestResult:
        return self.run(IngestConfig.tsv(table, file_path, header=False))

    def ingest_csv_with_header(self, table: str, file_path: str | Path) -> IngestResult:
        return self.run(IngestConfig.csv(table, file_path, header=True))

    def ingest_csv_without_header(self, table: str, file_path: str | Path) -> IngestResult:
        return self.run(IngestConfig.csv(table, file_path, header=False))

    def run(
        self, config: IngestConfig, cancel_event: threading.Event | None = None
    ) -> IngestResult:
        """Ingest with a prepared config."""
        result = IngestResult(table=config.table, file_path=config.file_path)
        self._progress(f"Processing {config.file_path}")

        self.state = IngestState.OPENING
        service: DatabaseService | None = None
        try:
            service = self._service_factory(self._target)
            service.connect()
            with LineReader(config.file_path, config.encoding) as reader:
                self.state = IngestState.STREAMING
                self._stream(config, reader, service, result, cancel_event)
        except IngestCancelled as e:
            self.state = IngestState.CLOSING
            logger.warning("Ingest of %s cancelled: %s", config.file_path, e)
            result.cancelled = True
        except IngestError as e:
            if not config.best_effort:
                self.state = IngestState.FAILED
                raise
            self.state = IngestState.CLOSING
            logger.error("Ingest of %s into %s failed", config.file_path, config.table, exc_info=True)
            result.errors.append(e)
        except Exception:
            self.state = IngestState.FAILED
            raise
        finally:
            if service is not None:
                service.close()

        if result.cancelled:
            self.state = IngestState.CANCELLED
        elif result.errors:
            self.state = IngestState.FAILED
        else:
            self.state = IngestState.DONE
        return result

    def _stream(
        self,
        config: IngestConfig,
        reader: LineReader,
        service: DatabaseService,
        result: IngestResult,
        cancel_event: threading.Event | None,
    ) -> None:
        writer = BatchWriter(service, config.table, parameterized=config.parameterized)
        accumulator = BatchAccumulator(
            writer,
            config.batch_size,
            result,
            on_progress=self._progress,
            best_effort=config.best_effort,
            cancel_event=cancel_event,
        )
        wrap = not config.parameterized
        header_consumed = not config.ignore_first_row

        for line in reader:
            if cancel_event is not None and cancel_event.is_set():
                raise IngestCancelled(f"Cancelled at line {reader.line_number}")
            if not header_consumed:
                header_consumed = True
                continue
            row = normalize_line(line, config.delimiter, config.enforce_double_quotes, wrap=wrap)
            accumulator.append(row)

        self.state = IngestState.DRAINING
        accumulator.finish()
        self._progress(f"Processed {result.rows_submitted} rows.")


def ingest(
    target: Target,
    config: IngestConfig,
    *,
    cancel_event: threading.Event | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> IngestResult:
    """One-shot helper: build an SVIngestor for target and run config."""
    return SVIngestor(target, on_progress=on_progress).run(config, cancel_event=cancel_event)

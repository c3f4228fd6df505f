"""Lazy line reader for separated-value files."""

import codecs
import logging
from pathlib import Path
from typing import Iterator

from svloader.errors import SourceDecodeError, SourceNotFoundError, SourceReadError

logger = logging.getLogger(__name__)


def strip_terminator(line: str) -> str:
    """Drop a trailing "\\n" or "\\r\\n". A lone "\\r" is kept as data."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class LineReader:
    """Decoded lines of a text file, without their terminators.

    Use as a context manager; the handle is closed on every exit path:

        with LineReader(path, "UTF-8") as reader:
            for line in reader:
                ...
    """

    def __init__(self, file_path: str | Path, encoding: str):
        self._path = str(file_path)
        self._encoding = encoding
        self._handle = None
        self.line_number = 0

    @property
    def closed(self) -> bool:
        return self._handle is None

    def open(self) -> "LineReader":
        if self._handle is not None:
            return self
        try:
            handle = open(self._path, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise SourceNotFoundError(f"Source file not found: {self._path}", self._path) from e
        except OSError as e:
            raise SourceReadError(f"Cannot open {self._path}: {e}", self._path) from e
        try:
            codecs.lookup(self._encoding)
        except LookupError as e:
            handle.close()
            raise SourceDecodeError(
                f"Unknown encoding {self._encoding!r} for {self._path}", self._path
            ) from e
        self._handle = handle
        logger.debug("Opened %s as %s", self._path, self._encoding)
        return self

    def close(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError:
            logger.warning("Error while closing %s", self._path, exc_info=True)

    def __enter__(self) -> "LineReader":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        if self._handle is None:
            raise RuntimeError("LineReader is not open")
        handle = self._handle
        # Bytes are decoded one raw line at a time, so a bad byte is reported
        # on its own line after every earlier line has been yielded. The
        # incremental decoder keeps multi-byte state across raw lines.
        decoder = codecs.getincrementaldecoder(self._encoding)()
        pending = ""
        while True:
            try:
                chunk = handle.readline()
            except OSError as e:
                raise SourceReadError(
                    f"{self._path}: read failed after line {self.line_number}: {e}", self._path
                ) from e
            final = not chunk
            try:
                pending += decoder.decode(chunk, final=final)
            except UnicodeDecodeError as e:
                raise SourceDecodeError(
                    f"{self._path}: cannot decode line {self.line_number + 1} as {self._encoding}: {e}",
                    self._path,
                ) from e

            end = pending.find("\n")
            while end >= 0:
                self.line_number += 1
                yield strip_terminator(pending[: end + 1])
                pending = pending[end + 1 :]
                end = pending.find("\n")

            if final:
                if pending:
                    self.line_number += 1
                    yield pending
                return

"""File-backed record stream.

This adapter implements the RecordSource protocol over any readable
binary file object. It reads exactly one fixed-size record per step and
hands each chunk to the RecordDecoder.

End-of-data handling:
    - 0 bytes at a record boundary      -> StopIteration
    - 1..RECORD_SIZE-1 bytes            -> TruncatedRecordError
    - OSError from the underlying read  -> RecordReadError

The stream owns its byte source: it is closed on exhaustion, on any
error, on close(), and on context-manager exit. A fresh bytes object is
read per record, so no buffer is shared between iterations.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator

from show_acct.domain.entities import AccountingRecord
from show_acct.domain.services import DecodeError, RecordDecoder
from show_acct.infrastructure.logging import get_logger
from show_acct.ports.inbound import RecordReadError, TruncatedRecordError


class RecordStream:
    """Sequential, non-restartable reader of accounting records.

    Attributes:
        name: Display name of the source (file path or "<stream>").
        record_size: Size of one on-disk record in bytes.

    Example:
        >>> with RecordStream.open("/var/account/pacct") as stream:  # doctest: +SKIP
        ...     for record in stream:
        ...         print(record.command)
    """

    def __init__(
        self,
        source: BinaryIO,
        decoder: RecordDecoder | None = None,
        record_size: int | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize the stream.

        Args:
            source: Readable binary file object. The stream takes ownership.
            decoder: Record decoder (a default RecordDecoder if omitted).
            record_size: Chunk size (default: the decoder's record size).
            name: Display name used in log events.
        """
        self._source = source
        self._decoder = decoder or RecordDecoder()
        self._record_size = record_size or self._decoder.record_size
        self._name = name or getattr(source, "name", "<stream>")
        self._closed = False
        self._pending: bytes | None = None
        self._records_read = 0
        self._bytes_read = 0
        self._logger = get_logger(__name__, source=str(self._name))

    @classmethod
    def open(cls, path: str | Path, decoder: RecordDecoder | None = None) -> RecordStream:
        """Open an accounting file for reading.

        Raises:
            OSError: If the file cannot be opened.
        """
        path = Path(path)
        source = open(path, "rb")
        stream = cls(source, decoder=decoder, name=str(path))
        stream._logger.debug("stream.opened", record_size=stream.record_size)
        return stream

    @property
    def name(self) -> str:
        return str(self._name)

    @property
    def record_size(self) -> int:
        return self._record_size

    @property
    def records_read(self) -> int:
        return self._records_read

    @property
    def bytes_read(self) -> int:
        return self._bytes_read

    @property
    def closed(self) -> bool:
        return self._closed

    def _read_chunk(self) -> bytes:
        """Read up to one record, retrying short reads until EOF."""
        offset = self._bytes_read
        parts: list[bytes] = []
        remaining = self._record_size

        while remaining > 0:
            try:
                data = self._source.read(remaining)
            except OSError as exc:
                self._logger.debug("stream.read_failed", offset=offset, error=str(exc))
                self.close()
                raise RecordReadError(offset, exc) from exc

            if not data:
                break
            parts.append(data)
            remaining -= len(data)

        chunk = b"".join(parts)
        self._bytes_read += len(chunk)

        if 0 < len(chunk) < self._record_size:
            self._logger.debug(
                "stream.truncated_record",
                offset=offset,
                size=len(chunk),
                expected=self._record_size,
            )
            self.close()
            raise TruncatedRecordError(offset, len(chunk), self._record_size)

        return chunk

    def __iter__(self) -> Iterator[AccountingRecord]:
        return self

    def __next__(self) -> AccountingRecord:
        if self._closed:
            raise StopIteration

        if self._pending is not None:
            chunk, self._pending = self._pending, None
        else:
            chunk = self._read_chunk()

        if not chunk:
            self._logger.debug(
                "stream.exhausted",
                records_read=self._records_read,
                bytes_read=self._bytes_read,
            )
            self.close()
            raise StopIteration

        try:
            record = self._decoder.decode(chunk)
        except DecodeError as exc:
            self._logger.debug(
                "stream.decode_failed",
                record_index=self._records_read,
                error=str(exc),
            )
            self.close()
            raise

        self._records_read += 1
        return record

    def read_format_version(self) -> int | None:
        """Return the version byte of the first record, or None if empty.

        Must be called before iteration starts. The record is kept and
        still yielded by the first next() call.

        Raises:
            TruncatedRecordError: If the first record is incomplete.
            RecordReadError: If the underlying read fails.
        """
        if self._records_read or self._closed:
            raise RuntimeError("read_format_version() must be called before iterating")

        if self._pending is None:
            chunk = self._read_chunk()
            if not chunk:
                return None
            self._pending = chunk

        return self._decoder.read_version(self._pending)

    def close(self) -> None:
        """Close the stream and release the byte source."""
        if self._closed:
            return

        self._closed = True
        self._pending = None
        self._source.close()

    def __enter__(self) -> RecordStream:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __del__(self) -> None:
        """Destructor - ensure the source is closed."""
        if not getattr(self, "_closed", True):
            self.close()

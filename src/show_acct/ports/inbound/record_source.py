"""Record source port for sequential record access.

This inbound port defines the contract for anything that hands out decoded
accounting records one at a time. The reference implementation reads a
binary accounting file in fixed-size chunks.

Sequence semantics:
    - Iteration yields AccountingRecord values in file order
    - Exhaustion (StopIteration) is the normal end-of-stream signal
    - Any raised error is terminal for the stream
    - A source is consumed once; it cannot be rewound
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterator, Protocol

from show_acct.domain.entities import AccountingRecord


class RecordSource(Protocol):
    """Protocol for a lazy, finite, non-restartable record sequence.

    Thread Safety:
        Not thread-safe. A source is consumed by a single reader.
    """

    @property
    @abstractmethod
    def records_read(self) -> int:
        """Number of records decoded so far."""
        ...

    @property
    @abstractmethod
    def bytes_read(self) -> int:
        """Number of bytes consumed from the underlying source."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[AccountingRecord]:
        ...

    @abstractmethod
    def __next__(self) -> AccountingRecord:
        """Return the next decoded record.

        Raises:
            StopIteration: At a clean record boundary with no more data.
            TruncatedRecordError: If the source ends mid-record.
            RecordReadError: If the underlying read fails.
            DecodeError: If the record cannot be decoded.
        """
        ...

    @abstractmethod
    def read_format_version(self) -> int | None:
        """Read the first record and return its version byte.

        Returns None if the source holds no data at all.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the underlying byte source. Idempotent."""
        ...


class StreamError(Exception):
    """Base class for failures reading records from a source.

    Stream errors are terminal: the reader must not guess at record
    alignment after one occurs.
    """

    pass


class TruncatedRecordError(StreamError):
    """The source ended part-way through a record."""

    def __init__(self, offset: int, size: int, expected: int) -> None:
        self.offset = offset
        self.size = size
        self.expected = expected
        super().__init__(
            f"Truncated record at offset {offset}: got {size} bytes, expected {expected}"
        )


class RecordReadError(StreamError):
    """The underlying read failed."""

    def __init__(self, offset: int, cause: OSError) -> None:
        self.offset = offset
        self.cause = cause
        super().__init__(f"Read failed at offset {offset}: {cause}")

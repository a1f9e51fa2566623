"""Record decoder: raw accounting bytes to canonical records.

The two on-disk layouts overlap in the same 64 bytes. The decoder reads
the version byte first (same offset in both layouts), then parses the
buffer through exactly one layout:

    Version | Layout      | utime/stime/mem | etime
    --------|-------------|-----------------|-----------------
    2       | RawRecordV2 | comp_t          | comp_t
    3       | RawRecordV3 | comp_t          | float, plain ticks

Any other version is rejected before the rest of the buffer is looked at.
No other field is validated.
"""

from __future__ import annotations

import math

from show_acct.domain.entities import (
    RECORD_SIZE,
    VERSION_OFFSET,
    AccountingRecord,
    RawRecordV2,
    RawRecordV3,
)
from show_acct.domain.value_objects import (
    AcctFlag,
    FormatVersion,
    Ticks,
    UserId,
    decode_comp_t,
)


class DecodeError(Exception):
    """Base class for failures to interpret a record buffer."""

    pass


class UnsupportedVersionError(DecodeError):
    """The version byte names a format this reader does not understand."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(
            f"Unsupported accounting record version {version} "
            f"(supported: {', '.join(str(int(v)) for v in FormatVersion)})"
        )


class RecordSizeError(DecodeError):
    """The buffer handed to the decoder is not exactly one record long."""

    def __init__(self, size: int, expected: int = RECORD_SIZE) -> None:
        self.size = size
        self.expected = expected
        super().__init__(f"Record buffer must be {expected} bytes, got {size}")


def decode_command(raw: bytes) -> str:
    """Cut a fixed-size command field at its first NUL and decode it."""
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def plain_ticks(value: float) -> int:
    """Truncate the v3 float elapsed time to whole ticks."""
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


class RecordDecoder:
    """Turns one fixed-size record buffer into an AccountingRecord.

    The decoder is stateless and can be shared by any number of streams.

    Example:
        >>> decoder = RecordDecoder()
        >>> record = decoder.decode(RawRecordV3(uid=1000, comm=b"sleep").to_bytes())
        >>> record.command
        'sleep'
    """

    record_size = RECORD_SIZE

    def read_version(self, buffer: bytes) -> int:
        """Return the raw version byte without validating it."""
        if len(buffer) <= VERSION_OFFSET:
            raise RecordSizeError(len(buffer))
        return buffer[VERSION_OFFSET]

    def decode(self, buffer: bytes) -> AccountingRecord:
        """Decode one record.

        Args:
            buffer: Exactly RECORD_SIZE bytes.

        Returns:
            The canonical record, not yet enriched with derived fields.

        Raises:
            RecordSizeError: If the buffer is not one record long.
            UnsupportedVersionError: If the version byte is not 2 or 3.
        """
        if len(buffer) != self.record_size:
            raise RecordSizeError(len(buffer), self.record_size)

        version = buffer[VERSION_OFFSET]
        if version == FormatVersion.V2:
            return self._decode_v2(RawRecordV2.from_bytes(bytes(buffer)))
        if version == FormatVersion.V3:
            return self._decode_v3(RawRecordV3.from_bytes(bytes(buffer)))

        raise UnsupportedVersionError(version)

    def _decode_v2(self, raw: RawRecordV2) -> AccountingRecord:
        return AccountingRecord(
            flags=AcctFlag(raw.flag),
            format_version=FormatVersion.V2,
            user_id=UserId(raw.uid),
            start_time=raw.btime,
            user_time_ticks=Ticks(decode_comp_t(raw.utime)),
            system_time_ticks=Ticks(decode_comp_t(raw.stime)),
            elapsed_time_ticks=Ticks(decode_comp_t(raw.etime)),
            average_memory=decode_comp_t(raw.mem),
            exit_code=raw.exitcode,
            command=decode_command(raw.comm),
        )

    def _decode_v3(self, raw: RawRecordV3) -> AccountingRecord:
        return AccountingRecord(
            flags=AcctFlag(raw.flag),
            format_version=FormatVersion.V3,
            user_id=UserId(raw.uid),
            start_time=raw.btime,
            user_time_ticks=Ticks(decode_comp_t(raw.utime)),
            system_time_ticks=Ticks(decode_comp_t(raw.stime)),
            elapsed_time_ticks=Ticks(plain_ticks(raw.etime)),
            average_memory=decode_comp_t(raw.mem),
            exit_code=raw.exitcode,
            command=decode_command(raw.comm),
        )

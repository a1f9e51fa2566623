"""Inbound ports - interfaces offered to the application layer."""

from show_acct.ports.inbound.record_source import (
    RecordReadError,
    RecordSource,
    StreamError,
    TruncatedRecordError,
)

__all__ = [
    "RecordSource",
    "StreamError",
    "TruncatedRecordError",
    "RecordReadError",
]

"""Domain services for decoding and post-processing accounting records."""

from show_acct.domain.services.derived_fields import DerivedFieldComputer
from show_acct.domain.services.record_decoder import (
    DecodeError,
    RecordDecoder,
    RecordSizeError,
    UnsupportedVersionError,
)
from show_acct.domain.services.record_filter import ZERO_EXIT, ZERO_TIME, RecordFilter

__all__ = [
    "RecordDecoder",
    "DecodeError",
    "RecordSizeError",
    "UnsupportedVersionError",
    "DerivedFieldComputer",
    "RecordFilter",
    "ZERO_TIME",
    "ZERO_EXIT",
]

"""Domain entities for accounting records.

Exports:
    Raw layouts:
        - RawRecordV2: struct acct (version 2)
        - RawRecordV3: struct acct_v3 (version 3)
        - RECORD_SIZE: Physical size shared by both layouts
        - VERSION_OFFSET: Offset of the discriminating version byte
        - ACCT_COMM: Length of the recorded command name

    Canonical:
        - AccountingRecord: Version-independent decoded record
"""

from show_acct.domain.entities.accounting_record import AccountingRecord
from show_acct.domain.entities.raw_record import (
    ACCT_COMM,
    RECORD_SIZE,
    VERSION_OFFSET,
    RawRecordV2,
    RawRecordV3,
)

__all__ = [
    # Raw layouts
    "RawRecordV2",
    "RawRecordV3",
    "RECORD_SIZE",
    "VERSION_OFFSET",
    "ACCT_COMM",
    # Canonical
    "AccountingRecord",
]

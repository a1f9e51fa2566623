"""Outbound adapters - implementations of record sources and host lookups."""

from show_acct.adapters.outbound.passwd_user_directory import PasswdUserDirectory
from show_acct.adapters.outbound.record_stream import RecordStream

__all__ = [
    "RecordStream",
    "PasswdUserDirectory",
]

"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to the application (e.g., RecordSource)
- Outbound ports: Dependencies on the host (e.g., UserDirectory)

Adapters implement these ports with concrete functionality.
"""

from show_acct.ports.inbound import (
    RecordReadError,
    RecordSource,
    StreamError,
    TruncatedRecordError,
)
from show_acct.ports.outbound import UserDirectory

__all__ = [
    # Inbound ports
    "RecordSource",
    "StreamError",
    "TruncatedRecordError",
    "RecordReadError",
    # Outbound ports
    "UserDirectory",
]

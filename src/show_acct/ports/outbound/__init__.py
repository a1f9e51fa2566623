"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for host services the reader depends on,
such as the user account database.
"""

from show_acct.ports.outbound.user_directory import UserDirectory

__all__ = [
    "UserDirectory",
]

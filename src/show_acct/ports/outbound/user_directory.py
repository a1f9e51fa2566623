"""User directory port for resolving numeric user ids.

Implementations may consult the passwd database, NSS, LDAP, or a static
table. The contract only requires that every id maps to some display
string.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from show_acct.domain.value_objects import UserId


class UserDirectory(Protocol):
    """Protocol for mapping user ids to display names."""

    @abstractmethod
    def display_name(self, user_id: UserId) -> str:
        """Return the account name for a user id.

        Falls back to the decimal user id when no account exists.
        Never raises for an unknown id.
        """
        ...

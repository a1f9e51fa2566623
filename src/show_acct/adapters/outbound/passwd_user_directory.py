"""passwd-backed user directory.

Resolves user ids through the host's account database (getpwuid). Ids
without an entry fall back to their decimal representation, which is
common for records written inside containers or by since-deleted users.
"""

from __future__ import annotations

import pwd

from show_acct.domain.value_objects import UserId
from show_acct.infrastructure.logging import get_logger


class PasswdUserDirectory:
    """UserDirectory implementation using the pwd module.

    Lookups are cached for the lifetime of the instance; an accounting
    file typically names a handful of users many thousands of times.
    """

    def __init__(self) -> None:
        self._cache: dict[int, str] = {}
        self._logger = get_logger(__name__)

    def display_name(self, user_id: UserId) -> str:
        """Return the account name, or the numeric id if there is none."""
        name = self._cache.get(user_id)
        if name is not None:
            return name

        try:
            name = pwd.getpwuid(user_id).pw_name
        except KeyError:
            self._logger.debug("user.unknown", user_id=user_id)
            name = str(user_id)

        self._cache[user_id] = name
        return name

"""Record filter service.

Filtering is presentation policy, applied to records after they have been
decoded and enriched. The decoder itself never drops anything.
"""

from __future__ import annotations

from show_acct.domain.entities import AccountingRecord


ZERO_TIME = "zero_time"
ZERO_EXIT = "zero_exit"


class RecordFilter:
    """Decides which decoded records make it into the report.

    By default processes that used no user CPU time are left out, since
    they make up most of a busy accounting file and carry little
    information.
    """

    def __init__(
        self,
        include_zero_time: bool = False,
        suppress_zero_exit: bool = False,
    ) -> None:
        """Initialize the filter.

        Args:
            include_zero_time: Keep records with zero user CPU time.
            suppress_zero_exit: Drop records whose exit code is 0.
        """
        self.include_zero_time = include_zero_time
        self.suppress_zero_exit = suppress_zero_exit

    def rejection_reason(self, record: AccountingRecord) -> str | None:
        """Return why a record is filtered out, or None if it is kept."""
        if not self.include_zero_time and record.user_time_ticks == 0:
            return ZERO_TIME
        if self.suppress_zero_exit and record.exit_code == 0:
            return ZERO_EXIT
        return None

    def accepts(self, record: AccountingRecord) -> bool:
        return self.rejection_reason(record) is None

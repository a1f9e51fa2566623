"""Derived field computation for decoded records."""

from __future__ import annotations

from dataclasses import replace

from show_acct.domain.entities import AccountingRecord


class DerivedFieldComputer:
    """Fills in fields that are computed rather than read from disk.

    The clock-ticks-per-second value is fixed for the whole run; it is
    supplied once at construction, usually from the host's
    sysconf(_SC_CLK_TCK).
    """

    def __init__(self, clock_ticks_per_second: int) -> None:
        if clock_ticks_per_second <= 0:
            raise ValueError(
                f"clock_ticks_per_second must be positive, got {clock_ticks_per_second}"
            )
        self._clock_ticks_per_second = clock_ticks_per_second

    @property
    def clock_ticks_per_second(self) -> int:
        return self._clock_ticks_per_second

    def enrich(self, record: AccountingRecord) -> AccountingRecord:
        """Return a copy of the record with end_time set.

        end_time = start_time + floor(elapsed_time_ticks / ticks_per_second)
        """
        elapsed_seconds = record.elapsed_time_ticks // self._clock_ticks_per_second
        return replace(record, end_time=record.start_time + elapsed_seconds)

    def ticks_to_seconds(self, ticks: int) -> float:
        """Convert raw clock ticks to fractional seconds."""
        return ticks / self._clock_ticks_per_second

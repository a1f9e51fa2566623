"""Canonical accounting record.

Both on-disk layouts are normalized into this one representation so that
everything downstream of the decoder (filtering, rendering) never needs
to know which format version a record came from.
"""

from __future__ import annotations

from dataclasses import dataclass

from show_acct.domain.value_objects import (
    FLAG_LETTERS,
    AcctFlag,
    FormatVersion,
    Ticks,
    UserId,
)


@dataclass(frozen=True)
class AccountingRecord:
    """One finished process, as decoded from an accounting file.

    Attributes:
        flags: Flag bits (fork without exec, super-user, core, signal)
        format_version: The on-disk layout the record was read from
        user_id: Real user id of the process
        start_time: Process creation time, epoch seconds
        user_time_ticks: User CPU time in clock ticks
        system_time_ticks: System CPU time in clock ticks
        elapsed_time_ticks: Wall-clock run time in clock ticks
        average_memory: Average memory usage (kernel units)
        exit_code: Exit status as recorded by the kernel
        command: Command name, at most 16 characters, no NULs
        end_time: start_time plus elapsed seconds; None until enriched

    Example:
        >>> record = AccountingRecord(
        ...     flags=AcctFlag.AFORK,
        ...     format_version=FormatVersion.V3,
        ...     user_id=UserId(1000),
        ...     start_time=1700000000,
        ...     user_time_ticks=Ticks(100),
        ...     system_time_ticks=Ticks(100),
        ...     elapsed_time_ticks=Ticks(360),
        ...     average_memory=100,
        ...     exit_code=0,
        ...     command="sleep",
        ... )
        >>> record.flag_string()
        '---F'
    """

    flags: AcctFlag
    format_version: FormatVersion
    user_id: UserId
    start_time: int
    user_time_ticks: Ticks
    system_time_ticks: Ticks
    elapsed_time_ticks: Ticks
    average_memory: int
    exit_code: int
    command: str
    end_time: int | None = None

    @property
    def forked_without_exec(self) -> bool:
        return AcctFlag.AFORK in self.flags

    @property
    def used_superuser(self) -> bool:
        return AcctFlag.ASU in self.flags

    @property
    def dumped_core(self) -> bool:
        return AcctFlag.ACORE in self.flags

    @property
    def killed_by_signal(self) -> bool:
        return AcctFlag.AXSIG in self.flags

    @property
    def is_enriched(self) -> bool:
        """Whether derived fields have been computed."""
        return self.end_time is not None

    def flag_string(
        self,
        order: tuple[AcctFlag, ...] = (
            AcctFlag.AXSIG,
            AcctFlag.ACORE,
            AcctFlag.ASU,
            AcctFlag.AFORK,
        ),
    ) -> str:
        """Render flags as letters, '-' for each unset bit."""
        return "".join(
            FLAG_LETTERS[flag] if flag in self.flags else "-" for flag in order
        )

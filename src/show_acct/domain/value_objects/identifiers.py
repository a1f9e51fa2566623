"""Core identifiers and flag types for accounting records.

These value objects give names to the raw integers read from an
accounting file so that user ids, tick counts and flag bits are not
confused with each other.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import NewType


UserId = NewType("UserId", int)
"""Numeric user id of the process owner."""

Ticks = NewType("Ticks", int)
"""Raw clock ticks. Converting to seconds needs the host's ticks-per-second."""


class FormatVersion(IntEnum):
    """On-disk record format versions this reader understands."""

    V2 = 2
    V3 = 3


class AcctFlag(IntFlag):
    """Bits of the ac_flag byte (linux/acct.h)."""

    NONE = 0x00
    AFORK = 0x01  # forked but did not exec
    ASU = 0x02  # used super-user privileges
    ACOMPAT = 0x04  # used compatibility mode (VAX only)
    ACORE = 0x08  # dumped core
    AXSIG = 0x10  # killed by a signal


FLAG_LETTERS: dict[AcctFlag, str] = {
    AcctFlag.AXSIG: "X",
    AcctFlag.ACORE: "C",
    AcctFlag.ASU: "S",
    AcctFlag.AFORK: "F",
}
"""Single-letter codes used when rendering flags."""

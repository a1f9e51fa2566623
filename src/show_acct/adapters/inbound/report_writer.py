"""Text rendering of accounting records.

Two styles are supported:

    tabular    fixed-width, right-aligned columns with an underlined header
    delimited  one line per record, fields joined by a single character

Timestamps are rendered in local time. CPU and elapsed times are raw clock
ticks unless the writer is asked for seconds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, TextIO

from show_acct.domain.entities import AccountingRecord
from show_acct.domain.services import DerivedFieldComputer
from show_acct.domain.value_objects import AcctFlag


# (name, width) for the tabular style
COLUMNS: tuple[tuple[str, int], ...] = (
    ("command", 20),
    ("date", 10),
    ("start", 8),
    ("end", 8),
    ("utime", 8),
    ("stime", 8),
    ("elapsed", 11),
    ("average_mem", 11),
    ("exitcode", 8),
    ("flag", 4),
)
USER_COLUMN = ("user", 8)

TABULAR_FLAG_ORDER = (AcctFlag.AXSIG, AcctFlag.ACORE, AcctFlag.ASU, AcctFlag.AFORK)
DELIMITED_FLAG_ORDER = (AcctFlag.AFORK, AcctFlag.ASU, AcctFlag.AXSIG, AcctFlag.ACORE)


class ReportWriter:
    """Writes a header and one line per record to a text stream."""

    def __init__(
        self,
        out: TextIO,
        derived: DerivedFieldComputer,
        style: Literal["tabular", "delimited"] = "tabular",
        delimiter: str = "|",
        header: bool = True,
        show_user: bool = False,
        time_unit: Literal["ticks", "seconds"] = "ticks",
    ) -> None:
        if style not in ("tabular", "delimited"):
            raise ValueError(f"Unknown output style: {style}")
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")

        self._out = out
        self._derived = derived
        self.style = style
        self.delimiter = delimiter
        self.header = header
        self.show_user = show_user
        self.time_unit = time_unit
        self._lines_written = 0

    @property
    def lines_written(self) -> int:
        """Record lines written so far (header excluded)."""
        return self._lines_written

    def _columns(self) -> tuple[tuple[str, int], ...]:
        if self.show_user:
            return (USER_COLUMN, *COLUMNS)
        return COLUMNS

    def _format_ticks(self, ticks: int) -> str:
        if self.time_unit == "seconds":
            return f"{self._derived.ticks_to_seconds(ticks):.2f}"
        return str(ticks)

    def _end_clock(self, record: AccountingRecord) -> str:
        # end_time is derived from an unchecked float32 and can overflow datetime
        if record.end_time is None:
            return ""
        try:
            return datetime.fromtimestamp(record.end_time).strftime("%H:%M:%S")
        except (OverflowError, OSError, ValueError):
            return ""

    def _fields(self, record: AccountingRecord, user_name: str | None) -> list[str]:
        started = datetime.fromtimestamp(record.start_time)
        flag_order = TABULAR_FLAG_ORDER if self.style == "tabular" else DELIMITED_FLAG_ORDER

        fields = [
            record.command,
            started.strftime("%Y%m%d"),
            started.strftime("%H:%M:%S"),
            self._end_clock(record),
            self._format_ticks(record.user_time_ticks),
            self._format_ticks(record.system_time_ticks),
            self._format_ticks(record.elapsed_time_ticks),
            str(record.average_memory),
            str(record.exit_code),
            record.flag_string(flag_order),
        ]
        if self.show_user:
            fields.insert(0, user_name if user_name is not None else str(record.user_id))
        return fields

    def _render(self, values: list[str]) -> str:
        if self.style == "delimited":
            return self.delimiter.join(values)

        parts = []
        for (name, width), value in zip(self._columns(), values):
            if (name, width) == USER_COLUMN:
                parts.append(f"{value:<{width}}")
            else:
                parts.append(f"{value:>{width}}")
        return " ".join(parts)

    def write_header(self) -> None:
        """Write the header (and underline, for tabular output) if enabled."""
        if not self.header:
            return

        names = [name for name, _ in self._columns()]
        self._out.write(self._render(names) + "\n")
        if self.style == "tabular":
            self._out.write(self._render(["-" * len(name) for name in names]) + "\n")

    def write_record(self, record: AccountingRecord, user_name: str | None = None) -> None:
        """Write one record line."""
        self._out.write(self._render(self._fields(record, user_name)) + "\n")
        self._lines_written += 1

"""Accounting report orchestration.

Connects the pieces of one run:

    RecordSource -> DerivedFieldComputer -> RecordFilter -> ReportWriter

Records are processed strictly one at a time. Any error other than the
normal end of the stream aborts the run; nothing is skipped.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from show_acct.adapters.inbound.report_writer import ReportWriter
from show_acct.domain.services import (
    DecodeError,
    DerivedFieldComputer,
    RecordFilter,
    UnsupportedVersionError,
)
from show_acct.infrastructure.logging import get_logger
from show_acct.infrastructure.metrics import MetricsRegistry
from show_acct.infrastructure.tracing import trace_span
from show_acct.ports.inbound import (
    RecordReadError,
    RecordSource,
    StreamError,
    TruncatedRecordError,
)
from show_acct.ports.outbound import UserDirectory


@dataclass(frozen=True)
class ReportSummary:
    """Counts for one completed run."""

    records_read: int
    records_written: int
    records_filtered: int
    bytes_read: int


def error_kind(exc: Exception) -> str:
    """Short label for a stream or decode error, used in metrics and logs."""
    if isinstance(exc, UnsupportedVersionError):
        return "unsupported_version"
    if isinstance(exc, TruncatedRecordError):
        return "truncated_record"
    if isinstance(exc, RecordReadError):
        return "read_error"
    return "decode_error"


class AccountingReport:
    """Produces a report from one record source."""

    def __init__(
        self,
        derived: DerivedFieldComputer,
        record_filter: RecordFilter,
        writer: ReportWriter,
        user_directory: UserDirectory,
        metrics: MetricsRegistry,
    ) -> None:
        """Initialize the report.

        Args:
            derived: Computes end times from the fixed ticks-per-second.
            record_filter: Decides which records are written.
            writer: Renders the header and record lines.
            user_directory: Resolves user ids when the user column is shown.
            metrics: Registry the run records into.
        """
        self._derived = derived
        self._filter = record_filter
        self._writer = writer
        self._users = user_directory
        self._metrics = metrics
        self._logger = get_logger(__name__)

    def run(self, source: RecordSource) -> ReportSummary:
        """Consume the source and write the report.

        Raises:
            DecodeError: If a record has an unsupported format.
            StreamError: If the source is truncated or unreadable.
        """
        started = time.perf_counter()
        lines_before = self._writer.lines_written
        filtered = 0
        bytes_seen = 0

        with trace_span("acct.report", {"acct.clock_ticks": self._derived.clock_ticks_per_second}) as span:
            self._writer.write_header()

            try:
                for record in source:
                    self._metrics.records_decoded_total.labels(
                        format_version=str(int(record.format_version))
                    ).inc()

                    record = self._derived.enrich(record)

                    reason = self._filter.rejection_reason(record)
                    if reason is not None:
                        filtered += 1
                        self._metrics.records_filtered_total.labels(reason=reason).inc()
                        continue

                    user_name = (
                        self._users.display_name(record.user_id)
                        if self._writer.show_user
                        else None
                    )
                    self._writer.write_record(record, user_name)
                    self._metrics.records_written_total.inc()
            except (DecodeError, StreamError) as exc:
                kind = error_kind(exc)
                self._metrics.stream_errors_total.labels(kind=kind).inc()
                span.set_attribute("acct.error", kind)
                self._logger.error(
                    "report.aborted",
                    kind=kind,
                    records_read=source.records_read,
                    error=str(exc),
                )
                raise
            finally:
                bytes_seen = source.bytes_read
                self._metrics.bytes_read_total.inc(bytes_seen)
                self._metrics.report_duration_seconds.observe(time.perf_counter() - started)

            summary = ReportSummary(
                records_read=source.records_read,
                records_written=self._writer.lines_written - lines_before,
                records_filtered=filtered,
                bytes_read=bytes_seen,
            )
            span.set_attribute("acct.records_read", summary.records_read)
            span.set_attribute("acct.records_written", summary.records_written)

        self._logger.info(
            "report.completed",
            records_read=summary.records_read,
            records_written=summary.records_written,
            records_filtered=summary.records_filtered,
            bytes_read=summary.bytes_read,
        )
        return summary

"""Prometheus metrics for the accounting reader.

show-acct is a batch tool, so metrics are not scraped from a live HTTP
endpoint. Instead each run records into its own registry, which can be
written out for the node-exporter text-file collector.
"""

from __future__ import annotations

from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    write_to_textfile,
)


class MetricsRegistry:
    """Registry of all accounting reader metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or CollectorRegistry()

        # Decode metrics
        self.records_decoded_total = Counter(
            "acct_records_decoded_total",
            "Total accounting records decoded",
            ["format_version"],  # 2, 3
            registry=self._registry,
        )

        self.bytes_read_total = Counter(
            "acct_bytes_read_total",
            "Total bytes read from accounting files",
            registry=self._registry,
        )

        self.stream_errors_total = Counter(
            "acct_stream_errors_total",
            "Total runs aborted by a stream or decode error",
            ["kind"],  # unsupported_version, truncated_record, read_error
            registry=self._registry,
        )

        # Report metrics
        self.records_written_total = Counter(
            "acct_records_written_total",
            "Total records written to the report",
            registry=self._registry,
        )

        self.records_filtered_total = Counter(
            "acct_records_filtered_total",
            "Total records left out of the report",
            ["reason"],  # zero_time, zero_exit
            registry=self._registry,
        )

        self.report_duration_seconds = Histogram(
            "acct_report_duration_seconds",
            "Time to produce one report",
            buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0),
            registry=self._registry,
        )

        self.info = Info(
            "show_acct",
            "Accounting reader information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def write_textfile(self, path: str | Path) -> None:
        """Write all metrics in the Prometheus text format."""
        write_to_textfile(str(path), self._registry)


def setup_metrics(registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Create the metrics registry for one run.

    Args:
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    metrics = MetricsRegistry(registry)

    from show_acct import __version__
    metrics.info.info({
        "version": __version__,
    })

    return metrics

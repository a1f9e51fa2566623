"""Application layer - use cases built from domain services and ports."""

from show_acct.application.report import AccountingReport, ReportSummary, error_kind

__all__ = [
    "AccountingReport",
    "ReportSummary",
    "error_kind",
]

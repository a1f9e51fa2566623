"""Inbound adapters - the command-line entry point and report rendering.

The Typer application lives in ``show_acct.adapters.inbound.cli``; it is
not imported here so that the application layer can use the report
writer without loading the CLI.
"""

from show_acct.adapters.inbound.report_writer import ReportWriter

__all__ = [
    "ReportWriter",
]

"""show-acct command-line interface implemented with Typer."""

from __future__ import annotations

import errno
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Optional, TextIO

import typer

from show_acct.adapters.inbound.report_writer import ReportWriter
from show_acct.adapters.outbound import PasswdUserDirectory, RecordStream
from show_acct.application import AccountingReport, error_kind
from show_acct.domain.services import (
    DecodeError,
    DerivedFieldComputer,
    RecordFilter,
    UnsupportedVersionError,
)
from show_acct.infrastructure.config import Config, get_config
from show_acct.infrastructure.logging import get_logger, setup_logging
from show_acct.infrastructure.metrics import setup_metrics
from show_acct.infrastructure.tracing import setup_tracing, shutdown_tracing
from show_acct.ports.inbound import StreamError

SUCCESS_EXIT_CODE = 0
UNSUPPORTED_VERSION_EXIT_CODE = errno.EINVAL
STREAM_ERROR_EXIT_CODE = errno.EIO

FLAGS_HELP = (
    "Flags: X killed by signal, C dumped core, "
    "S ran with super-user privileges, F forked but did not exec."
)

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Show details of a process accounting data file.",
    epilog=FLAGS_HELP,
)


def _emit_error(message: str) -> None:
    typer.echo(f"error: {message}", err=True)


def _build_config(
    file: Optional[Path],
    output: Optional[Path],
    delimited: bool,
    delimiter: Optional[str],
    no_header: bool,
    show_user: bool,
    include_zero_time: bool,
    suppress_zero_exit: bool,
    debug: bool,
    clock_ticks: Optional[int],
    seconds: bool,
) -> Config:
    """Fold command-line options over environment/default settings."""
    return get_config().with_overrides(
        input={"path": file, "clock_ticks_per_second": clock_ticks},
        output={
            "path": output,
            "style": "delimited" if delimited else None,
            "delimiter": delimiter,
            "header": False if no_header else None,
            "show_user": True if show_user else None,
            "time_unit": "seconds" if seconds else None,
        },
        filter={
            "include_zero_time": True if include_zero_time else None,
            "suppress_zero_exit": True if suppress_zero_exit else None,
        },
        observability={"log_level": "DEBUG" if debug else None},
    )


def _open_stream(path: Path) -> RecordStream:
    try:
        return RecordStream.open(path)
    except OSError as exc:
        _emit_error(f"cannot open accounting file {path} ({exc.strerror or exc})")
        raise typer.Exit(code=exc.errno or 1) from exc


def _open_output(stack: ExitStack, path: Optional[Path]) -> TextIO:
    if path is None:
        return sys.stdout
    try:
        return stack.enter_context(open(path, "w", encoding="utf-8"))
    except OSError as exc:
        _emit_error(f"cannot open output {path} ({exc.strerror or exc})")
        raise typer.Exit(code=exc.errno or 1) from exc


def _show_version(config: Config) -> None:
    """Print the format version of the first record and exit."""
    path = config.input.path
    with _open_stream(path) as stream:
        try:
            version = stream.read_format_version()
        except StreamError as exc:
            _emit_error(str(exc))
            raise typer.Exit(code=STREAM_ERROR_EXIT_CODE) from exc

    if version is None:
        _emit_error(f"failed to read from accounting file {path} (file is empty)")
        raise typer.Exit(code=STREAM_ERROR_EXIT_CODE)

    typer.echo(f"Accounting file {path} is version {version}")
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _run_report(config: Config) -> None:
    """Decode the accounting file and write the report."""
    logger = get_logger(__name__, input=str(config.input.path))
    metrics = setup_metrics()
    derived = DerivedFieldComputer(config.input.clock_ticks_per_second)

    with ExitStack() as stack:
        stream = stack.enter_context(_open_stream(config.input.path))
        logger.debug("input.opened", clock_ticks=derived.clock_ticks_per_second)
        out = _open_output(stack, config.output.path)

        writer = ReportWriter(
            out,
            derived,
            style=config.output.style,
            delimiter=config.output.delimiter,
            header=config.output.header,
            show_user=config.output.show_user,
            time_unit=config.output.time_unit,
        )
        report = AccountingReport(
            derived=derived,
            record_filter=RecordFilter(
                include_zero_time=config.filter.include_zero_time,
                suppress_zero_exit=config.filter.suppress_zero_exit,
            ),
            writer=writer,
            user_directory=PasswdUserDirectory(),
            metrics=metrics,
        )

        try:
            report.run(stream)
        except UnsupportedVersionError as exc:
            _emit_error(f"{exc}; only versions 2 and 3 can be read")
            raise typer.Exit(code=UNSUPPORTED_VERSION_EXIT_CODE) from exc
        except (DecodeError, StreamError) as exc:
            _emit_error(f"{config.input.path}: {exc} ({error_kind(exc)})")
            raise typer.Exit(code=STREAM_ERROR_EXIT_CODE) from exc
        finally:
            out.flush()
            if config.observability.metrics_textfile is not None:
                metrics.write_textfile(config.observability.metrics_textfile)


@app.command()
def main(
    file: Optional[Path] = typer.Option(
        None, "-f", "--file", help="Accounting file (default /var/account/pacct)"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the report to this file instead of stdout"
    ),
    delimited: bool = typer.Option(False, "-d", "--delimited", help="Delimited output"),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", help="Delimiter character for delimited output (default '|')"
    ),
    no_header: bool = typer.Option(False, "-H", "--no-header", help="Suppress the header"),
    show_user: bool = typer.Option(False, "-u", "--show-user", help="Show the user in output"),
    include_zero_time: bool = typer.Option(
        False,
        "-0",
        "--include-zero-time",
        help="Include processes with a run time of zero (excluded by default)",
    ),
    suppress_zero_exit: bool = typer.Option(
        False, "-e", "--suppress-zero-exit", help="Suppress processes with an exit code of 0"
    ),
    file_version: bool = typer.Option(
        False, "-v", "--file-version", help="Show the accounting file version and exit"
    ),
    debug: bool = typer.Option(False, "-D", "--debug", help="Turn on debug output"),
    clock_ticks: Optional[int] = typer.Option(
        None, "--clock-ticks", min=1, help="Clock ticks per second (default: host value)"
    ),
    seconds: bool = typer.Option(
        False, "--seconds", help="Show CPU and elapsed times in seconds instead of ticks"
    ),
) -> None:
    """Show details of a process accounting data file."""
    try:
        config = _build_config(
            file,
            output,
            delimited,
            delimiter,
            no_header,
            show_user,
            include_zero_time,
            suppress_zero_exit,
            debug,
            clock_ticks,
            seconds,
        )
    except ValueError as exc:
        _emit_error(f"invalid option: {exc}")
        raise typer.Exit(code=2) from exc

    setup_logging(config.observability.log_level, config.observability.log_format)
    if config.observability.otel_endpoint:
        setup_tracing(config.observability.otel_service_name, config.observability.otel_endpoint)

    try:
        if file_version:
            _show_version(config)
        _run_report(config)
    finally:
        shutdown_tracing()

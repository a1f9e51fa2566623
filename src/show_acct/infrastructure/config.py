"""Configuration management for the accounting reader."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ACCT_FILE = Path("/var/account/pacct")
DEFAULT_CLOCK_TICKS = 100


def host_clock_ticks() -> int:
    """Return the host's clock ticks per second (sysconf _SC_CLK_TCK)."""
    if hasattr(os, "sysconf") and "SC_CLK_TCK" in os.sysconf_names:
        ticks = os.sysconf("SC_CLK_TCK")
        if ticks > 0:
            return ticks
    return DEFAULT_CLOCK_TICKS


class InputConfig(BaseModel):
    """Accounting file input configuration."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(default=DEFAULT_ACCT_FILE, description="Accounting file path")
    clock_ticks_per_second: int = Field(
        default_factory=host_clock_ticks,
        ge=1,
        description="Clock ticks per second used to convert tick counts",
    )


class OutputConfig(BaseModel):
    """Report output configuration."""

    model_config = ConfigDict(frozen=True)

    path: Path | None = Field(default=None, description="Output file (stdout if unset)")
    style: Literal["tabular", "delimited"] = Field(default="tabular", description="Output style")
    delimiter: str = Field(
        default="|", min_length=1, max_length=1, description="Delimiter for delimited output"
    )
    header: bool = Field(default=True, description="Print the header row")
    show_user: bool = Field(default=False, description="Include the user column")
    time_unit: Literal["ticks", "seconds"] = Field(
        default="ticks", description="Unit for CPU and elapsed time columns"
    )


class FilterConfig(BaseModel):
    """Record filtering configuration."""

    model_config = ConfigDict(frozen=True)

    include_zero_time: bool = Field(
        default=False, description="Include processes with zero user CPU time"
    )
    suppress_zero_exit: bool = Field(
        default=False, description="Leave out processes that exited with code 0"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    model_config = ConfigDict(frozen=True)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="show_acct", description="Service name for tracing")
    metrics_textfile: Path | None = Field(
        default=None, description="Write Prometheus metrics to this file after a run"
    )


class Config(BaseSettings):
    """Main configuration for the accounting reader."""

    model_config = SettingsConfigDict(
        env_prefix="SHOW_ACCT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        frozen=True,
    )

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def with_overrides(
        self,
        input: dict | None = None,
        output: dict | None = None,
        filter: dict | None = None,
        observability: dict | None = None,
    ) -> Config:
        """Return a copy with some nested settings replaced.

        None values in the override dicts are ignored, so callers can pass
        unset command-line options straight through.
        """

        def merged(section: BaseModel, updates: dict | None) -> BaseModel:
            changes = {k: v for k, v in (updates or {}).items() if v is not None}
            if not changes:
                return section
            return section.model_validate({**section.model_dump(), **changes})

        return self.model_copy(
            update={
                "input": merged(self.input, input),
                "output": merged(self.output, output),
                "filter": merged(self.filter, filter),
                "observability": merged(self.observability, observability),
            }
        )


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()

"""Infrastructure layer - cross-cutting concerns."""

from show_acct.infrastructure.config import Config, get_config
from show_acct.infrastructure.logging import get_logger, setup_logging
from show_acct.infrastructure.metrics import MetricsRegistry, setup_metrics
from show_acct.infrastructure.tracing import get_tracer, setup_tracing, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]

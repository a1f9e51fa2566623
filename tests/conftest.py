"""Pytest configuration and fixtures for show_acct tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from show_acct.domain.entities import RawRecordV2, RawRecordV3
from show_acct.domain.value_objects import UserId, pack_comp_t
from show_acct.infrastructure.config import (
    Config,
    FilterConfig,
    InputConfig,
    OutputConfig,
    get_config,
)
from show_acct.infrastructure.metrics import MetricsRegistry


START_TIME = 1_700_000_000


def sleep_v3(**overrides: object) -> RawRecordV3:
    """The v3 'sleep' record used throughout the tests."""
    fields: dict = dict(
        flag=0x01,
        uid=1000,
        exitcode=0,
        comm=b"sleep",
        utime=pack_comp_t(100, 0),
        stime=pack_comp_t(100, 0),
        mem=pack_comp_t(100, 0),
        etime=360.0,
        btime=START_TIME,
    )
    fields.update(overrides)
    return RawRecordV3(**fields)


def sleep_v2(**overrides: object) -> RawRecordV2:
    """The v2 equivalent of sleep_v3()."""
    fields: dict = dict(
        flag=0x01,
        uid=1000,
        uid16=1000,
        exitcode=0,
        comm=b"sleep",
        utime=pack_comp_t(100, 0),
        stime=pack_comp_t(100, 0),
        mem=pack_comp_t(100, 0),
        etime=pack_comp_t(360, 0),
        btime=START_TIME,
    )
    fields.update(overrides)
    return RawRecordV2(**fields)


class FakeUserDirectory:
    """In-memory UserDirectory with the standard numeric fallback."""

    def __init__(self, names: dict[int, str] | None = None) -> None:
        self.names = dict(names or {})
        self.lookups: list[int] = []

    def display_name(self, user_id: UserId) -> str:
        self.lookups.append(user_id)
        return self.names.get(user_id, str(user_id))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_acct_file(temp_dir: Path) -> Callable[..., Path]:
    """Write raw records (and optional trailing bytes) to an accounting file."""

    def _write(
        *records: RawRecordV2 | RawRecordV3 | bytes,
        name: str = "pacct",
    ) -> Path:
        path = temp_dir / name
        with open(path, "wb") as f:
            for record in records:
                f.write(record if isinstance(record, bytes) else record.to_bytes())
        return path

    return _write


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a fixed clock rate."""
    return Config(
        input=InputConfig(path=temp_dir / "pacct", clock_ticks_per_second=100),
        output=OutputConfig(),
        filter=FilterConfig(),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def user_directory() -> FakeUserDirectory:
    return FakeUserDirectory({1000: "alice", 0: "root"})


@pytest.fixture(autouse=True)
def clear_config_cache() -> Generator[None, None, None]:
    """get_config() is cached; tests that touch the environment need a fresh one."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """CLI runs bind structlog to the runner's stderr; undo that between tests."""
    yield
    structlog.reset_defaults()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")

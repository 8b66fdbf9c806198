"""Shared pytest fixtures for the file logger test suite."""

import os
from datetime import datetime

import pytest

from src.config import Config
from src.store import LogStore


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def config(tmp_path) -> Config:
    """Config with the log file and archive directory inside tmp_path."""
    return Config(
        log_file=str(tmp_path / "log.txt"),
        archive_dir=str(tmp_path / "logs"),
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 15, 12, 0, 0))


@pytest.fixture()
def store(config, clock) -> LogStore:
    return LogStore(config, time_func=clock)


@pytest.fixture()
def read_log(config):
    """Return the active log file's lines (empty list if absent)."""
    def _read():
        if not os.path.exists(config.log_file):
            return []
        with open(config.log_file, encoding="utf-8") as f:
            return f.read().splitlines()
    return _read


@pytest.fixture()
def write_lines(config):
    """Write raw lines to the active log file, bypassing the store."""
    def _write(lines):
        with open(config.log_file, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    return _write

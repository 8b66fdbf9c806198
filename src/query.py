"""Read-side queries over the active log file: by level tag and by time range.

Queries never take the store's lock. Each call opens, reads and closes the
file on its own, so a query racing a writer can see the file missing
(just rotated) or a partially written last line.
"""

import os
from datetime import datetime
from typing import Generator

from src.config import Config
from src.levels import Severity

TIMESTAMP_WIDTH = len(datetime(2000, 1, 1).strftime(Config.timestamp_format))


class LogParseError(ValueError):
    """Raised when a line's leading timestamp cannot be parsed."""

    def __init__(self, line_num: int, line: str):
        super().__init__(f"Unparsable timestamp on line {line_num}: {line!r}")
        self.line_num = line_num
        self.line = line


def _read_lines(path: str) -> Generator[str, None, None]:
    """Yield lines without trailing newlines. Yields nothing if the file is absent."""
    try:
        f = open(path, "r", encoding="utf-8")
    except FileNotFoundError:
        return
    with f:
        for line in f:
            yield line.rstrip("\n")


def parse_timestamp(line: str, timestamp_format: str = Config.timestamp_format) -> datetime:
    """Parse the fixed-width timestamp at the start of *line*. Raises ValueError."""
    return datetime.strptime(line[:TIMESTAMP_WIDTH], timestamp_format)


def read_by_level(level: Severity, path: str = Config.log_file) -> list[str]:
    """Return lines containing the bracketed tag for *level*.

    Matching is on the substring ``[LEVEL]`` anywhere in the line, so a message
    that itself contains ``[ERROR]`` also matches ERROR.
    """
    tag = level.tag
    return [line for line in _read_lines(path) if tag in line]


def read_by_time_range(start: datetime, end: datetime, path: str = Config.log_file) -> list[str]:
    """Return lines whose timestamp lies in [start, end], inclusive.

    Fails fast: the first unparsable line raises LogParseError.
    """
    results = []
    for line_num, line in enumerate(_read_lines(path), 1):
        try:
            ts = parse_timestamp(line)
        except ValueError:
            raise LogParseError(line_num, line) from None
        if start <= ts <= end:
            results.append(line)
    return results


def list_archives(archive_dir: str = Config.archive_dir) -> list[str]:
    """Return rotated archive file names sorted oldest-first."""
    try:
        names = os.listdir(archive_dir)
    except FileNotFoundError:
        return []
    return sorted(n for n in names if n.startswith("log_") and n.endswith(".txt"))

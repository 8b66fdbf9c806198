"""Process-wide append-only log sink with level filtering and size-based rotation."""

import logging
import os
import threading
from datetime import datetime
from typing import TextIO

from src.config import Config, load_config, validate_config
from src.levels import Severity

logger = logging.getLogger(__name__)

_instance = None
_instance_lock = threading.Lock()


def format_line(timestamp: datetime, level: Severity, message: str,
                timestamp_format: str = Config.timestamp_format) -> str:
    """Render one record as ``<timestamp> [<LEVEL>] <message>`` (no trailing newline)."""
    return f"{timestamp.strftime(timestamp_format)} {level.tag} {message}"


class LogStore:
    """Single writer for the active log file.

    Every state change and every file operation happens while holding
    ``self._lock``, so appends, rotations, level changes and clears never
    interleave. The file is opened and closed inside each locked section.
    """

    def __init__(self, config: Config, lock=None, echo: TextIO | None = None, time_func=None):
        validate_config(config)
        self._config = config
        self._lock = lock if lock is not None else threading.Lock()
        self._echo = echo
        self._time_func = time_func or datetime.now
        self._level = config.default_level

    @property
    def config(self) -> Config:
        return self._config

    @property
    def level(self) -> Severity:
        with self._lock:
            return self._level

    def set_level(self, level: Severity):
        """Replace the minimum severity; applies to every later append."""
        with self._lock:
            self._level = level

    def set_echo(self, stream: TextIO | None):
        """Mirror every written line to *stream* (None disables mirroring)."""
        with self._lock:
            self._echo = stream

    def append(self, message: str, level: Severity) -> bool:
        """Write one line if *level* passes the filter. Returns True if a line was written."""
        with self._lock:
            if level < self._level:
                return False

            self._rotate_if_needed()

            line = format_line(self._time_func(), level, message, self._config.timestamp_format)
            with open(self._config.log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")

            if self._echo is not None:
                self._echo.write(line + "\n")
                self._echo.flush()
            return True

    def clear_log(self) -> bool:
        """Delete the active file. Returns False if there was nothing to delete."""
        with self._lock:
            try:
                os.remove(self._config.log_file)
            except FileNotFoundError:
                return False
            logger.debug("Cleared %s", self._config.log_file)
            return True

    def _rotate_if_needed(self) -> str | None:
        """Move an oversized active file into the archive. Must be called with self._lock held."""
        archive_dir = self._config.archive_dir
        if not os.path.isdir(archive_dir):
            os.makedirs(archive_dir, exist_ok=True)
            logger.debug("Created archive directory %s", archive_dir)

        try:
            size = os.path.getsize(self._config.log_file)
        except FileNotFoundError:
            return None
        if size <= self._config.max_file_size_bytes:
            return None

        stamp = self._time_func().strftime(self._config.archive_timestamp_format)
        archive_path = os.path.join(archive_dir, f"log_{stamp}.txt")
        # Same-second rotations reuse the name and replace the older archive.
        os.replace(self._config.log_file, archive_path)
        logger.info("Rotated %s (%d bytes) to %s", self._config.log_file, size, archive_path)
        return archive_path


def get_instance() -> LogStore:
    """Return the process-wide LogStore, constructing it on first access.

    The construction lock is also the instance's mutex, so first construction
    serializes against every later level change, append and clear.
    """
    global _instance
    instance = _instance
    if instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = LogStore(load_config(), lock=_instance_lock)
                logger.debug("Created log store for %s", _instance.config.log_file)
            instance = _instance
    return instance

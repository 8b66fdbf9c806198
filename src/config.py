"""Configuration module — fixed operational parameters for the log sink.

The sink's file path, archive directory and rotation threshold are hard-coded;
there is no environment or file override for them.
"""

import os
from dataclasses import dataclass

from src.levels import Severity


class ConfigurationError(Exception):
    """Raised when the log file or archive location cannot be established."""


@dataclass(frozen=True)
class Config:
    log_file: str = "log.txt"
    archive_dir: str = "logs"
    max_file_size_bytes: int = 1024 * 1024  # 1 MB
    default_level: Severity = Severity.INFO
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    archive_timestamp_format: str = "%Y%m%d%H%M%S"


def load_config() -> Config:
    """Return the fixed configuration used by the process-wide logger."""
    return Config()


def validate_config(config: Config) -> None:
    """Raise ConfigurationError if the paths or threshold are unusable."""
    if not config.log_file:
        raise ConfigurationError("log_file must not be empty")
    if not config.archive_dir:
        raise ConfigurationError("archive_dir must not be empty")
    if os.path.isdir(config.log_file):
        raise ConfigurationError(f"log_file {config.log_file!r} is a directory")
    if os.path.exists(config.archive_dir) and not os.path.isdir(config.archive_dir):
        raise ConfigurationError(f"archive_dir {config.archive_dir!r} is not a directory")
    if config.max_file_size_bytes <= 0:
        raise ConfigurationError(
            f"max_file_size_bytes must be positive, got {config.max_file_size_bytes}"
        )

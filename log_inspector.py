"""CLI log inspector — filter the active log by level or time range, list archives, clear."""

import argparse
import os
import sys
from datetime import datetime

from src.config import ConfigurationError, load_config
from src.levels import Severity
from src.query import LogParseError, list_archives, read_by_level, read_by_time_range
from src.store import get_instance


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid datetime {value!r} (use YYYY-MM-DD[ HH:MM:SS])") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect the active log file and its archives")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--level", type=Severity.parse, help="Show lines tagged with LEVEL")
    group.add_argument("--since", type=_parse_datetime, help="Show lines at or after this time")
    group.add_argument("--list-archives", action="store_true", help="List rotated log files")
    group.add_argument("--clear", action="store_true", help="Delete the active log file")
    parser.add_argument("--until", type=_parse_datetime,
                        help="Upper bound for --since (default: now)")
    return parser


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def run(args, config):
    """Execute the selected inspector action."""
    if args.level is not None:
        for line in read_by_level(args.level, config.log_file):
            print(line)

    elif args.since is not None:
        until = args.until or datetime.now()
        for line in read_by_time_range(args.since, until, config.log_file):
            print(line)

    elif args.list_archives:
        names = list_archives(config.archive_dir)
        if not names:
            print("No archived log files found.")
            return
        for name in names:
            size = os.path.getsize(os.path.join(config.archive_dir, name))
            print(f"  {name}  ({_format_size(size)})")

    elif args.clear:
        if get_instance().clear_log():
            print(f"Cleared {config.log_file}")
        else:
            print(f"Nothing to clear: {config.log_file} does not exist")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config()

    if args.until is not None and args.since is None:
        parser.error("--until requires --since")

    try:
        run(args, config)
    except (LogParseError, ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""File logger demo — concurrent workers share one logger, then the log is queried."""

import argparse
import logging
import sys
import threading
from datetime import datetime, timedelta

import yaml

from src.config import ConfigurationError
from src.levels import Severity
from src.query import LogParseError, read_by_level, read_by_time_range
from src.scenario import load_scenario, run_worker
from src.store import get_instance

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [file-logger] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run worker threads against the shared file logger")
    parser.add_argument("--scenario", metavar="PATH",
                        help="YAML file describing worker threads (default: built-in demo)")
    parser.add_argument("--clear", action="store_true",
                        help="Delete the active log file before running")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not mirror written lines to stdout")
    return parser


def _fail(error: Exception):
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        workers = load_scenario(args.scenario)
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(e)

    try:
        store = get_instance()
        if args.clear:
            store.clear_log()
    except (ConfigurationError, OSError) as e:
        _fail(e)
    if not args.quiet:
        store.set_echo(sys.stdout)

    errors = []

    def target(worker):
        try:
            run_worker(store, worker)
        except OSError as e:
            logger.error("Worker %s failed: %s", worker.name, e)
            errors.append(e)

    threads = [threading.Thread(target=target, args=(w,), name=w.name) for w in workers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    store.set_echo(None)

    if errors:
        sys.exit(1)

    log_file = store.config.log_file
    now = datetime.now()
    try:
        warnings = read_by_level(Severity.WARNING, log_file)
        recent = read_by_time_range(now - timedelta(minutes=1), now, log_file)
    except (LogParseError, OSError) as e:
        _fail(e)

    print("Logs filtered by level WARNING:")
    for line in warnings:
        print(line)

    print("Logs from the last minute:")
    for line in recent:
        print(line)


if __name__ == "__main__":
    main()

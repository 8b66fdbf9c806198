"""Demo workload — which worker threads make which logger calls."""

import logging
from dataclasses import dataclass, field

import yaml

from src.levels import Severity
from src.store import LogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    action: str              # "log" or "set_level"
    level: Severity
    message: str = ""


@dataclass(frozen=True)
class Worker:
    name: str
    steps: list[Step] = field(default_factory=list)


DEFAULT_WORKERS = [
    Worker("t1", [
        Step("log", Severity.INFO, "Information message"),
        Step("log", Severity.WARNING, "Warning message"),
        Step("log", Severity.ERROR, "Error message"),
    ]),
    Worker("t2", [
        Step("set_level", Severity.WARNING),
        Step("log", Severity.WARNING, "Another warning message"),
        Step("log", Severity.ERROR, "Another error message"),
    ]),
]


def _parse_step(worker_name: str, raw) -> Step:
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ValueError(f"Worker {worker_name!r}: each step must be a single-key mapping, got {raw!r}")
    action, body = next(iter(raw.items()))
    try:
        if action == "log":
            return Step("log", Severity.parse(body["level"]), str(body["message"]))
        if action == "set_level":
            return Step("set_level", Severity.parse(body))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Worker {worker_name!r}: invalid {action} step {body!r}: {e}") from None
    raise ValueError(f"Worker {worker_name!r}: unknown step {action!r}")


def parse_scenario(data: dict) -> list[Worker]:
    """Build workers from parsed YAML data. Raises ValueError on a malformed layout."""
    if not data:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"Scenario must be a mapping with a 'workers' list, got {type(data).__name__}")
    raw_workers = data.get("workers") or []
    if not isinstance(raw_workers, list):
        raise ValueError(f"'workers' must be a list, got {type(raw_workers).__name__}")

    workers = []
    for i, raw in enumerate(raw_workers):
        if not isinstance(raw, dict):
            raise ValueError(f"Worker #{i}: expected a mapping, got {raw!r}")
        name = str(raw.get("name", f"worker-{i}"))
        raw_steps = raw.get("steps") or []
        if not isinstance(raw_steps, list):
            raise ValueError(f"Worker {name!r}: 'steps' must be a list, got {raw_steps!r}")
        steps = [_parse_step(name, s) for s in raw_steps]
        workers.append(Worker(name, steps))
    return workers


def load_scenario(path: str | None) -> list[Worker]:
    """Load workers from a YAML file, or return a copy of the built-in demo when *path* is None."""
    if not path:
        return [Worker(w.name, list(w.steps)) for w in DEFAULT_WORKERS]
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    workers = parse_scenario(data)
    logger.info("Loaded %d worker(s) from %s", len(workers), path)
    return workers


def run_worker(store: LogStore, worker: Worker):
    """Execute a worker's steps in order against *store*."""
    for step in worker.steps:
        if step.action == "set_level":
            store.set_level(step.level)
        else:
            store.append(step.message, step.level)

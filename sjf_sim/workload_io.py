from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping

from .models import Process
from .validation import MissingInput, ValidationError, validate_sequences

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Each entry needs ``arrival_time`` and ``burst_time``; ``pid`` is optional
    and defaults to the 1-based position of the entry.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        rows = _load_json(path)
    elif suffix == ".csv":
        rows = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    processes = _processes_from_rows(rows)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValidationError("JSON workload must be a list of process objects")
    return raw


def _load_csv(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def _processes_from_rows(rows: List[Mapping]) -> List[Process]:
    if not rows:
        raise MissingInput("Workload contains no processes")

    pids, arrivals, bursts = [], [], []
    for idx, entry in enumerate(rows, start=1):
        try:
            pid = entry.get("pid")
            arrivals.append(entry["arrival_time"])
            bursts.append(entry["burst_time"])
        except (KeyError, TypeError, AttributeError) as exc:
            raise MissingInput(f"Invalid process entry: {entry!r}") from exc
        pids.append(idx if pid in (None, "") else pid)

    pids, arrivals, bursts = validate_sequences(pids, arrivals, bursts)
    return [
        Process(pid=pid, arrival_time=arrival, burst_time=burst)
        for pid, arrival, burst in zip(pids, arrivals, bursts)
    ]

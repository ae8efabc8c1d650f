from __future__ import annotations

import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Sequence

from .models import Process

FIELDS = ["pid", "arrival_time", "burst_time", "priority"]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def save_workload(processes: Sequence[Process], path: str | Path) -> Path:
    """
    Write a workload in the same JSON or CSV layout that load_workload reads.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [asdict(p) for p in processes]

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
            f.write("\n")
        return path
    if suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
        return path

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = _parse_int(mapping["arrival_time"])
        burst_time = _parse_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _parse_int(priority_val) if priority_val not in (None, "") else None
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    try:
        return Process(
            pid=pid,
            arrival_time=arrival_time,
            burst_time=burst_time,
            priority=priority,
        )
    except ValueError as exc:
        raise ValueError(f"Invalid process entry {mapping!r}: {exc}") from exc


def _parse_int(value) -> int:
    # JSON gives ints directly, CSV gives strings; anything else is malformed.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {value!r}")

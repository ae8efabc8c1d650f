"""
Default simulation parameters and workload configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_COUNT = 5
DEFAULT_ARRIVAL_RANGE = (0, 10)
DEFAULT_BURST_RANGE = (1, 10)
DEFAULT_PRIORITY_RANGE = (1, 5)
DEFAULT_AGING_INTERVAL = 4


@dataclass(frozen=True)
class WorkloadConfig:
    """Parameters for random workload generation. All ranges are inclusive."""

    count: int = DEFAULT_COUNT
    arrival_range: Tuple[int, int] = DEFAULT_ARRIVAL_RANGE
    burst_range: Tuple[int, int] = DEFAULT_BURST_RANGE
    priority_range: Tuple[int, int] = DEFAULT_PRIORITY_RANGE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count cannot be negative")
        _check_range("arrival_range", self.arrival_range, minimum=0)
        _check_range("burst_range", self.burst_range, minimum=1)
        _check_range("priority_range", self.priority_range, minimum=1)


def _check_range(name: str, bounds: Tuple[int, int], minimum: int) -> None:
    if len(bounds) != 2:
        raise ValueError(f"{name} must be a (low, high) pair")
    low, high = bounds
    if low < minimum:
        raise ValueError(f"{name} lower bound must be >= {minimum}")
    if high < low:
        raise ValueError(f"{name} must satisfy low <= high")


def validate_aging_interval(value: int) -> int:
    if value < 1:
        raise ValueError("aging interval must be at least 1 tick")
    return value

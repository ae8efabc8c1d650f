from __future__ import annotations

import logging
from random import Random
from typing import List, Optional

from .config import WorkloadConfig
from .models import Process

logger = logging.getLogger(__name__)


def generate_workload(config: Optional[WorkloadConfig] = None, rng: Optional[Random] = None) -> List[Process]:
    """
    Draw `config.count` processes with uniformly random arrival, burst and
    priority values. Process ids run "1".."n" in generation order.

    Pass `rng` to control the random source directly; otherwise a fresh
    Random seeded with `config.seed` is used.
    """
    config = config or WorkloadConfig()
    if rng is None:
        rng = Random(config.seed)
        logger.debug("Generating %d processes with seed %r", config.count, config.seed)

    processes: List[Process] = []
    for i in range(config.count):
        arrival_time = rng.randint(*config.arrival_range)
        burst_time = rng.randint(*config.burst_range)
        priority = rng.randint(*config.priority_range)
        processes.append(
            Process(
                pid=str(i + 1),
                arrival_time=arrival_time,
                burst_time=burst_time,
                priority=priority,
            )
        )
    return processes

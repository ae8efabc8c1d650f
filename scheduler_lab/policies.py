from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_AGING_INTERVAL
from .models import ProcessState

logger = logging.getLogger(__name__)


class OrderingPolicy(ABC):
    """Chooses which ready process runs next; smallest sort key wins."""

    name: str = ""
    uses_priority: bool = False

    def before_selection(self, ready: Iterable[ProcessState], now: int) -> None:
        """Hook invoked on the whole ready set right before each selection."""

    @abstractmethod
    def sort_key(self, state: ProcessState) -> Tuple:
        """Total-order key for a ready process."""


class ShortestBurstFirst(OrderingPolicy):
    """
    Non-preemptive Shortest Job First.

    Ties on burst time go to the earlier arrival, then to the process that
    appeared first in the workload.
    """

    name = "SJF (non-preemptive)"

    def sort_key(self, state: ProcessState) -> Tuple:
        return (state.burst_time, state.arrival_time, state.order)


class PriorityWithAging(OrderingPolicy):
    """
    Non-preemptive priority scheduling with aging.

    Lower numeric priority value means higher priority. Before every
    selection, each ready process that has waited at least `aging_interval`
    ticks since arrival is promoted by one level (floored at 1). The check
    repeats on every selection step, so long waits earn several promotions.
    An `aging_interval` of None turns aging off.
    """

    name = "Priority with aging"
    uses_priority = True

    def __init__(self, aging_interval: Optional[int] = DEFAULT_AGING_INTERVAL) -> None:
        self.aging_interval = aging_interval

    def before_selection(self, ready: Iterable[ProcessState], now: int) -> None:
        if self.aging_interval is None:
            return
        for state in ready:
            if now - state.arrival_time >= self.aging_interval and state.promote():
                logger.debug("t=%d: aged %s to priority %d", now, state.pid, state.priority)

    def sort_key(self, state: ProcessState) -> Tuple:
        # Processes without a priority sort last.
        prio = state.priority if state.priority is not None else float("inf")
        return (prio, state.arrival_time, state.order)

from __future__ import annotations

import heapq
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULT_AGING_INTERVAL
from .metrics import compute_system_metrics
from .models import Process, ProcessState, ScheduleResult, ScheduledSlice
from .policies import OrderingPolicy, PriorityWithAging, ShortestBurstFirst

logger = logging.getLogger(__name__)


@dataclass(order=True)
class _HeapItem:
    key: Tuple
    state: ProcessState = field(compare=False)


class ReadyQueue:
    """
    Processes that have arrived but not yet run.

    The container is re-keyed by the active policy on every selection, since
    aging and new arrivals can change the best choice between steps.
    """

    def __init__(self) -> None:
        self._states: List[ProcessState] = []

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[ProcessState]:
        return iter(self._states)

    def admit(self, state: ProcessState) -> None:
        self._states.append(state)

    def pop_next(self, policy: OrderingPolicy, now: int) -> ProcessState:
        if not self._states:
            raise IndexError("pop from an empty ready queue")
        policy.before_selection(self._states, now)
        heap = [_HeapItem(policy.sort_key(s), s) for s in self._states]
        heapq.heapify(heap)
        chosen = heapq.heappop(heap).state
        self._states = [item.state for item in heap]
        return chosen


def simulate(processes: Sequence[Process], policy: OrderingPolicy) -> ScheduleResult:
    """
    Run a non-preemptive, single-CPU simulation of `processes` under `policy`.

    The clock starts at 0. Each step admits every process whose arrival time
    has been reached, then either runs the policy's pick to completion or,
    when nothing is ready, advances the clock by one idle tick. The input
    records are never modified; all timing lives in per-run state.
    """
    _check_unique_pids(processes)

    states = [ProcessState.for_run(p, order) for order, p in enumerate(processes)]
    not_arrived = deque(sorted(states, key=lambda s: (s.arrival_time, s.order)))
    ready = ReadyQueue()

    time = 0
    idle_ticks = 0
    timeline: List[ScheduledSlice] = []

    while not_arrived or ready:
        while not_arrived and not_arrived[0].arrival_time <= time:
            ready.admit(not_arrived.popleft())

        if not ready:
            logger.debug("t=%d: CPU idle", time)
            time += 1
            idle_ticks += 1
            continue

        current = ready.pop_next(policy, time)
        current.mark_started(time)
        time += current.burst_time
        current.mark_finished(time)

        timeline.append(ScheduledSlice(pid=current.pid, start_time=current.start_time, end_time=time))
        logger.debug(
            "t=%d: ran %s until t=%d (waited %d)",
            current.start_time,
            current.pid,
            time,
            current.waiting_time,
        )

    result = ScheduleResult(
        algorithm=policy.name,
        aging_interval=getattr(policy, "aging_interval", None),
        uses_priority=policy.uses_priority,
        processes=[s.to_metrics() for s in states],
        timeline=timeline,
        idle_ticks=idle_ticks,
    )
    compute_system_metrics(result)
    logger.info("%s finished %d processes at t=%d", policy.name, len(states), time)
    return result


def _check_unique_pids(processes: Sequence[Process]) -> None:
    seen = set()
    for p in processes:
        if p.pid in seen:
            raise ValueError(f"Duplicate process id '{p.pid}' in workload")
        seen.add(p.pid)


def schedule_sjf(processes: Sequence[Process], aging_interval: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive). `aging_interval` is accepted for a
    uniform signature and ignored.
    """
    return simulate(processes, ShortestBurstFirst())


def schedule_priority_aging(
    processes: Sequence[Process],
    aging_interval: Optional[int] = DEFAULT_AGING_INTERVAL,
) -> ScheduleResult:
    """
    Priority scheduling (non-preemptive) with aging every `aging_interval`
    ticks of waiting. Every process must carry a priority.
    """
    missing = [p.pid for p in processes if p.priority is None]
    if missing:
        raise ValueError(f"Priority scheduling needs a priority for every process (missing: {', '.join(missing)})")
    return simulate(processes, PriorityWithAging(aging_interval))


ALGORITHMS = {
    "sjf": schedule_sjf,
    "priority-aging": schedule_priority_aging,
}


def run_algorithm(name: str, processes: Sequence[Process], aging_interval: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. The aging interval falls back to
    the default when not given and is ignored by SJF.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    if aging_interval is None:
        aging_interval = DEFAULT_AGING_INTERVAL
    func = ALGORITHMS[name]
    return func(processes, aging_interval=aging_interval)


def compare_algorithms(
    processes: Sequence[Process],
    names: Sequence[str] = tuple(ALGORITHMS),
    aging_interval: Optional[int] = None,
) -> List[ScheduleResult]:
    """Run several algorithms on the same workload, each on fresh state."""
    return [run_algorithm(name, processes, aging_interval=aging_interval) for name in names]

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

PRIORITY_FLOOR = 1


@dataclass(frozen=True)
class Process:
    """
    One schedulable unit of work as produced by the generator or a workload
    file. Never mutated by a scheduling run.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.pid, str) or not self.pid:
            raise ValueError("pid must be a non-empty string")
        for name in ("arrival_time", "burst_time"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.arrival_time < 0:
            raise ValueError(f"Process {self.pid}: arrival_time cannot be negative")
        if self.burst_time <= 0:
            raise ValueError(f"Process {self.pid}: burst_time must be strictly positive")
        if self.priority is not None:
            if isinstance(self.priority, bool) or not isinstance(self.priority, int):
                raise ValueError(f"priority must be an integer, got {self.priority!r}")
            if self.priority < PRIORITY_FLOOR:
                raise ValueError(f"Process {self.pid}: priority must be >= {PRIORITY_FLOOR}")


@dataclass
class ProcessState:
    """Mutable per-run scheduling state for a single process."""

    process: Process
    order: int
    priority: Optional[int] = None
    promotions: int = 0
    start_time: Optional[int] = None
    finish_time: Optional[int] = None
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None

    @classmethod
    def for_run(cls, process: Process, order: int) -> "ProcessState":
        return cls(process=process, order=order, priority=process.priority)

    @property
    def pid(self) -> str:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def is_finished(self) -> bool:
        return self.finish_time is not None

    def mark_started(self, now: int) -> None:
        if self.start_time is not None:
            raise RuntimeError(f"Process {self.pid} was already started at t={self.start_time}")
        if now < self.arrival_time:
            raise RuntimeError(f"Process {self.pid} cannot start at t={now} before arriving at t={self.arrival_time}")
        self.start_time = now

    def mark_finished(self, now: int) -> None:
        if self.start_time is None:
            raise RuntimeError(f"Process {self.pid} finished without being started")
        self.finish_time = now
        self.turnaround_time = self.finish_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def promote(self) -> bool:
        """
        Raise the working priority by one step (numerically lower), floored at
        PRIORITY_FLOOR. Returns True when the priority actually changed.
        """
        if self.priority is None or self.priority <= PRIORITY_FLOOR:
            return False
        self.priority -= 1
        self.promotions += 1
        return True

    def to_metrics(self) -> "ProcessMetrics":
        if not self.is_finished:
            raise RuntimeError(f"Process {self.pid} has not finished")
        return ProcessMetrics(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            start_time=self.start_time,
            completion_time=self.finish_time,
            waiting_time=self.waiting_time,
            turnaround_time=self.turnaround_time,
            priority=self.process.priority,
            final_priority=self.priority,
            promotions=self.promotions,
        )


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    priority: Optional[int] = None
    final_priority: Optional[int] = None
    promotions: int = 0


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    idle_time: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass
class MetricsSummary:
    """Average waiting/turnaround times; averages are None when there is no data."""

    count: int
    avg_waiting: Optional[float] = None
    avg_turnaround: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.count > 0


@dataclass
class ScheduleResult:
    algorithm: str
    aging_interval: Optional[int] = None
    uses_priority: bool = False
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    idle_ticks: int = 0
    system: Optional[SystemMetrics] = None

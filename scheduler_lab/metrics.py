from __future__ import annotations

from typing import Sequence

from .models import MetricsSummary, ProcessMetrics, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute makespan, idle time, throughput and CPU utilization given
    populated per-process metrics and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, idle_time=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    # Processes that waited more than twice the mean are counted as starved.
    avg_wait = sum(p.waiting_time for p in result.processes) / len(result.processes)
    starvation_count = sum(1 for p in result.processes if p.waiting_time > 2 * avg_wait)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        idle_time=makespan - cpu_busy_time,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        starvation_count=starvation_count,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> MetricsSummary:
    """
    Return average waiting and turnaround times. An empty run yields a
    summary with no averages instead of dividing by zero.
    """
    if not processes:
        return MetricsSummary(count=0)

    n = len(processes)
    return MetricsSummary(
        count=n,
        avg_waiting=sum(p.waiting_time for p in processes) / n,
        avg_turnaround=sum(p.turnaround_time for p in processes) / n,
    )

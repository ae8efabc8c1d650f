import pytest

from scheduler_lab.engine import schedule_sjf
from scheduler_lab.metrics import compute_system_metrics, summarize_process_metrics
from scheduler_lab.models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice


def test_summary_averages():
    res = schedule_sjf([Process("1", 0, 8), Process("2", 0, 3)])
    summary = summarize_process_metrics(res.processes)
    assert summary.has_data
    assert summary.count == 2
    assert summary.avg_waiting == pytest.approx(1.5)
    assert summary.avg_turnaround == pytest.approx(7.0)


def test_summary_of_empty_run_has_no_data():
    summary = summarize_process_metrics([])
    assert not summary.has_data
    assert summary.avg_waiting is None
    assert summary.avg_turnaround is None


def test_system_metrics_with_idle_gap():
    res = schedule_sjf([Process("A", 0, 2), Process("B", 6, 2)])
    sys = res.system
    assert sys.makespan == 8
    assert sys.cpu_busy_time == 4
    assert sys.idle_time == 4
    assert sys.cpu_utilization == pytest.approx(0.5)
    assert sys.throughput == pytest.approx(2 / 8)


def test_starvation_count():
    processes = [
        ProcessMetrics(pid, 0, 1, start, start + 1, start, start + 1)
        for pid, start in [("a", 0), ("b", 0), ("c", 0), ("d", 9)]
    ]
    result = ScheduleResult(
        algorithm="test",
        processes=processes,
        timeline=[ScheduledSlice(p.pid, p.start_time, p.completion_time) for p in processes],
    )
    system = compute_system_metrics(result)
    assert result.system is system
    assert system.starvation_count == 1


def test_system_metrics_of_empty_result():
    system = compute_system_metrics(ScheduleResult(algorithm="empty"))
    assert system.makespan == 0
    assert system.throughput == 0.0

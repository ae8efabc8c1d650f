import dataclasses

import pytest

from scheduler_lab.models import Process, ProcessState


@pytest.mark.parametrize(
    "kwargs",
    [
        {"pid": "", "arrival_time": 0, "burst_time": 1},
        {"pid": 1, "arrival_time": 0, "burst_time": 3},
        {"pid": "A", "arrival_time": -1, "burst_time": 1},
        {"pid": "A", "arrival_time": 0, "burst_time": 0},
        {"pid": "A", "arrival_time": 0, "burst_time": -3},
        {"pid": "A", "arrival_time": 0, "burst_time": 2, "priority": 0},
        {"pid": "A", "arrival_time": 1.5, "burst_time": 2},
    ],
)
def test_invalid_process_rejected(kwargs):
    with pytest.raises(ValueError):
        Process(**kwargs)


def test_process_is_immutable():
    p = Process("A", 0, 3, priority=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.priority = 1


def test_state_timing_fields():
    state = ProcessState.for_run(Process("A", 2, 3, priority=4), order=0)
    assert state.start_time is None
    state.mark_started(5)
    state.mark_finished(8)
    assert (state.turnaround_time, state.waiting_time) == (6, 3)

    metrics = state.to_metrics()
    assert metrics.completion_time == 8
    assert metrics.priority == metrics.final_priority == 4


def test_state_starts_only_once_and_never_before_arrival():
    state = ProcessState.for_run(Process("A", 2, 3), order=0)
    with pytest.raises(RuntimeError):
        state.mark_started(1)
    state.mark_started(2)
    with pytest.raises(RuntimeError):
        state.mark_started(4)


def test_state_must_start_before_finishing():
    state = ProcessState.for_run(Process("A", 0, 3), order=0)
    with pytest.raises(RuntimeError):
        state.mark_finished(3)
    with pytest.raises(RuntimeError):
        state.to_metrics()


def test_promote_is_floored():
    state = ProcessState.for_run(Process("A", 0, 1, priority=2), order=0)
    assert state.promote()
    assert not state.promote()
    assert state.priority == 1
    assert state.promotions == 1

    unprioritised = ProcessState.for_run(Process("B", 0, 1), order=1)
    assert not unprioritised.promote()

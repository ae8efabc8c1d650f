from random import Random

import pytest

from scheduler_lab.config import WorkloadConfig, validate_aging_interval
from scheduler_lab.workload import generate_workload


def test_default_workload_shape():
    procs = generate_workload(WorkloadConfig(seed=1))
    assert [p.pid for p in procs] == ["1", "2", "3", "4", "5"]
    for p in procs:
        assert 0 <= p.arrival_time <= 10
        assert 1 <= p.burst_time <= 10
        assert 1 <= p.priority <= 5


def test_seeded_generation_is_reproducible():
    config = WorkloadConfig(count=20, seed=42)
    assert generate_workload(config) == generate_workload(config)


def test_injected_rng_drives_generation():
    config = WorkloadConfig(count=6)
    assert generate_workload(config, rng=Random(5)) == generate_workload(config, rng=Random(5))


def test_degenerate_ranges():
    procs = generate_workload(
        WorkloadConfig(count=3, arrival_range=(2, 2), burst_range=(4, 4), priority_range=(3, 3), seed=0)
    )
    assert {(p.arrival_time, p.burst_time, p.priority) for p in procs} == {(2, 4, 3)}


def test_zero_count():
    assert generate_workload(WorkloadConfig(count=0)) == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"count": -1},
        {"arrival_range": (-1, 3)},
        {"burst_range": (0, 3)},
        {"priority_range": (0, 5)},
        {"burst_range": (5, 2)},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        WorkloadConfig(**kwargs)


def test_validate_aging_interval():
    assert validate_aging_interval(4) == 4
    with pytest.raises(ValueError):
        validate_aging_interval(0)

from pathlib import Path

import pytest

from scheduler_lab.workload_io import load_workload, save_workload
from scheduler_lab.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority is None


@pytest.mark.parametrize("name", ["w.json", "w.csv"])
def test_save_then_load(tmp_path: Path, name: str):
    procs = [Process("1", 0, 3, priority=2), Process("2", 4, 1, priority=5)]
    path = save_workload(procs, tmp_path / name)
    assert load_workload(path) == procs


def test_invalid_entries(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0}]')
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)

    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":-2}]')
    with pytest.raises(ValueError, match="burst_time"):
        load_workload(p)

    p.write_text('{"pid":"A"}')
    with pytest.raises(ValueError, match="list"):
        load_workload(p)


def test_unsupported_format(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported"):
        load_workload(tmp_path / "w.txt")
    with pytest.raises(ValueError, match="Unsupported"):
        save_workload([], tmp_path / "w.yaml")


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":"A","arrival_time":2.9,"burst_time":3}',
        '{"pid":"A","arrival_time":0,"burst_time":3.7}',
        '{"pid":"A","arrival_time":0,"burst_time":3,"priority":true}',
        '{"pid":"A","arrival_time":"1","burst_time":[3]}',
    ],
)
def test_non_integer_json_values_rejected(tmp_path: Path, entry: str):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_non_integer_csv_values_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,2.9,3,1\n")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)

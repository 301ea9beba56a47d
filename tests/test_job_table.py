import pytest

from cpu_scheduler import CapacityExceeded, IndexOutOfRange, InvalidProcess, JobTable, SchedulerConfig
from cpu_scheduler.job_table import SCENARIOS
from cpu_scheduler.models import PROCESS_COLORS


def test_add_assigns_ids_names_and_colors():
    table = JobTable()
    first = table.add("", 0, 3)
    second = table.add("Editor", 2, 4, 1)

    assert (first.name, first.id, first.color) == ("P1", 1, PROCESS_COLORS[0])
    assert (second.name, second.id, second.color) == ("Editor", 2, PROCESS_COLORS[1])
    assert second.remaining_time == 4
    assert second.start_time == -1
    assert second.response_time == -1


@pytest.mark.parametrize("given, stored", [(0, 1), (-4, 1), (1, 1), (10, 10), (42, 10)])
def test_priority_is_clamped(given, stored):
    table = JobTable()
    assert table.add("P", 0, 1, given).priority == stored


@pytest.mark.parametrize("arrival, burst", [(0, 0), (0, -2), (-1, 3)])
def test_invalid_process_is_rejected(arrival, burst):
    table = JobTable()
    with pytest.raises(InvalidProcess):
        table.add("bad", arrival, burst)
    assert len(table) == 0


def test_capacity_exceeded_leaves_table_untouched():
    table = JobTable(SchedulerConfig(capacity=2))
    table.add("A", 0, 1)
    table.add("B", 0, 1)

    with pytest.raises(CapacityExceeded):
        table.add("C", 0, 1)
    assert [p.name for p in table] == ["A", "B"]


def test_remove_shifts_and_renumbers():
    table = JobTable()
    for name in "ABCD":
        table.add(name, 0, 1)

    removed = table.remove(1)

    assert removed.name == "B"
    assert [p.name for p in table] == ["A", "C", "D"]
    assert [p.id for p in table] == [1, 2, 3]
    assert table[1].color == PROCESS_COLORS[1]


@pytest.mark.parametrize("index", [-1, 3, 99])
def test_remove_out_of_range(index):
    table = JobTable()
    for name in "ABC":
        table.add(name, 0, 1)

    with pytest.raises(IndexOutOfRange):
        table.remove(index)
    with pytest.raises(IndexError):
        table.remove(index)
    assert len(table) == 3


def test_reset_keeps_static_inputs():
    table = JobTable()
    p = table.add("A", 1, 4, 2)
    p.remaining_time = 0
    p.start_time = 3
    p.completion_time = 7
    p.waiting_time = 2
    p.turnaround_time = 6
    p.response_time = 2

    table.reset()

    assert (p.name, p.arrival_time, p.burst_time, p.priority) == ("A", 1, 4, 2)
    assert (p.remaining_time, p.start_time, p.completion_time) == (4, -1, 0)
    assert (p.waiting_time, p.turnaround_time, p.response_time) == (0, 0, -1)


def test_sample_set():
    table = JobTable()
    table.add("old", 0, 1)
    table.load_sample_set()

    assert [p.name for p in table] == ["P1", "P2", "P3", "P4", "P5"]
    assert [p.arrival_time for p in table] == [0, 1, 2, 3, 4]
    assert [p.burst_time for p in table] == [6, 4, 3, 2, 5]
    assert [p.priority for p in table] == [3, 1, 4, 2, 5]
    assert [p.id for p in table] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("scenario", sorted(SCENARIOS))
def test_scenarios_load(scenario):
    table = JobTable()
    table.load_scenario(scenario)
    assert len(table) == len(SCENARIOS[scenario])
    assert table[0].name == "P1"


def test_unknown_scenario():
    with pytest.raises(KeyError):
        JobTable().load_scenario("nope")


def test_load_is_all_or_nothing():
    table = JobTable()
    table.add("keep", 0, 1)

    with pytest.raises(InvalidProcess):
        table.load([("ok", 0, 1, 1), ("bad", 0, 0, 1)])
    assert [p.name for p in table] == ["keep"]


def test_config_validation():
    with pytest.raises(ValueError):
        SchedulerConfig(capacity=0)
    with pytest.raises(ValueError):
        SchedulerConfig(default_quantum=-1)
    with pytest.raises(ValueError):
        SchedulerConfig(min_priority=5, max_priority=1)

import pytest

from cpu_scheduler import Algorithm, execute
from cpu_scheduler.algorithms import round_robin_scheduling
from cpu_scheduler.timeline import Timeline

from conftest import blocks, completions, make_processes


def test_fcfs_order_and_metrics():
    procs = make_processes([("P1", 0, 6), ("P2", 1, 4), ("P3", 2, 3)])
    run = execute(procs, Algorithm.FCFS, 2)

    assert run.execution_order == ["P1", "P2", "P3"]
    assert [p.completion_time for p in run.processes] == [6, 10, 13]
    assert [p.turnaround_time for p in run.processes] == [6, 9, 11]
    assert [p.waiting_time for p in run.processes] == [0, 5, 8]
    assert run.clock == 13


def test_fcfs_sorts_by_arrival_stably_without_reordering_table():
    procs = make_processes([("X", 1, 2), ("Y", 0, 1), ("Z", 1, 1)])
    run = execute(procs, Algorithm.FCFS, 2)

    assert blocks(run) == [("Y", 0, 1), ("X", 1, 3), ("Z", 3, 4)]
    assert [p.name for p in procs] == ["X", "Y", "Z"]


def test_fcfs_idles_until_first_arrival():
    procs = make_processes([("A", 3, 2), ("B", 10, 1)])
    run = execute(procs, Algorithm.FCFS, 2)

    assert blocks(run) == [("A", 3, 5), ("B", 10, 11)]
    assert run.clock == 11


def test_sjf_sample_set_picks_p4_before_p3(sample_processes):
    run = execute(sample_processes, Algorithm.SJF, 2)

    assert run.execution_order == ["P1", "P4", "P3", "P2", "P5"]
    assert completions(run) == {"P1": 6, "P2": 15, "P3": 11, "P4": 8, "P5": 20}


def test_sjf_tie_goes_to_first_registered():
    procs = make_processes([("A", 0, 1), ("B", 1, 3), ("C", 1, 3)])
    run = execute(procs, Algorithm.SJF, 2)

    assert run.execution_order == ["A", "B", "C"]


def test_sjf_idle_ticks_between_arrivals():
    procs = make_processes([("A", 3, 2), ("B", 10, 1)])
    run = execute(procs, Algorithm.SJF, 2)

    assert blocks(run) == [("A", 3, 5), ("B", 10, 11)]
    assert run.process_named("A").start_time == 3
    assert run.process_named("B").response_time == 0


def test_priority_sample_set(sample_processes):
    run = execute(sample_processes, Algorithm.PRIORITY, 2)

    assert blocks(run) == [
        ("P1", 0, 6),
        ("P2", 6, 10),
        ("P4", 10, 12),
        ("P3", 12, 15),
        ("P5", 15, 20),
    ]


def test_priority_is_not_preemptive():
    procs = make_processes([("Low", 0, 5, 9), ("High", 1, 1, 1)])
    run = execute(procs, Algorithm.PRIORITY, 2)

    assert blocks(run) == [("Low", 0, 5), ("High", 5, 6)]


def test_srtf_sample_set(sample_processes):
    run = execute(sample_processes, Algorithm.SRTF, 2)

    assert blocks(run) == [
        ("P1", 0, 1),
        ("P2", 1, 5),
        ("P4", 5, 7),
        ("P3", 7, 10),
        ("P1", 10, 15),
        ("P5", 15, 20),
    ]
    assert completions(run) == {"P1": 15, "P2": 5, "P3": 10, "P4": 7, "P5": 20}
    # P1 started at 0 even though it finished last.
    assert run.process_named("P1").response_time == 0


def test_srtf_preempts_on_arrival():
    procs = make_processes([("A", 0, 8), ("B", 1, 2)])
    run = execute(procs, Algorithm.SRTF, 2)

    assert blocks(run) == [("A", 0, 1), ("B", 1, 3), ("A", 3, 10)]
    assert run.process_named("B").completion_time == 3


def test_preemptive_priority_sample_set(sample_processes):
    run = execute(sample_processes, Algorithm.PREEMPTIVE_PRIORITY, 2)

    assert blocks(run) == [
        ("P1", 0, 1),
        ("P2", 1, 5),
        ("P4", 5, 7),
        ("P1", 7, 12),
        ("P3", 12, 15),
        ("P5", 15, 20),
    ]
    p1 = run.process_named("P1")
    assert (p1.start_time, p1.completion_time, p1.waiting_time) == (0, 12, 6)


def test_preemptive_priority_equal_priority_keeps_table_order():
    procs = make_processes([("A", 0, 2, 3), ("B", 0, 2, 3)])
    run = execute(procs, Algorithm.PREEMPTIVE_PRIORITY, 2)

    assert blocks(run) == [("A", 0, 2), ("B", 2, 4)]


def test_tick_dispatch_idles_until_arrival():
    procs = make_processes([("A", 2, 2)])
    run = execute(procs, Algorithm.SRTF, 2)

    assert blocks(run) == [("A", 2, 4)]
    assert run.process_named("A").start_time == 2


def test_round_robin_two_jobs_quantum_two():
    procs = make_processes([("A", 0, 5), ("B", 0, 3)])
    run = execute(procs, Algorithm.ROUND_ROBIN, 2)

    assert blocks(run) == [("A", 0, 2), ("B", 2, 4), ("A", 4, 6), ("B", 6, 7), ("A", 7, 8)]
    assert completions(run) == {"A": 8, "B": 7}
    assert run.quantum == 2


def test_round_robin_arrivals_join_before_preempted_job(sample_processes):
    run = execute(sample_processes, Algorithm.ROUND_ROBIN, 2)

    assert blocks(run) == [
        ("P1", 0, 2),
        ("P2", 2, 4),
        ("P3", 4, 6),
        ("P1", 6, 8),
        ("P4", 8, 10),
        ("P5", 10, 12),
        ("P2", 12, 14),
        ("P3", 14, 15),
        ("P1", 15, 17),
        ("P5", 17, 19),
        ("P5", 19, 20),
    ]
    assert completions(run) == {"P1": 17, "P2": 14, "P3": 15, "P4": 10, "P5": 20}


def test_round_robin_fast_forwards_when_queue_empty():
    procs = make_processes([("A", 3, 3), ("B", 4, 2)])
    run = execute(procs, Algorithm.ROUND_ROBIN, 2)

    assert blocks(run) == [("A", 3, 5), ("B", 5, 7), ("A", 7, 8)]
    assert run.process_named("A").response_time == 0
    assert run.process_named("B").response_time == 1


def test_round_robin_large_quantum_behaves_like_fcfs(sample_processes):
    run = execute(sample_processes, Algorithm.ROUND_ROBIN, 100)

    assert run.execution_order == ["P1", "P2", "P3", "P4", "P5"]


def test_round_robin_requires_positive_quantum():
    procs = make_processes([("A", 0, 1)])
    with pytest.raises(ValueError):
        round_robin_scheduling(procs, Timeline(), 0)


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_every_job_completes_exactly_once(algorithm, sample_processes):
    run = execute(sample_processes, algorithm, 2)

    for p in run.processes:
        assert p.remaining_time == 0
        assert p.completion_time > 0
        assert p.completion_time - p.arrival_time == p.turnaround_time
        # No clamping happens on consistent input.
        assert p.turnaround_time - p.burst_time == p.waiting_time

    starts = [b.start_time for b in run.timeline]
    assert starts == sorted(starts)
    for previous, current in zip(run.timeline, run.timeline[1:]):
        assert previous.end_time <= current.start_time
    assert run.timeline[-1].end_time == max(p.completion_time for p in run.processes) == run.clock
    assert sum(b.duration for b in run.timeline) == sum(p.burst_time for p in run.processes)


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_runs_are_deterministic(algorithm, sample_processes):
    first = execute(sample_processes, algorithm, 3)
    second = execute(sample_processes, algorithm, 3)

    assert first.timeline == second.timeline
    assert first.processes == second.processes

from typing import List, Tuple

import pytest

from cpu_scheduler import JobTable, Process, Simulator


def make_processes(rows: List[Tuple]) -> List[Process]:
    """Build processes from ``(name, arrival, burst[, priority])`` rows."""
    table = JobTable()
    for row in rows:
        table.add(*row)
    return table.processes


def blocks(run) -> List[Tuple[str, int, int]]:
    return [(b.name, b.start_time, b.end_time) for b in run.timeline]


def completions(run) -> dict:
    return {p.name: p.completion_time for p in run.processes}


@pytest.fixture
def sample_processes() -> List[Process]:
    table = JobTable()
    table.load_sample_set()
    return table.processes


@pytest.fixture
def simulator() -> Simulator:
    sim = Simulator()
    sim.load_sample_set()
    return sim

"""
Per-process and aggregate timing metrics.

Formulas:
    Turnaround Time  = Completion - Arrival
    Waiting Time     = Turnaround - Burst
    Response Time    = First Start - Arrival
    CPU Utilization  = BusyTime / TotalTime
    Throughput       = NumberOfProcesses / TotalTime
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from .models import Process, Run

logger = logging.getLogger(__name__)


def calculate_times(processes: Iterable[Process]) -> None:
    """
    Fill in turnaround, waiting and response time for every finished process.

    Waiting and response time are floored at 0. A negative value means the
    inputs were inconsistent (e.g. a process started before it arrived);
    it is logged as a warning rather than raised.
    """
    for p in processes:
        p.turnaround_time = p.completion_time - p.arrival_time
        p.waiting_time = p.turnaround_time - p.burst_time
        p.response_time = p.start_time - p.arrival_time if p.started else 0

        if p.waiting_time < 0:
            logger.warning("%s: negative waiting time %d clamped to 0", p.name, p.waiting_time)
            p.waiting_time = 0
        if p.response_time < 0:
            logger.warning("%s: negative response time %d clamped to 0", p.name, p.response_time)
            p.response_time = 0


@dataclass(frozen=True)
class RunSummary:
    """Aggregate metrics for one run."""

    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    min_waiting: int
    max_waiting: int
    cpu_utilization: float
    throughput: float
    makespan: int


def summarize(run: Run) -> RunSummary:
    """Compute aggregate metrics from a finished run."""
    processes = run.processes
    if processes:
        count = len(processes)
        avg_waiting = sum(p.waiting_time for p in processes) / count
        avg_turnaround = sum(p.turnaround_time for p in processes) / count
        avg_response = sum(p.response_time for p in processes) / count
        min_waiting = min(p.waiting_time for p in processes)
        max_waiting = max(p.waiting_time for p in processes)
    else:
        avg_waiting = avg_turnaround = avg_response = 0.0
        min_waiting = max_waiting = 0

    total_time = run.clock
    busy_time = sum(block.duration for block in run.timeline)
    cpu_utilization = (busy_time / total_time) if total_time > 0 else 0.0
    throughput = (len(processes) / total_time) if total_time > 0 else 0.0

    return RunSummary(
        avg_waiting=avg_waiting,
        avg_turnaround=avg_turnaround,
        avg_response=avg_response,
        min_waiting=min_waiting,
        max_waiting=max_waiting,
        cpu_utilization=cpu_utilization,
        throughput=throughput,
        makespan=total_time,
    )

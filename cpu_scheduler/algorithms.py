"""
Scheduling algorithms.

Every algorithm has the same signature::

    algorithm(processes, timeline, quantum) -> clock

It runs the whole schedule over ``processes`` (in job-table order, with
derived fields already reset), writes ``start_time``, ``remaining_time`` and
``completion_time`` into each process, appends Gantt blocks to ``timeline``
and returns the clock value at which the last process finished.

Ties between equally eligible processes always go to the process that comes
first in the job table. Only Round Robin uses ``quantum``.
"""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from .models import Algorithm, Process
from .timeline import Timeline

logger = logging.getLogger(__name__)

SchedulingFunction = Callable[[List[Process], Timeline, Optional[int]], int]


# ---------------------------------------------------------------------------
# Batch dispatch: one block per process, run to completion
# ---------------------------------------------------------------------------


def _dispatch_to_completion(process: Process, timeline: Timeline, current_time: int) -> int:
    """Run ``process`` from ``current_time`` until it finishes; return the new clock."""
    process.start_time = current_time
    process.completion_time = current_time + process.burst_time
    process.remaining_time = 0
    timeline.append(process, current_time, process.completion_time)
    logger.debug("t=%d: %s runs to %d", current_time, process.name, process.completion_time)
    return process.completion_time


def fcfs_scheduling(processes: List[Process], timeline: Timeline, quantum: Optional[int] = None) -> int:
    """
    First-Come, First-Served (FCFS) scheduling.

    Concept:
        - Non-preemptive.
        - Processes are ordered once by arrival time; equal arrivals keep
          their job-table order.
        - That order is followed strictly. If the CPU becomes idle, time
          jumps forward to the arrival of the next process.

    The job table itself is not reordered.
    """
    current_time = 0
    for process in sorted(processes, key=lambda p: p.arrival_time):
        if current_time < process.arrival_time:
            current_time = process.arrival_time
        current_time = _dispatch_to_completion(process, timeline, current_time)
    return current_time


def _select_and_run(
    processes: List[Process],
    timeline: Timeline,
    key: Callable[[Process], int],
) -> int:
    """
    Shared loop for SJF and non-preemptive Priority.

    At each decision point the eligible process with the smallest ``key``
    runs to completion. When nothing has arrived yet the CPU idles for one
    tick and the selection is retried.
    """
    current_time = 0
    pending = list(processes)

    while pending:
        ready = [p for p in pending if p.arrival_time <= current_time]
        if not ready:
            current_time += 1
            continue

        # min() keeps the first of equal keys, i.e. the lowest table index.
        chosen = min(ready, key=key)
        current_time = _dispatch_to_completion(chosen, timeline, current_time)
        pending.remove(chosen)

    return current_time


def sjf_scheduling(processes: List[Process], timeline: Timeline, quantum: Optional[int] = None) -> int:
    """
    Shortest Job First (SJF) scheduling, non-preemptive.

    Concept:
        - Among the processes that have arrived and are waiting, always
          choose the one with the smallest CPU burst time.
        - Once dispatched, a process runs to completion.
        - If no process is ready, the CPU is idle until the next arrival.
    """
    return _select_and_run(processes, timeline, key=lambda p: p.burst_time)


def priority_scheduling(processes: List[Process], timeline: Timeline, quantum: Optional[int] = None) -> int:
    """
    Priority scheduling, non-preemptive.

    Convention:
        - Lower numeric priority value means *higher* priority.
          (Priority 1 is higher than 2.)

    Concept:
        - Among the ready processes, always choose the one with the
          highest priority and run it to completion.
        - If no process is ready, the CPU is idle until the next arrival.
    """
    return _select_and_run(processes, timeline, key=lambda p: p.priority)


# ---------------------------------------------------------------------------
# Tick dispatch: re-evaluate every time unit
# ---------------------------------------------------------------------------


def _run_tick_by_tick(
    processes: List[Process],
    timeline: Timeline,
    key: Callable[[Process], int],
) -> int:
    """
    Shared loop for SRTF and preemptive Priority.

    Time is simulated one unit at a time. At every tick the ready process
    with the smallest ``key`` runs for one unit, so a newly arrived process
    with a better key preempts the current one at its arrival time.
    Consecutive units of the same process are merged into a single block.
    """
    current_time = 0
    remaining = len(processes)

    while remaining:
        ready = [p for p in processes if p.arrival_time <= current_time and p.remaining_time > 0]
        if not ready:
            current_time += 1
            continue

        current = min(ready, key=key)
        if not current.started:
            current.start_time = current_time

        current.remaining_time -= 1
        timeline.append_or_extend(current, current_time, current_time + 1)
        current_time += 1

        if current.remaining_time == 0:
            current.completion_time = current_time
            remaining -= 1
            logger.debug("t=%d: %s completed", current_time, current.name)

    return current_time


def srtf_scheduling(processes: List[Process], timeline: Timeline, quantum: Optional[int] = None) -> int:
    """
    Shortest Remaining Time First (preemptive SJF) scheduling.

    Concept:
        - At every time unit, among the ready processes, choose the one
          with the smallest remaining burst time.
        - A newly arrived process with a shorter remaining time preempts
          the currently running one at its arrival time.
    """
    return _run_tick_by_tick(processes, timeline, key=lambda p: p.remaining_time)


def preemptive_priority_scheduling(
    processes: List[Process], timeline: Timeline, quantum: Optional[int] = None
) -> int:
    """
    Priority scheduling, preemptive.

    Concept:
        - At every time unit, among the ready processes, the one with the
          highest priority (smallest numeric value) is chosen.
        - A newly arrived process with a higher priority preempts the
          currently running one at its arrival time.
    """
    return _run_tick_by_tick(processes, timeline, key=lambda p: p.priority)


# ---------------------------------------------------------------------------
# Queue dispatch
# ---------------------------------------------------------------------------


def round_robin_scheduling(processes: List[Process], timeline: Timeline, quantum: Optional[int] = None) -> int:
    """
    Round Robin (RR) scheduling with a given time quantum.

    Concept:
        - Preemptive, time-sliced.
        - The ready queue starts with every process arriving at t = 0.
        - The process at the head runs for up to ``quantum`` units as one
          block. Processes that arrived by the end of that slice join the
          queue (in job-table order) before the preempted process goes back
          to the tail.
        - When the queue is empty, time jumps to the next arrival.

    A process is never queued twice at the same time.

    Raises:
        ValueError: ``quantum`` is missing or not positive. The simulator
                    substitutes its default before calling in here.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Time quantum must be a positive integer.")

    current_time = 0
    completed = 0
    ready_queue: Deque[Process] = deque()
    # Ids of processes that are queued or running and not yet finished.
    admitted = set()

    def admit_arrivals() -> None:
        for p in processes:
            if p.arrival_time <= current_time and p.id not in admitted and p.remaining_time > 0:
                ready_queue.append(p)
                admitted.add(p.id)

    for p in processes:
        if p.arrival_time == 0:
            ready_queue.append(p)
            admitted.add(p.id)

    while completed < len(processes):
        if not ready_queue:
            upcoming = [p.arrival_time for p in processes if p.arrival_time > current_time and p.remaining_time > 0]
            if not upcoming:
                break
            current_time = min(upcoming)
            admit_arrivals()
            continue

        current = ready_queue.popleft()
        if not current.started:
            current.start_time = current_time

        run_time = min(quantum, current.remaining_time)
        timeline.append(current, current_time, current_time + run_time)
        current_time += run_time
        current.remaining_time -= run_time

        admit_arrivals()

        if current.remaining_time == 0:
            current.completion_time = current_time
            admitted.discard(current.id)
            completed += 1
            logger.debug("t=%d: %s completed", current_time, current.name)
        else:
            ready_queue.append(current)

    return current_time


ALGORITHMS: Dict[Algorithm, SchedulingFunction] = {
    Algorithm.FCFS: fcfs_scheduling,
    Algorithm.SJF: sjf_scheduling,
    Algorithm.SRTF: srtf_scheduling,
    Algorithm.PRIORITY: priority_scheduling,
    Algorithm.ROUND_ROBIN: round_robin_scheduling,
    Algorithm.PREEMPTIVE_PRIORITY: preemptive_priority_scheduling,
}

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import SchedulerConfig
from .errors import CapacityExceeded, IndexOutOfRange, InvalidProcess
from .models import Process, color_for

logger = logging.getLogger(__name__)


# (name, arrival, burst, priority) for the reference demonstration set.
SAMPLE_PROCESSES: List[Tuple[str, int, int, int]] = [
    ("P1", 0, 6, 3),
    ("P2", 1, 4, 1),
    ("P3", 2, 3, 4),
    ("P4", 3, 2, 2),
    ("P5", 4, 5, 5),
]

# Predefined scenarios that illustrate a particular scheduling behavior,
# as lists of (arrival, burst, priority). Names are assigned P1, P2, ...
SCENARIOS: Dict[str, List[Tuple[int, int, int]]] = {
    "sample": [(arrival, burst, priority) for _, arrival, burst, priority in SAMPLE_PROCESSES],
    "simple-fcfs": [
        (0, 5, 2),
        (2, 3, 1),
        (4, 1, 3),
        (6, 7, 2),
    ],
    "priority-starvation": [
        # One low-priority long job arrives first, high-priority jobs keep arriving.
        (0, 20, 5),
        (2, 3, 1),
        (4, 4, 1),
        (6, 2, 1),
        (8, 1, 1),
    ],
    "sjf-preemption": [
        (0, 8, 1),
        (1, 4, 1),
        (2, 2, 1),
        (3, 1, 1),
    ],
}


class JobTable:
    """
    Ordered, capacity-bounded list of processes.

    The position of a process in the table is its identity for tie-breaks:
    ``Process.id`` always equals ``index + 1``. Only the static inputs
    (name, arrival, burst, priority) survive :meth:`reset`.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None) -> None:
        self.config = config or SchedulerConfig()
        self._processes: List[Process] = []

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._processes)

    def __getitem__(self, index: int) -> Process:
        return self._processes[index]

    @property
    def processes(self) -> List[Process]:
        """The live process records, in table order."""
        return self._processes

    @property
    def is_full(self) -> bool:
        return len(self._processes) >= self.config.capacity

    def add(
        self,
        name: Optional[str],
        arrival_time: int,
        burst_time: int,
        priority: int = 5,
    ) -> Process:
        """
        Append a new process after validating its attributes.

        Raises:
            CapacityExceeded: the table already holds ``config.capacity`` rows.
            InvalidProcess:   burst time is not positive or arrival is negative.

        Priority is clamped into the configured range rather than rejected.
        A blank name defaults to ``P<n>``.
        """
        if self.is_full:
            raise CapacityExceeded(self.config.capacity)
        if burst_time <= 0:
            raise InvalidProcess("Burst time must be > 0.")
        if arrival_time < 0:
            raise InvalidProcess("Arrival time must be >= 0.")

        process_id = len(self._processes) + 1
        clamped = self.config.clamp_priority(priority)
        if clamped != priority:
            logger.debug("Clamped priority %d to %d", priority, clamped)

        process = Process(
            name=(name or "").strip() or f"P{process_id}",
            id=process_id,
            arrival_time=arrival_time,
            burst_time=burst_time,
            priority=clamped,
            color=color_for(process_id),
        )
        self._processes.append(process)
        return process

    def remove(self, index: int) -> Process:
        """Remove the process at ``index``; later rows shift down one place."""
        if not 0 <= index < len(self._processes):
            raise IndexOutOfRange(index, len(self._processes))
        removed = self._processes.pop(index)
        self._renumber()
        return removed

    def clear(self) -> None:
        self._processes.clear()

    def reset(self) -> None:
        """Reset the derived fields of every process."""
        for process in self._processes:
            process.reset()

    def load(self, rows: Sequence[Tuple[str, int, int, int]]) -> None:
        """
        Replace the table contents with ``(name, arrival, burst, priority)`` rows.

        Rows are validated up front so a bad row leaves the table untouched.
        """
        staging = JobTable(self.config)
        for name, arrival, burst, priority in rows:
            staging.add(name, arrival, burst, priority)
        self._processes = staging._processes

    def load_sample_set(self) -> None:
        self.load(SAMPLE_PROCESSES)

    def load_scenario(self, scenario: str) -> None:
        try:
            rows = SCENARIOS[scenario]
        except KeyError:
            raise KeyError(f"Unknown scenario {scenario!r} (choose from {', '.join(SCENARIOS)})") from None
        self.load(
            [(f"P{i}", arrival, burst, priority) for i, (arrival, burst, priority) in enumerate(rows, start=1)]
        )

    def _renumber(self) -> None:
        for index, process in enumerate(self._processes, start=1):
            process.id = index
            process.color = color_for(index)

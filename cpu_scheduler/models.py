"""
Data model shared by the job table, the scheduling algorithms and the
presentation layer.

- Process:       one job with its static inputs and simulation-derived fields.
- TimelineBlock: one contiguous CPU execution interval (Gantt bar).
- Run:           the outcome of running one algorithm over the job table.
- Algorithm:     the closed set of supported scheduling policies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


# Bright accents on dark background, cycled by process id.
PROCESS_COLORS = [
    "#22C55E",  # emerald
    "#3B82F6",  # blue
    "#EAB308",  # amber
    "#EC4899",  # pink
    "#F97316",  # orange
    "#8B5CF6",  # violet
    "#06B6D4",  # cyan
    "#FACC15",  # yellow
    "#EF4444",  # red
    "#14B8A6",  # teal
]

NOT_STARTED = -1


def color_for(process_id: int) -> str:
    """Return the display color assigned to a 1-based process id."""
    return PROCESS_COLORS[(process_id - 1) % len(PROCESS_COLORS)]


class Algorithm(Enum):
    """Supported CPU scheduling policies."""

    FCFS = "FCFS"
    SJF = "SJF"
    SRTF = "SRTF"
    PRIORITY = "PRIORITY"
    ROUND_ROBIN = "ROUND_ROBIN"
    PREEMPTIVE_PRIORITY = "PREEMPTIVE_PRIORITY"

    @property
    def label(self) -> str:
        return _ALGORITHM_LABELS[self]

    @property
    def preemptive(self) -> bool:
        return self in (
            Algorithm.SRTF,
            Algorithm.ROUND_ROBIN,
            Algorithm.PREEMPTIVE_PRIORITY,
        )

    @classmethod
    def parse(cls, text: str) -> "Algorithm":
        """
        Resolve an algorithm from its tag, case-insensitively.

        Dashes and spaces are accepted in place of underscores and "RR" is
        understood as Round Robin, so "round-robin" and "rr" both work.
        """
        key = text.strip().upper().replace("-", "_").replace(" ", "_")
        if key == "RR":
            return cls.ROUND_ROBIN
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown algorithm {text!r} (choose from {choices})") from None


_ALGORITHM_LABELS = {
    Algorithm.FCFS: "First-Come, First-Served (FCFS)",
    Algorithm.SJF: "Shortest Job First (SJF, non-preemptive)",
    Algorithm.SRTF: "Shortest Remaining Time First (SRTF)",
    Algorithm.PRIORITY: "Priority Scheduling (non-preemptive)",
    Algorithm.ROUND_ROBIN: "Round Robin (RR)",
    Algorithm.PREEMPTIVE_PRIORITY: "Priority Scheduling (preemptive)",
}


@dataclass
class Process:
    """
    Represents a single process for CPU scheduling.

    Attributes:
        name:            A human-readable label (e.g. "P1").
        id:              1-based position of the process in the job table.
        arrival_time:    The tick at which the process becomes eligible.
        burst_time:      The total CPU time required by the process.
        priority:        Process priority (lower number = higher priority).
        color:           Display color used by the Gantt chart.

    The remaining fields are derived by a simulation run and are reset
    before every run:

        remaining_time:  CPU time still owed to the process.
        start_time:      Tick of the first dispatch, or -1 if never run.
        completion_time: Tick at which the last unit of work finished.
        waiting_time, turnaround_time, response_time: see metrics.py.
    """

    name: str
    id: int
    arrival_time: int
    burst_time: int
    priority: int = 5
    color: str = PROCESS_COLORS[0]
    remaining_time: int = 0
    start_time: int = NOT_STARTED
    completion_time: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0
    response_time: int = NOT_STARTED

    def __post_init__(self) -> None:
        if self.remaining_time == 0 and self.completion_time == 0:
            self.remaining_time = self.burst_time

    @property
    def started(self) -> bool:
        return self.start_time != NOT_STARTED

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def reset(self) -> None:
        """Forget everything a previous run derived, keep the static inputs."""
        self.remaining_time = self.burst_time
        self.start_time = NOT_STARTED
        self.completion_time = 0
        self.waiting_time = 0
        self.turnaround_time = 0
        self.response_time = NOT_STARTED

    def snapshot(self) -> "Process":
        return replace(self)

    def fresh_copy(self) -> "Process":
        """Copy the static inputs into a new, never-simulated process."""
        return Process(
            name=self.name,
            id=self.id,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
            color=self.color,
        )


@dataclass
class TimelineBlock:
    """One contiguous slice of CPU time held by a single process."""

    process_id: int
    name: str
    start_time: int
    end_time: int
    color: str = PROCESS_COLORS[0]

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class Run:
    """
    Result of one algorithm execution.

    ``processes`` and ``timeline`` are snapshots: later runs on the same
    simulator never mutate them.
    """

    algorithm: Algorithm
    processes: List[Process] = field(default_factory=list)
    timeline: List[TimelineBlock] = field(default_factory=list)
    clock: int = 0
    quantum: Optional[int] = None

    def process_named(self, name: str) -> Process:
        for process in self.processes:
            if process.name == name:
                return process
        raise KeyError(name)

    @property
    def execution_order(self) -> List[str]:
        """Process names in the order their timeline blocks appear."""
        return [block.name for block in self.timeline]

from dataclasses import dataclass


DEFAULT_CAPACITY = 50
DEFAULT_QUANTUM = 2
MIN_PRIORITY = 1
MAX_PRIORITY = 10


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Tunable limits shared by the job table and the simulator.

    Attributes:
        capacity:        Maximum number of processes the job table accepts.
        default_quantum: Round Robin quantum used when none (or an invalid
                         one) is supplied.
        min_priority:    Most urgent priority value; smaller inputs are clamped.
        max_priority:    Least urgent priority value; larger inputs are clamped.
    """

    capacity: int = DEFAULT_CAPACITY
    default_quantum: int = DEFAULT_QUANTUM
    min_priority: int = MIN_PRIORITY
    max_priority: int = MAX_PRIORITY

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("capacity must be strictly positive")
        if self.default_quantum <= 0:
            raise ValueError("default_quantum must be strictly positive")
        if self.min_priority > self.max_priority:
            raise ValueError("min_priority cannot exceed max_priority")

    def clamp_priority(self, priority: int) -> int:
        return max(self.min_priority, min(self.max_priority, priority))

"""Exceptions raised by the job table and the simulation controller."""


class SchedulerError(Exception):
    """Base class for every recoverable simulator error."""


class CapacityExceeded(SchedulerError):
    """The job table is already holding its maximum number of processes."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Maximum number of processes reached ({capacity}).")
        self.capacity = capacity


class IndexOutOfRange(SchedulerError, IndexError):
    """A delete targeted a row that does not exist."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"No process at index {index} (table holds {size}).")
        self.index = index
        self.size = size


class NoProcesses(SchedulerError):
    """A simulation was requested on an empty job table."""

    def __init__(self) -> None:
        super().__init__("No processes available! Add some processes first.")


class InvalidProcess(SchedulerError, ValueError):
    """Process attributes failed validation (negative arrival, empty burst)."""

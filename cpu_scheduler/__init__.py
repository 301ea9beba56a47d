"""CPU scheduling simulator: six classic policies, one timeline and metrics model."""

from .config import SchedulerConfig
from .errors import CapacityExceeded, IndexOutOfRange, InvalidProcess, NoProcesses, SchedulerError
from .job_table import JobTable
from .metrics import RunSummary, calculate_times, summarize
from .models import Algorithm, Process, Run, TimelineBlock
from .simulator import Simulator, execute, resolve_quantum
from .timeline import Timeline

__all__ = [
    "Algorithm",
    "CapacityExceeded",
    "IndexOutOfRange",
    "InvalidProcess",
    "JobTable",
    "NoProcesses",
    "Process",
    "Run",
    "RunSummary",
    "SchedulerConfig",
    "SchedulerError",
    "Simulator",
    "Timeline",
    "TimelineBlock",
    "calculate_times",
    "execute",
    "resolve_quantum",
    "summarize",
]

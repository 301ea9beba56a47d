"""
Simulation controller.

The :class:`Simulator` owns the job table and is the only place that runs
algorithms over it. Each :meth:`Simulator.run` is one synchronous step:
reset derived fields, run the selected algorithm on a fresh timeline,
compute metrics, and hand back a :class:`~cpu_scheduler.models.Run`
snapshot.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .algorithms import ALGORITHMS
from .config import SchedulerConfig
from .errors import NoProcesses
from .job_table import JobTable
from .metrics import RunSummary, calculate_times, summarize
from .models import Algorithm, Process, Run
from .timeline import Timeline

logger = logging.getLogger(__name__)

QuantumInput = Union[int, str, None]


def resolve_quantum(value: QuantumInput, default: int) -> int:
    """
    Turn a user-supplied time quantum into a usable one.

    Missing, unparsable and non-positive values are not errors: they fall
    back to ``default`` and a warning is logged so the substitution is
    visible.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        quantum = int(value)
    except (TypeError, ValueError):
        logger.warning("Unparsable time quantum %r, using default %d", value, default)
        return default
    if quantum <= 0:
        logger.warning("Non-positive time quantum %d, using default %d", quantum, default)
        return default
    return quantum


def execute(
    processes: Sequence[Process],
    algorithm: Algorithm,
    quantum: int,
) -> Run:
    """
    Run ``algorithm`` over ``processes`` in place and return a snapshot.

    Derived fields are reset first, so the same records can be simulated
    repeatedly. ``quantum`` is only passed through for Round Robin.
    """
    records = list(processes)
    for p in records:
        p.reset()

    timeline = Timeline()
    effective_quantum = quantum if algorithm is Algorithm.ROUND_ROBIN else None
    clock = ALGORITHMS[algorithm](records, timeline, effective_quantum)
    calculate_times(records)

    run = Run(
        algorithm=algorithm,
        processes=[p.snapshot() for p in records],
        timeline=list(timeline.blocks),
        clock=clock,
        quantum=effective_quantum,
    )
    logger.debug(
        "%s finished %d processes at t=%d in %d blocks",
        algorithm.value,
        len(records),
        clock,
        len(run.timeline),
    )
    return run


class Simulator:
    """
    Facade used by the presentation layer.

    Static process inputs persist across runs until edited; every derived
    field is recomputed from scratch by :meth:`run`.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None) -> None:
        self.config = config or SchedulerConfig()
        self.table = JobTable(self.config)
        self.last_run: Optional[Run] = None

    # ------------------------------------------------------------------#
    # Job table operations                                              #
    # ------------------------------------------------------------------#

    def add_process(
        self,
        name: Optional[str],
        arrival_time: int,
        burst_time: int,
        priority: int = 5,
    ) -> Process:
        return self.table.add(name, arrival_time, burst_time, priority)

    def delete_process(self, index: int) -> Process:
        return self.table.remove(index)

    def load_sample_set(self) -> None:
        self.table.load_sample_set()
        self.last_run = None

    def load_scenario(self, scenario: str) -> None:
        self.table.load_scenario(scenario)
        self.last_run = None

    def clear(self) -> None:
        self.table.clear()
        self.last_run = None

    def reset(self) -> None:
        """Clear derived fields and the last timeline, keep the process list."""
        self.table.reset()
        self.last_run = None

    # ------------------------------------------------------------------#
    # Simulation                                                        #
    # ------------------------------------------------------------------#

    def run(self, algorithm: Union[Algorithm, str], quantum: QuantumInput = None) -> Run:
        """
        Simulate ``algorithm`` over the current job table.

        Args:
            algorithm: An :class:`Algorithm` or its tag (e.g. "SRTF", "rr").
            quantum:   Round Robin time quantum; ignored by other algorithms.
                       Invalid values fall back to ``config.default_quantum``.

        Raises:
            NoProcesses: the job table is empty. Nothing is modified.
        """
        if isinstance(algorithm, str):
            algorithm = Algorithm.parse(algorithm)
        if not len(self.table):
            raise NoProcesses()

        run = execute(self.table.processes, algorithm, self._quantum(algorithm, quantum))
        self.last_run = run
        return run

    def compare(self, quantum: QuantumInput = None) -> List[Tuple[Run, RunSummary]]:
        """
        Run every algorithm on copies of the job table.

        The table's own derived fields are left as they were.
        """
        if not len(self.table):
            raise NoProcesses()
        results = []
        for algorithm in Algorithm:
            copies = [p.fresh_copy() for p in self.table]
            run = execute(copies, algorithm, self._quantum(algorithm, quantum))
            results.append((run, summarize(run)))
        return results

    def _quantum(self, algorithm: Algorithm, quantum: QuantumInput) -> int:
        if algorithm is not Algorithm.ROUND_ROBIN:
            return self.config.default_quantum
        return resolve_quantum(quantum, self.config.default_quantum)

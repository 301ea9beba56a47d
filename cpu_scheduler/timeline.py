from typing import Iterator, List, Sequence, Tuple

from .models import Process, TimelineBlock


class Timeline:
    """
    Ordered list of Gantt blocks built up while an algorithm runs.

    Blocks are appended in non-decreasing start order and never overlap.
    Idle time is not stored as blocks; see :meth:`idle_gaps`.
    """

    def __init__(self) -> None:
        self.blocks: List[TimelineBlock] = []

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[TimelineBlock]:
        return iter(self.blocks)

    def clear(self) -> None:
        self.blocks.clear()

    def append(self, process: Process, start: int, end: int) -> TimelineBlock:
        """Push a new block for ``process`` spanning ``[start, end)``."""
        if end <= start:
            raise ValueError(f"Empty timeline block for {process.name}: {start}-{end}")
        if self.blocks and start < self.blocks[-1].end_time:
            raise ValueError(
                f"Block for {process.name} at {start} overlaps the previous block "
                f"ending at {self.blocks[-1].end_time}"
            )
        block = TimelineBlock(
            process_id=process.id,
            name=process.name,
            start_time=start,
            end_time=end,
            color=process.color,
        )
        self.blocks.append(block)
        return block

    def append_or_extend(self, process: Process, tick_start: int, tick_end: int) -> TimelineBlock:
        """
        Record that ``process`` ran during ``[tick_start, tick_end)``.

        Back-to-back ticks of the same process are merged into a single bar,
        so the tick-driven algorithms do not emit one block per time unit.
        """
        if self.blocks:
            last = self.blocks[-1]
            if last.process_id == process.id and last.end_time == tick_start:
                last.end_time = tick_end
                return last
        return self.append(process, tick_start, tick_end)

    @property
    def end_time(self) -> int:
        return self.blocks[-1].end_time if self.blocks else 0

    @property
    def busy_time(self) -> int:
        return sum(block.duration for block in self.blocks)

    def idle_gaps(self) -> List[Tuple[int, int]]:
        return idle_gaps(self.blocks)


def idle_gaps(blocks: Sequence[TimelineBlock]) -> List[Tuple[int, int]]:
    """Intervals, starting from t = 0, during which no process held the CPU."""
    gaps: List[Tuple[int, int]] = []
    cursor = 0
    for block in blocks:
        if block.start_time > cursor:
            gaps.append((cursor, block.start_time))
        cursor = block.end_time
    return gaps

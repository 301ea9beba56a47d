"""Plain-text rendering of runs, used by the command-line interface."""

from typing import List, Optional, Sequence, Tuple

from .metrics import RunSummary, summarize
from .models import Run

LEGEND = (
    "Legend:\n"
    "AT = Arrival Time\n"
    "BT = Burst Time\n"
    "CT = Completion Time\n"
    "TAT = Turnaround Time\n"
    "WT = Waiting Time\n"
    "RT = Response Time\n"
)


def format_timeline(run: Run) -> str:
    """One-line Gantt chart, e.g. ``| P1 0-6 | idle 6-8 | P2 8-12 |``."""
    parts: List[str] = []
    cursor = 0
    for block in run.timeline:
        if block.start_time > cursor:
            parts.append(f"idle {cursor}-{block.start_time}")
        parts.append(f"{block.name} {block.start_time}-{block.end_time}")
        cursor = block.end_time
    return "| " + " | ".join(parts) + " |" if parts else "(empty)"


def format_statistics(run: Run, summary: Optional[RunSummary] = None) -> str:
    summary = summary or summarize(run)
    header = f"SCHEDULING STATISTICS: {run.algorithm.label}"
    if run.quantum is not None:
        header += f" (quantum = {run.quantum})"

    rows = [("Process", "AT", "BT", "CT", "TAT", "WT", "RT")]
    for p in run.processes:
        rows.append(
            (
                p.name,
                str(p.arrival_time),
                str(p.burst_time),
                str(p.completion_time),
                str(p.turnaround_time),
                str(p.waiting_time),
                str(p.response_time),
            )
        )

    lines = [header, "=" * len(header), "", "Process Details:"]
    lines.extend(_table(rows))
    lines.extend(
        [
            "",
            "Gantt Chart:",
            format_timeline(run),
            "",
            "AVERAGES:",
            f"Average Turnaround Time: {summary.avg_turnaround:.2f}",
            f"Average Waiting Time: {summary.avg_waiting:.2f}",
            f"Average Response Time: {summary.avg_response:.2f}",
            f"CPU Utilization: {summary.cpu_utilization * 100:.2f}%",
            f"Throughput: {summary.throughput:.3f} proc/unit",
            "",
            LEGEND,
        ]
    )
    return "\n".join(lines)


def format_comparison(results: Sequence[Tuple[Run, RunSummary]]) -> str:
    rows = [("Algorithm", "Avg Waiting", "Avg Turnaround", "Avg Response", "CPU Util (%)", "Throughput")]
    for run, summary in results:
        rows.append(
            (
                run.algorithm.value,
                f"{summary.avg_waiting:.2f}",
                f"{summary.avg_turnaround:.2f}",
                f"{summary.avg_response:.2f}",
                f"{summary.cpu_utilization * 100:.2f}",
                f"{summary.throughput:.3f}",
            )
        )
    return "\n".join(_table(rows))


def _table(rows: Sequence[Sequence[str]]) -> List[str]:
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    lines = []
    for index, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if index == 0:
            lines.append("  ".join("-" * width for width in widths))
    return lines

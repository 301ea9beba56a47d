import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .errors import SchedulerError
from .job_table import SCENARIOS
from .models import Algorithm
from .report import format_comparison, format_statistics
from .simulator import Simulator


def parse_process(raw: str) -> Tuple[str, int, int, int]:
    """Parse ``NAME:ARRIVAL:BURST[:PRIORITY]`` (priority defaults to 5)."""
    parts = [item.strip() for item in raw.split(":")]
    if len(parts) not in (3, 4):
        raise argparse.ArgumentTypeError(f"expected NAME:ARRIVAL:BURST[:PRIORITY], got {raw!r}")
    try:
        numbers = [int(item) for item in parts[1:]]
    except ValueError:
        raise argparse.ArgumentTypeError(f"arrival, burst and priority must be integers in {raw!r}") from None
    if len(numbers) == 2:
        numbers.append(5)
    arrival, burst, priority = numbers
    return parts[0], arrival, burst, priority


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cpu-scheduler",
        description="Simulate CPU scheduling algorithms. Without --algorithm or --compare the GUI is opened.",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        type=Algorithm.parse,
        help="Algorithm to run: " + ", ".join(a.value for a in Algorithm) + " (RR is accepted).",
    )
    parser.add_argument("--compare", action="store_true", help="Run all six algorithms and print a comparison.")
    parser.add_argument("--quantum", "-q", default=None, help="Round Robin time quantum (invalid values use the default).")
    parser.add_argument("--sample", action="store_true", help="Load the five-process reference set.")
    parser.add_argument("--scenario", choices=sorted(SCENARIOS), help="Load a predefined scenario.")
    parser.add_argument(
        "--process",
        "-p",
        dest="processes",
        action="append",
        type=parse_process,
        default=[],
        metavar="NAME:ARRIVAL:BURST[:PRIORITY]",
        help="Add a process (repeatable).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log dispatch decisions.")
    args = parser.parse_args(argv)
    args.parser = parser
    return args


def build_simulator(args: argparse.Namespace) -> Simulator:
    simulator = Simulator()
    if args.sample:
        simulator.load_sample_set()
    elif args.scenario:
        simulator.load_scenario(args.scenario)
    for name, arrival, burst, priority in args.processes:
        simulator.add_process(name, arrival, burst, priority)
    return simulator


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        simulator = build_simulator(args)
    except SchedulerError as exc:
        args.parser.error(str(exc))

    if args.algorithm is None and not args.compare:
        from .gui import main as gui_main

        gui_main(simulator)
        return

    output: List[str] = []
    try:
        if args.algorithm is not None:
            output.append(format_statistics(simulator.run(args.algorithm, args.quantum)))
        if args.compare:
            output.append(format_comparison(simulator.compare(args.quantum)))
    except SchedulerError as exc:
        args.parser.error(str(exc))

    sys.stdout.write("\n".join(output) + "\n")


if __name__ == "__main__":
    main()

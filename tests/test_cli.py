import argparse

import pytest

from cpu_scheduler import Algorithm, execute, summarize
from cpu_scheduler.__main__ import main, parse_process
from cpu_scheduler.report import format_comparison, format_statistics, format_timeline

from conftest import make_processes


def test_parse_process():
    assert parse_process("Shell:1:4") == ("Shell", 1, 4, 5)
    assert parse_process("Db:0:6:2") == ("Db", 0, 6, 2)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_process("Db:0")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_process("Db:zero:6")


def test_format_timeline_marks_idle_gaps():
    procs = make_processes([("A", 3, 2), ("B", 10, 1)])
    run = execute(procs, Algorithm.SJF, 2)

    assert format_timeline(run) == "| idle 0-3 | A 3-5 | idle 5-10 | B 10-11 |"


def test_format_statistics(sample_processes):
    text = format_statistics(execute(sample_processes, Algorithm.ROUND_ROBIN, 2))

    assert text.startswith("SCHEDULING STATISTICS: Round Robin (RR) (quantum = 2)")
    assert "Process  AT  BT  CT  TAT  WT  RT" in text
    assert "P4       3   2   10  7    5   5" in text
    assert "Average Turnaround Time: 13.20" in text


def test_format_comparison(sample_processes):
    results = []
    for algorithm in Algorithm:
        run = execute([p.fresh_copy() for p in sample_processes], algorithm, 2)
        results.append((run, summarize(run)))

    lines = format_comparison(results).splitlines()
    assert lines[0].split() == [
        "Algorithm",
        "Avg",
        "Waiting",
        "Avg",
        "Turnaround",
        "Avg",
        "Response",
        "CPU",
        "Util",
        "(%)",
        "Throughput",
    ]
    assert len(lines) == 2 + len(Algorithm)
    assert lines[2].startswith("FCFS ")


def test_cli_runs_sample_set(capsys):
    main(["--sample", "--algorithm", "sjf"])
    out = capsys.readouterr().out

    assert "Shortest Job First" in out
    assert "| P1 0-6 | P4 6-8 | P3 8-11 | P2 11-15 | P5 15-20 |" in out
    assert "Average Waiting Time: 6.00" in out


def test_cli_custom_processes_and_invalid_quantum(capsys):
    main(["-p", "A:0:5", "-p", "B:0:3", "-a", "rr", "-q", "nope"])
    out = capsys.readouterr().out

    assert "(quantum = 2)" in out
    assert "| A 0-2 | B 2-4 | A 4-6 | B 6-7 | A 7-8 |" in out


def test_cli_compare(capsys):
    main(["--scenario", "simple-fcfs", "--compare"])
    out = capsys.readouterr().out

    for algorithm in Algorithm:
        assert algorithm.value in out


def test_cli_without_processes_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--algorithm", "fcfs"])
    assert excinfo.value.code == 2
    assert "No processes available" in capsys.readouterr().err


def test_cli_rejects_invalid_process(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", "A:0:0", "-a", "fcfs"])
    assert excinfo.value.code == 2
    assert "Burst time must be > 0" in capsys.readouterr().err

"""Synthetic workloads that burn CPU time or write output for a while."""

from __future__ import annotations

import os
import re
import sys
import time
from typing import Callable, Optional, Sequence

from mcpsched.commands import UsageError

Clock = Callable[[], float]

CPU_DEFAULT_SECONDS = 30
IO_DEFAULT_SECONDS = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_seconds(argv: Sequence[str], default: int) -> int:
    """Return the value of ``-seconds N`` or ``default``.

    The first ``-seconds`` ends parsing; any other flag before it is an error.
    """
    for position, arg in enumerate(argv):
        if arg != "-seconds":
            raise UsageError(f"Illegal flag: `{arg}'")
        if position + 1 >= len(argv):
            raise UsageError("Missing value for `-seconds'")
        return _atoi(argv[position + 1])
    return default


def cpu_bound(seconds: float, clock: Clock = time.process_time) -> int:
    """Spin until ``seconds`` of ``clock`` time pass; return the rounds run."""
    start = clock()
    rounds = 0
    while True:
        value = 0
        for _ in range(100):
            value = value + value * 2
        rounds += 1
        if clock() - start >= seconds:
            return rounds


def io_bound(
    seconds: float,
    path: str | os.PathLike = os.devnull,
    clock: Clock = time.process_time,
) -> int:
    """Write lines to ``path`` until ``seconds`` of ``clock`` time pass.

    Returns the number of lines written.
    """
    line = "A string! " * 100 + "\n"
    lines = 0
    with open(path, "w") as stream:
        start = clock()
        while True:
            stream.write(line)
            lines += 1
            if clock() - start >= seconds:
                return lines


def _run(argv: Optional[Sequence[str]], default: int, action: str, work: Callable[[int], int]) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        seconds = parse_seconds(args, default)
    except UsageError as error:
        print(error, file=sys.stderr)
        return 1
    pid = os.getpid()
    print(f"Process: {pid} - Begining {action}.", flush=True)
    work(seconds)
    print(f"Process: {pid} - Finished.", flush=True)
    return 0


def cpubound_main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point for the CPU-bound workload."""
    return _run(argv, CPU_DEFAULT_SECONDS, "calculation", cpu_bound)


def iobound_main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point for the I/O-bound workload."""
    return _run(argv, IO_DEFAULT_SECONDS, "to write to file", io_bound)
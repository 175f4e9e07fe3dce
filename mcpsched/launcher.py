"""Starting a batch of commands, optionally gated and driven by signals."""

from __future__ import annotations

import os
import signal
import sys
import time
from typing import Iterable, Optional, Sequence

from mcpsched.commands import UsageError, parse_input_argument, read_commands

_GATE = {signal.SIGUSR1}


def _exec_child(argv: Sequence[str]) -> None:
    """Replace the current (forked) process with ``argv``; never returns."""
    try:
        os.execvp(argv[0], list(argv))
    except BaseException:
        pass
    try:
        os.write(2, b"Execvp failed\n")
    finally:
        os._exit(255)


def spawn(argv: Sequence[str]) -> int:
    """Fork a child that runs ``argv`` at once; return its pid."""
    pid = os.fork()
    if pid == 0:
        _exec_child(argv)
    return pid


def spawn_gated(argv: Sequence[str]) -> int:
    """Fork a child that waits for SIGUSR1 before running ``argv``."""
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, _GATE)
    try:
        pid = os.fork()
    except BaseException:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)
        raise
    if pid == 0:
        try:
            signal.sigwait(_GATE)
        except BaseException:
            os._exit(255)
        _exec_child(argv)
    signal.pthread_sigmask(signal.SIG_SETMASK, previous)
    return pid


def signal_all(processes: Iterable[int], signum: int) -> None:
    """Send ``signum`` to every pid, ignoring ones that are gone."""
    for pid in processes:
        try:
            os.kill(pid, signum)
        except ProcessLookupError:
            pass


def release(processes: Iterable[int]) -> None:
    """Let gated children go on to run their commands."""
    signal_all(processes, signal.SIGUSR1)


def wait_all(processes: Iterable[int]) -> list[int]:
    """Wait for each pid in order; return exit codes (negative for signals)."""
    codes = []
    for pid in processes:
        _, status = os.waitpid(pid, 0)
        codes.append(os.waitstatus_to_exitcode(status))
    return codes


def run_all(commands: Iterable[Sequence[str]]) -> list[int]:
    """Start every command concurrently and wait for all of them."""
    processes = [spawn(argv) for argv in commands]
    return wait_all(processes)


def run_with_signals(commands: Iterable[Sequence[str]], pause: float = 1.0) -> list[int]:
    """Start commands gated, release them, stop and continue them, then wait."""
    processes = [spawn_gated(argv) for argv in commands]
    release(processes)
    time.sleep(pause)
    signal_all(processes, signal.SIGSTOP)
    time.sleep(pause)
    signal_all(processes, signal.SIGCONT)
    return wait_all(processes)


def _main(argv: Optional[Sequence[str]], program: str, runner) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = parse_input_argument(args, program)
    except UsageError as error:
        print(error, file=sys.stderr)
        return 1
    try:
        commands = read_commands(path)
    except OSError:
        print("Cannot open input file", file=sys.stderr)
        return 255
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        runner(commands)
    except OSError:
        print("Fork failed", file=sys.stderr)
        return 255
    return 0


def launch_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run every command in the input file concurrently."""
    return _main(argv, "launch", run_all)


def signals_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the input file's commands under start, stop and continue signals."""
    return _main(argv, "signals", run_with_signals)
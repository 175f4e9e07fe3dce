"""Round-robin time slicing of child processes with SIGSTOP and SIGCONT."""

from __future__ import annotations

import os
import signal
import sys
import time
from typing import Iterable, Optional, Sequence, TextIO, Union

from mcpsched.commands import UsageError, parse_input_argument, read_commands
from mcpsched.launcher import release, signal_all, spawn_gated
from mcpsched.procinfo import NAME_LENGTH, ProcessInfo


def next_alive(exited: Sequence[bool], current: int) -> int:
    """Return the index after ``current``, cyclically, that has not exited.

    When every other entry has exited the search stops back at ``current``.
    """
    total = len(exited)
    index = current
    while True:
        index = (index + 1) % total
        if not exited[index] or index == current:
            return index


class RoundRobinScheduler:
    """Give each child process a fixed time slice in turn.

    With ``monitor`` set, each resumed process is reported after being given
    one quantum to settle, and exits are reported as they are reaped.
    """

    def __init__(
        self,
        processes: Iterable[Union[int, ProcessInfo]],
        quantum: float = 1.0,
        monitor: bool = False,
        out: Optional[TextIO] = None,
    ) -> None:
        self.processes = [
            entry if isinstance(entry, ProcessInfo) else ProcessInfo(pid=entry)
            for entry in processes
        ]
        self.quantum = quantum
        self.monitor = monitor
        self.out = out if out is not None else sys.stdout
        self.current = 0
        self._reaped: set[int] = set()

    def _say(self, text: str) -> None:
        print(text, file=self.out, flush=True)

    @staticmethod
    def _send(pid: int, signum: int) -> None:
        try:
            os.kill(pid, signum)
        except ProcessLookupError:
            pass

    def switch(self) -> bool:
        """Stop the running process and continue the next live one.

        Returns whether a process was resumed.
        """
        if not self.processes:
            return False
        running = self.processes[self.current]
        if not running.exited:
            if self.monitor:
                running.refresh()
            self._send(running.pid, signal.SIGSTOP)
        self.current = next_alive([entry.exited for entry in self.processes], self.current)
        chosen = self.processes[self.current]
        if chosen.exited:
            return False
        if self.monitor:
            self.out.write("\n\n")
            self._say(f"===== Resuming process {chosen.pid} =====")
        self._send(chosen.pid, signal.SIGCONT)
        if self.monitor:
            time.sleep(self.quantum)
            chosen.refresh()
            self._say(chosen.format())
        return True

    def mark_exited(self, pid: int, returncode: int) -> bool:
        """Record that ``pid`` ended with ``returncode`` (negative for a signal).

        Returns ``False`` for a pid that is unknown or already recorded.
        """
        for entry in self.processes:
            if entry.pid == pid and pid not in self._reaped:
                self._reaped.add(pid)
                entry.exited = True
                if returncode >= 0:
                    entry.status = returncode
                    if self.monitor:
                        self._say(f"Process {pid} exited with status {returncode}")
                elif self.monitor:
                    self._say(f"Process {pid} terminated abnormally")
                return True
        return False

    def _arm(self) -> None:
        signal.setitimer(signal.ITIMER_REAL, self.quantum)

    def _on_alarm(self, signum, frame) -> None:
        if self.switch():
            self._arm()

    def run(self) -> list[int]:
        """Release gated children, slice time between them until all exit.

        Returns each process's exit status in table order.
        """
        if not self.processes:
            return []
        pids = [entry.pid for entry in self.processes]
        release(pids)
        signal_all(pids, signal.SIGSTOP)
        previous = signal.signal(signal.SIGALRM, self._on_alarm)
        try:
            if self.monitor:
                for entry in self.processes:
                    entry.refresh()
                self._say(f"===== Starting execution with process {pids[0]} =====")
            self.current = 0
            self._send(pids[0], signal.SIGCONT)
            self._arm()
            while len(self._reaped) < len(self.processes):
                try:
                    pid, status = os.waitpid(-1, 0)
                except ChildProcessError:
                    break
                self.mark_exited(pid, os.waitstatus_to_exitcode(status))
        finally:
            signal.setitimer(signal.ITIMER_REAL, 0)
            signal.signal(signal.SIGALRM, previous)
        return [entry.status for entry in self.processes]


def _main(argv: Optional[Sequence[str]], program: str, monitor: bool) -> int:
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
    processes = []
    try:
        for command in commands:
            pid = spawn_gated(command)
            name = command[0][:NAME_LENGTH] if command else ""
            processes.append(ProcessInfo(pid=pid, name=name))
    except OSError:
        print("Fork failed", file=sys.stderr)
        return 255
    RoundRobinScheduler(processes, monitor=monitor).run()
    return 0


def round_robin_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the input file's commands under round-robin time slicing."""
    return _main(argv, "round_robin", monitor=False)


def monitor_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the input file's commands round-robin, reporting on each slice."""
    return _main(argv, "monitor", monitor=True)
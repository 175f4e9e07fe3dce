"""Per-process bookkeeping read from a /proc style filesystem."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PROC_ROOT = "/proc"
NAME_LENGTH = 63

_STATUS_FIELDS = (
    ("VmRSS:", "vmrss_kb"),
    ("voluntary_ctxt_switches:", "voluntary_ctxt_switches"),
    ("Threads:", "threads"),
)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_status(text: str) -> dict[str, int]:
    """Pick resident memory, voluntary context switches and threads from status text.

    Only fields that are present and carry a number appear in the result.
    """
    values: dict[str, int] = {}
    for line in text.splitlines():
        for prefix, field in _STATUS_FIELDS:
            if line.startswith(prefix):
                match = _LEADING_INT.match(line, len(prefix))
                if match:
                    values[field] = int(match.group(1))
                break
    return values


def read_comm(pid: int, proc_root: str | os.PathLike = PROC_ROOT) -> Optional[str]:
    """Return the command name of ``pid``, or ``None`` if it cannot be read."""
    try:
        with open(Path(proc_root) / str(pid) / "comm", encoding="utf-8", errors="replace") as stream:
            first = stream.readline(NAME_LENGTH)
    except OSError:
        return None
    return first.split("\n", 1)[0]


@dataclass
class ProcessInfo:
    """What is known about one scheduled child process."""

    pid: int
    name: str = ""
    vmrss_kb: int = 0
    voluntary_ctxt_switches: int = 0
    threads: int = 0
    exited: bool = False
    status: int = 0

    def refresh(self, proc_root: str | os.PathLike = PROC_ROOT) -> bool:
        """Update the fields from ``proc_root``; return whether the process is alive.

        A process that can no longer be signalled is marked as exited.
        """
        if self.exited:
            return False
        try:
            os.kill(self.pid, 0)
        except OSError:
            self.exited = True
            return False
        if not self.name:
            name = read_comm(self.pid, proc_root)
            if name is not None:
                self.name = name
        try:
            text = (Path(proc_root) / str(self.pid) / "status").read_text(
                encoding="utf-8", errors="replace"
            )
        except OSError:
            return True
        for field, value in parse_status(text).items():
            setattr(self, field, value)
        return True

    def format(self) -> str:
        """Render the one-line report printed for this process."""
        if self.exited:
            return f"PID: {self.pid} | Status: Exited with code {self.status}"
        return (
            f"PID: {self.pid} | Name: {self.name or 'Unknown':<10} | "
            f"RSS: {self.vmrss_kb:5d} KB | Threads: {self.threads} | "
            f"CtxSwitches: {self.voluntary_ctxt_switches}"
        )
"""Reading command files: one command line per process."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Sequence

MAX_PROCESSES = 500
MAX_ARGS = 100

_SEPARATORS = re.compile(r"[ \n]")


class UsageError(Exception):
    """Raised when a program is started with arguments it cannot use."""


def parse_command_line(line: str, max_args: Optional[int] = MAX_ARGS) -> list[str]:
    """Split a command line on spaces and newlines into an argument vector.

    At most ``max_args - 1`` arguments are kept, leaving room for the
    terminating slot of an exec argument array. ``None`` keeps them all.
    """
    tokens = [token for token in _SEPARATORS.split(line) if token]
    if max_args is not None:
        tokens = tokens[: max(max_args - 1, 0)]
    return tokens


def read_commands(
    path: str | Path,
    max_processes: int = MAX_PROCESSES,
    max_args: Optional[int] = MAX_ARGS,
) -> list[list[str]]:
    """Read up to ``max_processes`` lines from ``path`` as argument vectors.

    Blank lines are kept as empty vectors so that every line stands for
    one process. Raises ``OSError`` when the file cannot be opened.
    """
    commands: list[list[str]] = []
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as stream:
        for line in stream:
            if len(commands) >= max_processes:
                break
            commands.append(parse_command_line(line, max_args))
    return commands


def parse_input_argument(argv: Sequence[str], program: str) -> str:
    """Return the single input-file argument, or raise ``UsageError``."""
    if len(argv) != 1:
        raise UsageError(f"Usage: ./{program} <input.txt>")
    return argv[0]
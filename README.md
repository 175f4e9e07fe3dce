# mcpsched

A small process launcher and round-robin scheduler for Linux. It reads a
file of commands and starts one child process per line. It then controls the
children with POSIX signals (`SIGUSR1`, `SIGSTOP`, `SIGCONT`, `SIGALRM`).

## Input file

Put one command on each line and separate the arguments with spaces:

```
mcpsched-cpubound -seconds 5
mcpsched-iobound -seconds 3
ls -l /tmp
```

At most 500 lines are read. At most 99 arguments are taken from a line.

## Commands

Each of these commands takes the input file as its only argument. Given any
other arguments, it prints `Usage: ./<name> <input.txt>` and exits with
status 1. If the file cannot be opened, it prints `Cannot open input file`
and exits with status 255.

- `mcpsched-launch commands.txt` starts every command at once. It then waits
  for all of them to finish.
- `mcpsched-signals commands.txt` starts every child held at a gate. It
  releases them together with `SIGUSR1`. After one second it stops them all
  with `SIGSTOP`. One second later it resumes them with `SIGCONT`. It then
  waits for them.
- `mcpsched-roundrobin commands.txt` releases every child and then stops it.
  It lets one child run at a time, for a one-second quantum. Each time the
  alarm fires, it stops the running child and continues the next child that
  has not exited.
- `mcpsched-monitor commands.txt` schedules the same way, with these
  additions:
  - On each switch it prints `===== Resuming process <pid> =====`.
  - It gives the resumed child one quantum to settle.
  - It then prints one line about that child, read from `/proc`: its name,
    resident memory, thread count and voluntary context switches.
  - As each child is reaped, it prints either
    `Process <pid> exited with status <n>` or
    `Process <pid> terminated abnormally`.

## Workloads

Two workloads are included for trying out the scheduler:

- `mcpsched-cpubound [-seconds N]` spins on arithmetic until it has used N
  seconds of processor time. The default is 30.
- `mcpsched-iobound [-seconds N]` writes lines to the null device until it
  has used N seconds of processor time. The default is 5.

Each workload prints a line when it begins and another when it finishes.
Any other flag, or `-seconds` given without a value, is rejected with exit
status 1.

## Library use

The pieces can be imported:

- `mcpsched.commands`: `parse_command_line`, `read_commands`,
  `parse_input_argument` and `UsageError`.
- `mcpsched.workloads`: `parse_seconds`, `cpu_bound` and `io_bound`. Both
  `cpu_bound` and `io_bound` accept a custom clock.
- `mcpsched.launcher`: `spawn`, `spawn_gated`, `release`, `signal_all`,
  `wait_all`, `run_all` and `run_with_signals`. `run_with_signals` takes the
  pause length as an argument.
- `mcpsched.procinfo`: the `ProcessInfo` dataclass, with `refresh` and
  `format`, plus `parse_status` and `read_comm`. `refresh` and `read_comm`
  take the proc root as an argument.
- `mcpsched.scheduler`: `RoundRobinScheduler` and `next_alive`. The scheduler
  takes the quantum, the monitor switch and the output stream as arguments.

## Limitations

- It runs on Linux only. It relies on `fork`, POSIX signals, interval timers
  and `/proc`.
- The command-line tools always use a one-second quantum and a one-second
  pause. Other values are available only through the library functions.

## Tests

```
pip install -e .[test]
pytest
```
import os
import subprocess

import pytest

from mcpsched.procinfo import ProcessInfo, parse_status, read_comm


STATUS_TEXT = (
    "Name:\tworker\n"
    "State:\tS (sleeping)\n"
    "VmRSS:\t    1234 kB\n"
    "Threads:\t4\n"
    "voluntary_ctxt_switches:\t17\n"
    "nonvoluntary_ctxt_switches:\t99\n"
)


def _fake_proc(tmp_path, pid, comm=None, status=None):
    directory = tmp_path / str(pid)
    directory.mkdir()
    if comm is not None:
        (directory / "comm").write_text(comm)
    if status is not None:
        (directory / "status").write_text(status)
    return tmp_path


def test_parse_status_picks_fields():
    assert parse_status(STATUS_TEXT) == {
        "vmrss_kb": 1234,
        "threads": 4,
        "voluntary_ctxt_switches": 17,
    }


def test_parse_status_ignores_non_numeric_and_missing():
    assert parse_status("VmRSS:\tnone\nName:\tx\n") == {}


def test_read_comm_strips_newline(tmp_path):
    root = _fake_proc(tmp_path, 77, comm="worker\n")
    assert read_comm(77, root) == "worker"


def test_read_comm_truncates_long_names(tmp_path):
    root = _fake_proc(tmp_path, 78, comm="x" * 200 + "\n")
    assert read_comm(78, root) == "x" * 63


def test_read_comm_missing_returns_none(tmp_path):
    assert read_comm(79, tmp_path) is None


def test_refresh_reads_fake_proc(tmp_path):
    pid = os.getpid()
    root = _fake_proc(tmp_path, pid, comm="worker\n", status=STATUS_TEXT)
    info = ProcessInfo(pid=pid)
    assert info.refresh(root) is True
    assert info.name == "worker"
    assert info.vmrss_kb == 1234
    assert info.threads == 4
    assert info.voluntary_ctxt_switches == 17
    assert info.exited is False


def test_refresh_keeps_existing_name(tmp_path):
    pid = os.getpid()
    root = _fake_proc(tmp_path, pid, comm="other\n", status=STATUS_TEXT)
    info = ProcessInfo(pid=pid, name="sleep")
    info.refresh(root)
    assert info.name == "sleep"


def test_refresh_skips_exited(tmp_path):
    pid = os.getpid()
    root = _fake_proc(tmp_path, pid, comm="worker\n", status=STATUS_TEXT)
    info = ProcessInfo(pid=pid, exited=True)
    assert info.refresh(root) is False
    assert info.name == ""
    assert info.vmrss_kb == 0


def test_refresh_marks_dead_process_exited(tmp_path):
    child = subprocess.Popen(["true"])
    child.wait()
    info = ProcessInfo(pid=child.pid)
    assert info.refresh(tmp_path) is False
    assert info.exited is True


def test_format_exited():
    info = ProcessInfo(pid=42, exited=True, status=3)
    assert info.format() == "PID: 42 | Status: Exited with code 3"


@pytest.mark.parametrize("name, shown", [("sleep", "sleep     "), ("", "Unknown   ")])
def test_format_running(name, shown):
    info = ProcessInfo(pid=42, name=name, vmrss_kb=12, threads=1, voluntary_ctxt_switches=5)
    assert info.format() == (
        f"PID: 42 | Name: {shown} | RSS:    12 KB | Threads: 1 | CtxSwitches: 5"
    )
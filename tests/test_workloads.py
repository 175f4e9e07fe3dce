import os

import pytest

from mcpsched.commands import UsageError
from mcpsched.workloads import (
    cpu_bound,
    cpubound_main,
    io_bound,
    iobound_main,
    parse_seconds,
)


def fake_clock(values):
    iterator = iter(values)
    return lambda: next(iterator)


def test_parse_seconds_default():
    assert parse_seconds([], 30) == 30


def test_parse_seconds_value():
    assert parse_seconds(["-seconds", "7"], 30) == 7


def test_parse_seconds_atoi_prefix():
    assert parse_seconds(["-seconds", "12abc"], 5) == 12


def test_parse_seconds_non_number_is_zero():
    assert parse_seconds(["-seconds", "abc"], 5) == 0


def test_parse_seconds_stops_after_first_flag():
    assert parse_seconds(["-seconds", "3", "-bogus"], 5) == 3


def test_parse_seconds_illegal_flag():
    with pytest.raises(UsageError) as info:
        parse_seconds(["-bad"], 5)
    assert str(info.value) == "Illegal flag: `-bad'"


def test_parse_seconds_missing_value():
    with pytest.raises(UsageError):
        parse_seconds(["-seconds"], 5)


def test_cpu_bound_runs_until_clock_passes():
    assert cpu_bound(1, fake_clock([0.0, 0.2, 0.5, 1.0, 9.0])) == 3


def test_cpu_bound_zero_runs_once():
    assert cpu_bound(0, fake_clock([5.0, 5.0])) == 1


def test_io_bound_writes_lines(tmp_path):
    path = tmp_path / "out.txt"
    lines = io_bound(2, path, fake_clock([0.0, 1.0, 2.5]))
    assert lines == 2
    content = path.read_text()
    assert content == ("A string! " * 100 + "\n") * lines


def test_io_bound_default_target():
    assert io_bound(0, os.devnull, fake_clock([0.0, 0.0])) == 1


def test_cpubound_main_prints_progress(capsys):
    assert cpubound_main(["-seconds", "0"]) == 0
    out = capsys.readouterr().out
    pid = os.getpid()
    assert out == (
        f"Process: {pid} - Begining calculation.\n"
        f"Process: {pid} - Finished.\n"
    )


def test_iobound_main_prints_progress(capsys):
    assert iobound_main(["-seconds", "0"]) == 0
    out = capsys.readouterr().out
    assert f"Process: {os.getpid()} - Begining to write to file.\n" in out


def test_iobound_main_rejects_flag(capsys):
    assert iobound_main(["-oops"]) == 1
    assert "Illegal flag: `-oops'" in capsys.readouterr().err
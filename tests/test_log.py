import io
from datetime import datetime

from lobbybbs.log import (
    format_entry,
    log_auth,
    log_debug,
    log_entry,
    log_err,
    log_info,
    log_msg,
    log_warn,
)


def test_format_entry_layout():
    when = datetime(2009, 8, 23, 20, 38, 8)
    assert format_entry("E", "hello", when) == "Aug 23 20:38:08 E hello"


def test_format_entry_pads_single_digit_day():
    when = datetime(2009, 8, 3, 1, 2, 3)
    line = format_entry("I", "x", when)
    assert line[3:6] == "  3"


def test_format_entry_truncates_long_message():
    when = datetime(2009, 1, 1)
    assert len(format_entry("W", "a" * 5000, when)) == 1023


def test_log_entry_formats_arguments():
    stream = io.StringIO()
    log_entry(stream, "D", "value %d of %s", 5, "five")
    assert stream.getvalue().endswith(" D value 5 of five\n")


def test_log_entry_without_args_keeps_percent():
    stream = io.StringIO()
    log_entry(stream, "I", "100%")
    assert stream.getvalue().endswith(" I 100%\n")


def test_levels_go_to_stdout(capsys):
    log_msg("m")
    log_info("i")
    log_err("e")
    log_warn("w")
    log_debug("d")
    out = capsys.readouterr().out.splitlines()
    assert [line[16:] for line in out] == ["  m", "I i", "E e", "W w", "D d"]


def test_log_auth_goes_to_stderr(capsys):
    log_auth("login %s", "joe")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.endswith(" A login joe\n")
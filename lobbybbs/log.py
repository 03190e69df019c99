"""Timestamped log lines written to stdout (and stderr for authentication)."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import TextIO

MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)

_MAX_ENTRY = 1023
_lock = threading.Lock()


def format_entry(level: str, message: str, when: datetime) -> str:
    """Build one log line: ``Mon dd hh:mm:ss L message``."""
    prefix = (
        f"{MONTHS[when.month - 1][:3]} {when.day:2d} "
        f"{when.hour:02d}:{when.minute:02d}:{when.second:02d} {level} "
    )
    return (prefix + message)[:_MAX_ENTRY]


def log_entry(stream: TextIO, level: str, msg: str, *args) -> None:
    """Format ``msg % args`` with the current local time and write it to ``stream``."""
    message = msg % args if args else msg
    line = format_entry(level, message, datetime.now())
    with _lock:
        stream.write(line + "\n")
        stream.flush()


def log_msg(msg: str, *args) -> None:
    log_entry(sys.stdout, " ", msg, *args)


def log_info(msg: str, *args) -> None:
    log_entry(sys.stdout, "I", msg, *args)


def log_err(msg: str, *args) -> None:
    log_entry(sys.stdout, "E", msg, *args)


def log_warn(msg: str, *args) -> None:
    log_entry(sys.stdout, "W", msg, *args)


def log_debug(msg: str, *args) -> None:
    log_entry(sys.stdout, "D", msg, *args)


def log_auth(msg: str, *args) -> None:
    log_entry(sys.stderr, "A", msg, *args)
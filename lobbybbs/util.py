"""Formatting helpers, flag conversion and the yes/no prompt."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Callable, Sequence

from .keys import Key, key_ctrl
from .log import MONTHS

MAX_NAME = 19
MAX_LINE = 80
MAX_LONGLINE = 256
MAX_HALFLINE = 40
MAX_COLORBUF = 20
MAX_CRYPTED = 255
MAX_NUMBER = 32
MAX_X_LINES = 5
MAX_PROFILE_LINES = 256
PRINT_BUF = 512

LOGIN_TIMEOUT = 20
USER_TIMEOUT = 60
USER_TIMEOUT2 = 10
USER_TIMEOUT3 = 10
LOCKED_TIMEOUT = 3600

SECS_IN_MIN = 60
SECS_IN_HOUR = 60 * SECS_IN_MIN
SECS_IN_DAY = 24 * SECS_IN_HOUR
SECS_IN_WEEK = 7 * SECS_IN_DAY

MAX_FRIENDS = 25
PASSWD_MIN_LEN = 5

DAYS = ("Sun", "Mon", "Tues", "Wednes", "Thurs", "Fri", "Satur")


class YesNo(IntEnum):
    YES = 1
    NO = 0
    UNDEF = -1


def _weekday(t: datetime) -> int:
    """Day of the week with Sunday as 0."""
    return (t.weekday() + 1) % 7


def _day_suffix(mday: int) -> str:
    if 10 <= mday <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(mday % 10, "th")


def _clock(hour: int, twelve_hour_clock: bool) -> tuple[int, str]:
    if not twelve_hour_clock:
        return hour, ""
    if hour >= 12:
        return (hour - 12 if hour > 12 else hour), " PM"
    return hour, " AM"


def sprint_date(t: datetime, twelve_hour_clock: bool) -> str:
    """Long date such as ``Sunday, August 23rd 2009 20:38:08``."""
    hour, am_pm = _clock(t.hour, twelve_hour_clock)
    return (
        f"{DAYS[_weekday(t)]}day, {MONTHS[t.month - 1]} {t.day}{_day_suffix(t.day)} "
        f"{t.year} {hour:02d}:{t.minute:02d}:{t.second:02d}{am_pm}"
    )


def sprint_time(t: datetime, twelve_hour_clock: bool) -> str:
    """Hours and minutes, optionally with AM/PM."""
    hour, am_pm = _clock(t.hour, twelve_hour_clock)
    return f"{hour:02d}:{t.minute:02d}{am_pm}"


_TIME_UNITS = (
    (SECS_IN_WEEK, "week", "weeks"),
    (SECS_IN_DAY, "day", "days"),
    (SECS_IN_HOUR, "hour", "hours"),
    (SECS_IN_MIN, "minute", "minutes"),
    (1, "second", "seconds"),
)


def sprint_total_time(total: int) -> str:
    """Spell out a number of seconds in weeks, days, hours, minutes and seconds."""
    if total < 0:
        raise ValueError("total time can not be negative")
    parts = []
    for divisor, one, more in _TIME_UNITS:
        value, total = divmod(total, divisor)
        if value > 0:
            parts.append(f"{value} {one if value == 1 else more}")
    if not parts:
        return "0 seconds"
    if len(parts) == 1:
        return parts[0]
    return ", ".join(parts[:-1]) + " and " + parts[-1]


def sprint_number(value: int, sep: str | int) -> str:
    """Write ``value`` with ``sep`` between each group of three digits."""
    if value < 0:
        raise ValueError("number can not be negative")
    separator = chr(sep) if isinstance(sep, int) else sep
    return f"{value:,}".replace(",", separator)


def sprint_number_commas(value: int) -> str:
    return sprint_number(value, ",")


def sprint_number_dots(value: int) -> str:
    return sprint_number(value, ".")


def numberth(num: int) -> str:
    """The ordinal suffix for ``num``: st, nd, rd or th."""
    if 10 <= num % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")


def flags_to_str(flags: int, flagnames: Sequence[str]) -> str:
    """Names of the set bits, joined with ``|``; bit ``i`` is ``flagnames[i]``."""
    return "|".join(name for bit, name in enumerate(flagnames) if flags & (1 << bit))


def str_to_flags(text: str, flagnames: Sequence[str]) -> int:
    """Inverse of :func:`flags_to_str`; unknown names are ignored."""
    present = set(text.split("|"))
    flags = 0
    for bit, name in enumerate(flagnames):
        if name in present:
            flags |= 1 << bit
    return flags


def _code(c: str | int) -> int:
    return ord(c) if isinstance(c, str) else c


def yesno(
    read_key: Callable[[], str | int],
    write: Callable[[str], object],
    prompt: str,
    default_answer: str | int,
) -> YesNo:
    """Ask until the user answers y or n; Return picks the default, Ctrl-C/D aborts."""
    default = _code(default_answer)
    abort_keys = {key_ctrl("C"), key_ctrl("D")}
    while True:
        write(prompt)
        c = _code(read_key())
        if c == Key.RETURN:
            c = default
        if c in (ord("y"), ord("Y")):
            write("Yes\n")
            return YesNo.YES
        if c in (ord("n"), ord("N")):
            write("No\n")
            return YesNo.NO
        write("\n")
        if c in abort_keys:
            return YesNo.UNDEF
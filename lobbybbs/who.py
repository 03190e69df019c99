"""Who lists, the calendar and ping replies shown at the room prompt."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import IntEnum
from typing import Iterable, Sequence

from .display import DisplayFlag
from .log import MONTHS
from .user import RuntimeFlag, User, UserFlag
from .util import DAYS, numberth

HELP_FILE = "help.txt"

_COLUMNS = 4
_CALENDAR_WEEKS = 5


class WhoFormat(IntEnum):
    LONG = 1
    SHORT = 2


def sort_who(entries: Iterable, flags: int) -> list:
    """Order who-list entries by name or online time, as the user's flags ask."""
    flags = UserFlag(flags)
    descending = bool(flags & UserFlag.SORT_DESCENDING)
    if flags & UserFlag.SORT_BYNAME:
        return sorted(entries, key=lambda e: e.name, reverse=descending)
    return sorted(entries, key=lambda e: e.online_time, reverse=descending)


def wholist_status(usr: User, entry) -> tuple[str, str]:
    """The status character and name colour for ``entry`` as seen by ``usr``."""
    ansi = bool(usr.display.flags & DisplayFlag.ANSI)
    status = " "
    color = "white" if entry.name == usr.name else "yellow"

    if entry.name in usr.enemies:
        color = "red"
        if not ansi:
            status = "-"
    elif entry.name in usr.friends:
        color = "green"
        if not ansi:
            status = "+"

    if entry.flags & UserFlag.HELPING_HAND:
        status = "%"
    if entry.runtime_flags & RuntimeFlag.SYSOP:
        status = "$"
    if entry.runtime_flags & RuntimeFlag.HOLD:
        status = "b"
    if entry.flags & UserFlag.X_DISABLED:
        status = "*"
    if entry.runtime_flags & RuntimeFlag.LOCKED:
        status = "#"
    return status, color


def filter_enemies(usr: User, entries: Iterable) -> list:
    """Drop enemies from the list when the user chose to hide them."""
    entries = list(entries)
    if not (usr.flags & UserFlag.HIDE_ENEMIES) or not len(usr.enemies):
        return entries
    return [e for e in entries if e.name not in usr.enemies]


def short_who_list(usr: User, entries: Sequence) -> str:
    """Names with status in four columns, filled top to bottom."""
    count = len(entries)
    rows = -(-count // _COLUMNS)
    out = ["<yellow>"]
    for row in range(rows):
        for n in range(row, count, rows):
            entry = entries[n]
            status, color = wholist_status(usr, entry)
            out.append(f"<white>{status}<{color}>{entry.name:<18s}")
        out.append("\n")
    return "".join(out)


def online_among(entries: Iterable, names: Iterable[str]) -> list:
    """The entries whose names appear in ``names``, sorted by name."""
    wanted = set(names)
    return sorted((e for e in entries if e.name in wanted), key=lambda e: e.name)


def _weekday(t: datetime) -> int:
    return (t.weekday() + 1) % 7


def calendar(now: datetime) -> str:
    """The current time followed by a five-week calendar with today highlighted."""
    wday = _weekday(now)
    out = [
        f"<magenta>Current time is <yellow>{DAYS[wday]}day, {MONTHS[now.month - 1]} "
        f"{now.day}{numberth(now.day)} {now.year:04d} "
        f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}\n",
        "\n<magenta>  S  M Tu  W Th  F  S\n",
        "<green>",
    ]
    t = now - timedelta(days=14 + wday)
    old_month = t.month
    green = True

    for _ in range(_CALENDAR_WEEKS):
        for _ in range(7):
            if t.day == now.day and t.month == now.month and t.year == now.year:
                out.append(f"<white> {t.day:2d}<{'green' if green else 'yellow'}>")
            else:
                if t.month != old_month:
                    green = not green
                    old_month = t.month
                    out.append("<green>" if green else "<yellow>")
                out.append(f" {t.day:2d}")
            t += timedelta(days=1)
        out.append("\n")
    return "".join(out)


def ping_status(name: str, entry) -> str:
    """The reply to pinging ``name``; ``entry`` is its online record, or None."""
    if entry is None:
        return f"<yellow>{name}<red> is not online\n"
    if entry.runtime_flags & RuntimeFlag.LOCKED:
        away = getattr(entry, "away", None)
        if away:
            return f"<yellow>{name}<green> is away from the terminal; {away}\n"
        return f"<yellow>{name}<green> is away from the terminal\n"
    busy = "" if entry.runtime_flags & RuntimeFlag.BUSY else "not "
    return f"<yellow>{name}<green> is {busy}busy\n"
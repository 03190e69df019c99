"""The user record and the comma-separated name lists it carries."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Iterable, Iterator

from .display import Display


class UserFlag(IntFlag):
    HIDE_ADDRESS = 0x01
    TWELVE_HR_CLOCK = 0x02
    HELPING_HAND = 0x04
    X_DISABLED = 0x08
    BLOCK_FRIENDS = 0x10
    SHORT_WHO = 0x20
    SORT_BYNAME = 0x40
    SORT_DESCENDING = 0x80
    HIDE_ENEMIES = 0x100
    NO_AWAY_REASON = 0x200


class RuntimeFlag(IntFlag):
    BUSY = 0x01
    TIMEOUT_WARNING = 0x02
    TIMEOUT_WARNING2 = 0x04
    WAS_HH = 0x08
    SYSOP = 0x10
    LOCKED = 0x20
    HOLD = 0x40
    DEADCONN = 0x80000


class NameList:
    """An ordered list of distinct user names, stored as ``a,b,c``."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = []
        for name in names:
            self.add(name)

    def add(self, name: str) -> bool:
        """Append ``name``; return False if it was already present."""
        if not name or "," in name:
            raise ValueError(f"invalid name: {name!r}")
        if name in self._names:
            return False
        self._names.append(name)
        return True

    def remove(self, name: str) -> bool:
        """Remove ``name``; return False if it was not present."""
        try:
            self._names.remove(name)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._names.clear()

    def to_string(self) -> str:
        return ",".join(self._names)

    @classmethod
    def from_string(cls, text: str) -> NameList:
        return cls(part for part in text.split(",") if part)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NameList):
            return self._names == other._names
        return NotImplemented

    def __repr__(self) -> str:
        return f"NameList({self._names!r})"


@dataclass(eq=False)
class User:
    """A BBS user: identity, settings, lists, messages and statistics."""

    name: str = ""
    hostname: str = ""
    display: Display = field(default_factory=Display)

    flags: UserFlag = UserFlag(0)
    runtime_flags: RuntimeFlag = RuntimeFlag(0)
    timeout: int = 0

    recipients: NameList = field(default_factory=NameList)
    talked_to: NameList = field(default_factory=NameList)
    quick: NameList = field(default_factory=NameList)
    friends: NameList = field(default_factory=NameList)
    enemies: NameList = field(default_factory=NameList)
    override: NameList = field(default_factory=NameList)

    sent_xmsgs: list = field(default_factory=list)
    recv_xmsgs: list = field(default_factory=list)
    seen_xmsgs: int = 0
    dirty: set[str] = field(default_factory=set)

    real_name: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    email: str | None = None
    www: str | None = None
    doing: str | None = None
    reminder: str | None = None
    vanity: str | None = None
    xmsg_header: str | None = None
    away: str | None = None
    last_from: str | None = None
    info: str | None = None

    birth: int = 0
    login_time: int = 0
    last_logout: int = 0
    logins: int = 0
    total_time: int = 0
    last_online_time: int = 0
    xsent: int = 0
    xrecv: int = 0
    esent: int = 0
    erecv: int = 0
    fsent: int = 0
    frecv: int = 0
    qsent: int = 0
    qansw: int = 0
    msgs_posted: int = 0
    msgs_read: int = 0
    default_room: int = 0

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
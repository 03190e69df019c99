"""The list of users who are online, hashed by name into slots."""

from __future__ import annotations

import copy
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from .user import NameList, RuntimeFlag, User, UserFlag
from .util import MAX_LINE, MAX_LONGLINE, MAX_NAME
from .xmsg import XMsg, XMsgType, recv_xmsg

ONLINE_SLOTS = 64

_NAME_LISTS = ("recipients", "talked_to", "quick", "friends", "enemies", "override")


@dataclass(frozen=True)
class WhoListEntry:
    """A snapshot of one online user, as shown in the who list."""

    name: str
    doing: str = ""
    flags: UserFlag = UserFlag(0)
    runtime_flags: RuntimeFlag = RuntimeFlag(0)
    online_time: int = 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def _signed_char(b: int) -> int:
    return b - 256 if b >= 128 else b


def hashaddr_ascii(key: str) -> int:
    """A non-negative hash of ``key``, computed in 32-bit signed arithmetic."""
    data = key.encode("utf-8")
    if not data:
        return 0
    addr = _signed_char(data[0])
    for b in data[1:]:
        addr = _to_int32((addr << 1) ^ (_signed_char(b) - 32))
    return abs(addr)


def _slot(name: str) -> int:
    return hashaddr_ascii(name) % ONLINE_SLOTS


def _snapshot(usr: User) -> User:
    """A copy of ``usr`` that can be examined without touching the live object."""
    dup = copy.copy(usr)
    for attr in _NAME_LISTS:
        setattr(dup, attr, NameList(getattr(usr, attr)))
    dup.display = copy.copy(usr.display)
    dup.sent_xmsgs = list(usr.sent_xmsgs)
    dup.recv_xmsgs = list(usr.recv_xmsgs)
    dup.dirty = set(usr.dirty)
    dup.lock = threading.RLock()
    return dup


class OnlineList:
    """Thread-safe registry of the users who are currently online."""

    def __init__(self) -> None:
        self._slots: list[list[User]] = [[] for _ in range(ONLINE_SLOTS)]
        self._lock = threading.RLock()

    def _users(self) -> Iterator[User]:
        for slot in self._slots:
            yield from list(slot)

    def _find(self, name: str) -> User | None:
        for u in self._slots[_slot(name)]:
            if u.name == name:
                return u
        return None

    def add(self, usr: User) -> None:
        """Put ``usr`` online; users without a name are ignored."""
        if not usr.name:
            return
        with self._lock:
            slot = self._slots[_slot(usr.name)]
            if not any(u is usr for u in slot):
                slot.append(usr)

    def remove(self, usr: User) -> None:
        """Take ``usr`` offline; users that are not online are ignored."""
        if not usr.name:
            return
        with self._lock:
            slot = self._slots[_slot(usr.name)]
            for i, u in enumerate(slot):
                if u is usr:
                    del slot[i]
                    break

    def is_online(self, name: str) -> User | None:
        """A copy of the online user called ``name``, or None when not online."""
        if not name:
            return None
        with self._lock:
            u = self._find(name)
            if u is None:
                return None
            with u.lock:
                return _snapshot(u)

    def get_online_list(self) -> list[WhoListEntry]:
        """Who-list entries for everyone online, in slot order."""
        with self._lock:
            now = int(time.time())
            return [
                WhoListEntry(
                    name=u.name[: MAX_NAME - 1],
                    doing=(u.doing or "")[: MAX_LINE - 1],
                    flags=u.flags,
                    runtime_flags=u.runtime_flags,
                    online_time=now - u.login_time,
                )
                for u in self._users()
            ]

    def get_online_names(self) -> list[str]:
        """Names of everyone online, in slot order."""
        with self._lock:
            return [u.name for u in self._users()]

    @contextmanager
    def lock_user(self, name: str) -> Iterator[User | None]:
        """Hold the online list and the live user ``name`` locked; yields None if absent."""
        if not name:
            yield None
            return
        with self._lock:
            u = self._find(name)
            if u is None:
                yield None
                return
            with u.lock:
                yield u

    def notify_friends(self, username: str, msg: str) -> int:
        """Tell everyone who has ``username`` as a friend; return how many were told."""
        if not username:
            raise ValueError("a user name is required")
        text = f"<yellow>{username}<magenta> {msg}"[: MAX_LONGLINE - 1]
        x = XMsg(type=XMsgType.NOTIFY, msg=text, mtime=int(time.time()))
        sent = 0
        with self._lock:
            for u in self._users():
                if username in u.friends:
                    recv_xmsg(u, x)
                    sent += 1
        return sent

    def broadcast(self, msg: str) -> int:
        """Send a system message to everyone online; return how many received it."""
        x = XMsg(type=XMsgType.SYSTEM, msg=msg, mtime=int(time.time()))
        sent = 0
        with self._lock:
            for u in self._users():
                recv_xmsg(u, x)
                sent += 1
        return sent

    def broadcast_callback(self, callback: Callable[[User], object]) -> None:
        """Run ``callback`` on every online user while it is locked."""
        with self._lock:
            for u in self._users():
                with u.lock:
                    callback(u)

    def count(self) -> int:
        with self._lock:
            return sum(len(slot) for slot in self._slots)
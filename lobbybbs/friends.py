"""Friend, enemy and override lists, and switching between their menus."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Iterable

from .keys import Key, key_ctrl
from .user import User
from .util import MAX_FRIENDS


class ListError(Exception):
    """A change to a name list was refused; the message says why."""


class FriendsMenu(IntEnum):
    EXIT = 0
    FRIENDS = 1
    ENEMIES = 2
    OVERRIDES = 3


def _check_room(names, what: str) -> None:
    if len(names) >= MAX_FRIENDS:
        raise ListError(f"You already have {MAX_FRIENDS} {what} defined")


def add_friend(usr: User, name: str, user_exists: Callable[[str], bool]) -> str | None:
    """Add ``name`` to the friend list; return a notice if it moved from the enemy list."""
    _check_room(usr.friends, "friends")
    if not name:
        return None
    if name == usr.name:
        raise ListError("Heh, your best friend is YOU")
    if name in usr.friends:
        raise ListError(f"{name} already is on your friend list")
    if not user_exists(name):
        raise ListError("No such user")
    notice = None
    if usr.enemies.remove(name):
        usr.dirty.add("enemies")
        notice = f"{name} moved from your enemy to friend list"
    usr.friends.add(name)
    usr.dirty.add("friends")
    return notice


def remove_friend(usr: User, name: str) -> None:
    if not name:
        return
    if name == usr.name:
        raise ListError("Stopped being friends with yourself? How sad and lonely ...")
    if not usr.friends.remove(name):
        raise ListError("There is no such person on your friend list")
    usr.dirty.add("friends")


def add_enemy(usr: User, name: str, user_exists: Callable[[str], bool]) -> str | None:
    """Add ``name`` to the enemy list; return a notice if it moved from the friend list."""
    _check_room(usr.enemies, "enemies")
    if not name:
        return None
    if name == usr.name:
        raise ListError("Heh, you are your own worst enemy!")
    if name in usr.enemies:
        raise ListError(f"{name} already is on your enemy list")
    if not user_exists(name):
        raise ListError("No such user")
    notice = None
    if usr.friends.remove(name):
        usr.dirty.add("friends")
        notice = f"{name} moved from your friend to enemy list"
    usr.talked_to.remove(name)
    usr.override.remove(name)
    usr.enemies.add(name)
    usr.dirty.add("enemies")
    return notice


def remove_enemy(usr: User, name: str) -> None:
    if not name:
        return
    if name == usr.name:
        raise ListError("It's good to see you've made peace with yourself")
    if not usr.enemies.remove(name):
        raise ListError("There is no such person on your enemy list")
    usr.dirty.add("enemies")


def add_override(usr: User, name: str, user_exists: Callable[[str], bool]) -> None:
    _check_room(usr.override, "overrides")
    if not name:
        return
    if name == usr.name:
        raise ListError("You may always send yourself messages")
    if name in usr.override:
        raise ListError(f"{name} already is on your override list")
    if name in usr.enemies:
        raise ListError(f"But {name} is on your enemy list!")
    if not user_exists(name):
        raise ListError("No such user")
    usr.override.add(name)


def remove_override(usr: User, name: str) -> None:
    if not name:
        return
    if name == usr.name:
        raise ListError("You may always send yourself messages")
    if not usr.override.remove(name):
        raise ListError("There is no such person on your override list")


def format_namelist(names: Iterable[str]) -> str:
    """Sorted names in four columns, filled top to bottom, one row per line."""
    ordered = sorted(names)
    count = len(ordered)
    if not count:
        return ""
    columns = 4
    rows = -(-count // columns)
    lines = []
    for row in range(rows):
        cells = (f" {ordered[n]:<18s}" for n in range(row, count, rows))
        lines.append("".join(cells) + "\n")
    return "".join(lines)


_EXIT_KEYS = {key_ctrl("C"), key_ctrl("D"), ord(" "), int(Key.RETURN), int(Key.BS)}
_TO_FRIENDS = {ord(">"), ord("f"), ord("F")}
_TO_ENEMIES = {ord("<"), ord("e"), ord("E")}
_TO_OVERRIDES = {ord("o"), ord("O")}


def next_menu(menu: FriendsMenu, key: str | int, x_disabled: bool) -> FriendsMenu | None:
    """The menu that ``key`` switches to from ``menu``, or None to stay."""
    c = ord(key) if isinstance(key, str) else int(key)
    if menu == FriendsMenu.EXIT or c in _EXIT_KEYS:
        return FriendsMenu.EXIT
    if menu != FriendsMenu.FRIENDS and c in _TO_FRIENDS:
        if menu == FriendsMenu.ENEMIES or c != ord("<"):
            return FriendsMenu.FRIENDS
    if menu != FriendsMenu.ENEMIES and c in _TO_ENEMIES:
        return FriendsMenu.ENEMIES
    if menu != FriendsMenu.OVERRIDES and c in _TO_OVERRIDES and x_disabled:
        return FriendsMenu.OVERRIDES
    return None
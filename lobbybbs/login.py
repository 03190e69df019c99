"""Checks and messages used while logging in and creating new users."""

from __future__ import annotations

from typing import Callable, Iterable

from .user import User, UserFlag
from .util import PASSWD_MIN_LEN, numberth

MAX_LOGIN_ATTEMPTS = 3

RESERVED_NAMES = ("New", "Sysop", "Guest")

REALLY_LOGOUT = (
    "Really logout",
    "Are you sure",
    "Are you sure you are sure",
    "Are you sure you want to logout",
    "Do you really wish to logout",
    "Really logout from the BBS",
)

_ONLY_ONE = "<green>You are the one and only user online right now ...\n"


class LoginError(Exception):
    """A login name or password was refused; the message says why."""


def validate_new_name(name: str, user_exists: Callable[[str], bool]) -> str:
    """Return ``name`` if it may be used for a new account."""
    if not name:
        raise LoginError("No name given")
    if len(name) < 2:
        raise LoginError("That name is too short")
    if name in RESERVED_NAMES:
        raise LoginError(f"You can not use '{name}' as login name, choose an other login name")
    if user_exists(name):
        raise LoginError("That name already is in use, please choose an other login name")
    return name


def check_new_password(name: str, password: str, verification: str) -> str:
    """Return ``password`` if it is acceptable for user ``name``."""
    if len(password) < PASSWD_MIN_LEN:
        raise LoginError("That password is too short")
    if password.lower() == name.lower():
        raise LoginError("Sorry, but that password is not good enough")
    if password != verification:
        raise LoginError("Passwords didn't match! Please try again")
    return password


def online_summary(usr: User, who: Iterable) -> str:
    """The line telling a user who has just logged in how many others are online."""
    entries = list(who)
    if not entries:
        return ""
    num_online = len(entries)
    if num_online == 1:
        return _ONLY_ONE

    num_friends = 0
    hide_enemies = bool(usr.flags & UserFlag.HIDE_ENEMIES)
    for entry in entries:
        if entry.name in usr.friends:
            num_friends += 1
        elif hide_enemies and entry.name in usr.enemies:
            num_online -= 1

    num_online -= 1  # not counting oneself
    num_others = num_online - num_friends

    if num_online <= 0:
        return _ONLY_ONE
    if num_friends <= 0:
        if num_others <= 1:
            return "<green>There is one other user online\n"
        return f"<green>There are <yellow>{num_others}<green> other users online\n"

    if num_friends == 1:
        out = "<green>There is one friend "
    else:
        out = f"<green>There are <yellow>{num_friends}<green> friends "
    if num_others <= 0:
        return out + "online\n"
    if num_others == 1:
        return out + "and one other user online\n"
    return out + f"and <yellow>{num_others}<green> other users online\n"


def welcome_back(usr: User) -> str:
    """The greeting shown right after a successful login."""
    if usr.logins > 1:
        return (
            f"\n<green>Welcome back, {usr.name}! This is your "
            f"<yellow>{usr.logins}{numberth(usr.logins)}<green> login\n"
        )
    return f"\n<green>Hello, {usr.name}!\n"
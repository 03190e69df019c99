"""Key codes and the input filter that recognises cursor-key escape sequences."""

from __future__ import annotations

from enum import IntEnum


class Key(IntEnum):
    """Special key codes delivered by the keyboard filter."""

    BEEP = 0x07
    BS = 0x08
    TAB = 0x09
    RETURN = 0x0D
    ESC = 0x1B
    BACKTAB = 0x5C
    UP = 0x8000
    DOWN = 0x8001
    RIGHT = 0x8002
    LEFT = 0x8003
    PAGEUP = 0x8004
    PAGEDOWN = 0x8005
    HOME = 0x8006
    END = 0x8007
    INSERT = 0x8008
    DELETE = 0x8009


def key_ctrl(c: str | int) -> int:
    """Return the control code for a letter, e.g. ``key_ctrl('C')`` for Ctrl-C."""
    code = ord(c) if isinstance(c, str) else c
    return code - ord("A") + 1


_TILDE_KEYS = {
    ord("2"): Key.INSERT,
    ord("3"): Key.DELETE,
    ord("5"): Key.PAGEUP,
    ord("6"): Key.PAGEDOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

_ARROW_KEYS = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
}


def keyboard_cook(buffer: bytearray, c: int) -> int:
    """Translate ESC sequences such as ``ESC[5~`` and ``ESC[A`` into key codes.

    ``buffer`` holds the pending input after ``c``; a recognised sequence is
    consumed from it. Anything else leaves the buffer untouched and returns ``c``.
    """
    if c != Key.ESC:
        return c

    if len(buffer) >= 3:
        if buffer[0] != ord("[") or buffer[2] != ord("~"):
            return c
        key = _TILDE_KEYS.get(buffer[1])
        if key is None:
            return c
        del buffer[:3]
        return key

    if len(buffer) == 2:
        if buffer[0] != ord("["):
            return c
        key = _ARROW_KEYS.get(buffer[1])
        if key is None:
            return c
        del buffer[:2]
        return key

    return c
"""Terminal display state and the control sequences that act on it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

TERM_WIDTH = 80
TERM_HEIGHT = 24
PRINT_BUF = 512

_BELL = "\a"
_RESTORE_CURSOR = "\x1b[u"


class DisplayFlag(IntFlag):
    BEEP = 0x01
    ANSI = 0x02
    BOLD = 0x04
    BOLD_HOTKEYS = 0x08
    HOTKEY_BRACKETS = 0x10
    UPPERCASE_HOTKEYS = 0x20
    COLOR_SYMBOLS = 0x40
    FORCE_TERM = 0x80


@dataclass
class Display:
    """Terminal size, display options and the current cursor column."""

    term_width: int = TERM_WIDTH
    term_height: int = TERM_HEIGHT
    flags: DisplayFlag = DisplayFlag(0)
    cursor: int = 0


def _ansi(display: Display) -> bool:
    return bool(display.flags & DisplayFlag.ANSI)


def _gated(display: Display, flag: DisplayFlag, sequence: str) -> str:
    """Return ``sequence`` when ``flag`` is set on the display, else nothing."""
    if display.flags & flag:
        return sequence
    return ""


def reset_colors() -> str:
    return "\x1b[0m"


def beep(display: Display) -> str:
    """The bell character, if the user wants to hear it."""
    return _gated(display, DisplayFlag.BEEP, _BELL)


def erase(display: Display, pos: int) -> str:
    """Erase ``pos`` characters to the left of the cursor."""
    if pos <= 0:
        return ""
    if _ansi(display):
        out = f"\x1b[{pos}D\x1b[K"
    else:
        out = "\b \b" * pos
    display.cursor = max(display.cursor - pos, 0)
    return out


def erase_line(display: Display) -> str:
    if _ansi(display):
        out = "\r\x1b[K"
    else:
        out = "\r" + " " * max(display.term_width - 1, 0) + "\r"
    display.cursor = 0
    return out


def clear_screen(display: Display) -> str:
    if _ansi(display):
        out = "\x1b[1;1H\x1b[2J"
    else:
        out = "\r" + "\n" * max(display.term_height, 0)
    display.cursor = 0
    return out


def save_cursor() -> str:
    return "\x1b[s"


def restore_cursor(display: Display) -> str:
    """Restore the saved cursor position on ANSI terminals."""
    return _gated(display, DisplayFlag.ANSI, _RESTORE_CURSOR)


def home_cursor(display: Display) -> str:
    out = "\x1b[1;1H" if _ansi(display) else "\r"
    display.cursor = 0
    return out


def scroll_up(display: Display, n: int) -> str:
    if not _ansi(display):
        return ""
    return "\x1b[S" if n == 1 else f"\x1b[{n}S"


def scroll_down(display: Display, n: int) -> str:
    if not _ansi(display):
        return "\r" + "\n" * max(n, 0)
    return "\x1b[T" if n == 1 else f"\x1b[{n}T"


def hline(display: Display, c: str) -> str:
    """A horizontal line of ``c`` across the terminal, ending in CR LF."""
    length = min(display.term_width + 1, PRINT_BUF - 1)
    if length <= 0:
        return ""
    line = c * max(length - 2, 0) + "\r\n"
    return line[-length:]
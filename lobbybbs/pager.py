"""A --More-- pager that shows long text one screen at a time."""

from __future__ import annotations

from .display import (
    TERM_HEIGHT,
    Display,
    DisplayFlag,
    erase_line,
    home_cursor,
    restore_cursor,
    save_cursor,
    scroll_down,
)
from .keys import Key, key_ctrl

_QUIT = {key_ctrl("C"), key_ctrl("D"), ord("q"), ord("Q"), int(Key.ESC)}
_PAGE_DOWN = {ord(" "), int(Key.PAGEDOWN)}
_PAGE_UP = {ord("b"), int(Key.PAGEUP)}
_LINE_DOWN = {int(Key.RETURN), ord("+"), int(Key.DOWN)}
_LINE_UP = {int(Key.BS), ord("-"), int(Key.UP)}
_REPRINT = {key_ctrl("L")}
_HOME = {ord("g"), int(Key.HOME)}
_END = {ord("G"), int(Key.END)}


class Pager:
    """Paging state over a block of already rendered lines.

    ``first_page`` and ``handle_key`` return the terminal output to send;
    ``done`` becomes True once the user has left the pager or the text ran out.
    """

    def __init__(self, text: str, term_height: int = TERM_HEIGHT, ansi: bool = False) -> None:
        lines = text.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        self.lines = lines
        flags = DisplayFlag.ANSI if ansi else DisplayFlag(0)
        self.display = Display(term_height=term_height, flags=flags)
        self.top = 0
        self.end = 0
        self.done = False

    @property
    def num_lines(self) -> int:
        return len(self.lines)

    @property
    def page_size(self) -> int:
        return max(self.display.term_height - 1, 1)

    @property
    def _ansi(self) -> bool:
        return bool(self.display.flags & DisplayFlag.ANSI)

    def _write(self, start: int, stop: int) -> str:
        return "".join(line + "\r\n" for line in self.lines[start:stop])

    def _show_page(self) -> str:
        self.end = self.top + self.page_size
        out = self._write(self.top, self.end)
        if self.end > self.num_lines:
            self.done = True
            return out
        return out + self.more_prompt()

    def more_prompt(self) -> str:
        """The ``--More--`` prompt with the position in the text."""
        total = self.num_lines
        pos = self.end
        return f"<yellow>--More--<cyan> (line {pos}/{total} {100 * pos // total}%)"

    def first_page(self) -> str:
        """Show the first screen of text."""
        self.top = 0
        self.done = False
        return self._show_page()

    def _back_to_start(self) -> str:
        """Scroll the already shown lines above the top back onto the screen."""
        n = self.top
        self.top = 0
        self.end = self.page_size
        return (
            save_cursor()
            + scroll_down(self.display, n)
            + home_cursor(self.display)
            + self._write(0, n)
            + restore_cursor(self.display)
            + erase_line(self.display)
            + self.more_prompt()
        )

    def handle_key(self, key: str | int) -> str:
        """React to one key press; return what to send to the terminal."""
        if self.done:
            return ""
        c = ord(key) if isinstance(key, str) else int(key)
        page = self.page_size

        if c in _QUIT:
            self.done = True
            return erase_line(self.display)

        if c in _PAGE_DOWN:
            out = erase_line(self.display)
            n = self.num_lines - self.end
            if n <= 0:
                self.done = True
                return out
            if n > page:
                self.top = self.end
                return out + self._show_page()
            out += self._write(self.end, self.end + n)
            self.top += n
            self.end += n
            return out + self.more_prompt()

        if c in _PAGE_UP or c in _HOME:
            if self.top <= 0:
                return ""
            if self.top >= page or not self._ansi:
                out = erase_line(self.display)
                self.top = 0 if c in _HOME else max(self.top - page, 0)
                return out + self._show_page()
            return self._back_to_start()

        if c in _LINE_DOWN:
            out = erase_line(self.display)
            if self.end >= self.num_lines:
                self.done = True
                return out
            out += self._write(self.end, self.end + 1)
            self.top += 1
            self.end += 1
            if self.end > self.num_lines:
                self.done = True
                return out
            return out + self.more_prompt()

        if c in _LINE_UP:
            if self.top <= 0:
                return ""
            if not self._ansi:
                out = erase_line(self.display)
                self.top -= 1
                return out + self._show_page()
            self.top -= 1
            self.end -= 1
            return (
                save_cursor()
                + scroll_down(self.display, 1)
                + home_cursor(self.display)
                + self._write(self.top, self.top + 1)
                + restore_cursor(self.display)
                + erase_line(self.display)
                + self.more_prompt()
            )

        if c in _REPRINT:
            return erase_line(self.display) + self._show_page()

        if c in _END:
            n = self.num_lines - page - self.top
            if n <= 0:
                return ""
            out = erase_line(self.display)
            if n >= page:
                self.top = self.num_lines - page
                return out + self._show_page()
            out += self._write(self.end, self.end + n)
            self.top += n
            self.end += n
            return out + self.more_prompt()

        return ""


def page_text(text: str, term_height: int = TERM_HEIGHT, ansi: bool = False) -> Pager:
    """A pager over ``text``, ready for ``first_page``."""
    return Pager(text, term_height, ansi)
"""Countdowns for a Sysop-initiated reboot or shutdown."""

from __future__ import annotations

import functools
import threading
from typing import Callable

from .log import log_debug, log_err
from .util import sprint_total_time

# remaining seconds at which the countdown is announced again
_ANNOUNCE_AT = (60, 30, 10)


def countdown_stages(seconds: int) -> list[tuple[int, int]]:
    """The countdown as ``(delay, remaining)`` pairs.

    After waiting ``delay`` seconds, ``remaining`` seconds are left; the
    countdown is announced at one minute, 30 and 10 seconds, and the last
    stage, with nothing remaining, is when the action runs.
    """
    if seconds < 0:
        raise ValueError("countdown can not be negative")
    stages = []
    left = seconds
    for mark in _ANNOUNCE_AT:
        if left > mark:
            stages.append((left - mark, mark))
            left = mark
    stages.append((left, 0))
    return stages


def _remaining_text(remaining: int) -> str:
    return "one minute" if remaining == 60 else f"{remaining} seconds"


class CountdownScheduler:
    """Runs ``action`` after a countdown, announcing along the way.

    ``announce`` receives each message meant for all online users; ``what``
    completes the sentence "The system is ... in", e.g. "rebooting".
    """

    def __init__(
        self,
        action: Callable[[], object],
        announce: Callable[[str], object],
        what: str = "rebooting",
        timer_factory: Callable = threading.Timer,
    ) -> None:
        self._action = action
        self._announce = announce
        self._what = what
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer = None
        self._stages: list[tuple[int, int]] = []
        self._generation = 0

    def _start(self, index: int) -> None:
        delay, _ = self._stages[index]
        timer = self._timer_factory(
            delay, functools.partial(self._run_stage, index, self._generation)
        )
        if hasattr(timer, "daemon"):
            timer.daemon = True
        self._timer = timer
        timer.start()

    def _run_stage(self, index: int, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
            _, remaining = self._stages[index]
            if remaining == 0:
                self._timer = None
                self._generation += 1
            else:
                try:
                    self._start(index + 1)
                except RuntimeError:
                    log_err("failed to start %s timer for %d seconds", self._what, remaining)
                    self._timer = None
                    self._generation += 1
                    failed = True
                else:
                    failed = False
        if remaining == 0:
            self._action()
            return
        if failed:
            self._announce(f"error in {self._what} timer; system not {self._what}")
            return
        self._announce(f"The system is {self._what} in {_remaining_text(remaining)}")

    def schedule(self, seconds: int) -> str:
        """Start a countdown of ``seconds``, replacing any running one; return the notice."""
        stages = countdown_stages(seconds)
        with self._lock:
            self._cancel_locked()
            self._stages = stages
            self._start(0)
        message = f"The system is {self._what} in {sprint_total_time(seconds)}"
        self._announce(message)
        log_debug("%s", message)
        return message

    def _cancel_locked(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        self._generation += 1
        return True

    def cancel(self) -> bool:
        """Stop the running countdown; False when none was running."""
        with self._lock:
            return self._cancel_locked()

    def pending(self) -> bool:
        """True while a countdown is running."""
        with self._lock:
            return self._timer is not None
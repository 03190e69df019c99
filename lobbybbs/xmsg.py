"""eXpress messages: sending, receiving and rendering them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Iterator

from .log import log_err
from .user import User
from .util import MAX_NAME


class XMsgType(IntEnum):
    X = 0
    SYSTEM = 1
    NOTIFY = 2
    EMOTE = 3
    FEELING = 4
    QUESTION = 5
    ANSWER = 6


@dataclass(eq=False)
class XMsg:
    """One message, shared by reference between sender and recipients."""

    type: XMsgType = XMsgType.X
    sender: str = ""
    recipients: str | None = None
    msg: str = ""
    mtime: int = 0


_SENT_COUNTERS = {
    XMsgType.X: "xsent",
    XMsgType.EMOTE: "esent",
    XMsgType.FEELING: "fsent",
    XMsgType.QUESTION: "qsent",
    XMsgType.ANSWER: "qansw",
}

_RECV_COUNTERS = {
    XMsgType.X: "xrecv",
    XMsgType.EMOTE: "erecv",
    XMsgType.FEELING: "frecv",
}


def _bump(usr: User, counter: str | None) -> None:
    if counter is None:
        return
    setattr(usr, counter, getattr(usr, counter) + 1)
    usr.dirty.add(counter)


def sent_xmsg_stats(usr: User, x: XMsg, name: str | None) -> None:
    """Count a sent message and remember ``name`` in the talked-to list."""
    _bump(usr, _SENT_COUNTERS.get(x.type))
    if name:
        usr.talked_to.add(name)


def send_xmsg_bcc(usr: User, x: XMsg) -> None:
    """Keep a copy of a sent message with the sender; stats are not touched."""
    usr.sent_xmsgs.append(x)


def recv_xmsg(usr: User, x: XMsg) -> None:
    """Deliver ``x`` to ``usr`` and count it."""
    with usr.lock:
        usr.recv_xmsgs.append(x)
        _bump(usr, _RECV_COUNTERS.get(x.type))


def unseen_xmsgs(usr: User) -> Iterator[XMsg]:
    """Yield received messages not seen yet, marking each as seen."""
    while usr.seen_xmsgs < len(usr.recv_xmsgs):
        x = usr.recv_xmsgs[usr.seen_xmsgs]
        usr.seen_xmsgs += 1
        yield x


def format_xmsg(x: XMsg, twelve_hour_clock: bool = False) -> str:
    """The text shown to a user who receives ``x``."""
    tm = datetime.fromtimestamp(x.mtime)
    hour = tm.hour
    if twelve_hour_clock and hour > 12:
        hour -= 12

    if x.type == XMsgType.X:
        return (
            f"\n\n<magenta>***<cyan> eXpress Message received from <yellow>{x.sender}"
            f"<cyan> at <white>{hour:02d}:{tm.minute:02d} <magenta>***<yellow>\n"
            f"{x.msg}\n"
        )
    if x.type == XMsgType.SYSTEM:
        return (
            f"\n\n<white>*** <yellow>System message received at {hour}:{tm.minute:02d} "
            f"<white>***<red>\n{x.msg}\n"
        )
    if x.type == XMsgType.NOTIFY:
        return f"{x.msg}\n"
    if x.type == XMsgType.EMOTE:
        return f"\n<yellow>\n({hour:02d}:{tm.minute:02d}) <white>{x.sender}<yellow> {x.msg}\n"

    log_err("print_XMsg(): unknown XMsg type %d", int(x.type))
    raise ValueError(f"can not display message of type {x.type!r}")


def split_recipients(text: str) -> list[str]:
    """Recipient names from a comma-separated list, each cut to the name limit."""
    return [part[: MAX_NAME - 1] for part in text.split(",") if part]
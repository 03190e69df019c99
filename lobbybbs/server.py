"""The network server: accepts connections and hands each to a session thread."""

from __future__ import annotations

import argparse
import selectors
import signal
import socket
import threading
from typing import Callable

from .inet import NetworkError, inet_accept, inet_listen
from .log import log_debug, log_err, log_info, log_msg

BBS_VERSION = "0.101"
BUILD_TIME = "20090823-2038.08 Sunday, August 23 2009"

IAC = 255
WILL = 251
DO = 253
TELOPT_ECHO = 1
TELOPT_SGA = 3
TELOPT_NAWS = 31
TELOPT_NEW_ENVIRON = 39

_CATCH_SIGNALS = (
    "SIGHUP", "SIGINT", "SIGQUIT", "SIGUSR1", "SIGUSR2", "SIGPIPE", "SIGALRM",
    "SIGTERM", "SIGCHLD", "SIGURG", "SIGXCPU", "SIGVTALRM", "SIGPROF",
    "SIGWINCH", "SIGIO", "SIGPWR", "SIGSYS",
)


def telnet_greeting() -> bytes:
    """Option negotiation sent to a new client: SGA, ECHO, NAWS and NEW-ENVIRON."""
    return bytes([
        IAC, WILL, TELOPT_SGA,
        IAC, WILL, TELOPT_ECHO,
        IAC, DO, TELOPT_NAWS,
        IAC, DO, TELOPT_NEW_ENVIRON,
    ]) + b"\n"


def version_info() -> str:
    return (
        f"<yellow>This is <white>lobbybbs<yellow>, version <white>{BBS_VERSION} "
        f"<yellow>build {BUILD_TIME}\n"
    )


def _greet(conn: socket.socket, ipaddr: str) -> None:
    try:
        conn.setblocking(True)
        conn.sendall(telnet_greeting())
    except OSError:
        pass
    finally:
        conn.close()


class BBSServer:
    """Listens on ``node:service`` and runs ``handler(conn, ipaddr)`` per connection."""

    def __init__(
        self,
        node: str | None = "0.0.0.0",
        service: str | int = "1234",
        handler: Callable[[socket.socket, str], object] = _greet,
        poll_interval: float = 0.2,
    ) -> None:
        self.node = node
        self.service = str(service)
        self.handler = handler
        self.poll_interval = poll_interval
        self.address = None
        self.ready = threading.Event()
        self._stop = threading.Event()
        self._sock: socket.socket | None = None

    def _spawn(self, conn: socket.socket, ipaddr: str) -> None:
        thread = threading.Thread(target=self.handler, args=(conn, ipaddr), daemon=True)
        thread.start()

    def serve_forever(self) -> None:
        """Accept connections until :meth:`stop` is called."""
        sock = inet_listen(self.node, self.service)
        self._sock = sock
        self.address = sock.getsockname()
        self.ready.set()
        log_msg("main thread is accepting connections")
        try:
            with selectors.DefaultSelector() as sel:
                sel.register(sock, selectors.EVENT_READ)
                while not self._stop.is_set():
                    if not sel.select(self.poll_interval):
                        continue
                    try:
                        conn, ipaddr = inet_accept(sock)
                    except NetworkError as exc:
                        if exc.fatal:
                            log_err("inet_server(): error on the main socket, aborting")
                            raise
                        continue
                    self._spawn(conn, ipaddr)
        finally:
            log_msg("main thread no longer accepting connections")
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
            self._sock = None

    def stop(self) -> None:
        """Ask the accept loop to finish."""
        self._stop.set()


def _install_signals(server: BBSServer) -> dict:
    def handler(sig, frame):
        if sig in (signal.SIGINT, signal.SIGTERM):
            log_info("signals_thread(): exiting")
            server.stop()
        elif sig == getattr(signal, "SIGWINCH", None):
            pass
        else:
            log_debug("signals_thread(): signal %d caught", sig)

    previous = {}
    if threading.current_thread() is not threading.main_thread():
        return previous
    for name in _CATCH_SIGNALS:
        sig = getattr(signal, name, None)
        if sig is None:
            continue
        try:
            previous[sig] = signal.signal(sig, handler)
        except (OSError, ValueError):
            continue
    return previous


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lobbybbs", description="Run the BBS server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", default="1234", help="port to listen on")
    args = parser.parse_args(argv)

    print(f"lobbybbs version {BBS_VERSION}")
    log_msg("system is starting")

    server = BBSServer(args.host, args.port)
    previous = _install_signals(server)
    try:
        server.serve_forever()
    except NetworkError:
        return 1
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)
    return 0
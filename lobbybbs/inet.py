"""Listening and accepting TCP connections, IPv4 and IPv6 alike."""

from __future__ import annotations

import errno
import os
import socket
import time

from .log import log_err, log_msg, log_warn

BIND_RETRIES = 30
BIND_WAIT = 5
MAX_NEWCONNS = 5


class NetworkError(Exception):
    """A network operation failed; ``fatal`` marks errors on a broken socket."""

    def __init__(self, message: str, fatal: bool = False) -> None:
        super().__init__(message)
        self.fatal = fatal


def inet_error(err: BaseException | int) -> str:
    """Readable text for a socket or resolver error, or an errno value."""
    if isinstance(err, OSError):
        return err.strerror or str(err)
    if isinstance(err, int):
        return os.strerror(err)
    return str(err)


def inet_printaddr(host: str, service: str | int) -> str:
    """``host:service``, with IPv6 hosts in brackets."""
    if host is None or service is None:
        raise ValueError("host and service are required")
    if ":" in host:
        return f"[{host}]:{service}"
    return f"{host}:{service}"


def _numeric_addr(sockaddr) -> str | None:
    try:
        host, serv = socket.getnameinfo(
            sockaddr, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV
        )
    except OSError:
        return None
    return inet_printaddr(host, serv)


def _set_options(sock: socket.socket, where: str, reuse: bool) -> None:
    options = []
    if reuse:
        options.append(("SO_REUSEADDR", socket.SO_REUSEADDR, 1))
    options.append(("SO_KEEPALIVE", socket.SO_KEEPALIVE, 1))
    options.append(("SO_OOBINLINE", socket.SO_OOBINLINE, 0))
    for name, opt, value in options:
        try:
            sock.setsockopt(socket.SOL_SOCKET, opt, value)
        except OSError as exc:
            log_warn("%s: setsockopt(%s) failed: %s", where, name, inet_error(exc))


def _bind(
    sock: socket.socket, sockaddr, service: str, bind_retries: int, bind_wait: float
) -> bool:
    try:
        sock.bind(sockaddr)
        return True
    except OSError as exc:
        error = exc

    addr = _numeric_addr(sockaddr)
    if addr is None:
        log_warn("inet_listen(%s): bind failed on an interface, but I don't know which one(!)", service)
        return False

    if error.errno == errno.EADDRINUSE:
        for _ in range(bind_retries):
            log_warn("inet_listen(): waiting on bind() on %s", addr)
            time.sleep(bind_wait)
            try:
                sock.bind(sockaddr)
                return True
            except OSError as exc:
                error = exc
                if exc.errno != errno.EADDRINUSE:
                    break

    log_warn("inet_listen(): bind() failed on %s: %s", addr, inet_error(error))
    return False


def inet_listen(
    node: str | None,
    service: str | int,
    bind_retries: int = BIND_RETRIES,
    bind_wait: float = BIND_WAIT,
) -> socket.socket:
    """Return a listening socket on the first usable address for ``node:service``."""
    service = str(service)
    try:
        infos = socket.getaddrinfo(node, service, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except OSError as exc:
        log_err("inet_listen(%s): %s", service, inet_error(exc))
        raise NetworkError(f"can not resolve {node}:{service}: {inet_error(exc)}") from exc

    for family, socktype, proto, _, sockaddr in infos:
        if family == getattr(socket, "AF_UNIX", None):
            continue
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            # IPv6 may simply be unavailable here
            if not (exc.errno == errno.EAFNOSUPPORT and family == socket.AF_INET6):
                log_warn(
                    "inet_listen(%s): socket(family = %d, socktype = %d, protocol = %d) failed: %s",
                    service, family, socktype, proto, inet_error(exc),
                )
            continue

        _set_options(sock, f"inet_listen({service})", reuse=True)

        if not _bind(sock, sockaddr, service, bind_retries, bind_wait):
            sock.close()
            continue

        try:
            sock.listen(MAX_NEWCONNS)
        except OSError:
            addr = _numeric_addr(sockaddr)
            if addr is not None:
                log_err("inet_listen(): listen() failed on %s", addr)
            else:
                log_err("inet_listen(%s): listen() failed", service)
            sock.close()
            continue

        addr = _numeric_addr(sockaddr)
        if addr is not None:
            log_msg("listening on %s", addr)
        else:
            log_msg("listening on port %s", service)
        return sock

    log_err("failed to start network")
    raise NetworkError("failed to start network")


_FATAL_ACCEPT = {errno.ENOTSOCK, errno.EOPNOTSUPP, errno.EBADF}


def inet_accept(listen_sock: socket.socket) -> tuple[socket.socket, str]:
    """Accept a connection; return the non-blocking socket and the peer's IP address."""
    try:
        conn, client = listen_sock.accept()
    except OSError as exc:
        log_err("inet_accept(): failed to accept(): %s", inet_error(exc))
        fatal = exc.errno in _FATAL_ACCEPT
        if fatal:
            log_err("This is a serious error, aborting")
        raise NetworkError(f"accept failed: {inet_error(exc)}", fatal=fatal) from exc

    try:
        conn.setblocking(False)
    except OSError:
        log_warn("inet_accept(): failed to set socket nonblocking")

    _set_options(conn, "inet_accept()", reuse=False)

    try:
        ipaddr, _ = socket.getnameinfo(client, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV)
    except OSError as exc:
        log_warn("inet_accept(): getnameinfo(): %s", inet_error(exc))
        ipaddr = "0.0.0.0"
    return conn, ipaddr
import errno
import os
import socket

import pytest

from lobbybbs.inet import NetworkError, inet_accept, inet_error, inet_listen, inet_printaddr


def test_printaddr_ipv4():
    assert inet_printaddr("127.0.0.1", "80") == "127.0.0.1:80"


def test_printaddr_ipv6_in_brackets():
    assert inet_printaddr("::1", "1234") == "[::1]:1234"


def test_printaddr_rejects_none():
    with pytest.raises(ValueError):
        inet_printaddr(None, "80")


def test_inet_error_from_errno():
    assert inet_error(errno.EADDRINUSE) == os.strerror(errno.EADDRINUSE)


def test_inet_error_from_exception():
    exc = OSError(errno.ECONNREFUSED, os.strerror(errno.ECONNREFUSED))
    assert inet_error(exc) == os.strerror(errno.ECONNREFUSED)


def test_listen_and_accept():
    server = inet_listen("127.0.0.1", "0")
    try:
        host, port = server.getsockname()[:2]
        assert host == "127.0.0.1"
        assert port > 0
        client = socket.create_connection((host, port), timeout=5)
        try:
            conn, ipaddr = inet_accept(server)
            try:
                assert ipaddr == "127.0.0.1"
                assert conn.gettimeout() == 0.0
                assert conn.getsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE) != 0
            finally:
                conn.close()
        finally:
            client.close()
    finally:
        server.close()


def test_listen_unknown_service():
    with pytest.raises(NetworkError):
        inet_listen("127.0.0.1", "no-such-service-here")


def test_listen_port_in_use():
    first = inet_listen("127.0.0.1", "0")
    try:
        port = first.getsockname()[1]
        with pytest.raises(NetworkError):
            inet_listen("127.0.0.1", str(port), bind_retries=1, bind_wait=0)
    finally:
        first.close()


def test_accept_on_closed_socket_is_fatal():
    server = inet_listen("127.0.0.1", "0")
    server.close()
    with pytest.raises(NetworkError) as info:
        inet_accept(server)
    assert info.value.fatal is True
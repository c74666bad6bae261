#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""Tests for the datagram connection."""

import os
import socket
import tempfile
from unittest import mock

import pytest

from batchstatsd.connection import Connection
from batchstatsd.errors import SendError, StatsdConnectionError


class FailingSocket:
    "Pretend to be a UDP socket that cannot send"

    def send(self, msg):
        raise OSError("Network is unreachable")

    def close(self):
        pass


class TestConnectionInit:

    def test_init_attributes(self):
        conn = Connection("localhost", "8126")

        assert conn.host == "localhost"
        assert conn.port == "8126"
        assert conn.address == ("localhost", 8126)
        assert conn.sock is None
        assert not conn.connected

    def test_unix_address(self):
        conn = Connection("unix:/tmp/statsd.sock")
        assert conn.address == "/tmp/statsd.sock"
        assert "unix:/tmp/statsd.sock" in repr(conn)


class TestConnectionUDP:

    def test_establish_and_send(self, udp_server):
        conn = Connection("127.0.0.1", udp_server.getsockname()[1])
        assert conn.establish()
        assert conn.connected

        conn.send(b"foo.bar:1|c\n")
        assert udp_server.recv(1024) == b"foo.bar:1|c\n"
        conn.close()

    def test_establish_replaces_socket(self, udp_server):
        conn = Connection("127.0.0.1", udp_server.getsockname()[1])
        conn.establish()
        first = conn.sock

        assert conn.establish()
        assert conn.sock is not first
        assert first.fileno() == -1

        conn.send(b"foo.bar:1|c\n")
        assert udp_server.recv(1024) == b"foo.bar:1|c\n"
        conn.close()

    def test_close_idempotent(self, udp_server):
        conn = Connection("127.0.0.1", udp_server.getsockname()[1])
        conn.establish()
        conn.close()
        conn.close()
        assert not conn.connected

    def test_closed_connection_is_not_reopened(self, udp_server):
        log = mock.Mock()
        conn = Connection("127.0.0.1", udp_server.getsockname()[1], log=log)
        conn.establish()
        conn.close()

        assert conn.closed
        assert conn.establish() is False
        assert not conn.connected
        with pytest.raises(SendError):
            conn.send(b"foo.bar:1|c\n")


class TestConnectionUnix:

    def test_send_over_unix_socket(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "statsd.sock")
            server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
            server.bind(path)
            try:
                conn = Connection("unix:%s" % path)
                assert conn.establish()
                conn.send(b"foo.time:42|ms\n")
                assert server.recv(1024) == b"foo.time:42|ms\n"
                conn.close()
            finally:
                server.close()


class TestConnectionErrors:

    def test_connect_nonexistent_socket(self):
        conn = Connection("unix:/nonexistent/statsd.sock")

        with pytest.raises(StatsdConnectionError) as exc_info:
            conn.connect()

        assert "Cannot connect" in str(exc_info.value)
        assert exc_info.value.address == "unix:/nonexistent/statsd.sock"
        assert conn.sock is None

    def test_establish_logs_instead_of_raising(self):
        log = mock.Mock()
        conn = Connection("unix:/nonexistent/statsd.sock", log=log)

        assert conn.establish() is False
        assert not conn.connected
        assert log.error.called

    def test_send_without_socket(self):
        conn = Connection("localhost", 8125)

        with pytest.raises(SendError) as exc_info:
            conn.send(b"foo.bar:1|c\n")

        assert "Not connected" in str(exc_info.value)

    def test_send_failure(self):
        conn = Connection("localhost", 8125)
        conn.sock = FailingSocket()

        with pytest.raises(SendError) as exc_info:
            conn.send(b"foo.bar:1|c\n")

        assert "Network is unreachable" in str(exc_info.value)
        assert exc_info.value.details == {"address": "localhost:8125"}

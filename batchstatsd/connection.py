#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""
Datagram connection to the StatsD daemon.

A Connection owns one connected datagram socket and the lock guarding it.
Several clients may share a Connection; every use or replacement of the
socket happens while holding ``Connection.lock``.
"""

import socket
import threading

from batchstatsd import util
from batchstatsd.errors import SendError, StatsdConnectionError
from batchstatsd.glogging import get_error_log


class Connection:
    """Connected UDP (or unix datagram) socket to a StatsD daemon."""

    def __init__(self, host, port=util.STATSD_DEFAULT_PORT, log=None):
        self.host = host
        self.port = port
        self.address = util.make_address(host, port)
        self.log = log or get_error_log()
        self.sock = None
        self._closed = False
        # reentrant so a flush holding the lock can reconnect
        self.lock = threading.RLock()

    def __repr__(self):
        return "<Connection %s connected=%s>" % (
            util.format_address(self.address), self.connected)

    @property
    def connected(self):
        return self.sock is not None

    @property
    def closed(self):
        return self._closed

    def connect(self):
        """
        Open the datagram socket and connect it to the daemon.

        Raises:
            StatsdConnectionError: If the socket cannot be opened
        """
        with self.lock:
            sock = None
            try:
                sock = socket.socket(util.address_family(self.address),
                                     socket.SOCK_DGRAM)
                sock.connect(self.address)
            except (socket.error, OSError) as e:
                if sock is not None:
                    util.close(sock)
                self.sock = None
                raise StatsdConnectionError(
                    f"Cannot connect to statsd server: {e}",
                    address=util.format_address(self.address)
                ) from e
            self.sock = sock

    def establish(self):
        """(Re)open the socket, logging instead of raising on failure.

        Returns True when a socket is connected afterwards.
        """
        with self.lock:
            if self._closed:
                self.log.debug("Connection to %s is closed, not reopening",
                               util.format_address(self.address))
                return False
            self._close_socket()
            try:
                self.connect()
            except StatsdConnectionError as e:
                self.log.error("%s", e)
                return False
            self.log.debug("Connected to statsd server %s",
                           util.format_address(self.address))
            return True

    def send(self, data):
        """
        Write ``data`` as one datagram.

        Raises:
            SendError: If there is no socket or the write fails
        """
        with self.lock:
            if self.sock is None:
                raise SendError("Not connected to statsd server",
                                address=util.format_address(self.address))
            try:
                self.sock.send(data)
            except (socket.error, OSError) as e:
                raise SendError(f"Error sending to statsd server: {e}",
                                address=util.format_address(self.address)) from e

    def close(self):
        """Release the socket. A closed connection is never reopened."""
        with self.lock:
            self._closed = True
            self._close_socket()

    def _close_socket(self):
        if self.sock is not None:
            util.close(self.sock)
            self.sock = None

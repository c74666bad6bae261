#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""
StatsD Client

Public facade for emitting counters and timers. Every call formats a line
and hands it to the buffered sender; nothing here raises because a metric
could not be delivered.

Usage::

    from batchstatsd.client import new

    client = new("localhost", 8125)
    client.increment("foo.bar")
    with client.timer("foo.time"):
        expensive_call()
    client.close()
"""

import time
from contextlib import contextmanager

from batchstatsd import protocol, util
from batchstatsd.config import validate_sample_rate
from batchstatsd.connection import Connection
from batchstatsd.glogging import Logger, get_error_log
from batchstatsd.sender import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_QUEUE,
    BufferedSender,
)


class StatsClient:
    """Buffered StatsD client."""

    def __init__(self, host="localhost", port=util.STATSD_DEFAULT_PORT,
                 sample_rate=1.0, buffer_size=DEFAULT_BUFFER_SIZE,
                 max_queue=DEFAULT_MAX_QUEUE, connection=None, log=None):
        """
        Initialize the client and start its sender thread.

        Args:
            host: StatsD daemon host, or 'unix:PATH'
            port: StatsD daemon port (int or str)
            sample_rate: Default sample rate in (0, 1]
            buffer_size: Capacity of the line buffer in bytes
            max_queue: Queue bound for pending lines, 0 for unbounded
            connection: Connection to share with other clients. A client
                only closes a connection it created itself.
            log: Logger, defaults to the 'batchstatsd.error' logger
        """
        self.host = host
        self.port = port
        self.sample_rate = validate_sample_rate(sample_rate)
        self.log = log or get_error_log()

        if connection is None:
            connection = Connection(host, port, log=self.log)
            connection.establish()
            self._owns_connection = True
        else:
            self._owns_connection = False
        self.connection = connection

        self.sender = BufferedSender(connection, buffer_size=buffer_size,
                                     max_queue=max_queue, log=self.log)
        self._closed = False
        self.sender.start()

    def __repr__(self):
        return "<StatsClient %s>" % util.format_address(
            self.connection.address)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def closed(self):
        return self._closed

    def timing(self, stat, duration_ms, sample_rate=None):
        """Log timing information, in milliseconds, for a single stat."""
        sample_rate = self._keep(sample_rate, 1)
        if sample_rate is not None:
            self.sender.put(protocol.timer_line(stat, duration_ms, sample_rate))

    def increment(self, stat, sample_rate=None):
        """Increment one stat counter."""
        self.update_stats(stat, 1, sample_rate)

    def decrement(self, stat, sample_rate=None):
        """Decrement one stat counter."""
        self.update_stats(stat, -1, sample_rate)

    def update_stats(self, stats, delta, sample_rate=None):
        """Update one or more stat counters by an arbitrary delta."""
        if isinstance(stats, str):
            stats = [stats]
        sample_rate = self._keep(sample_rate, len(stats))
        if sample_rate is None:
            return
        for stat in stats:
            self.sender.put(protocol.counter_line(stat, delta, sample_rate))

    def send(self, data, sample_rate=None):
        """Queue a mapping of stat name to 'value|type'.

        The whole mapping is kept or dropped according to the sample rate.
        """
        sample_rate = self._keep(sample_rate, len(data))
        if sample_rate is None:
            return
        for stat, update in data.items():
            self.sender.put(protocol.format_line(stat, update, sample_rate))

    def _keep(self, sample_rate, count):
        """Return the rate to tag the lines with, or None to drop them."""
        if self._closed:
            self.log.debug("Client closed, dropping %d stats", count)
            return None
        if sample_rate is None:
            sample_rate = self.sample_rate
        if not protocol.sampled(sample_rate):
            return None
        return sample_rate

    @contextmanager
    def timer(self, stat, sample_rate=None):
        """Time the enclosed block and log it with ``timing``."""
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed = int((time.monotonic() - start) * 1000)
            self.timing(stat, elapsed, sample_rate)

    def close(self, timeout=None):
        """Flush pending lines, stop the sender and release the socket."""
        if self._closed:
            return
        self._closed = True
        self.sender.stop(timeout)
        if self._owns_connection:
            self.connection.close()


def new(host, port, sample_rate=1.0):
    """Return a client connected to the daemon at ``host:port``."""
    return StatsClient(host, port, sample_rate=sample_rate)


def make_client(cfg):
    """Return a client configured from a ``Config``."""
    log = Logger(cfg)
    address = cfg.address
    if isinstance(address, str):
        host, port = "unix:%s" % address, None
    else:
        host, port = address
    return StatsClient(host, port,
                       sample_rate=cfg.sample_rate,
                       buffer_size=cfg.buffer_size,
                       max_queue=cfg.max_queue,
                       log=log)

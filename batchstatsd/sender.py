#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""
Buffered Sender

A single worker thread takes formatted lines off a queue, batches them into
a fixed-size buffer and writes the buffer to the connection when the next
line would not fit, when the buffer is full, or on shutdown.

The queue carries both lines and the shutdown sentinel, so every line put
before ``stop()`` is flushed before the worker exits.
"""

import queue
import threading

from batchstatsd import util
from batchstatsd.errors import SendError
from batchstatsd.glogging import get_error_log
from batchstatsd.protocol import LINE_SEPARATOR

DEFAULT_BUFFER_SIZE = 512
DEFAULT_MAX_QUEUE = 8192

# one write plus one retry after reconnecting
FLUSH_ATTEMPTS = 2

_SHUTDOWN = object()


class BufferedSender:
    """Batches lines and flushes them to a Connection from a worker thread."""

    def __init__(self, connection, buffer_size=DEFAULT_BUFFER_SIZE,
                 max_queue=DEFAULT_MAX_QUEUE, log=None):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive: %s" % buffer_size)
        self.connection = connection
        self.buffer_size = buffer_size
        self.log = log or get_error_log()
        self.buffer = bytearray()
        # maxsize=0 gives an unbounded queue
        self.queue = queue.Queue(maxsize=max_queue)
        self._thread = None
        self._stopping = False
        self._lock = threading.Lock()

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        with self._lock:
            if self._thread is not None or self._stopping:
                return
            self._thread = threading.Thread(target=self.run,
                                            name="batchstatsd-sender",
                                            daemon=True)
            self._thread.start()

    def put(self, line):
        """Queue a line for the worker.

        Waits while a bounded queue is full. Lines put after ``stop()``
        are dropped.
        """
        with self._lock:
            if self._stopping:
                self.log.debug("Sender stopped, dropping line %r", line)
                return False
            # under the lock so no line lands behind the shutdown sentinel
            self.queue.put(line)
        return True

    def stop(self, timeout=None):
        """Ask the worker to flush what it has and exit, then wait for it."""
        with self._lock:
            if self._stopping:
                already_stopped = True
            else:
                already_stopped = False
                self._stopping = True
                thread = self._thread

        if already_stopped:
            return

        if thread is None:
            # never started: drain here so queued lines are not lost
            self._drain()
            if self.buffer:
                self.flush()
            return

        self.queue.put(_SHUTDOWN)
        thread.join(timeout)
        if thread.is_alive():
            self.log.warning("Sender did not stop within %s seconds", timeout)

    def run(self):
        while True:
            item = self.queue.get()
            if item is _SHUTDOWN:
                if self.buffer:
                    self.flush()
                return
            try:
                self.handle_line(item)
            except Exception:
                self.log.exception("Error handling line %r", item)

    def handle_line(self, line):
        data = util.to_bytestring(line + LINE_SEPARATOR)

        if self.buffer and len(self.buffer) + len(data) > self.buffer_size:
            self.flush()

        self.buffer.extend(data)

        if len(self.buffer) >= self.buffer_size:
            self.flush()

    def flush(self):
        """Write the buffer to the connection and clear it.

        On a failed write the connection is re-established and the write
        retried once; if that fails too the data is dropped.
        """
        if not self.buffer:
            return

        payload = bytes(self.buffer)
        with self.connection.lock:
            try:
                for attempt in range(1, FLUSH_ATTEMPTS + 1):
                    try:
                        self.connection.send(payload)
                        break
                    except SendError as e:
                        if attempt == FLUSH_ATTEMPTS:
                            self.log.error("Dropping %d bytes of metrics: %s",
                                           len(payload), e)
                        else:
                            self.log.warning("%s, reconnecting", e)
                            self.connection.establish()
            finally:
                self.buffer.clear()

    def _drain(self):
        while True:
            try:
                item = self.queue.get_nowait()
            except queue.Empty:
                return
            if item is not _SHUTDOWN:
                self.handle_line(item)

#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""Pytest configuration for batchstatsd tests."""

import socket

import pytest


@pytest.fixture
def udp_server():
    """A bound UDP socket standing in for the statsd daemon."""
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(2.0)
    try:
        yield server
    finally:
        server.close()

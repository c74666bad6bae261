#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.
import socket

import pytest

from batchstatsd import util


@pytest.mark.parametrize('test_input, expected', [
    ('unix:/var/run/statsd.sock', '/var/run/statsd.sock'),
    ('', ('localhost', 8125)),
    ('[::1]:8126', ('::1', 8126)),
    ('[::1]', ('::1', 8125)),
    ('localhost:9125', ('localhost', 9125)),
    ('127.0.0.1:8125', ('127.0.0.1', 8125)),
    ('Metrics.Example.com', ('metrics.example.com', 8125)),
])
def test_parse_address(test_input, expected):
    assert util.parse_address(test_input) == expected


def test_parse_address_invalid():
    with pytest.raises(RuntimeError) as exc_info:
        util.parse_address('127.0.0.1:test')
    assert "'test' is not a valid port number." in str(exc_info.value)


@pytest.mark.parametrize('host, port, expected', [
    ('localhost', 8125, ('localhost', 8125)),
    ('localhost', '8126', ('localhost', 8126)),
    ('unix:/tmp/statsd.sock', None, '/tmp/statsd.sock'),
])
def test_make_address(host, port, expected):
    assert util.make_address(host, port) == expected


@pytest.mark.parametrize('address, expected', [
    (('127.0.0.1', 8125), socket.AF_INET),
    (('localhost', 8125), socket.AF_INET),
    (('::1', 8125), socket.AF_INET6),
    ('/tmp/statsd.sock', socket.AF_UNIX),
])
def test_address_family(address, expected):
    assert util.address_family(address) == expected


def test_format_address():
    assert util.format_address(('localhost', 8125)) == 'localhost:8125'
    assert util.format_address('/tmp/statsd.sock') == 'unix:/tmp/statsd.sock'


def test_to_bytestring():
    assert util.to_bytestring('test_str', 'ascii') == b'test_str'
    assert util.to_bytestring('test_str®') == b'test_str\xc2\xae'
    assert util.to_bytestring(b'byte_test_str') == b'byte_test_str'
    with pytest.raises(TypeError) as exc_info:
        util.to_bytestring(100)
    msg = '100 is not a string'
    assert msg in str(exc_info.value)

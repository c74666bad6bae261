# -*- coding: utf-8 -
#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

import socket

STATSD_DEFAULT_PORT = 8125


def is_ipv6(addr):
    try:
        socket.inet_pton(socket.AF_INET6, addr)
    except (socket.error, ValueError):
        return False
    return True


def parse_address(netloc, default_port=STATSD_DEFAULT_PORT):
    if netloc.startswith("unix:"):
        return netloc.split("unix:")[1]

    # get host
    if '[' in netloc and ']' in netloc:
        host = netloc.split(']')[0][1:].lower()
    elif ':' in netloc:
        host = netloc.split(':')[0].lower()
    elif netloc == "":
        host = "localhost"
    else:
        host = netloc.lower()

    # get port
    netloc = netloc.split(']')[-1]
    if ":" in netloc:
        port = netloc.split(':', 1)[1]
        if not port.isdigit():
            raise RuntimeError("%r is not a valid port number." % port)
        port = int(port)
    else:
        port = default_port
    return (host, port)


def make_address(host, port):
    """Return the socket address for ``host``/``port``.

    A host of the form ``unix:PATH`` yields the path itself.
    """
    if isinstance(host, str) and host.startswith("unix:"):
        return host.split("unix:")[1]
    return (host, int(port))


def address_family(address):
    if isinstance(address, str):
        return socket.AF_UNIX
    if is_ipv6(address[0]):
        return socket.AF_INET6
    return socket.AF_INET


def format_address(address):
    if isinstance(address, str):
        return "unix:%s" % address
    return "%s:%s" % address


def to_bytestring(value, encoding="utf8"):
    """Converts a string argument to a byte string"""
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise TypeError('%r is not a string' % value)

    return value.encode(encoding)


def close(sock):
    try:
        sock.close()
    except socket.error:
        pass

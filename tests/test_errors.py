#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""Tests for the error classes."""

from batchstatsd.errors import (
    ConfigError,
    SendError,
    StatsdConnectionError,
    StatsdError,
)


def test_base_error():
    error = StatsdError("Something went wrong")
    assert str(error) == "Something went wrong"
    assert error.details == {}


def test_base_error_details():
    error = StatsdError("Something went wrong", {"key": "value"})
    assert "key" in str(error)


def test_connection_error():
    error = StatsdConnectionError("Cannot connect", address="localhost:8125")
    assert isinstance(error, StatsdError)
    assert error.address == "localhost:8125"
    assert str(error) == "Cannot connect: {'address': 'localhost:8125'}"


def test_send_error_without_address():
    error = SendError("Error sending")
    assert error.address is None
    assert str(error) == "Error sending"


def test_config_error():
    assert issubclass(ConfigError, StatsdError)

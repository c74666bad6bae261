#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"""
StatsD Client Error Classes

None of these reach the code emitting metrics: connection and send errors
are logged by the sender, configuration errors are raised while building
the client.
"""


class StatsdError(Exception):
    """Base exception for all statsd client errors."""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class StatsdConnectionError(StatsdError):
    """Raised when the datagram socket cannot be opened or re-opened."""

    def __init__(self, message, address=None):
        self.address = address
        details = {"address": address} if address else None
        super().__init__(message, details)


class SendError(StatsdError):
    """Raised when writing a payload to the socket fails."""

    def __init__(self, message, address=None):
        self.address = address
        details = {"address": address} if address else None
        super().__init__(message, details)


class ConfigError(StatsdError):
    """Raised for an invalid client configuration."""

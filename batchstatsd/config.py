# -*- coding: utf-8 -
#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

import copy
import textwrap

from batchstatsd import util
from batchstatsd.errors import ConfigError

KNOWN_SETTINGS = []


def wrap_method(func):
    def _wrapped(instance, *args, **kwargs):
        return func(*args, **kwargs)
    return _wrapped


def make_settings(ignore=None):
    settings = {}
    ignore = ignore or ()
    for s in KNOWN_SETTINGS:
        setting = s()
        if setting.name in ignore:
            continue
        settings[setting.name] = setting.copy()
    return settings


class Config(object):

    def __init__(self, **kwargs):
        self.settings = make_settings()
        for name, value in kwargs.items():
            self.set(name, value)

    def __getattr__(self, name):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        return self.settings[name].get()

    def __setattr__(self, name, value):
        if name != "settings" and name in self.settings:
            raise AttributeError("Invalid access!")
        super().__setattr__(name, value)

    def set(self, name, value):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        self.settings[name].set(value)

    @property
    def address(self):
        host = self.settings['statsd_host'].get()
        try:
            return util.parse_address(host)
        except RuntimeError as e:
            raise ConfigError(str(e)) from e


class SettingMeta(type):
    def __new__(cls, name, bases, attrs):
        super_new = super().__new__
        parents = [b for b in bases if isinstance(b, SettingMeta)]
        if not parents:
            return super_new(cls, name, bases, attrs)

        attrs["order"] = len(KNOWN_SETTINGS)
        attrs["validator"] = wrap_method(attrs["validator"])

        new_class = super_new(cls, name, bases, attrs)
        new_class.fmt_desc(attrs.get("desc", ""))
        KNOWN_SETTINGS.append(new_class)
        return new_class

    def fmt_desc(cls, desc):
        desc = textwrap.dedent(desc).strip()
        setattr(cls, "desc", desc)
        setattr(cls, "short", desc.splitlines()[0])


class Setting(metaclass=SettingMeta):
    name = None
    value = None
    section = None
    validator = None
    default = None
    short = None
    desc = None

    def __init__(self):
        if self.default is not None:
            self.set(self.default)

    def copy(self):
        return copy.copy(self)

    def get(self):
        return self.value

    def set(self, val):
        assert callable(self.validator), "Invalid validator: %s" % self.name
        self.value = self.validator(val)

    def __repr__(self):
        return "<%s.%s object at %x with value %r>" % (
            self.__class__.__module__,
            self.__class__.__name__,
            id(self),
            self.value,
        )


def validate_pos_int(val):
    if isinstance(val, bool):
        raise TypeError("Not an integer: %s" % val)
    if not isinstance(val, int):
        val = int(val, 0)
    if val < 0:
        raise ValueError("Value must be positive: %s" % val)
    return val


def validate_string(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise TypeError("Not a string: %s" % val)
    return val.strip()


def validate_sample_rate(val):
    if isinstance(val, bool):
        raise TypeError("Not a number: %s" % val)
    val = float(val)
    if not 0 < val <= 1:
        raise ValueError("Sample rate must be in (0, 1]: %s" % val)
    return val


def validate_statsd_address(val):
    val = validate_string(val)
    if val is None:
        return None

    if val.startswith("unix:"):
        return val

    try:
        util.parse_address(val)
    except RuntimeError:
        raise TypeError("Value must be one of ('host:port', 'unix:PATH')")
    return val


def validate_loglevel(val):
    val = validate_string(val)
    if val.lower() not in ("critical", "error", "warning", "info", "debug"):
        raise ValueError("Invalid log level: %s" % val)
    return val.lower()


class StatsdHost(Setting):
    name = "statsd_host"
    section = "Daemon"
    validator = validate_statsd_address
    default = "localhost:%d" % util.STATSD_DEFAULT_PORT
    desc = """\
        The address of the StatsD daemon to send metrics to.

        A string of the form: 'HOST', 'HOST:PORT' or 'unix:PATH'. When the
        port is omitted it defaults to 8125.
        """


class BufferSize(Setting):
    name = "buffer_size"
    section = "Buffering"
    validator = validate_pos_int
    default = 512
    desc = """\
        The capacity, in bytes, of the line buffer.

        Lines are batched into one datagram until the next line would not
        fit. Keep it below the path MTU so datagrams are not fragmented.
        """


class MaxQueue(Setting):
    name = "max_queue"
    section = "Buffering"
    validator = validate_pos_int
    default = 8192
    desc = """\
        The maximum number of lines waiting for the sender thread.

        When the queue is full the calling thread waits until the sender
        drains it. Set to 0 for an unbounded queue.
        """


class SampleRate(Setting):
    name = "sample_rate"
    section = "Sampling"
    validator = validate_sample_rate
    default = 1.0
    desc = """\
        The default sample rate for counters and timers.

        A rate below 1 keeps each line with that probability and tags it
        with '|@RATE' so the daemon can scale the value back up.
        """


class Loglevel(Setting):
    name = "loglevel"
    section = "Logging"
    validator = validate_loglevel
    default = "info"
    desc = """\
        The granularity of the client's error log output.

        Valid level names are:

        * debug
        * info
        * warning
        * error
        * critical
        """


class ErrorLog(Setting):
    name = "errorlog"
    section = "Logging"
    validator = validate_string
    default = "-"
    desc = """\
        The error log file to write to.

        Using ``'-'`` for FILE makes the client log to stderr.
        """

# -*- coding: utf-8 -
#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

"Bare-bones implementation of statsD's protocol, client-side"

import random

COUNTER_TYPE = "c"
TIMER_TYPE = "ms"

LINE_SEPARATOR = "\n"


def format_update(value, mtype):
    """Render the ``value|type`` half of a line."""
    return "%d|%s" % (value, mtype)


def format_line(name, update, sample_rate=1):
    """Render one observation as ``name:value|type``.

    The name is written as given; callers keep ``:``, ``|`` and newlines
    out of it. A sample rate below 1 adds the ``|@rate`` suffix.
    """
    line = "%s:%s" % (name, update)
    if sample_rate < 1:
        line = "%s|@%s" % (line, sample_rate)
    return line


def counter_line(name, delta, sample_rate=1):
    return format_line(name, format_update(delta, COUNTER_TYPE), sample_rate)


def timer_line(name, duration_ms, sample_rate=1):
    return format_line(name, format_update(duration_ms, TIMER_TYPE),
                       sample_rate)


def sampled(sample_rate):
    """Return True if an observation at ``sample_rate`` should be kept."""
    if sample_rate >= 1:
        return True
    return random.random() < sample_rate

# -*- coding: utf-8 -
#
# This file is part of batchstatsd released under the MIT license.
# See the NOTICE for more information.

import logging
import threading

ERROR_LOGGER = "batchstatsd.error"


def get_error_log():
    return logging.getLogger(ERROR_LOGGER)


class LazyWriter(object):

    """
    File-like object that opens a file lazily when it is first written
    to.
    """

    def __init__(self, filename, mode='w'):
        self.filename = filename
        self.fileobj = None
        self.lock = threading.Lock()
        self.mode = mode

    def open(self):
        if self.fileobj is None:
            with self.lock:
                if self.fileobj is None:
                    self.fileobj = open(self.filename, self.mode)
        return self.fileobj

    def close(self):
        if self.fileobj:
            with self.lock:
                if self.fileobj:
                    self.fileobj.close()
                    self.fileobj = None

    def write(self, text):
        fileobj = self.open()
        fileobj.write(text)
        fileobj.flush()

    def flush(self):
        self.open().flush()

    def isatty(self):
        return bool(self.fileobj and self.fileobj.isatty())


class Logger(object):

    LOG_LEVELS = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG
    }

    error_fmt = r"%(asctime)s [%(process)d] [%(levelname)s] %(message)s"
    datefmt = r"%Y-%m-%d %H:%M:%S"

    def __init__(self, cfg):
        self.error_log = get_error_log()
        self.cfg = cfg
        self.setup(cfg)

    def setup(self, cfg):
        loglevel = self.LOG_LEVELS.get(cfg.loglevel.lower(), logging.INFO)
        self.error_log.setLevel(loglevel)

        self._set_handler(self.error_log, cfg.errorlog,
                          logging.Formatter(self.error_fmt, self.datefmt))

    def critical(self, msg, *args, **kwargs):
        self.error_log.critical(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self.error_log.error(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.error_log.warning(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.error_log.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.error_log.debug(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        self.error_log.exception(msg, *args, **kwargs)

    def log(self, lvl, msg, *args, **kwargs):
        if isinstance(lvl, str):
            lvl = self.LOG_LEVELS.get(lvl.lower(), logging.INFO)
        self.error_log.log(lvl, msg, *args, **kwargs)

    def close(self):
        h = self._get_batchstatsd_handler(self.error_log)
        if h:
            self.error_log.removeHandler(h)
            h.close()
            if isinstance(h.stream, LazyWriter):
                h.stream.close()

    def _get_batchstatsd_handler(self, log):
        for h in log.handlers:
            if getattr(h, "_batchstatsd", False):
                return h
        return None

    def _set_handler(self, log, output, fmt):
        # remove previous batchstatsd log handler
        h = self._get_batchstatsd_handler(log)
        if h:
            log.removeHandler(h)
            h.close()

        if output == "-":
            h = logging.StreamHandler()
        else:
            h = logging.StreamHandler(LazyWriter(output, 'a'))

        h.setFormatter(fmt)
        h._batchstatsd = True
        log.addHandler(h)

#!/usr/bin/env python -O
# -*- coding: utf-8 -*-
import io
import logging
import logging.config
import update_batching

from . import fake_dbapi
from .conf_test import conf
from os import path


def configure_logging():
    log_file_path = path.join(path.dirname(path.abspath(__file__)), 'logging.conf')
    logging.config.fileConfig(log_file_path, disable_existing_loggers=False)


def merged_conf(additional_conf=None):
    default_conf = conf()
    if additional_conf is None:
        c = {key: value for (key, value) in (default_conf.items())}
    else:
        c = {key: value for (key, value) in (list(default_conf.items()) + list(
            additional_conf.items()))}
    return c


def create_connection(additional_conf=None):
    configure_logging()
    return update_batching.connect(**merged_conf(additional_conf))


def create_driver(additional_conf=None):
    """Driver on the fake database, printing into a StringIO available as driver.conf['out']."""
    configure_logging()
    fake_dbapi.reset()
    c = merged_conf(additional_conf)
    c.setdefault("out", io.StringIO())
    return update_batching.BenchmarkDriver(c)


def ticking_clock(step=7):
    """Deterministic clock advancing `step` ticks on every call."""
    state = [0]

    def clock():
        state[0] += step
        return state[0]

    return clock

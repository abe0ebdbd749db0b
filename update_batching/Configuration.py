import importlib
import sys
import time

ITERATIONS = 50000
PAIRS = 10


def default_conf(arg=None) -> dict:
    conf = dict(arg or {})

    conf.setdefault("driver", "mysql.connector")
    conf.setdefault("host", "localhost")
    conf.setdefault("port", 3306)
    conf.setdefault("database", "Fortunes")
    conf.setdefault("user")
    conf.setdefault("password")
    conf.setdefault("autocommit", True)
    conf.setdefault("connect_args", {})

    conf.setdefault("iterations", ITERATIONS)
    conf.setdefault("pairs", PAIRS)
    conf.setdefault("seed")
    conf.setdefault("record_observations", False)
    conf.setdefault("clock", time.perf_counter_ns)
    conf.setdefault("out", sys.stdout)

    conf.setdefault("no_backslash_escapes", False)

    conf.setdefault("dump_queries_on_exception", False)
    conf.setdefault("max_query_size_to_log", 1024)
    return conf


def resolve_driver(conf):
    """Return the PEP 249 module named (or given) by conf['driver']."""
    driver = conf.get("driver")
    if isinstance(driver, str):
        return importlib.import_module(driver)
    return driver


def connect_kwargs(conf) -> dict:
    kwargs = {}
    for key in ("host", "port", "database", "user", "password", "autocommit"):
        if conf.get(key) is not None:
            kwargs[key] = conf.get(key)
    kwargs.update(conf.get("connect_args") or {})
    return kwargs

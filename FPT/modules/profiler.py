import time
import functools
from contextlib import contextmanager

from FPT.debug.debug_manager import Debug


def _counter_name(key, group):
    return f"{group}/{key}" if group else key


def profile(key, group=None):
    """Publish the wall time of each call, in ms, as a Debug performance counter."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                Debug.set_performance_counter(_counter_name(key, group),
                                              (time.perf_counter() - start) * 1000)

        return wrapper

    return decorator


@contextmanager
def profile_context(key, group=None):
    start = time.perf_counter()
    try:
        yield
    finally:
        Debug.set_performance_counter(_counter_name(key, group), (time.perf_counter() - start) * 1000)

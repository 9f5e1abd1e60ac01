import contextlib
import time

from txchop import my_logging


@contextlib.contextmanager
def time_measure(key):
    """Log the wall clock time spent in the context as data record "time_<key>"."""
    start = time.time()
    yield
    end = time.time()
    my_logging.data("time_" + key, end - start)

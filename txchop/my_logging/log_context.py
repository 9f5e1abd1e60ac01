import contextlib
from typing import List

full_log_context: List = []


@contextlib.contextmanager
def log_context(key: str, value=None):
    full_log_context.append(key if value is None else f'{key}={value}')
    try:
        yield
    finally:
        full_log_context.pop()

"""Reusable decorators for builder utilities."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(label: str) -> Callable[[Callable], Callable]:
    """
    Log how long each call of the decorated function takes.

    :param label: Names the work in the log line, e.g. ``"learning"`` gives
        ``learning completed in 0.12 s``.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            # still logged when func raises
            finally:
                elapsed = time.perf_counter() - start
                log.info(f"{label} completed in {elapsed:.2f} s ({elapsed / 60:.2f} mins)")

        return wrapper

    return decorator

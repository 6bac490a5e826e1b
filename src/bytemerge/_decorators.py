"""Timing decorator for training runs."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """
    Log wall time of a training call.

    When the result carries ``n_merges_completed`` the merge rate is logged
    as well. Failed calls log the time spent before the error.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.info(f"{func.__name__} failed after {time.perf_counter() - start:.2f} s")
            raise

        elapsed = time.perf_counter() - start
        n_merges = getattr(result, "n_merges_completed", None)
        if n_merges is None:
            log.info(f"{func.__name__} finished in {elapsed:.2f} s")
        else:
            rate = n_merges / elapsed if elapsed > 0 else float("inf")
            log.info(
                f"{func.__name__}: {n_merges} merges in {elapsed:.2f} s "
                f"({rate:,.1f} merges/s)"
            )
        return result

    return wrapper

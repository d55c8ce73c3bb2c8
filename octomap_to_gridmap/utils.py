import logging
import math
import time
from functools import wraps


# ────────────────────── Utilities ──────────────────────

def measure_time(func):
    logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapse_time = (time.perf_counter() - start) * 1000
        logger.debug(f"[{func.__name__}] Elapsed time: {elapse_time:.4f} msec")
        return result
    return wrapper


def round_half_away(value: float) -> int:
    """Round like C's round(): halves go away from zero (Python's round() goes to even)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))

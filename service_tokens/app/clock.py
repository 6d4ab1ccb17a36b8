"""
Wall clock in Unix epoch milliseconds.
"""

import time
from typing import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Current UTC time in milliseconds."""
    return int(time.time() * 1000)

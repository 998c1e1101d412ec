from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


def await_condition(
    predicate: Callable[[], bool],
    *,
    interval: float,
    timeout: float,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    label: str = "condition",
) -> bool:
    """Poll predicate every interval seconds until it holds or timeout elapses.

    The predicate is always evaluated at least once, and once more after the
    last sleep. Returns False on timeout; callers decide what failure means.
    """

    if interval <= 0:
        raise ValueError("interval must be positive")

    deadline = clock() + max(timeout, 0.0)
    polls = 0
    while True:
        polls += 1
        if predicate():
            logger.debug("%s satisfied after %d poll(s)", label, polls)
            return True
        if clock() >= deadline:
            logger.debug("%s not satisfied after %d poll(s), %.1fs", label, polls, timeout)
            return False
        sleep(interval)

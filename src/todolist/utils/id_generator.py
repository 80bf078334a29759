"""Unique task id allocation."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Allocates integer ids that never repeat within a store's lifetime.

    Ids follow the clock in milliseconds but always advance past the last
    issued (or observed) id, so two calls in the same clock tick still get
    distinct values.
    """

    def __init__(self, clock: Callable[[], int] = epoch_millis):
        self._clock = clock
        self._last = 0

    @property
    def last(self) -> int:
        return self._last

    def observe(self, ids: Iterable[int | str]) -> None:
        """Account for ids that already exist, e.g. after a load."""
        for task_id in ids:
            if isinstance(task_id, int) and not isinstance(task_id, bool):
                self._last = max(self._last, task_id)

    def next_id(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last

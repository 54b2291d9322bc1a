"""Round timer backed by an injectable monotonic clock."""

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class RoundTimer:
    """Measures elapsed wall-clock time for one round.

    The clock is any zero-argument callable returning seconds as a float
    (``time.monotonic`` by default). Tests pass a fake clock so elapsed time
    is fully deterministic.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or time.monotonic
        self._started_at: Optional[float] = None
        self._frozen_ms: Optional[int] = None

    def start(self) -> None:
        """Start (or restart) timing from zero."""
        self._started_at = self._clock()
        self._frozen_ms = None

    def stop(self) -> None:
        """Freeze the elapsed time. Stopping twice keeps the first value."""
        if self._frozen_ms is None:
            self._frozen_ms = self.elapsed_ms()

    def elapsed_ms(self) -> int:
        """Return elapsed milliseconds (0 before start, frozen after stop)."""
        if self._frozen_ms is not None:
            return self._frozen_ms
        if self._started_at is None:
            return 0
        return round((self._clock() - self._started_at) * 1000)

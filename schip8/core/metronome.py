"""
Fire-if-due rate limiting for the emulation and presentation loops.

A :class:`RateLimiter` never catches up: if several periods elapse between
two polls the action still runs at most once, and the next period is
measured from that poll.
"""

from __future__ import annotations

import time
from typing import Callable


class RateLimiter:
    """Run an action at most once per ``1 / hz`` seconds.

    Parameters
    ----------
    hz:
        Target rate.  Must be positive.
    clock:
        Zero-argument callable returning monotonic seconds.  Defaults to
        :func:`time.monotonic`.
    """

    def __init__(self, hz: float, clock: Callable[[], float] = time.monotonic) -> None:
        if hz <= 0:
            raise ValueError(f"hz must be positive, got {hz}")
        self._clock = clock
        self.period: float = 1.0 / hz
        self.ticked_at: float = clock()

    def on_tick(self, action: Callable[[], None]) -> bool:
        """Invoke *action* if a full period has passed since the last fire.

        Returns:
            ``True`` if *action* was invoked.
        """
        now = self._clock()
        if now - self.ticked_at < self.period:
            return False
        self.ticked_at = now
        action()
        return True

    def __repr__(self) -> str:
        return f"RateLimiter(hz={1.0 / self.period:g})"

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Time source for the test engine.

    Engine logic depends on this interface rather than calling real time
    directly, so tests can drive it with a fake clock.
    """

    def now(self) -> float:
        """Return the current time in seconds."""


class RealClock:
    """Production clock backed by time.time().

    Wall time rather than a monotonic clock: an engine's deadlines are stored
    in the session and read back by whichever worker serves the next request.
    """

    def now(self) -> float:
        return time.time()

import time
from typing import Protocol

from babysleep.core.errors import ClockUnavailable


# Two readings are needed: a monotonic one for measuring elapsed time (immune to clock changes), and the wall clock
# as epoch seconds for showing the user what time it is.
class Clock(Protocol):
    def monotonic(self) -> float:
        ...

    def epoch(self) -> float:
        ...


class SystemClock:

    def monotonic(self) -> float:
        return time.monotonic()

    # time.time() is where a broken or unset system clock would show up.
    def epoch(self) -> float:
        try:
            return time.time()
        except (OSError, OverflowError, ValueError) as e:
            raise ClockUnavailable(f"Could not read the system clock: {e}") from e


# Manually driven clock for tests and demos. Both readings move together when advanced.
class FakeClock:

    def __init__(self, epoch=0.0, monotonic=0.0):
        self._epoch = float(epoch)
        self._monotonic = float(monotonic)
        self.epoch_available = True

    def monotonic(self) -> float:
        return self._monotonic

    def epoch(self) -> float:
        if not self.epoch_available:
            raise ClockUnavailable("FakeClock epoch reading disabled")
        return self._epoch

    def advance(self, seconds):
        self._monotonic += max(0.0, seconds)
        self._epoch += max(0.0, seconds)

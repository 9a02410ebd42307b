from dataclasses import dataclass
from enum import Enum


class SessionState(Enum):
    STANDBY = "standby"
    RUNNING = "running"


# The one live sleep period. `start`/`end` are monotonic readings, `start_wall_clock` is epoch seconds and only used
# for display and the sleep log. After a stop, start and start_wall_clock stay put so that resuming can pick the
# same period back up by clearing `end`.
@dataclass
class SleepPeriod:
    start: float | None = None
    end: float | None = None
    start_wall_clock: float | None = None
    paused_seconds: float = 0.0
    resumes: int = 0

    @property
    def is_completed(self):
        return self.start is not None and self.end is not None

    # Time counted towards the period at monotonic reading `now`. A completed period is measured up to its end.
    def elapsed(self, now):
        if self.start is None:
            return 0.0
        until = self.end if self.end is not None else now
        return max(0.0, until - self.start - self.paused_seconds)

    # Wall-clock time of the stop, derived from the monotonic duration so both always agree.
    @property
    def end_wall_clock(self):
        if self.start_wall_clock is None or not self.is_completed:
            return None
        return self.start_wall_clock + (self.end - self.start)

    def begin(self, mono, wall):
        self.start = mono
        self.end = None
        self.start_wall_clock = wall
        self.paused_seconds = 0.0
        self.resumes = 0

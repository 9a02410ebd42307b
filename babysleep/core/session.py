"""Sleep session state machine. Pure logic, no UI.

STANDBY --start--> RUNNING --stop--> STANDBY --resume--> RUNNING

Clicks that don't apply to the current state are ignored; the UI only shows
the buttons that make sense anyway.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from babysleep.common.logger import log
from babysleep.core.calendar_clock import format_duration, format_timestamp
from babysleep.core.clock import Clock, SystemClock
from babysleep.core.errors import ClockUnavailable, PersistenceFailure
from babysleep.core.sleep_period import SessionState, SleepPeriod

CLOCK_PLACEHOLDER = "----/--/-- --:--:--"


class ButtonId(Enum):
    START = "start"
    RESUME = "resume"
    STOP = "stop"


@dataclass(frozen=True)
class ButtonClicked:
    button: ButtonId


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class DisplayRecord:
    state: SessionState
    elapsed_display: str | None
    session_start_display: str | None
    is_resumable: bool
    current_wall_clock_display: str


SleepSink = Callable[[SleepPeriod], object]


class SessionController:

    def __init__(self, clock: Clock | None = None, sink: SleepSink | None = None,
                 exclude_paused_time=False):
        self.clock = clock or SystemClock()
        self.sink = sink
        self.exclude_paused_time = exclude_paused_time
        self.period = SleepPeriod()
        self.state = SessionState.STANDBY
        self._notice = None

    @property
    def running(self):
        return self.state is SessionState.RUNNING

    #region === Transitions ===

    def start(self):
        if self.state is not SessionState.STANDBY:
            log.debug("Ignoring start while a session is already running")
            return False
        try:
            wall = self.clock.epoch()
        except ClockUnavailable:
            log.warning("Wall clock unavailable at session start, start time will not be shown", exc_info=True)
            wall = None
        self.period.begin(self.clock.monotonic(), wall)
        self.state = SessionState.RUNNING
        log.debug(f"Started sleep session at mono {self.period.start} (wall {wall})")
        return True

    def resume(self):
        if not self.is_resumable():
            log.debug(f"Ignoring resume in state {self.state.value} with end={self.period.end}")
            return False
        now = self.clock.monotonic()
        if self.exclude_paused_time:
            self.period.paused_seconds += now - self.period.end
        self.period.end = None
        self.period.resumes += 1
        self.state = SessionState.RUNNING
        log.debug(f"Resumed sleep session at mono {now}, paused total {self.period.paused_seconds:.1f}s")
        return True

    def stop(self):
        if self.state is not SessionState.RUNNING:
            log.debug("Ignoring stop while in standby")
            return False
        self.period.end = self.clock.monotonic()
        self.state = SessionState.STANDBY
        log.debug(f"Stopped sleep session at mono {self.period.end}")
        self._record_completed()
        return True

    def handle(self, event):
        if isinstance(event, ButtonClicked):
            transitions = {
                ButtonId.START: self.start,
                ButtonId.RESUME: self.resume,
                ButtonId.STOP: self.stop,
            }
            return transitions[event.button]()
        log.debug(f"SessionController ignoring event {event!r}")
        return False

    # Hands the finished period to the sleep log. A failed write leaves the session stopped, and the message is kept
    # for the UI to show.
    def _record_completed(self):
        if self.sink is None:
            return
        try:
            self.sink(self.period)
        except PersistenceFailure as e:
            log.error("Failed to write completed sleep period", exc_info=True)
            self._notice = f"The sleep session could not be saved to the log.\n{e}"

    #endregion === Transitions ===

    #region === Queries ===

    def is_resumable(self):
        return self.state is SessionState.STANDBY and self.period.end is not None

    def elapsed_display(self):
        if not self.running:
            return None
        return format_duration(self.period.elapsed(self.clock.monotonic()))

    def session_start_display(self):
        if not self.running:
            return None
        if self.period.start_wall_clock is None:
            raise ClockUnavailable("Session start time was not recorded")
        return format_timestamp(self.period.start_wall_clock)

    def current_wall_clock_display(self):
        return format_timestamp(self.clock.epoch())

    # Everything the UI needs for one frame. Clock failures turn into a placeholder string rather than an exception.
    def display_record(self):
        try:
            started = self.session_start_display()
        except ClockUnavailable:
            log.debug("Session start time unavailable, showing placeholder")
            started = CLOCK_PLACEHOLDER
        try:
            wall = self.current_wall_clock_display()
        except ClockUnavailable:
            log.warning("System clock unavailable, showing placeholder", exc_info=True)
            wall = CLOCK_PLACEHOLDER
        return DisplayRecord(
            state=self.state,
            elapsed_display=self.elapsed_display(),
            session_start_display=started,
            is_resumable=self.is_resumable(),
            current_wall_clock_display=wall,
        )

    def take_notice(self):
        notice, self._notice = self._notice, None
        return notice

    #endregion === Queries ===

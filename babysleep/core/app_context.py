from collections import deque
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from babysleep.common.logger import log
from babysleep.core import config
from babysleep.core.clock import Clock
from babysleep.core.session import ButtonClicked, DisplayRecord, Quit, SessionController
from babysleep.core.sleep_log import read_sleep_log, write_sleep_period


# Everything the control loop needs, passed around explicitly instead of living in module globals. The UI pushes
# events in with post(), and calls tick() once per frame.
@dataclass
class AppContext:
    controller: SessionController
    settings: dict
    log_path: Path
    events: deque = field(default_factory=deque)
    quit_requested: bool = False

    @staticmethod
    def build(settings: dict | None = None, clock: Clock | None = None, log_path: Path | None = None):
        settings = settings if settings is not None else config.load_settings()["settings"]
        log_path = Path(log_path) if log_path is not None else config.sleep_log_path(settings)
        controller = SessionController(
            clock=clock,
            sink=partial(write_sleep_period, log_path),
            exclude_paused_time=settings.get("exclude_paused_time", False),
        )
        log.info(f"Built app context, sleep log at '{log_path}'")
        return AppContext(controller=controller, settings=settings, log_path=log_path)

    @property
    def tick_ms(self):
        return self.settings.get("tick_ms", 100)

    def post(self, event):
        self.events.append(event)

    # Drains queued events into the controller, then returns this frame's display record. Returns None once a Quit
    # has been seen; nothing after it in the queue is applied.
    def tick(self) -> DisplayRecord | None:
        while self.events and not self.quit_requested:
            event = self.events.popleft()
            if isinstance(event, Quit):
                log.info("Quit requested")
                self.quit_requested = True
            elif isinstance(event, ButtonClicked):
                self.controller.handle(event)
            else:
                log.warning(f"Dropping unknown event {event!r}")
        if self.quit_requested:
            self.events.clear()
            return None
        return self.controller.display_record()

    # The most recent entry in the sleep log, or None if nothing has been logged yet.
    def last_logged(self):
        try:
            records = read_sleep_log(self.log_path)
        except OSError:
            log.warning(f"Could not read sleep log '{self.log_path}'", exc_info=True)
            return None
        return records[-1] if records else None

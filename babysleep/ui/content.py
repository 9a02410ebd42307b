"""What each display slot shows for a frame, independent of Qt.

A slot is either Blank or Text with a color. ``frame_contents`` maps a
DisplayRecord onto the window's slots.
"""

from dataclasses import dataclass

from babysleep.core.sleep_period import SessionState


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Text:
    value: str
    color: str


Content = Blank | Text


def frame_contents(record, colors):
    """Return ``{slot_name: Content}`` for the clock, started and elapsed slots."""
    running = record.state is SessionState.RUNNING
    contents = {
        "clock": Text(record.current_wall_clock_display, colors["clock_text"]),
        "started": Blank(),
        "elapsed": Blank(),
    }
    if running and record.session_start_display is not None:
        contents["started"] = Text(f"Since {record.session_start_display}", colors["started_text"])
    if running and record.elapsed_display is not None:
        contents["elapsed"] = Text(record.elapsed_display, colors["elapsed_text"])
    return contents


def visible_buttons(record):
    """The buttons that do something in the record's state."""
    if record.state is SessionState.RUNNING:
        return {"stop"}
    if record.is_resumable:
        return {"start", "resume"}
    return {"start"}

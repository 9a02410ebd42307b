import json
from pathlib import Path
from babysleep.common.logger import log
from babysleep.core.calendar_clock import format_duration, format_timestamp
from babysleep.core.errors import PersistenceFailure

#region === Writing ===

# Builds the single log line for a completed period.
def build_record(period):
    duration = period.elapsed(period.end)
    record = {
        "start": None,
        "start_epoch": period.start_wall_clock,
        "end": None,
        "duration": format_duration(duration),
        "duration_seconds": round(duration, 3),
        "resumes": period.resumes,
    }
    if period.start_wall_clock is not None:
        record["start"] = format_timestamp(period.start_wall_clock)
        record["end"] = format_timestamp(period.end_wall_clock)
    return record

# Appends one JSON line for the given completed period to `path`, creating the file (and its folder) when missing.
# Any I/O problem comes back as a PersistenceFailure.
def write_sleep_period(path, period):
    if not period.is_completed:
        raise ValueError("Only a stopped sleep period can be written to the sleep log")

    path = Path(path)
    record = build_record(period)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")
    except OSError as e:
        raise PersistenceFailure(f"Could not append to sleep log '{path}': {e}") from e
    log.info(f"Logged sleep period {record['start']} lasting {record['duration']} to '{path}'")
    return record

#endregion === Writing ===

#region === Reading ===

# Returns every record in the sleep log, oldest first. A missing file is just an empty log, and lines that can't be
# decoded are skipped with a warning.
def read_sleep_log(path):
    path = Path(path)
    if not path.exists():
        return []

    records = []
    skipped = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                skipped += 1
                continue
            if isinstance(entry, dict):
                records.append(entry)
            else:
                skipped += 1
    if skipped:
        log.warning(f"Skipped {skipped} unreadable lines in sleep log '{path}'")
    return records

#endregion === Reading ===

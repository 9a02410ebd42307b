import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the per-user data folder. BABYSLEEP_HOME wins, then APPDATA on Windows, then XDG_DATA_HOME, then
# ~/.local/share.
def resolve_data_root():
    override = os.getenv("BABYSLEEP_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "BabySleep"
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "babysleep"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path

    logs: Path
    current: Path
    sessions: Path

    @staticmethod
    def build(data_root: Path | None = None):
        # Folder for all user-specific and session related stuff
        data = ensure_directory(data_root or resolve_data_root())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")
        sessions = ensure_directory(data / "sleep_log")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
            sessions = sessions
        )
PATHS = ProjectPaths.build()

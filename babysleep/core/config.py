import json
from datetime import datetime
from babysleep.common.logger import log
from babysleep.common.setup import PATHS


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.current / "settings.json"
SLEEP_LOG_DIR = PATHS.sessions

# Default values for every setting, along with the type each one must have.
_SETTINGS_DEFAULTS = {
    "window_title": "babyalarm",
    "font": "Unifont",
    "tick_ms": 100,
    "log_filename": "sleep_log.jsonl",
    "exclude_paused_time": False,
    "always_on_top": False,
}

# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": dict(_SETTINGS_DEFAULTS),
    }

# Where the sleep log for the given settings lives.
def sleep_log_path(settings):
    return SLEEP_LOG_DIR / settings.get("log_filename", _SETTINGS_DEFAULTS["log_filename"])

# A setting is valid if it has the same type as its default. bool is checked first since it's also an int.
def _valid_setting(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if isinstance(default, str):
        return isinstance(value, str) and value.strip() != ""
    return True

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from PATHS.current / settings.json, filling in defaults for anything missing or malformed.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info("No existing settings.json found in `current`, loading fresh settings dict.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            state = json.load(f)
        if not isinstance(state, dict):
            raise TypeError(f"settings.json holds a {type(state).__name__}, expected an object")
        defaulted_values = set()

        # Validate the meta dict
        if "meta" not in state or not isinstance(state["meta"], dict):
            defaulted_values.add("meta")
            state["meta"] = {}
        if "schema_version" not in state["meta"] or not isinstance(state["meta"]["schema_version"], int):
            defaulted_values.add("meta.schema_version")
            state["meta"]["schema_version"] = _SCHEMA_VERSION

        # Validate the settings dict, fill in any necessary defaults
        if "settings" not in state or not isinstance(state["settings"], dict):
            defaulted_values.add("settings")
            state["settings"] = dict(_SETTINGS_DEFAULTS)
        else:
            for key, default in _SETTINGS_DEFAULTS.items():
                if key not in state["settings"] or not _valid_setting(key, state["settings"][key]):
                    defaulted_values.add(f"settings.{key}")
                    state["settings"][key] = default

        if defaulted_values:
            log.warning(f"Successfully loaded settings from '{SETTINGS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return state
    # Fall back to fresh settings in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to fresh settings.",exc_info=True)
        return build_default_settings()

# Write the given settings dict to disk under PATHS.current / settings.json
def save_settings(state):
    state["meta"]["saved_at"] = now_iso()
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===

"""Persisted user preferences (currently only the message language)."""
import json
import os
from typing import Optional
from pr_triage import constants


def _read_preferences() -> dict:
    if not os.path.isfile(constants.PREFERENCES_FILE):
        return {}
    try:
        with open(constants.PREFERENCES_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        from pr_triage.logging_utils import log
        log(f"Preferences file unreadable: {e}", level="WARN")
        return {}
    return data if isinstance(data, dict) else {}


def get_language_preference() -> Optional[str]:
    value = _read_preferences().get("language")
    return value if isinstance(value, str) and value else None


def set_language_preference(lang: str) -> None:
    from pr_triage.config import ensure_config_dir
    data = _read_preferences()
    if data.get("language") == lang:
        return
    data["language"] = lang
    try:
        ensure_config_dir()
        with open(constants.PREFERENCES_FILE, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        from pr_triage.logging_utils import log
        log(f"Failed to save preferences: {e}", level="WARN")

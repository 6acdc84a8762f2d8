"""Message catalogue for user-facing strings."""
import json
import os
from typing import Any, Dict, Optional
DEFAULT_LANGUAGE = "en"
LOCALES_DIR = os.path.join(os.path.dirname(__file__), "locales")
_catalogues: Dict[str, Dict[str, Any]] = {}
_active_language = DEFAULT_LANGUAGE


def available_languages():
    try:
        return sorted(
            os.path.splitext(name)[0]
            for name in os.listdir(LOCALES_DIR)
            if name.endswith(".json")
        )
    except OSError:
        return [DEFAULT_LANGUAGE]


def _load_catalogue(lang: str) -> Dict[str, Any]:
    if lang in _catalogues:
        return _catalogues[lang]
    path = os.path.join(LOCALES_DIR, f"{lang}.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            catalogue = json.load(f)
    except (OSError, ValueError):
        catalogue = {}
    _catalogues[lang] = catalogue
    return catalogue


def _normalize(lang: Optional[str]) -> Optional[str]:
    """Reduce values like ``tr_TR.UTF-8`` to ``tr``."""
    if not lang:
        return None
    return lang.split(".")[0].split("_")[0].split("-")[0].lower() or None


def set_language(lang: Optional[str]) -> bool:
    global _active_language
    code = _normalize(lang)
    if code not in available_languages():
        return False
    _active_language = code
    return True


def get_active_language() -> str:
    return _active_language


def _lookup(catalogue: Dict[str, Any], key: str):
    node: Any = catalogue
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def t(key: str, **kwargs):
    """Translate ``key`` into the active language.

    Falls back to English, then to the key itself. Strings are formatted with
    ``kwargs``; lists are returned as-is.
    """
    value = _lookup(_load_catalogue(_active_language), key)
    if value is None and _active_language != DEFAULT_LANGUAGE:
        value = _lookup(_load_catalogue(DEFAULT_LANGUAGE), key)
    if value is None:
        return key
    if isinstance(value, str) and kwargs:
        try:
            return value.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return value
    return value

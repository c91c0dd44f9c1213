from __future__ import annotations

from typing import Dict, Optional

DEFAULT_LOCALE = "pl"

_SECONDS = {"pl": "sek", "en": "sec"}


def locale_or_default(locale: Optional[str]) -> str:
    return locale if locale in _SECONDS else DEFAULT_LOCALE


def question_text(a: int, b: int, operator: str = "×") -> str:
    return f"{a} {operator} {b}"


def format_elapsed(seconds: int, locale: Optional[str] = None) -> str:
    """125 -> "2 min 5 sek"; under a minute only seconds are shown."""
    unit = _SECONDS[locale_or_default(locale)]
    seconds = max(0, int(seconds))
    minutes, rest = divmod(seconds, 60)
    if minutes > 0:
        return f"{minutes} min {rest} {unit}"
    return f"{rest} {unit}"


MODE_LABELS: Dict[str, Dict[str, str]] = {
    "pl": {"normal": "Gra", "learning": "Nauka"},
    "en": {"normal": "Game", "learning": "Learning"},
}

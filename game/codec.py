"""
Wire format for the session state the client carries between requests.

History and solved keys are JSON arrays (via pydantic TypeAdapter), so entry text
can hold any character without breaking the framing. The older ``;``-delimited
solved string is still accepted on input.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from game.errors import MalformedInput

logger = logging.getLogger(__name__)

Number = Union[int, float]


class HistoryEntry(BaseModel):
    question_text: str
    correct_answer: Number
    user_answer: str
    is_correct: bool


_HISTORY = TypeAdapter(List[HistoryEntry])
_SOLVED = TypeAdapter(List[str])


def solved_key(a: int, b: int) -> str:
    # Directional on purpose: (3, 4) and (4, 3) are tracked separately
    return f"{a}-{b}"


# --- history -----------------------------------------------------------------------


def serialize_history(entries: Iterable[HistoryEntry]) -> str:
    items = list(entries)
    raw = _HISTORY.dump_json(items).decode("utf-8")
    logger.debug("serialize_history: %d entries -> %d chars", len(items), len(raw))
    return raw


def parse_history(raw: Optional[str]) -> List[HistoryEntry]:
    if raw is None or not raw.strip():
        return []
    try:
        entries = _HISTORY.validate_json(raw)
    except ValidationError as e:
        logger.warning("parse_history: rejecting malformed payload (%d chars)", len(raw))
        raise MalformedInput("history is not a valid JSON list of entries") from e
    logger.debug("parse_history: %d entries", len(entries))
    return entries


# --- solved set --------------------------------------------------------------------


def _dedupe(keys: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for k in keys:
        k = k.strip()
        if k and k not in seen:
            seen.add(k)
            out.append(k)
    return out


def parse_solved(raw: Optional[str]) -> List[str]:
    """Keys in first-seen order. Accepts a JSON array or the legacy "3-4;2-5" form."""
    if raw is None or not raw.strip():
        return []
    s = raw.strip()
    if s.startswith("["):
        try:
            keys = _SOLVED.validate_json(s)
        except ValidationError as e:
            raise MalformedInput("solved is not a valid JSON list of keys") from e
    else:
        keys = s.split(";")
    return _dedupe(keys)


def serialize_solved(keys: Iterable[str]) -> str:
    return _SOLVED.dump_json(_dedupe(keys)).decode("utf-8")


def update_solved(current: Iterable[str], a: int, b: int) -> List[str]:
    keys = _dedupe(current)
    key = solved_key(a, b)
    added = key not in keys
    if added:
        keys.append(key)
    logger.debug("update_solved: key=%s added=%s total=%d", key, added, len(keys))
    return keys

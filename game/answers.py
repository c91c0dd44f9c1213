from __future__ import annotations

import re
from typing import Optional

from sympy import Rational

from game.errors import MalformedInput

LEN_LIMIT = 32

_INT_RE = re.compile(r"^-?\d+$")
_DECIMAL_RE = re.compile(r"^-?\d+(\.\d+)?$|^-?\.\d+$")
# zero-width and bidi control characters that sneak in from mobile keyboards / paste
_INVISIBLE_RE = re.compile("[\u200B\u200C\u200D\u202A\u202B\u202C\u202D\u202E\u2060\uFEFF\u061C]")

_REQUIRED_MSG = "Answer required."
_TOO_LONG_MSG = f"Answer too long (> {LEN_LIMIT})."
_INTEGER_MSG = "Only whole numbers are allowed (digits with an optional leading minus)."
_NUMBER_MSG = "Only numbers are allowed (digits, optional minus, one decimal point or comma)."


def _prepare(raw: Optional[str]) -> str:
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise MalformedInput(_REQUIRED_MSG)
    s = raw.strip()
    if len(s) > LEN_LIMIT:
        raise MalformedInput(_TOO_LONG_MSG)
    return s


def parse_answer_text(raw: Optional[str]) -> int:
    """Whole-number answer for the multiplication game. "2, 9" or "5.5" are rejected."""
    s = _prepare(raw)
    if _INT_RE.fullmatch(s) is None:
        raise MalformedInput(_INTEGER_MSG)
    return int(s)


def parse_number(raw: Optional[str]) -> Rational:
    """Decimal answer for equations; "5,5" reads as 5.5. Parsed exactly, never via float."""
    s = _prepare(raw)
    s = _INVISIBLE_RE.sub("", s.replace(",", "."))
    if _DECIMAL_RE.fullmatch(s) is None:
        raise MalformedInput(_NUMBER_MSG)
    return Rational(s)

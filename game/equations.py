from __future__ import annotations

import logging
import random
from typing import List, Literal, Optional

from pydantic import BaseModel

from game.answers import parse_number
from game.codec import HistoryEntry, parse_history, serialize_history
from game.errors import MalformedInput
from game.grader import OPERATORS, clean_number, compute_equation, grade_equation
from game.texts import question_text
from settings import GameSettings

logger = logging.getLogger(__name__)

Difficulty = Literal["1", "2", "3"]
EquationAction = Literal["generate", "next", "submit"]

_EPS = 1e-4


class Equation(BaseModel):
    a: int
    b: int
    operator: str

    @property
    def text(self) -> str:
        return question_text(self.a, self.b, self.operator)


def _tier1(op: str, rng: random.Random) -> tuple[int, int]:
    # ages 6-7: small numbers, easy tables
    if op == "+":
        return rng.randint(0, 10), rng.randint(0, 10)
    if op == "-":
        a = rng.randint(0, 10)
        return a, rng.randint(0, a)
    if op == "×":
        return rng.choice((2, 3, 4, 5)), rng.randint(1, 5)
    b = rng.choice((2, 3, 4, 5))
    return b * rng.randint(1, 5), b


def _tier2(op: str, rng: random.Random) -> tuple[int, int]:
    # ages 8-9: full 2..10 table
    if op == "+":
        return rng.randint(0, 50), rng.randint(0, 50)
    if op == "-":
        a = rng.randint(0, 50)
        return a, rng.randint(0, a)
    if op == "×":
        return rng.randint(2, 10), rng.randint(2, 10)
    b = rng.randint(2, 10)
    return b * rng.randint(1, 10), b


def _tier3(op: str, rng: random.Random) -> tuple[int, int]:
    # ages 10+: bigger numbers; one factor up to 20, the other up to 12
    if op == "+":
        return rng.randint(0, 200), rng.randint(0, 200)
    if op == "-":
        a = rng.randint(0, 200)
        return a, rng.randint(0, a)
    if op == "×":
        big, small = rng.randint(2, 20), rng.randint(2, 12)
        return (big, small) if rng.randrange(2) == 0 else (small, big)
    b = rng.randint(2, 12)
    return b * rng.randint(1, 20), b


_TIERS = {"1": _tier1, "2": _tier2, "3": _tier3}


def generate_equation(difficulty: str, rng: random.Random) -> Equation:
    """Division is always exact and never by zero."""
    tier = _TIERS.get(difficulty, _tier1)
    op = rng.choice(("+", "-", "×", "÷"))
    a, b = tier(op, rng)
    return Equation(a=a, b=b, operator=op)


class EquationSession(BaseModel):
    difficulty: Difficulty = "1"
    a: int = 0
    b: int = 0
    operator: str = "+"
    user_answer: Optional[str] = None

    correct_answer: float = 0
    answer_checked: bool = False
    is_correct: bool = False
    duplicate: bool = False

    total_answered: int = 0
    history_raw: str = ""


def is_finished(history: List[HistoryEntry], settings: GameSettings) -> bool:
    return len(history) >= settings.equations_required_answers


def _new_question(s: EquationSession, rng: random.Random) -> None:
    eq = generate_equation(s.difficulty, rng)
    s.a, s.b, s.operator = eq.a, eq.b, eq.operator
    s.correct_answer = clean_number(compute_equation(eq.a, eq.b, eq.operator))
    s.answer_checked = False
    s.is_correct = False
    s.user_answer = None


def _is_duplicate(last: Optional[HistoryEntry], entry: HistoryEntry) -> bool:
    # double-click / resubmit of the same answer to the same question
    return (
        last is not None
        and last.question_text == entry.question_text
        and last.user_answer == entry.user_answer
        and abs(float(last.correct_answer) - float(entry.correct_answer)) < _EPS
        and last.is_correct == entry.is_correct
    )


def play_equation_round(
    session: EquationSession,
    action: EquationAction,
    settings: GameSettings,
    rng: random.Random,
) -> EquationSession:
    s = session.model_copy()
    s.duplicate = False

    if action == "generate":
        s.total_answered = 0
        s.history_raw = serialize_history([])
        _new_question(s, rng)
        return s

    history = parse_history(s.history_raw)

    if action == "next":
        if not is_finished(history, settings):
            _new_question(s, rng)
        return s

    if is_finished(history, settings):
        return s
    if s.operator not in OPERATORS:
        raise MalformedInput(f"unknown operator: {s.operator!r}")
    if OPERATORS[s.operator] == "÷" and s.b == 0:
        raise MalformedInput("division by zero is not a valid question")
    user_value = parse_number(s.user_answer)
    result = grade_equation(user_value, s.a, s.b, s.operator)
    s.correct_answer = result.correct_answer
    s.answer_checked = True
    s.is_correct = result.is_correct

    entry = HistoryEntry(
        question_text=question_text(s.a, s.b, OPERATORS[s.operator]),
        correct_answer=result.correct_answer,
        user_answer=(s.user_answer or "").strip(),
        is_correct=result.is_correct,
    )
    if _is_duplicate(history[-1] if history else None, entry):
        logger.debug("Duplicate submission ignored: %s user=%s", entry.question_text, entry.user_answer)
        s.duplicate = True
        return s

    s.total_answered += 1
    history.append(entry)
    s.history_raw = serialize_history(history)
    return s

from __future__ import annotations

import logging
import math
from typing import Union

from pydantic import BaseModel
from sympy import Integer, Rational

logger = logging.getLogger(__name__)

TOLERANCE = Rational(1, 10000)

# display operator -> canonical; ASCII aliases accepted from clients
OPERATORS = {"+": "+", "-": "-", "×": "×", "*": "×", "÷": "÷", "/": "÷"}


class GradeResult(BaseModel):
    is_correct: bool
    correct_answer: Union[int, float]


def grade(user_answer: int, a: int, b: int) -> GradeResult:
    correct = a * b
    is_correct = user_answer == correct
    logger.info(
        "Answer checked: %d x %d = %d, user answered %d -> %s",
        a,
        b,
        correct,
        user_answer,
        "correct" if is_correct else "incorrect",
    )
    return GradeResult(is_correct=is_correct, correct_answer=correct)


def compute_equation(a: int, b: int, operator: str) -> Rational:
    op = OPERATORS.get(operator)
    if op is None:
        raise ValueError(f"unknown operator: {operator!r}")
    x, y = Integer(a), Integer(b)
    if op == "+":
        return x + y
    if op == "-":
        return x - y
    if op == "×":
        return x * y
    if b == 0:
        # generator never produces this
        raise ValueError("division by zero")
    return Rational(a, b)


def clean_number(value: Rational) -> Union[int, float]:
    """Whole results as int, everything else as float (for JSON / display)."""
    if value.is_Integer:
        return int(value)
    f = float(value)
    if math.isfinite(f) and abs(f - round(f)) < 1e-12:
        return int(round(f))
    return f


def grade_equation(
    user_answer: Union[Rational, int, float], a: int, b: int, operator: str
) -> GradeResult:
    correct = compute_equation(a, b, operator)
    user = user_answer if isinstance(user_answer, Rational) else Rational(str(user_answer))
    is_correct = bool(abs(user - correct) < TOLERANCE)
    logger.info(
        "Equation checked: %d %s %d = %s, user answered %s -> %s",
        a,
        OPERATORS[operator],
        b,
        correct,
        user,
        "correct" if is_correct else "incorrect",
    )
    return GradeResult(is_correct=is_correct, correct_answer=clean_number(correct))

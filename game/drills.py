"""Small practice drills: a single multiply/divide question and the 10x10 table sheet."""

from __future__ import annotations

import random
from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel

Operation = Literal["Multiply", "Divide"]

TABLE_SIZE = 10
TABLE_CELLS = TABLE_SIZE * TABLE_SIZE
MAX_PROPOSALS = 10


class DrillResult(BaseModel):
    is_correct: bool
    correct_answer: int


def generate_drill(operation: Operation, max_factor: int, rng: random.Random) -> tuple[int, int]:
    hi = max(1, max_factor)
    if operation == "Divide":
        # dividend built from divisor * quotient so the division is exact
        b = rng.randint(1, hi)
        return b * rng.randint(1, hi), b
    return rng.randint(1, hi), rng.randint(1, hi)


def check_drill(operation: Operation, a: int, b: int, user_answer: int) -> DrillResult:
    if operation == "Multiply":
        correct = a * b
    elif b == 0:
        return DrillResult(is_correct=False, correct_answer=0)
    else:
        correct = a // b
    return DrillResult(is_correct=user_answer == correct, correct_answer=correct)


class TableResult(BaseModel):
    correct_count: int
    # None = empty cell, not checked
    cells: List[Optional[bool]]
    mistakes: List[str]


def _padded(answers: Sequence[Optional[int]]) -> List[Optional[int]]:
    cells = list(answers[:TABLE_CELLS])
    return cells + [None] * (TABLE_CELLS - len(cells))


def check_table(answers: Sequence[Optional[int]]) -> TableResult:
    """Row-major 10x10 sheet; cell (i, j) holds (i+1) * (j+1)."""
    cells: List[Optional[bool]] = []
    mistakes: List[str] = []
    correct_count = 0
    for idx, user in enumerate(_padded(answers)):
        row, col = idx // TABLE_SIZE + 1, idx % TABLE_SIZE + 1
        if user is None:
            cells.append(None)
            continue
        correct = row * col
        if user == correct:
            correct_count += 1
            cells.append(True)
        else:
            cells.append(False)
            mistakes.append(f"{row} × {col} = {correct} (your answer: {user})")
    return TableResult(correct_count=correct_count, cells=cells, mistakes=mistakes)


def table_proposals(answers: Sequence[Optional[int]], rng: random.Random) -> List[int]:
    """Up to MAX_PROPOSALS distinct products still missing from the sheet, shuffled."""
    missing = {
        (idx // TABLE_SIZE + 1) * (idx % TABLE_SIZE + 1)
        for idx, user in enumerate(_padded(answers))
        if user is None
    }
    proposals = sorted(missing)
    rng.shuffle(proposals)
    return proposals[:MAX_PROPOSALS]


def drop_proposal(proposals: Sequence[int], used: Optional[int]) -> List[int]:
    remaining = list(proposals)
    if used is not None and used in remaining:
        remaining.remove(used)
    return remaining

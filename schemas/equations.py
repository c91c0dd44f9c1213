from __future__ import annotations

from typing import List

from pydantic import BaseModel

from game.codec import HistoryEntry
from game.equations import EquationAction, EquationSession


class EquationQuestionOut(BaseModel):
    difficulty: str
    a: int
    b: int
    operator: str
    text: str


class EquationRoundRequest(EquationSession):
    action: EquationAction = "submit"


class EquationRoundResponse(EquationSession):
    question_text: str
    required_answers: int
    finished: bool
    score: int
    history: List[HistoryEntry]

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from game.drills import Operation
from game.memory import MemoryGame


class DrillRequest(BaseModel):
    operation: Operation = "Multiply"
    max_factor: int = Field(default=10, ge=1, le=100)
    # 0/0 or new=True -> deal a new question instead of checking
    a: int = 0
    b: int = 0
    user_answer: Optional[int] = None
    new: bool = False


class DrillResponse(BaseModel):
    operation: Operation
    a: int
    b: int
    checked: bool
    is_correct: bool = False
    correct_answer: Optional[int] = None


class TableRequest(BaseModel):
    answers: List[Optional[int]] = Field(default_factory=list, max_length=100)
    proposals: List[int] = Field(default_factory=list)
    last_filled_value: Optional[int] = None


class TableResponse(BaseModel):
    correct_count: int
    cells: List[Optional[bool]]
    mistakes: List[str]
    proposals: List[int]


class MemoryRequest(BaseModel):
    game: Optional[MemoryGame] = None
    flip_index: Optional[int] = None


class MemoryResponse(MemoryGame):
    finished: bool

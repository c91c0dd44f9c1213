from __future__ import annotations

import logging
import random
from typing import List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

HIDDEN, REVEALED, MATCHED = 0, 1, 2

PAIRS = [
    ("2×3", 6),
    ("3×4", 12),
    ("4×5", 20),
    ("5×6", 30),
    ("2×7", 14),
    ("3×7", 21),
    ("4×8", 32),
    ("5×9", 45),
]


class Card(BaseModel):
    display: str
    value: int
    is_expression: bool


class MemoryGame(BaseModel):
    cards: List[Card] = []
    state: List[int] = []

    def all_matched(self) -> bool:
        return bool(self.state) and all(x == MATCHED for x in self.state)

    def is_valid(self) -> bool:
        return (
            bool(self.cards)
            and len(self.cards) == len(self.state)
            and all(x in (HIDDEN, REVEALED, MATCHED) for x in self.state)
        )


def new_memory_game(rng: random.Random) -> MemoryGame:
    cards: List[Card] = []
    for expr, val in PAIRS:
        cards.append(Card(display=expr, value=val, is_expression=True))
        cards.append(Card(display=str(val), value=val, is_expression=False))
    rng.shuffle(cards)
    return MemoryGame(cards=cards, state=[HIDDEN] * len(cards))


def flip(game: MemoryGame, index: Optional[int], rng: random.Random) -> MemoryGame:
    if not game.is_valid():
        logger.info("Memory game state invalid; dealing a new game")
        return new_memory_game(rng)

    g = game.model_copy(deep=True)
    if index is None or not 0 <= index < len(g.state):
        return g

    if g.state[index] == HIDDEN:
        g.state[index] = REVEALED

    up = [i for i, v in enumerate(g.state) if v == REVEALED]
    if len(up) == 2:
        first, second = (g.cards[i] for i in up)
        matched = first.value == second.value and first.is_expression != second.is_expression
        for i in up:
            g.state[i] = MATCHED if matched else HIDDEN
    return g

from __future__ import annotations

import logging
import random
from typing import AbstractSet, Dict, Iterable, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from game.codec import solved_key
from game.errors import InvalidLevel
from game.pool import Pair, generate_pool, in_pool
from settings import GameSettings

logger = logging.getLogger(__name__)


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    a: int
    b: int
    level: int

    @property
    def exhausted(self) -> bool:
        return self.a == 0 and self.b == 0


def exhausted_question(level: int) -> Question:
    return Question(a=0, b=0, level=level)


def is_low(pair: Pair, low_factors: AbstractSet[int]) -> bool:
    return pair[0] in low_factors or pair[1] in low_factors


def partition(
    pairs: Sequence[Pair], low_factors: AbstractSet[int]
) -> Tuple[List[Pair], List[Pair]]:
    """Split into (undesired, desired) by whether either factor is low-probability."""
    undesired: List[Pair] = []
    desired: List[Pair] = []
    for p in pairs:
        (undesired if is_low(p, low_factors) else desired).append(p)
    return undesired, desired


def _pick(
    available: Sequence[Pair],
    undesired: Sequence[Pair],
    desired: Sequence[Pair],
    chance_percent: int,
    level: int,
    rng: random.Random,
) -> Question:
    # One bucket empty -> the bias cannot apply, fall back to uniform
    if not undesired or not desired:
        a, b = rng.choice(available)
        logger.debug("Selection: uniform fallback -> %dx%d", a, b)
        return Question(a=a, b=b, level=level)

    chance = max(0, min(100, chance_percent))
    roll = rng.randrange(100)
    if roll < chance:
        a, b = rng.choice(undesired)
        bucket = "undesired"
    else:
        a, b = rng.choice(desired)
        bucket = "desired"
    logger.debug("Selection roll %d/100 (threshold %d): %s -> %dx%d", roll, chance, bucket, a, b)
    return Question(a=a, b=b, level=level)


def select_question(
    pool: Sequence[Pair],
    solved: Iterable[str],
    low_probability_factors: AbstractSet[int],
    low_factor_chance_percent: int,
    level: int,
    rng: random.Random,
) -> Question:
    solved_keys = set(solved)
    available = [p for p in pool if solved_key(*p) not in solved_keys]
    if not available:
        logger.warning(
            "No available questions for level %s with %d solved", level, len(solved_keys)
        )
        return exhausted_question(level)

    undesired, desired = partition(available, low_probability_factors)
    logger.debug(
        "Question pool: %d desired, %d undesired (total: %d)",
        len(desired),
        len(undesired),
        len(available),
    )
    return _pick(available, undesired, desired, low_factor_chance_percent, level, rng)


class QuestionService:
    """Selects questions for the configured levels using the configured bias."""

    def __init__(self, settings: GameSettings, rng: random.Random):
        self.settings = settings
        self.rng = rng
        self._pools: Dict[int, List[Pair]] = {}
        self._buckets: Dict[int, Tuple[List[Pair], List[Pair]]] = {}

    def check_level(self, level: int) -> None:
        if level not in self.settings.levels:
            logger.warning(
                "Invalid level requested: %s. Available levels: %s",
                level,
                sorted(self.settings.levels),
            )
            raise InvalidLevel(level, self.settings.levels)

    def has_pair(self, a: int, b: int, level: int) -> bool:
        return in_pool(a, b, level, self.settings.default_max_multiplier)

    def pool(self, level: int) -> List[Pair]:
        if level not in self._pools:
            self._pools[level] = generate_pool(level, self.settings.default_max_multiplier)
        return self._pools[level]

    def get_question(self, level: int, solved: Iterable[str] = ()) -> Question:
        self.check_level(level)
        solved_keys = set(solved)
        pool = self.pool(level)

        if solved_keys:
            q = select_question(
                pool,
                solved_keys,
                self.settings.low_probability_factors,
                self.settings.low_factor_chance_percent,
                level,
                self.rng,
            )
        elif not pool:
            q = exhausted_question(level)
        else:
            # Unconstrained draws (diagnostics sampling) reuse the cached split
            if level not in self._buckets:
                self._buckets[level] = partition(pool, self.settings.low_probability_factors)
            undesired, desired = self._buckets[level]
            q = _pick(
                pool, undesired, desired, self.settings.low_factor_chance_percent, level, self.rng
            )

        if not q.exhausted:
            logger.debug("Selected question: %d x %d for level %d", q.a, q.b, level)
        return q

from __future__ import annotations

from typing import List, Tuple

Pair = Tuple[int, int]

# Level whose factors span the whole 1..1000 range instead of the configured multiplier
FULL_RANGE_LEVEL = 1000


def max_factor_for(level: int, default_max_multiplier: int) -> int:
    return FULL_RANGE_LEVEL if level == FULL_RANGE_LEVEL else default_max_multiplier


def generate_pool(level: int, max_multiplier: int) -> List[Pair]:
    """All (a, b) with 1 <= a, b <= max factor and a*b <= level, in (a, b) order."""
    max_num = max_factor_for(level, max_multiplier)
    pool: List[Pair] = []
    for a in range(1, max_num + 1):
        # b is bounded by the product limit as well as the factor range
        upper = min(max_num, level // a)
        if upper < 1:
            break
        pool.extend((a, b) for b in range(1, upper + 1))
    return pool


def in_pool(a: int, b: int, level: int, max_multiplier: int) -> bool:
    """Same membership test as ``(a, b) in generate_pool(level, max_multiplier)``."""
    max_num = max_factor_for(level, max_multiplier)
    return 1 <= a <= max_num and 1 <= b <= max_num and a * b <= level

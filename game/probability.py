from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from game.selector import QuestionService, is_low

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 20000
TOP_PAIRS = 20


def check_iterations(iterations: int) -> None:
    if iterations <= 0 or iterations > MAX_ITERATIONS:
        raise ValueError(f"Iterations must be between 1 and {MAX_ITERATIONS}.")


def sample(questions: QuestionService, level: int, iterations: int) -> Dict[str, Any]:
    """Draw from the unconstrained pool and count how often a low factor shows up."""
    check_iterations(iterations)
    questions.check_level(level)
    settings = questions.settings
    low = settings.low_probability_factors
    chance = max(0, min(100, settings.low_factor_chance_percent))

    low_count = 0
    for _ in range(iterations):
        q = questions.get_question(level)
        if is_low((q.a, q.b), low):
            low_count += 1

    low_percent = low_count / iterations * 100.0
    logger.info(
        "Probability sample: level=%d iterations=%d configured=%d%% observed_low=%d (%.2f%%)",
        level,
        iterations,
        chance,
        low_count,
        low_percent,
    )
    return {
        "level": level,
        "iterations": iterations,
        "low_probability_factors": sorted(low),
        "configured_chance_percent": chance,
        "observed_low_factor_count": low_count,
        "observed_low_factor_percent": low_percent,
        "observed_desired_count": iterations - low_count,
    }


def pair_stats(questions: QuestionService, level: int, iterations: int) -> Dict[str, Any]:
    """How often each unordered pair is drawn, and in which orientation."""
    check_iterations(iterations)
    questions.check_level(level)

    # (small, large) -> [total, small_first, large_first]
    stats: Dict[Tuple[int, int], list] = {}
    for _ in range(iterations):
        q = questions.get_question(level)
        key = (q.a, q.b) if q.a <= q.b else (q.b, q.a)
        entry = stats.setdefault(key, [0, 0, 0])
        entry[0] += 1
        if q.a <= q.b:
            entry[1] += 1
        else:
            entry[2] += 1

    both = sum(1 for v in stats.values() if v[1] > 0 and v[2] > 0)
    top = sorted(stats.items(), key=lambda kv: kv[1][0], reverse=True)[:TOP_PAIRS]
    return {
        "level": level,
        "iterations": iterations,
        "unordered_pairs_observed": len(stats),
        "both_orientations": both,
        "single_orientation": len(stats) - both,
        "top_pairs": [
            {"pair": f"{a}x{b}", "total": v[0], "a_first": v[1], "b_first": v[2]}
            for (a, b), v in top
        ],
    }

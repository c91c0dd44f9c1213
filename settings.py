from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

logger = logging.getLogger(__name__)

_BASE = Path(__file__).resolve().parent
_DEFAULT_FILE = _BASE / "game_settings.json"

# env var -> settings field
_ENV_KEYS = {
    "GAME_LEVELS": "levels",
    "GAME_DEFAULT_MAX_MULTIPLIER": "default_max_multiplier",
    "GAME_LOW_PROBABILITY_FACTORS": "low_probability_factors",
    "GAME_LOW_FACTOR_CHANCE_PERCENT": "low_factor_chance_percent",
    "GAME_REQUIRED_CORRECT_ANSWERS": "required_correct_answers",
    "GAME_INITIAL_ATTEMPTS": "initial_attempts",
    "GAME_BONUS_ATTEMPTS_THRESHOLD": "bonus_attempts_threshold",
    "GAME_EQUATIONS_REQUIRED_ANSWERS": "equations_required_answers",
}
_LIST_FIELDS = {"levels", "low_probability_factors"}

# appsettings-style keys accepted in the JSON file
_FILE_ALIASES = {
    "Levels": "levels",
    "DefaultMaxMultiplier": "default_max_multiplier",
    "LowProbabilityFactors": "low_probability_factors",
    "LowFactorChancePercent": "low_factor_chance_percent",
    "RequiredCorrectAnswers": "required_correct_answers",
    "InitialAttempts": "initial_attempts",
    "BonusAttemptsThreshold": "bonus_attempts_threshold",
    "EquationsRequiredAnswers": "equations_required_answers",
}


class GameSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    levels: FrozenSet[int] = frozenset({20, 50, 100, 1000})
    default_max_multiplier: int = Field(default=10, ge=1)
    low_probability_factors: FrozenSet[int] = frozenset({1, 2, 3, 4, 10})
    low_factor_chance_percent: int = Field(default=10, ge=0, le=100)
    required_correct_answers: int = Field(default=10, ge=1)
    # 0 = unlimited lives
    initial_attempts: int = Field(default=3, ge=0)
    # 0 = bonus disabled
    bonus_attempts_threshold: int = Field(default=5, ge=0)
    equations_required_answers: int = Field(default=20, ge=1)

    @field_validator("levels")
    @classmethod
    def _levels_not_empty(cls, v: FrozenSet[int]) -> FrozenSet[int]:
        if not v:
            raise ValueError("at least one level must be configured")
        if any(x < 1 for x in v):
            raise ValueError("levels must be positive")
        return v

    def bonus_enabled(self) -> bool:
        return self.initial_attempts > 0 and self.bonus_attempts_threshold > 0


def _split_ints(raw: str) -> List[int]:
    return [int(p) for p in raw.replace(";", ",").split(",") if p.strip()]


def _read_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: settings root must be an object")
    # Accept either a bare object or an appsettings-style "GameSettings" section
    section = data.get("GameSettings", data)
    return {_FILE_ALIASES.get(k, k): v for k, v in section.items()}


def _read_env(environ: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for env_key, field in _ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is None or not raw.strip():
            continue
        values[field] = _split_ints(raw) if field in _LIST_FIELDS else int(raw)
    return values


def load_settings(
    path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None
) -> GameSettings:
    """
    Build settings from defaults, then the JSON file (if present), then env overrides.
    Raises pydantic.ValidationError / ValueError on bad configuration.
    """
    environ = dict(os.environ) if environ is None else environ
    if path is None:
        path = Path(environ.get("GAME_SETTINGS_FILE") or _DEFAULT_FILE)

    values: Dict[str, Any] = {}
    if path.exists():
        values.update(_read_file(path))
    values.update(_read_env(environ))

    settings = GameSettings(**values)
    logger.info(
        "Game settings loaded: levels=%s max_multiplier=%s required=%s attempts=%s bonus=%s",
        sorted(settings.levels),
        settings.default_max_multiplier,
        settings.required_correct_answers,
        settings.initial_attempts,
        settings.bonus_attempts_threshold,
    )
    return settings


@lru_cache(maxsize=1)
def get_settings() -> GameSettings:
    return load_settings()

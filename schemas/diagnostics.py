from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field


class GameSettingsOut(BaseModel):
    levels: List[int]
    default_max_multiplier: int
    low_probability_factors: List[int]
    low_factor_chance_percent: int
    required_correct_answers: int
    initial_attempts: int
    bonus_attempts_threshold: int
    equations_required_answers: int


class ModeRequest(BaseModel):
    # older clients post "Mode"
    mode: Optional[str] = Field(default=None, validation_alias=AliasChoices("mode", "Mode"))


class ModeResponse(BaseModel):
    mode: Literal["normal", "learning"]
    label: str

import random
from typing import Annotated

from fastapi import Depends

from game.selector import QuestionService
from settings import GameSettings, get_settings


def get_rng() -> random.Random:
    """
    Per-request random source. Tests override this dependency with a seeded
    random.Random to make selection deterministic.
    """
    return random.Random()


SettingsDep = Annotated[GameSettings, Depends(get_settings)]
RngDep = Annotated[random.Random, Depends(get_rng)]


def get_question_service(settings: SettingsDep, rng: RngDep) -> QuestionService:
    return QuestionService(settings, rng)


QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]

import logging

from fastapi import APIRouter

from deps.game import SettingsDep
from schemas.diagnostics import GameSettingsOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/diagnostics", tags=["diagnostics"])


@router.get("/gamesettings", response_model=GameSettingsOut)
def game_settings(settings: SettingsDep):
    logger.debug("Returning GameSettings for diagnostics")
    data = settings.model_dump()
    data["levels"] = sorted(settings.levels)
    data["low_probability_factors"] = sorted(settings.low_probability_factors)
    return data

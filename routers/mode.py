from fastapi import APIRouter, HTTPException, Response

from game.texts import MODE_LABELS, locale_or_default
from schemas.diagnostics import ModeRequest, ModeResponse

router = APIRouter(prefix="/api/mode", tags=["mode"])

MODE_COOKIE = "mg_mode"
MODES = ("normal", "learning")
_COOKIE_MAX_AGE = 30 * 24 * 3600


def known_mode(value: str) -> bool:
    return value.strip().lower() in MODES


@router.post("", response_model=ModeResponse)
def set_mode(req: ModeRequest, response: Response, locale: str = "pl"):
    if not req.mode or not req.mode.strip():
        raise HTTPException(status_code=400, detail="Mode is required")
    if not known_mode(req.mode):
        raise HTTPException(status_code=400, detail="Invalid mode")

    mode = req.mode.strip().lower()
    response.set_cookie(
        MODE_COOKIE,
        mode,
        max_age=_COOKIE_MAX_AGE,
        httponly=False,
        samesite="strict",
    )
    return {"mode": mode, "label": MODE_LABELS[locale_or_default(locale)][mode]}

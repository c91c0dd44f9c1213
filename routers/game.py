from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Cookie, HTTPException

from deps.game import QuestionServiceDep, SettingsDep
from game.errors import GameError
from game.progression import GameSession, play_round
from game.texts import format_elapsed, question_text
from routers.mode import MODE_COOKIE, known_mode
from schemas.game import RoundResponse

router = APIRouter(prefix="/api/game", tags=["game"])


@router.post("/round", response_model=RoundResponse)
def play(
    session: GameSession,
    settings: SettingsDep,
    questions: QuestionServiceDep,
    locale: str = "pl",
    mode_cookie: Optional[str] = Cookie(default=None, alias=MODE_COOKIE),
):
    # cookie preference wins over whatever the form carried
    if mode_cookie and known_mode(mode_cookie):
        session = session.model_copy(update={"mode": mode_cookie.strip().lower()})

    try:
        s = play_round(session, settings, questions)
    except GameError as e:
        raise HTTPException(status_code=400, detail=str(e))

    required = settings.required_correct_answers
    return RoundResponse(
        **s.model_dump(),
        question_text=question_text(s.a, s.b),
        required_answers=required,
        progress=min(s.streak, required),
        attempts_unlimited=settings.initial_attempts == 0,
        elapsed_text=format_elapsed(s.game_elapsed_seconds, locale),
    )

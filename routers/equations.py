from __future__ import annotations

from fastapi import APIRouter, HTTPException

from deps.game import RngDep, SettingsDep
from game.codec import parse_history
from game.equations import Difficulty, generate_equation, is_finished, play_equation_round
from game.errors import GameError
from game.grader import OPERATORS
from game.texts import question_text
from schemas.equations import EquationQuestionOut, EquationRoundRequest, EquationRoundResponse

router = APIRouter(prefix="/api/equations", tags=["equations"])


@router.get("/question", response_model=EquationQuestionOut)
def get_equation(rng: RngDep, difficulty: Difficulty = "1"):
    eq = generate_equation(difficulty, rng)
    return {"difficulty": difficulty, "a": eq.a, "b": eq.b, "operator": eq.operator, "text": eq.text}


@router.post("/round", response_model=EquationRoundResponse)
def play(req: EquationRoundRequest, settings: SettingsDep, rng: RngDep):
    try:
        s = play_equation_round(req, req.action, settings, rng)
        history = parse_history(s.history_raw)
    except GameError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return EquationRoundResponse(
        **s.model_dump(exclude={"action"}),
        question_text=question_text(s.a, s.b, OPERATORS.get(s.operator, s.operator)),
        required_answers=settings.equations_required_answers,
        finished=is_finished(history, settings),
        score=sum(1 for h in history if h.is_correct),
        history=history,
    )

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from deps.game import QuestionServiceDep
from game.codec import parse_solved
from game.errors import GameError
from game.grader import grade
from schemas.multiplication import AnswerRequest, AnswerResponse, QuestionOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/multiplication", tags=["multiplication"])


@router.get("/question", response_model=QuestionOut)
def get_question(
    questions: QuestionServiceDep,
    level: int = 100,
    solved: Optional[str] = Query(default=None, description="JSON array or ';'-joined a-b keys"),
):
    logger.info("Question requested: level=%s solved_len=%d", level, len(solved or ""))
    try:
        q = questions.get_question(level, parse_solved(solved))
    except GameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return q


@router.post("/answer", response_model=AnswerResponse)
def check_answer(req: AnswerRequest):
    result = grade(req.user_answer, req.a, req.b)
    return {"is_correct": result.is_correct, "correct": result.correct_answer}

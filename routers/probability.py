from fastapi import APIRouter, HTTPException

from deps.game import QuestionServiceDep
from game import probability
from game.errors import GameError

router = APIRouter(prefix="/api/probability", tags=["probability"])


@router.get("/sample")
def sample(questions: QuestionServiceDep, level: int = 100, iterations: int = 1000):
    try:
        return probability.sample(questions, level, iterations)
    except (GameError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/pair-stats")
def pair_stats(questions: QuestionServiceDep, level: int = 100, iterations: int = 10000):
    try:
        return probability.pair_stats(questions, level, iterations)
    except (GameError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

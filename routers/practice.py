from __future__ import annotations

from fastapi import APIRouter

from deps.game import RngDep
from game.drills import check_drill, check_table, drop_proposal, generate_drill, table_proposals
from game.memory import flip, new_memory_game
from schemas.practice import (
    DrillRequest,
    DrillResponse,
    MemoryRequest,
    MemoryResponse,
    TableRequest,
    TableResponse,
)

router = APIRouter(prefix="/api/practice", tags=["practice"])


@router.post("/multiply-divide", response_model=DrillResponse)
def multiply_divide(req: DrillRequest, rng: RngDep):
    if req.new or (req.a == 0 and req.b == 0) or req.user_answer is None:
        a, b = generate_drill(req.operation, req.max_factor, rng)
        return {"operation": req.operation, "a": a, "b": b, "checked": False}

    result = check_drill(req.operation, req.a, req.b, req.user_answer)
    return {
        "operation": req.operation,
        "a": req.a,
        "b": req.b,
        "checked": True,
        "is_correct": result.is_correct,
        "correct_answer": result.correct_answer,
    }


@router.post("/table", response_model=TableResponse)
def multiplication_table(req: TableRequest, rng: RngDep):
    result = check_table(req.answers)

    proposals = drop_proposal(req.proposals, req.last_filled_value)
    # out of tiles while cells are still empty -> deal a fresh set
    if not proposals and any(c is None for c in result.cells):
        proposals = table_proposals(req.answers, rng)

    return TableResponse(**result.model_dump(), proposals=proposals)


@router.post("/memory", response_model=MemoryResponse)
def memory(req: MemoryRequest, rng: RngDep):
    game = new_memory_game(rng) if req.game is None else flip(req.game, req.flip_index, rng)
    return MemoryResponse(**game.model_dump(), finished=game.all_matched())

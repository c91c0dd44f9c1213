import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from routers.diagnostics import router as diagnostics_router
from routers.equations import router as equations_router
from routers.game import router as game_router
from routers.mode import router as mode_router
from routers.multiplication import router as multiplication_router
from routers.practice import router as practice_router
from routers.probability import router as probability_router
from settings import get_settings

logger = logging.getLogger("times-tables")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

# Configuration is validated at import; a bad value stops startup
get_settings()

app = FastAPI(title="Times Tables Trainer API")

# Allow calls from the local dev front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(multiplication_router)  # /api/multiplication/question, /answer
app.include_router(game_router)  # /api/game/round
app.include_router(equations_router)  # /api/equations/...
app.include_router(practice_router)  # /api/practice/...
app.include_router(probability_router)  # /api/probability/sample, /pair-stats
app.include_router(diagnostics_router)  # /api/diagnostics/gamesettings
app.include_router(mode_router)  # /api/mode

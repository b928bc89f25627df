"""
FastAPI web application for the Vision chess AI.

Exposes the computer opponent over HTTP so a browser board (or any other
client) can ask for a move at a chosen difficulty level.

Endpoints:
    POST /api/move    - FEN + level in, chosen move and resulting FEN out
    GET  /api/levels  - the ten difficulty profiles

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which keeps CPU-bound searches off the event loop.
- Stateless per request: the client sends the full FEN each time; no server-
  side board state is kept between requests.
- The random source is a dependency (``get_rng``) so tests can override it
  and get reproducible moves.
"""

import logging
import os
import random

import chess
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from vision.constants import MAX_TIER, MIN_TIER
from vision.levels import LEVELS, get_level
from vision.search import choose_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=os.environ.get("VISION_LOG_LEVEL", "INFO").upper())
_log = logging.getLogger(__name__)

_rng = random.Random()

app = FastAPI(title="Vision Chess AI", version="1.0.0")


def get_rng() -> random.Random:
    """Random source used by the level policy."""
    return _rng


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen:   Full FEN string of the current position.
        level: Difficulty tier, 1 (weakest) to 10 (strongest).
    """

    fen: str
    level: int = Field(default=MAX_TIER, ge=MIN_TIER, le=MAX_TIER)


class MoveResponse(BaseModel):
    """
    Engine response after choosing a move.

    Fields:
        move:   Chosen move in UCI notation (e.g. "e2e4", "e7e8q").
        fen:    Board FEN after the move is applied.
        level:  Tier the move was chosen at.
        name:   Display name of the level, e.g. "Vision 4".
        source: "search", "random" or "mistake".
        score:  Root search score for the side that moved (pawn = 10), or
                null when the move was random.
        depth:  Plies searched; 0 for random moves.
        nodes:  Search nodes visited.
    """

    move: str
    fen: str
    level: int
    name: str
    source: str
    score: float | None
    depth: int
    nodes: int


class LevelInfo(BaseModel):
    tier: int
    name: str
    description: str
    depth: int
    mistake_probability: float
    random_rate: float


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest, rng: random.Random = Depends(get_rng)) -> MoveResponse:
    """
    Choose the engine's move for the given position and level.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: The engine failed or returned no move.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    try:
        decision = choose_move(board, request.level, rng)
    except Exception as exc:
        _log.exception("Engine failed for FEN=%s level=%d", request.fen, request.level)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if decision.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    level = get_level(request.level)
    _log.info(
        "%s move=%s source=%s depth=%d nodes=%d fen=%s",
        level.name,
        decision.move.uci(),
        decision.source.value,
        decision.depth,
        decision.nodes,
        request.fen[:40],
    )

    board.push(decision.move)
    return MoveResponse(
        move=decision.move.uci(),
        fen=board.fen(),
        level=level.tier,
        name=level.name,
        source=decision.source.value,
        score=decision.score,
        depth=decision.depth,
        nodes=decision.nodes,
    )


@app.get("/api/levels", response_model=list[LevelInfo])
def api_levels() -> list[LevelInfo]:
    """List the difficulty profiles from weakest to strongest."""
    return [
        LevelInfo(
            tier=lv.tier,
            name=lv.name,
            description=lv.description,
            depth=lv.depth,
            mistake_probability=lv.mistake_probability,
            random_rate=lv.random_rate,
        )
        for lv in LEVELS
    ]

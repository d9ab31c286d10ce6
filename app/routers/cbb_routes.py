# app/routers/cbb_routes.py
from __future__ import annotations

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from app.models.cbb_model import project_live_game
from app.models.cbb_types import GameSnapshot, LiveBoard, LiveGame, LiveProjection
from app.services.live_board import build_live_board

logger = logging.getLogger("app.cbb")
router = APIRouter(tags=["CBB"])


# -------------------------
# 🏀  CBB - Live board
# -------------------------
@router.get("/live", response_model=LiveBoard)
async def cbb_live(
    date: Optional[str] = None,
    d1_only: bool = Query(
        True, description="If true, only NCAA Division I games (ESPN groups = 50)"
    ),
):
    """
    In-progress games with pace, projected total, confidence and signals.
    Poll again after `refreshSeconds`.
    """
    return await build_live_board(date, d1_only=d1_only)


@router.get("/live/{gameId}", response_model=LiveGame)
async def cbb_live_game(gameId: str, date: Optional[str] = None):
    """
    One game from the live board.
    """
    board = await build_live_board(date)
    game = next((g for g in board["games"] if g.get("gameId") == gameId), None)
    if not game:
        logger.info("live game %s not on board (demo=%s)", gameId, board["demo"])
        raise HTTPException(404, "Game not found")
    return game


# -------------------------
# 🧮  CBB - Ad-hoc projection
# -------------------------
@router.get("/project", response_model=LiveProjection)
async def cbb_project(
    homeScore: int = Query(..., ge=0),
    awayScore: int = Query(..., ge=0),
    period: int = Query(..., ge=1, description="1 = 1st half, 2 = 2nd half, 3+ = OT"),
    clock: Optional[str] = Query(None, description="e.g. '8:45' or '8:45 - 2nd Half'"),
    homeTeam: str = "",
    awayTeam: str = "",
):
    """
    Project a single game state without touching ESPN.
    """
    snapshot = GameSnapshot(
        home_score=homeScore,
        away_score=awayScore,
        clock_text=clock,
        period=period,
        home_team=homeTeam,
        away_team=awayTeam,
    )
    return project_live_game(snapshot)

# app/services/live_board.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.core import config
from app.core.cache import get_from_cache, set_in_cache
from app.models.cbb_model import project_live_game
from app.models.cbb_types import LiveBoard, LiveGame
from app.services.demo_games import demo_rows
from app.services.espn_cbb import get_live_games, to_game_snapshot
from app.services.espn_common import normalize_date_param

logger = logging.getLogger("app.live_board")

# One refresh in flight per board key
_refresh_locks: Dict[str, asyncio.Lock] = {}


def project_rows(rows: List[Dict[str, Any]]) -> List[LiveGame]:
    """Attach a live projection to each scoreboard row."""
    return [{**row, "model": project_live_game(to_game_snapshot(row))} for row in rows]


async def _refresh(date_yyyymmdd: str, d1_only: bool) -> LiveBoard:
    rows: List[Dict[str, Any]] = []
    try:
        rows = await get_live_games(date_yyyymmdd, d1_only=d1_only)
    except Exception:
        logger.exception("live_board: scoreboard fetch failed for date=%s", date_yyyymmdd)

    demo = False
    if not rows and config.LIVE_DEMO_FALLBACK:
        logger.info("live_board: no live games for date=%s, serving demo slate", date_yyyymmdd)
        rows = demo_rows()
        demo = True

    return {
        "games": project_rows(rows),
        "demo": demo,
        "updatedAt": datetime.now(timezone.utc).isoformat(),
        "refreshSeconds": config.LIVE_REFRESH_SECONDS,
    }


async def build_live_board(
    date: Optional[str] = None,
    d1_only: bool = True,
    use_cache: bool = True,
) -> LiveBoard:
    """
    One refresh of the live dashboard.

    Feed errors and empty slates are answered with the demo games (unless
    LIVE_DEMO_FALLBACK is off, then with an empty list) so a polling client
    always gets a board back. Concurrent pollers of an expired board share
    a single ESPN fetch.
    """
    d = normalize_date_param(date)
    if not use_cache:
        return await _refresh(d, d1_only)

    cache_key = f"cbb:live:{d}:{int(d1_only)}"
    cached = get_from_cache(cache_key, ttl_seconds=config.LIVE_CACHE_TTL_SECONDS)
    if cached is not None:
        logger.debug("live_board cache HIT %s", cache_key)
        return cached

    lock = _refresh_locks.setdefault(cache_key, asyncio.Lock())
    try:
        async with lock:
            # another poller may have refreshed while we waited
            cached = get_from_cache(cache_key, ttl_seconds=config.LIVE_CACHE_TTL_SECONDS)
            if cached is not None:
                return cached
            board = await _refresh(d, d1_only)
            set_in_cache(cache_key, board)
            return board
    finally:
        if not lock.locked():
            _refresh_locks.pop(cache_key, None)

# app/services/espn_cbb.py
from __future__ import annotations

import httpx
from typing import Any, Dict, List, Optional
import logging

from app.core.config import CBB_SCOREBOARD_URL
from app.models.cbb_types import GameSnapshot
from app.services.espn_common import _get_json, normalize_date_param

logger = logging.getLogger("app.espn_cbb")

# Status names that never get a live projection
NOT_LIVE_STATUSES = frozenset({
    "STATUS_FINAL",
    "STATUS_FINAL_OT",
    "STATUS_POSTPONED",
    "STATUS_CANCELED",
    "STATUS_SCHEDULED",
})


def _site_params(date_yyyymmdd: str, d1_only: bool) -> Dict[str, Any]:
    params: Dict[str, Any] = {"dates": date_yyyymmdd, "limit": 500}
    if d1_only:
        params["groups"] = 50  # Division I filter (matches ESPN UI)
    return params


async def _fetch_site(date_yyyymmdd: str, d1_only: bool) -> Dict[str, Any]:
    """
    Try single-day + groups first; on 400, retry without groups.
    """
    params = _site_params(date_yyyymmdd, d1_only=d1_only)
    try:
        return await _get_json(CBB_SCOREBOARD_URL, params)
    except httpx.HTTPStatusError as e:
        if d1_only and e.response is not None and e.response.status_code == 400:
            logger.info("espn_cbb: retrying without groups for date=%s", date_yyyymmdd)
            return await _get_json(CBB_SCOREBOARD_URL, _site_params(date_yyyymmdd, d1_only=False))
        raise


async def get_games_for_date(date: Optional[str] = None, d1_only: bool = True) -> List[Dict[str, Any]]:
    """
    Load ESPN CBB scoreboard events for a single date.
    - date: 'YYYYMMDD' or 'YYYY-MM-DD' or None (today in NY)
    - d1_only: True -> request NCAA Division I only (groups=50).
               If no D1 events found, we auto-fallback to ALL levels for that date.
    """
    d = normalize_date_param(date)
    logger.info("CBB get_games_for_date date=%s d1_only=%s", d, d1_only)

    data = await _fetch_site(d, d1_only=d1_only)
    events = data.get("events") or []
    if d1_only and len(events) == 0:
        logger.info("CBB get_games_for_date: D1 returned 0 events for %s, falling back to ALL levels", d)
        data2 = await _fetch_site(d, d1_only=False)
        events = data2.get("events") or []

    logger.info("CBB get_games_for_date returned %d events", len(events))
    return events


# ---------- Live extraction ----------

def _score(raw: Any) -> int:
    try:
        return max(0, int(str(raw).strip()))
    except (TypeError, ValueError):
        return 0


def _period(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def _status(event: Dict[str, Any]) -> Dict[str, Any]:
    comp = (event.get("competitions") or [{}])[0]
    return comp.get("status") or event.get("status") or {}


def is_live_event(event: Dict[str, Any]) -> bool:
    """In-progress games only: not final/postponed/canceled/scheduled, period started."""
    status = _status(event)
    name = (status.get("type") or {}).get("name")
    if name in NOT_LIVE_STATUSES:
        return False
    return _period(status.get("period")) >= 1


def extract_live_snapshot(ev: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten an ESPN CBB event into the fields the live projection needs.

    The clock comes from status.type.detail ("8:45 - 2nd Half"); when that
    has no clock in it we fall back to status.displayClock.
    """
    comp = (ev.get("competitions") or [{}])[0]
    competitors = comp.get("competitors") or []

    home = next(
        (c for c in competitors if c.get("homeAway") == "home"),
        competitors[0] if competitors else {},
    )
    away = next(
        (c for c in competitors if c.get("homeAway") == "away"),
        competitors[1] if len(competitors) > 1 else {},
    )

    status = _status(ev)
    status_type = status.get("type") or {}
    clock = status_type.get("detail") or ""
    if ":" not in clock and status.get("displayClock"):
        clock = status["displayClock"]

    return {
        "gameId": str(ev.get("id") or ""),
        "homeTeam": (home.get("team") or {}).get("displayName") or "",
        "awayTeam": (away.get("team") or {}).get("displayName") or "",
        "homeScore": _score(home.get("score")),
        "awayScore": _score(away.get("score")),
        "clock": clock,
        "period": _period(status.get("period")),
        "status": status_type.get("name"),
    }


def to_game_snapshot(row: Dict[str, Any]) -> GameSnapshot:
    return GameSnapshot(
        home_score=row["homeScore"],
        away_score=row["awayScore"],
        clock_text=row["clock"],
        period=row["period"],
        home_team=row["homeTeam"],
        away_team=row["awayTeam"],
    )


async def get_live_games(date: Optional[str] = None, d1_only: bool = True) -> List[Dict[str, Any]]:
    events = await get_games_for_date(date, d1_only=d1_only)
    live = [extract_live_snapshot(ev) for ev in events if is_live_event(ev)]
    logger.info("CBB get_live_games: %d of %d events in progress", len(live), len(events))
    return live

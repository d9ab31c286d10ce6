# app/services/demo_games.py
from __future__ import annotations

from typing import Any, Dict, List

# Served when ESPN is unreachable or no games are in progress.
# Scores and clocks only; projections are computed by the live model.
DEMO_GAMES: List[Dict[str, Any]] = [
    {
        "gameId": "demo1",
        "homeTeam": "Duke Blue Devils",
        "awayTeam": "North Carolina Tar Heels",
        "homeScore": 72,
        "awayScore": 68,
        "clock": "8:45 - 2nd Half",
        "period": 2,
        "status": "STATUS_IN_PROGRESS",
    },
    {
        "gameId": "demo2",
        "homeTeam": "Kentucky Wildcats",
        "awayTeam": "Louisville Cardinals",
        "homeScore": 45,
        "awayScore": 48,
        "clock": "12:30 - 2nd Half",
        "period": 2,
        "status": "STATUS_IN_PROGRESS",
    },
    {
        "gameId": "demo3",
        "homeTeam": "Gonzaga Bulldogs",
        "awayTeam": "UCLA Bruins",
        "homeScore": 58,
        "awayScore": 55,
        "clock": "15:22 - 2nd Half",
        "period": 2,
        "status": "STATUS_IN_PROGRESS",
    },
    {
        "gameId": "demo4",
        "homeTeam": "Michigan State Spartans",
        "awayTeam": "Purdue Boilermakers",
        "homeScore": 61,
        "awayScore": 59,
        "clock": "6:15 - 2nd Half",
        "period": 2,
        "status": "STATUS_IN_PROGRESS",
    },
]


def demo_rows() -> List[Dict[str, Any]]:
    return [dict(g) for g in DEMO_GAMES]

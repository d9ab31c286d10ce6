# app/models/cbb_types.py
from typing_extensions import TypedDict, Literal
from typing import List, NamedTuple, Optional

OverUnderEdge = Literal["OVER_LEAN", "UNDER_LEAN", "NEUTRAL"]
GameTempo = Literal["HOT", "COLD", "NEUTRAL"]


class GameSnapshot(NamedTuple):
    """One in-progress game as seen on a single scoreboard poll."""
    home_score: int
    away_score: int
    clock_text: Optional[str]
    period: int
    home_team: str = ""
    away_team: str = ""


class TimeState(NamedTuple):
    minutes_played: float
    minutes_remaining: float


class Signals(TypedDict):
    paceVsAverage: int
    overUnderEdge: OverUnderEdge
    gameTempo: GameTempo
    blowoutRisk: int


class LiveProjection(TypedDict):
    projectedTotal: int
    pace: int
    confidence: int
    paceVsAverage: int
    overUnderEdge: OverUnderEdge
    gameTempo: GameTempo
    blowoutRisk: int
    algorithmLabel: str
    minutesRemaining: float
    projectedPoints: int


class LiveGame(TypedDict):
    gameId: str
    homeTeam: str
    awayTeam: str
    homeScore: int
    awayScore: int
    clock: str
    period: int
    status: Optional[str]
    model: LiveProjection


class LiveBoard(TypedDict):
    games: List[LiveGame]
    demo: bool
    updatedAt: str
    refreshSeconds: int

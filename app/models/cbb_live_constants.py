# app/models/cbb_live_constants.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ProjectionConstants:
    """
    Every knob of the live pace projection in one place.

    Values are the canonical set used by the dashboard. Pass a modified copy
    (dataclasses.replace) to project_live_game to experiment.
    """

    # Game shape (NCAA men's: two 20-minute halves, 5-minute overtimes)
    half_minutes: float = 20.0
    overtime_minutes: float = 5.0
    game_minutes: float = 40.0
    league_avg_pace: float = 70.0

    # Clock text without a usable "M:SS"
    coarse_first_half_played: float = 10.0
    coarse_first_half_remaining: float = 30.0
    coarse_later_played: float = 30.0
    coarse_later_remaining: float = 10.0

    # Adjustment chain
    second_half_slowdown: float = 0.94
    blowout_severe_diff: int = 20
    blowout_severe_factor: float = 0.85
    blowout_moderate_diff: int = 12
    blowout_moderate_factor: float = 0.92
    close_game_diff: int = 3
    close_game_minutes: float = 5.0
    close_game_factor: float = 1.15
    foul_minutes: float = 2.0
    foul_min_diff: int = 4
    foul_max_diff: int = 15
    foul_factor: float = 1.22
    home_pace_weight: float = 0.55
    regression_max_weight: float = 0.30
    regression_min_weight: float = 0.05

    # Finalizer
    floor_increment: int = 3
    fallback_points: int = 28
    fallback_confidence: int = 55

    # Confidence
    confidence_base: float = 55.0
    confidence_progress_span: float = 35.0
    stability_max_bonus: float = 10.0
    stability_divisor: float = 2.0
    data_quality_per_minute: float = 0.2
    data_quality_max_bonus: float = 7.0
    confidence_cap: float = 95.0

    # Signals
    over_total: int = 145
    under_total: int = 125
    total_lean_confidence: int = 80
    pace_lean_margin: int = 8
    pace_lean_confidence: int = 75
    hot_pace: int = 78
    cold_pace: int = 62
    tempo_margin: int = 10
    blowout_risk_diff: int = 15
    blowout_risk_per_point: int = 5


DEFAULT_CONSTANTS = ProjectionConstants()

NORMAL_LABEL = "Adjusted Pace"
FALLBACK_LABEL = "Fallback"

# Pace tendency per ESPN displayName (1.0 = league-average tempo)
DEFAULT_TEAM_PACE_FACTORS: Mapping[str, float] = MappingProxyType({
    "Alabama Crimson Tide": 1.06,
    "Arizona Wildcats": 1.04,
    "Auburn Tigers": 1.03,
    "Baylor Bears": 1.00,
    "Creighton Bluejays": 1.02,
    "Duke Blue Devils": 1.02,
    "Gonzaga Bulldogs": 1.05,
    "Houston Cougars": 0.94,
    "Iowa Hawkeyes": 1.05,
    "Kansas Jayhawks": 1.01,
    "Kentucky Wildcats": 1.03,
    "Louisville Cardinals": 1.00,
    "Michigan State Spartans": 0.99,
    "North Carolina Tar Heels": 1.05,
    "Purdue Boilermakers": 0.97,
    "Saint Mary's Gaels": 0.93,
    "Tennessee Volunteers": 0.97,
    "UCLA Bruins": 0.97,
    "Virginia Cavaliers": 0.90,
    "Wisconsin Badgers": 0.94,
})

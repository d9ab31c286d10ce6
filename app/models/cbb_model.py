# app/models/cbb_model.py
"""
Live pace / projected-total engine for in-progress college basketball games.

Pipeline per game snapshot:

    parse_clock -> compute_pace -> adjust_pace -> finalize_projection
                                              \-> estimate_confidence
                                                  -> classify_signals

Everything here is deterministic arithmetic on one snapshot. Nothing is
cached or shared between calls, so the same snapshot always yields the
same record and games can be projected concurrently.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from app.models.cbb_live_constants import (
    DEFAULT_CONSTANTS,
    DEFAULT_TEAM_PACE_FACTORS,
    FALLBACK_LABEL,
    NORMAL_LABEL,
    ProjectionConstants,
)
from app.models.cbb_types import GameSnapshot, LiveProjection, Signals, TimeState

logger = logging.getLogger("app.cbb_model")


# -------------------------
# Clock
# -------------------------
def _to_int(raw: Optional[str]) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return 0


def parse_clock(
    clock_text: Optional[str],
    period: int,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> TimeState:
    """
    Convert ESPN clock text ("8:45" or "8:45 - 2nd Half") plus the period
    number into minutes played / remaining since tip-off.

    Text without a "M:SS" clock ("Halftime", "", None) gets a coarse guess.
    Non-numeric minute/second fields count as 0.
    """
    c = constants
    if not clock_text or ":" not in clock_text:
        if period <= 1:
            return TimeState(c.coarse_first_half_played, c.coarse_first_half_remaining)
        return TimeState(c.coarse_later_played, c.coarse_later_remaining)

    clock = clock_text.split(" - ", 1)[0]
    parts = clock.split(":")
    minutes = _to_int(parts[0])
    seconds = _to_int(parts[1]) if len(parts) > 1 else 0
    left = minutes + seconds / 60.0

    if period <= 1:
        return TimeState(c.half_minutes - left, left + c.half_minutes)
    if period == 2:
        return TimeState(c.half_minutes + (c.half_minutes - left), left)

    played = c.game_minutes + (period - 2) * c.overtime_minutes + (c.overtime_minutes - left)
    return TimeState(played, left)


# -------------------------
# Pace
# -------------------------
def compute_pace(
    current_total: int,
    minutes_played: float,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> float:
    """Points per 40 minutes. minutes_played must be > 0."""
    return (current_total / minutes_played) * constants.game_minutes


def team_pace_factor(
    home_team: Optional[str],
    away_team: Optional[str],
    team_factors: Mapping[str, float],
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> float:
    # unknown teams are neutral
    home = team_factors.get(home_team or "", 1.0)
    away = team_factors.get(away_team or "", 1.0)
    w = constants.home_pace_weight
    return home * w + away * (1.0 - w)


def adjust_pace(
    pace: float,
    time_state: TimeState,
    score_diff: int,
    period: int,
    home_team: Optional[str] = None,
    away_team: Optional[str] = None,
    team_factors: Optional[Mapping[str, float]] = None,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> float:
    """
    Apply the heuristic corrections to the raw pace, in order:

      1. second-half slowdown
      2. blowout slowdown (severe / moderate tiers)
      3. close-game acceleration in the last minutes
      4. late fouling surge (foulable margins only)
      5. team pace tendencies
      6. regression toward league-average pace, weaker as the game matures
    """
    c = constants
    remaining = time_state.minutes_remaining
    adjusted = pace

    if period >= 2:
        adjusted *= c.second_half_slowdown

    if score_diff > c.blowout_severe_diff:
        adjusted *= c.blowout_severe_factor
    elif score_diff > c.blowout_moderate_diff:
        adjusted *= c.blowout_moderate_factor

    if score_diff <= c.close_game_diff and remaining < c.close_game_minutes:
        adjusted *= c.close_game_factor

    if remaining < c.foul_minutes and c.foul_min_diff < score_diff < c.foul_max_diff:
        adjusted *= c.foul_factor

    if team_factors:
        adjusted *= team_pace_factor(home_team, away_team, team_factors, c)

    progress = _progress(time_state)
    weight = max(c.regression_min_weight, c.regression_max_weight * (1.0 - progress))
    return adjusted * (1.0 - weight) + c.league_avg_pace * weight


def _progress(time_state: TimeState) -> float:
    total = time_state.minutes_played + time_state.minutes_remaining
    if total <= 0:
        return 0.0
    return min(1.0, max(0.0, time_state.minutes_played / total))


# -------------------------
# Projection + confidence
# -------------------------
def finalize_projection(
    current_total: int,
    adjusted_pace: float,
    minutes_remaining: float,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> int:
    remaining_points = (adjusted_pace / constants.game_minutes) * minutes_remaining
    projected = round(current_total + remaining_points)
    # always project at least a few more points than are already on the board
    return max(current_total + constants.floor_increment, projected)


def estimate_confidence(
    time_state: TimeState,
    pace: float,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> int:
    c = constants
    base = c.confidence_base + _progress(time_state) * c.confidence_progress_span
    stability = max(0.0, c.stability_max_bonus - abs(pace - c.league_avg_pace) / c.stability_divisor)
    data_quality = min(c.data_quality_max_bonus, time_state.minutes_played * c.data_quality_per_minute)
    return round(min(c.confidence_cap, max(0.0, base + stability + data_quality)))


# -------------------------
# Signals
# -------------------------
def blowout_risk(score_diff: int, constants: ProjectionConstants = DEFAULT_CONSTANTS) -> int:
    if score_diff <= constants.blowout_risk_diff:
        return 0
    return min(100, (score_diff - constants.blowout_risk_diff) * constants.blowout_risk_per_point)


def classify_signals(
    projected_total: int,
    pace: int,
    confidence: int,
    score_diff: int,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> Signals:
    c = constants
    pace_vs_avg = int(pace - c.league_avg_pace)

    edge = "NEUTRAL"
    if projected_total > c.over_total and confidence > c.total_lean_confidence:
        edge = "OVER_LEAN"
    elif projected_total < c.under_total and confidence > c.total_lean_confidence:
        edge = "UNDER_LEAN"
    elif pace_vs_avg > c.pace_lean_margin and confidence > c.pace_lean_confidence:
        edge = "OVER_LEAN"
    elif pace_vs_avg < -c.pace_lean_margin and confidence > c.pace_lean_confidence:
        edge = "UNDER_LEAN"

    tempo = "NEUTRAL"
    if pace > c.hot_pace or pace_vs_avg > c.tempo_margin:
        tempo = "HOT"
    elif pace < c.cold_pace or pace_vs_avg < -c.tempo_margin:
        tempo = "COLD"

    return {
        "paceVsAverage": pace_vs_avg,
        "overUnderEdge": edge,
        "gameTempo": tempo,
        "blowoutRisk": blowout_risk(score_diff, c),
    }


# -------------------------
# Entry point
# -------------------------
def fallback_projection(
    snapshot: GameSnapshot,
    time_state: TimeState,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> LiveProjection:
    c = constants
    current_total = snapshot.home_score + snapshot.away_score
    score_diff = abs(snapshot.home_score - snapshot.away_score)
    projected = current_total + c.fallback_points
    pace = int(c.league_avg_pace)
    signals = classify_signals(projected, pace, c.fallback_confidence, score_diff, c)

    return {
        "projectedTotal": projected,
        "pace": pace,
        "confidence": c.fallback_confidence,
        **signals,
        "algorithmLabel": FALLBACK_LABEL,
        "minutesRemaining": round(max(0.0, time_state.minutes_remaining), 1),
        "projectedPoints": c.fallback_points,
    }


def project_live_game(
    snapshot: GameSnapshot,
    team_factors: Optional[Mapping[str, float]] = DEFAULT_TEAM_PACE_FACTORS,
    constants: ProjectionConstants = DEFAULT_CONSTANTS,
) -> LiveProjection:
    """
    Project the final combined score of one in-progress game.

    Never raises for a plausible snapshot: unreadable clocks degrade to a
    coarse time estimate and degenerate time states (nothing played yet,
    or nothing left) get a fixed low-confidence fallback.
    """
    time_state = parse_clock(snapshot.clock_text, snapshot.period, constants)
    if time_state.minutes_played <= 0 or time_state.minutes_remaining <= 0:
        logger.debug(
            "cbb_model fallback: clock=%r period=%s -> %s",
            snapshot.clock_text, snapshot.period, time_state,
        )
        return fallback_projection(snapshot, time_state, constants)

    current_total = snapshot.home_score + snapshot.away_score
    score_diff = abs(snapshot.home_score - snapshot.away_score)

    raw_pace = compute_pace(current_total, time_state.minutes_played, constants)
    adjusted = adjust_pace(
        raw_pace,
        time_state,
        score_diff,
        snapshot.period,
        snapshot.home_team,
        snapshot.away_team,
        team_factors,
        constants,
    )
    projected = finalize_projection(current_total, adjusted, time_state.minutes_remaining, constants)
    confidence = estimate_confidence(time_state, raw_pace, constants)
    pace = round(raw_pace)
    signals = classify_signals(projected, pace, confidence, score_diff, constants)

    return {
        "projectedTotal": projected,
        "pace": pace,
        "confidence": confidence,
        **signals,
        "algorithmLabel": NORMAL_LABEL,
        "minutesRemaining": round(time_state.minutes_remaining, 1),
        "projectedPoints": projected - current_total,
    }

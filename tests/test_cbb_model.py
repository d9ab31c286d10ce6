import dataclasses

import pytest

from app.models.cbb_live_constants import DEFAULT_CONSTANTS, DEFAULT_TEAM_PACE_FACTORS
from app.models.cbb_model import (
    adjust_pace,
    blowout_risk,
    classify_signals,
    compute_pace,
    estimate_confidence,
    finalize_projection,
    parse_clock,
    project_live_game,
    team_pace_factor,
)
from app.models.cbb_types import GameSnapshot, TimeState


# ============================================================================
# CLOCK
# ============================================================================

@pytest.mark.parametrize(
    "clock,period,played,remaining",
    [
        ("20:00", 1, 0.0, 40.0),
        ("0:00", 2, 40.0, 0.0),
        ("8:45 - 2nd Half", 2, 31.25, 8.75),
        ("12:30 - 1st Half", 1, 7.5, 32.5),
        ("2:30 - OT", 3, 47.5, 2.5),
        ("5:00 - 2OT", 4, 50.0, 5.0),
        # no clock in the text -> coarse estimate
        ("", 1, 10.0, 30.0),
        (None, 2, 30.0, 10.0),
        ("Halftime", 1, 10.0, 30.0),
        ("8", 2, 30.0, 10.0),
    ],
)
def test_parse_clock(clock, period, played, remaining):
    ts = parse_clock(clock, period)
    assert ts.minutes_played == pytest.approx(played)
    assert ts.minutes_remaining == pytest.approx(remaining)


def test_parse_clock_non_numeric_fields_count_as_zero():
    assert parse_clock("ab:cd - 2nd Half", 2) == TimeState(40.0, 0.0)
    assert parse_clock("8:xx", 1) == TimeState(12.0, 28.0)
    assert parse_clock("8:", 1) == TimeState(12.0, 28.0)


def test_parse_clock_regulation_adds_to_forty():
    for clock in ("19:59", "10:00", "0:30"):
        for period in (1, 2):
            ts = parse_clock(clock, period)
            assert ts.minutes_played + ts.minutes_remaining == pytest.approx(40.0)


# ============================================================================
# PACE + ADJUSTMENTS
# ============================================================================

def test_compute_pace_extrapolates_to_forty_minutes():
    assert compute_pace(140, 31.25) == pytest.approx(179.2)
    assert compute_pace(35, 20.0) == pytest.approx(70.0)


def test_first_half_league_pace_is_unchanged():
    assert adjust_pace(70.0, TimeState(10.0, 30.0), 0, 1) == pytest.approx(70.0)


def test_blowout_and_fouling_tiers_both_apply():
    # 13-point game, 1 minute left: moderate blowout + foul surge
    got = adjust_pace(100.0, TimeState(39.0, 1.0), 13, 2)
    expected = 100.0 * 0.94 * 0.92 * 1.22 * 0.95 + 70.0 * 0.05
    assert got == pytest.approx(expected)


def test_severe_blowout_is_not_foulable():
    got = adjust_pace(100.0, TimeState(39.0, 1.0), 21, 2)
    expected = 100.0 * 0.94 * 0.85 * 0.95 + 70.0 * 0.05
    assert got == pytest.approx(expected)


def test_close_game_speeds_up_late():
    got = adjust_pace(100.0, TimeState(37.0, 3.0), 2, 2)
    expected = 100.0 * 0.94 * 1.15 * 0.95 + 70.0 * 0.05
    assert got == pytest.approx(expected)


def test_regression_weight_shrinks_as_game_matures():
    early = adjust_pace(100.0, TimeState(4.0, 36.0), 0, 1)
    late = adjust_pace(100.0, TimeState(16.0, 24.0), 0, 1)
    # more regression toward 70 early on
    assert early < late < 100.0
    assert early == pytest.approx(100.0 * 0.73 + 70.0 * 0.27)


def test_team_pace_factor_defaults_to_neutral():
    table = DEFAULT_TEAM_PACE_FACTORS
    assert team_pace_factor("Nowhere State", "Somewhere Tech", table) == pytest.approx(1.0)
    assert team_pace_factor(None, None, table) == pytest.approx(1.0)
    assert team_pace_factor("Duke Blue Devils", "Nowhere State", table) == pytest.approx(
        1.02 * 0.55 + 1.0 * 0.45
    )


def test_team_pace_factor_weights_home_side():
    table = {"Fast U": 1.10, "Slow U": 0.90}
    assert team_pace_factor("Fast U", "Slow U", table) > 1.0
    assert team_pace_factor("Slow U", "Fast U", table) < 1.0


# ============================================================================
# PROJECTION + CONFIDENCE
# ============================================================================

def test_finalize_projection_floor():
    assert finalize_projection(100, 0.0, 5.0) == 103
    assert finalize_projection(100, 80.0, 10.0) == 120


def test_confidence_grows_with_progress():
    early = estimate_confidence(TimeState(5.0, 35.0), 70.0)
    late = estimate_confidence(TimeState(35.0, 5.0), 70.0)
    assert early < late <= 95


def test_confidence_is_capped():
    assert estimate_confidence(TimeState(39.9, 0.1), 70.0) == 95


# ============================================================================
# SIGNALS
# ============================================================================

@pytest.mark.parametrize(
    "total,pace,confidence,edge",
    [
        (150, 70, 85, "OVER_LEAN"),
        (120, 70, 85, "UNDER_LEAN"),
        (135, 70, 85, "NEUTRAL"),
        # pace-based leans need confidence > 75
        (135, 80, 78, "OVER_LEAN"),
        (135, 60, 78, "UNDER_LEAN"),
        (135, 80, 75, "NEUTRAL"),
        # total-based leans need confidence > 80
        (150, 70, 80, "NEUTRAL"),
        # total lean checked before pace lean
        (120, 80, 85, "UNDER_LEAN"),
    ],
)
def test_over_under_edge(total, pace, confidence, edge):
    assert classify_signals(total, pace, confidence, 0)["overUnderEdge"] == edge


@pytest.mark.parametrize(
    "pace,tempo",
    [(79, "HOT"), (78, "NEUTRAL"), (70, "NEUTRAL"), (62, "NEUTRAL"), (61, "COLD")],
)
def test_game_tempo(pace, tempo):
    signals = classify_signals(135, pace, 60, 0)
    assert signals["gameTempo"] == tempo
    assert signals["paceVsAverage"] == pace - 70


def test_blowout_risk_ramp():
    assert blowout_risk(0) == 0
    assert blowout_risk(15) == 0
    assert blowout_risk(16) == 5
    assert blowout_risk(25) == 50
    assert blowout_risk(35) == 100
    assert blowout_risk(60) == 100

    risks = [blowout_risk(d) for d in range(16, 60)]
    assert risks == sorted(risks)
    assert all(0 <= r <= 100 for r in risks)


# ============================================================================
# END TO END
# ============================================================================

def test_project_live_game_reference_scenario():
    snap = GameSnapshot(72, 68, "8:45 - 2nd Half", 2)
    out = project_live_game(snap)

    assert out["pace"] == 179
    assert out["projectedTotal"] == 175
    assert out["projectedPoints"] == 35
    assert out["confidence"] == 89
    assert out["minutesRemaining"] == pytest.approx(8.75, abs=0.06)
    assert out["gameTempo"] == "HOT"
    assert out["overUnderEdge"] == "OVER_LEAN"
    assert out["paceVsAverage"] == 109
    assert out["blowoutRisk"] == 0
    assert out["algorithmLabel"] == "Adjusted Pace"


def test_known_fast_teams_project_higher():
    base = project_live_game(GameSnapshot(72, 68, "8:45 - 2nd Half", 2))
    named = project_live_game(
        GameSnapshot(72, 68, "8:45 - 2nd Half", 2, "Duke Blue Devils", "North Carolina Tar Heels")
    )
    assert named["projectedTotal"] > base["projectedTotal"]
    assert named["pace"] == base["pace"]


def test_team_table_can_be_swapped_out():
    snap = GameSnapshot(72, 68, "8:45 - 2nd Half", 2, "Duke Blue Devils", "North Carolina Tar Heels")
    assert project_live_game(snap, team_factors={}) == project_live_game(GameSnapshot(72, 68, "8:45 - 2nd Half", 2))


def test_tipoff_uses_fallback():
    out = project_live_game(GameSnapshot(0, 0, "20:00 - 1st Half", 1))
    assert out["algorithmLabel"] == "Fallback"
    assert out["projectedTotal"] == 28
    assert out["projectedPoints"] == 28
    assert out["pace"] == 70
    assert out["confidence"] == 55
    assert out["minutesRemaining"] == 40.0
    assert out["overUnderEdge"] == "NEUTRAL"


def test_end_of_regulation_uses_fallback():
    out = project_live_game(GameSnapshot(70, 64, "0:00 - 2nd Half", 2))
    assert out["algorithmLabel"] == "Fallback"
    assert out["projectedTotal"] == 162
    assert out["blowoutRisk"] == 0


def test_empty_clock_takes_coarse_estimate():
    out = project_live_game(GameSnapshot(20, 18, "", 1))
    assert out["algorithmLabel"] == "Adjusted Pace"
    assert out["minutesRemaining"] == 30.0
    assert out["pace"] == 152


def test_projection_floor_in_final_seconds():
    out = project_live_game(GameSnapshot(30, 28, "0:01 - 2nd Half", 2))
    assert out["projectedTotal"] == 61


def test_fallback_constants_are_configurable():
    constants = dataclasses.replace(DEFAULT_CONSTANTS, fallback_points=30, fallback_confidence=50)
    out = project_live_game(GameSnapshot(10, 10, "20:00", 1), constants=constants)
    assert out["projectedTotal"] == 50
    assert out["confidence"] == 50


def test_projection_is_idempotent():
    snap = GameSnapshot(61, 59, "6:15 - 2nd Half", 2, "Michigan State Spartans", "Purdue Boilermakers")
    assert project_live_game(snap) == project_live_game(snap)


def test_invariants_over_many_game_states():
    clocks = ["19:30", "15:00 - 1st Half", "0:45", "10:00 - 2nd Half", "1:30 - 2nd Half", "Halftime", ""]
    for period in (1, 2, 3):
        for clock in clocks:
            for home, away in [(0, 0), (10, 2), (45, 48), (88, 40), (70, 66), (101, 99)]:
                out = project_live_game(GameSnapshot(home, away, clock, period))
                total = home + away
                assert out["projectedTotal"] >= total + 3
                assert 0 <= out["confidence"] <= 100
                assert 0 <= out["blowoutRisk"] <= 100
                if out["algorithmLabel"] != "Fallback":
                    assert 50 <= out["confidence"] <= 96


# ============================================================================
# THRESHOLD EDGES
# ============================================================================

@pytest.mark.parametrize(
    "score_diff,remaining,factor",
    [
        # blowout tiers: > 12 moderate, > 20 severe
        (12, 6.0, 1.0),
        (13, 6.0, 0.92),
        (20, 6.0, 0.92),
        (21, 6.0, 0.85),
        # close game: diff <= 3 and strictly under 5 minutes
        (3, 4.9, 1.15),
        (4, 4.9, 1.0),
        (3, 5.0, 1.0),
        # foul band: 4 < diff < 15 and strictly under 2 minutes
        (4, 1.9, 1.0),
        (5, 1.9, 1.22),
        (14, 1.9, 0.92 * 1.22),
        (15, 1.9, 0.92),
        (5, 2.0, 1.0),
    ],
)
def test_adjustment_threshold_edges(score_diff, remaining, factor):
    ts = TimeState(40.0 - remaining, remaining)
    got = adjust_pace(100.0, ts, score_diff, 2)
    # late enough that regression sits at its 5% floor
    expected = 100.0 * 0.94 * factor * 0.95 + 70.0 * 0.05
    assert got == pytest.approx(expected)

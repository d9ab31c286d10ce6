"""
Shared fixtures: ESPN scoreboard event builders and a clean live-board cache.
"""

import pytest

from app.core.cache import clear_cache


@pytest.fixture(autouse=True)
def _clean_cache():
    clear_cache()
    yield
    clear_cache()


def make_event(
    event_id="401",
    home="Duke Blue Devils",
    away="North Carolina Tar Heels",
    home_score="72",
    away_score="68",
    detail="8:45 - 2nd Half",
    period=2,
    status_name="STATUS_IN_PROGRESS",
    display_clock="8:45",
):
    """Minimal ESPN site-scoreboard event."""
    return {
        "id": event_id,
        "competitions": [
            {
                "competitors": [
                    {"homeAway": "home", "score": home_score, "team": {"displayName": home}},
                    {"homeAway": "away", "score": away_score, "team": {"displayName": away}},
                ],
                "status": {
                    "period": period,
                    "displayClock": display_clock,
                    "type": {"name": status_name, "detail": detail},
                },
            }
        ],
    }


@pytest.fixture
def live_event():
    return make_event()


@pytest.fixture
def event_factory():
    return make_event

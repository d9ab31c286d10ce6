# app/core/config.py
from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ESPN "site" scoreboard for Men's college basketball
CBB_SCOREBOARD_URL = os.getenv(
    "CBB_SCOREBOARD_URL",
    "https://site.api.espn.com/apis/site/v2/sports/basketball/mens-college-basketball/scoreboard",
)
ESPN_TIMEOUT_SECONDS = _env_int("ESPN_TIMEOUT_SECONDS", 10)

# How often the dashboard is expected to re-poll /api/cbb/live
LIVE_REFRESH_SECONDS = _env_int("LIVE_REFRESH_SECONDS", 8)
LIVE_CACHE_TTL_SECONDS = _env_int("LIVE_CACHE_TTL_SECONDS", 8)
LIVE_DEMO_FALLBACK = _env_bool("LIVE_DEMO_FALLBACK", True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

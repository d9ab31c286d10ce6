# app/services/espn_common.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import ESPN_TIMEOUT_SECONDS

logger = logging.getLogger("app.espn_common")

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}


# -----------------------------------------------------------
# Shared HTTP helper with retries
# -----------------------------------------------------------
async def _get_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_tries: int = 2,
) -> Dict[str, Any]:
    """
    Small shared helper for ESPN JSON fetch with basic retry + logging.

    Raises the last error once every attempt has failed.
    """
    last: Optional[Exception] = None

    async with httpx.AsyncClient(timeout=float(ESPN_TIMEOUT_SECONDS), headers=HEADERS) as client:
        for attempt in range(1, max_tries + 1):
            try:
                r = await client.get(url, params=params)
                r.raise_for_status()
                return r.json()
            except (httpx.HTTPError, ValueError) as e:
                last = e
                logger.warning(
                    "espn_common _get_json attempt %s failed: %s",
                    attempt,
                    repr(e),
                )

    # If we get here, all retries failed
    logger.error(
        "espn_common _get_json giving up after %s attempts: %s",
        max_tries,
        repr(last),
    )
    raise last or RuntimeError("unknown http error")


# -----------------------------------------------------------
# Date normalization helper (NY-local "today" by default)
# -----------------------------------------------------------
def normalize_date_param(date: Optional[str]) -> str:
    """
    Normalize a date for ESPN's `dates` param.

    Accepts:
      - None            -> today's date in America/New_York, YYYYMMDD
      - 'YYYYMMDD'      -> returned unchanged
      - 'YYYY-MM-DD'    -> dashes removed
      - ISO datetime    -> first 10 chars parsed
      - anything else   -> NY today (logged)
    """
    if date:
        s = date.strip()
        if len(s) == 8 and s.isdigit():
            return s
        try:
            return datetime.fromisoformat(s[:10]).strftime("%Y%m%d")
        except ValueError:
            logger.warning("espn_common: could not parse date '%s', falling back to NY today", date)

    try:
        now = datetime.now(ZoneInfo("America/New_York"))
    except ZoneInfoNotFoundError:
        # no tz database on this host; naive local time is close enough
        now = datetime.now()

    return now.strftime("%Y%m%d")

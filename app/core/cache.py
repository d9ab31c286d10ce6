# app/core/cache.py
import time
from typing import Any, Dict, Tuple

# Tiny in-memory cache (key -> (timestamp, value))
_cache: Dict[str, Tuple[float, Any]] = {}

MAX_ENTRIES = 256


def get_from_cache(key: str, ttl_seconds: int = 60):
    now = time.time()
    if key in _cache:
        ts, value = _cache[key]
        if now - ts <= ttl_seconds:
            return value
        # expired
        del _cache[key]
    return None


def set_in_cache(key: str, value: Any, max_entries: int = MAX_ENTRIES):
    _cache[key] = (time.time(), value)
    # drop the oldest entries once the map outgrows its cap
    if len(_cache) > max_entries:
        oldest = sorted(_cache, key=lambda k: _cache[k][0])
        for k in oldest[: len(_cache) - max_entries]:
            del _cache[k]


def clear_cache():
    _cache.clear()

"""
ayo.co.id integration configuration.

Endpoint, request headers and the key names the upstream has been seen
to use for each piece of slot data.
"""

from __future__ import annotations

from padel_finder.config import UPSTREAM_URL

# ── API endpoint ──────────────────────────────────────────────────────────

OP_TIMES_AND_FIELDS_URL = UPSTREAM_URL

# Every call is a live one; no intermediary may answer from its cache.
DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; PadelFinder/0.1)",
    "Accept": "application/json, */*",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

# ── Response shape ────────────────────────────────────────────────────────
# Keys are tried in order; the first one present wins.

COURT_NAME_KEYS: tuple[str, ...] = ("field_name", "name")
SLOTS_KEYS: tuple[str, ...] = ("slots",)
AVAILABLE_KEYS: tuple[str, ...] = ("is_available", "available")
START_TIME_KEYS: tuple[str, ...] = ("start_time", "time")

DEFAULT_COURT_NAME = "Court"

# "HH:MM" out of "HH:MM:SS"
TIME_LENGTH = 5

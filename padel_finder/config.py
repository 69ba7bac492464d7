"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Environment ───────────────────────────────────────────────────────────

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

VERSION = "0.1.0"

# ── Upstream gateway ──────────────────────────────────────────────────────

UPSTREAM_URL: str = os.getenv(
    "UPSTREAM_URL", "https://ayo.co.id/venues-ajax/op-times-and-fields"
)
UPSTREAM_TIMEOUT: float = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

# ── Proxy cache ───────────────────────────────────────────────────────────

# How long a normalized day payload is served from memory (seconds).
CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", "60"))

# slowapi limit string applied to POST /api/day, keyed on client IP.
DAY_RATE_LIMIT: str = os.getenv("DAY_RATE_LIMIT", "120/minute")

# ── Orchestrator ──────────────────────────────────────────────────────────

# Base URL of the proxy the orchestrator fetches days from.
PROXY_URL: str = os.getenv("PROXY_URL", "http://127.0.0.1:8000")
FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "30"))

# Pause between two consecutive days of a run (seconds).
INTER_DAY_DELAY_SECONDS: float = float(os.getenv("INTER_DAY_DELAY_SECONDS", "0.25"))

# Pause before the single retry on 429 / 5xx (seconds).
RETRY_DELAY_SECONDS: float = float(os.getenv("RETRY_DELAY_SECONDS", "1.0"))

# ── Venues ────────────────────────────────────────────────────────────────

# Look-ahead used when a venue id is not in the static list.
DEFAULT_LIMIT_DAYS: int = int(os.getenv("DEFAULT_LIMIT_DAYS", "30"))

"""
Rate limiting configuration using slowapi.

Two tiers:
  • day     – DAY_RATE_LIMIT (POST /api/day, shields the upstream)
  • default – 60/min (everything else)

The limiter keys on client IP by default.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from padel_finder.config import DAY_RATE_LIMIT

limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])

# Named rate strings for use in @limiter.limit() decorators
DAY = DAY_RATE_LIMIT
DEFAULT = "60/minute"

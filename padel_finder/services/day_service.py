"""
Day service – validated, cache-through lookups of one venue/day.

The only layer that knows about both the upstream client and the
normalized DayPayload shape.  Results are kept in a TTLCache so retried
or repeated requests for the same day do not reach the upstream again
within the TTL window.
"""

from __future__ import annotations

import logging
import re

from padel_finder.config import CACHE_TTL_SECONDS
from padel_finder.errors import InvalidRequest
from padel_finder.models import DayPayload
from padel_finder.services.ayo.client import AyoClient
from padel_finder.services.ayo.parser import parse_courts
from padel_finder.services.cache import TTLCache

logger = logging.getLogger(__name__)

# Shape check only; "2024-02-31" passes.
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def cache_key(venue_id: str, date_str: str) -> str:
    return f"{venue_id}:{date_str}"


def validate(venue_id: str, date_str: str) -> tuple[str, str]:
    """Trim and check a lookup request; raises InvalidRequest."""
    venue_id = venue_id.strip()
    date_str = date_str.strip()
    if not venue_id or not _DATE_RE.fullmatch(date_str):
        raise InvalidRequest(
            "Invalid body. Expect { venueId: string, date: 'YYYY-MM-DD' }",
            details={"venueId": venue_id, "date": date_str},
        )
    return venue_id, date_str


class DayService:
    """
    Serves normalized day availability.

    Usage::

        client = AyoClient()
        service = DayService(client)
        payload = await service.lookup("1476", "2025-01-31")
    """

    def __init__(
        self,
        client: AyoClient,
        cache: TTLCache[DayPayload] | None = None,
    ) -> None:
        self._client = client
        if cache is None:
            cache = TTLCache(CACHE_TTL_SECONDS)
        self._cache: TTLCache[DayPayload] = cache

    async def lookup(self, venue_id: str, date_str: str) -> DayPayload:
        venue_id, date_str = validate(venue_id, date_str)
        key = cache_key(venue_id, date_str)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        logger.debug("Cache miss for %s, asking upstream", key)
        # UpstreamError propagates; nothing is cached for a failed call.
        body = await self._client.fetch_day(venue_id, date_str)

        payload = DayPayload(venue_id=venue_id, date=date_str, courts=parse_courts(body))
        self._cache.set(key, payload)
        logger.info(
            "Fetched venue %s on %s: %d courts with availability",
            venue_id, date_str, len(payload.courts),
        )
        return payload

    async def close(self) -> None:
        await self._client.close()

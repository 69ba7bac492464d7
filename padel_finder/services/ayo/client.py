"""
Low-level HTTP client for the ayo.co.id op-times-and-fields endpoint.

Returns the decoded JSON body untouched; normalization lives in
padel_finder.services.ayo.parser.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from padel_finder.config import UPSTREAM_TIMEOUT
from padel_finder.errors import UpstreamError
from padel_finder.services.ayo.config import DEFAULT_HEADERS, OP_TIMES_AND_FIELDS_URL

logger = logging.getLogger(__name__)


class AyoClient:
    """Async HTTP client for the ayo.co.id venue gateway."""

    def __init__(
        self,
        timeout: float = UPSTREAM_TIMEOUT,
        *,
        url: str = OP_TIMES_AND_FIELDS_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._client = httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_day(self, venue_id: str, date_str: str) -> Any:
        """
        Fetch raw slot data for one venue and day.

        A body that is not valid JSON decodes as an empty object.
        Raises UpstreamError on transport failure or non-2xx status.
        """
        params = {"venue_id": venue_id, "date": date_str}
        logger.debug("Fetching ayo schedule: %s %s", self._url, params)
        try:
            resp = await self._client.get(self._url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Upstream request failed for %s %s: %s", venue_id, date_str, exc)
            raise UpstreamError(f"Upstream request failed: {exc}") from exc

        if not resp.is_success:
            logger.warning(
                "Upstream returned %d for venue %s on %s",
                resp.status_code, venue_id, date_str,
            )
            raise UpstreamError(
                f"Upstream error: {resp.status_code}",
                status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError:
            logger.warning("Upstream body for %s %s is not JSON", venue_id, date_str)
            return {}

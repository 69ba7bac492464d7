"""
HTTP client the orchestrator uses to fetch one day from the proxy.

Retries exactly once, after a fixed delay, when the proxy answers 429 or
5xx.  Every other failure is final for that day.
"""

from __future__ import annotations

import logging

import httpx

from padel_finder.config import FETCH_TIMEOUT, PROXY_URL, RETRY_DELAY_SECONDS
from padel_finder.errors import FetchFailed, RetryableStatus
from padel_finder.models import CourtTimes
from padel_finder.orchestrator.cancellation import CancelToken

logger = logging.getLogger(__name__)

DAY_PATH = "/api/day"


def is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class DayFetcher:
    """Async client for POST /api/day."""

    def __init__(
        self,
        base_url: str = PROXY_URL,
        *,
        timeout: float = FETCH_TIMEOUT,
        retry_delay: float = RETRY_DELAY_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._retry_delay = retry_delay
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self, venue_id: str, date_str: str, token: CancelToken) -> list[CourtTimes]:
        """
        Courts with availability for *venue_id* on *date_str*.

        Raises FetchFailed when the day cannot be fetched and Cancelled
        when *token* fires at any wait point.
        """
        try:
            return await self._fetch_once(venue_id, date_str, token)
        except RetryableStatus as exc:
            logger.info(
                "Proxy answered %s for %s, retrying in %.1fs",
                exc.status, date_str, self._retry_delay,
            )

        await token.sleep(self._retry_delay)
        try:
            return await self._fetch_once(venue_id, date_str, token)
        except RetryableStatus as exc:
            raise FetchFailed(str(exc), status=exc.status) from exc

    async def _fetch_once(
        self, venue_id: str, date_str: str, token: CancelToken
    ) -> list[CourtTimes]:
        try:
            resp = await token.run(
                self._client.post(DAY_PATH, json={"venueId": venue_id, "date": date_str})
            )
        except httpx.HTTPError as exc:
            raise FetchFailed(f"Request for {date_str} failed: {exc}") from exc

        if not resp.is_success:
            if is_retryable(resp.status_code):
                raise RetryableStatus(f"HTTP {resp.status_code}", status=resp.status_code)
            raise FetchFailed(f"HTTP {resp.status_code}", status=resp.status_code)

        return self._parse(resp, date_str)

    @staticmethod
    def _parse(resp: httpx.Response, date_str: str) -> list[CourtTimes]:
        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchFailed(f"Body for {date_str} is not JSON") from exc

        courts = data.get("courts") if isinstance(data, dict) else None
        if not isinstance(courts, list):
            return []
        try:
            return [CourtTimes.model_validate(c) for c in courts]
        except ValueError as exc:
            raise FetchFailed(f"Malformed courts for {date_str}: {exc}") from exc

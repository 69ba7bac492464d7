"""
Service registry – holds the day service and the clients it owns.

Initialized once at application startup and looked up by the routers.
"""

from __future__ import annotations

import logging

from padel_finder.services.ayo.client import AyoClient
from padel_finder.services.day_service import DayService

logger = logging.getLogger(__name__)


class ServiceRegistry:
    def __init__(self) -> None:
        self._day_service: DayService | None = None

    def register_ayo(self) -> None:
        """Create the upstream client and the cache-through day service."""
        self._day_service = DayService(AyoClient())
        logger.info("Registered ayo.co.id day service")

    @property
    def day_service(self) -> DayService:
        if self._day_service is None:
            raise RuntimeError("Day service is not registered")
        return self._day_service

    async def stop(self) -> None:
        """Close the upstream HTTP client."""
        if self._day_service is not None:
            await self._day_service.close()
            self._day_service = None


# ── Singleton instance ────────────────────────────────────────────────────
registry = ServiceRegistry()

"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • a DayService backed by a fake upstream (no external HTTP)
  • rate limiting switched off

The `client` fixture runs the full lifespan so startup/shutdown of the
service registry is exercised as well.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from padel_finder.main import app
from padel_finder.services.ayo.client import AyoClient
from padel_finder.services.day_service import DayService
from padel_finder.services.registry import ServiceRegistry
from tests.mocks.upstream import FakeUpstream


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def _test_env(monkeypatch, upstream: FakeUpstream) -> ServiceRegistry:
    """
    Internal fixture that patches the registry so that the app lifespan
    runs cleanly against the fake upstream.
    """
    # ── Registry backed by the fake upstream ─────────────────────────
    test_registry = ServiceRegistry()
    test_registry._day_service = DayService(AyoClient(transport=upstream.transport()))

    # Prevent the lifespan from registering the real upstream client
    test_registry.register_ayo = lambda: None  # type: ignore[assignment]

    # Patch everywhere `registry` was imported
    for mod_path in (
        "padel_finder.services.registry",
        "padel_finder.main",
        "padel_finder.routers.day",
    ):
        monkeypatch.setattr(f"{mod_path}.registry", test_registry)

    # ── Disable rate limiting in tests ────────────────────────────────
    from padel_finder.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return test_registry


@pytest.fixture()
def client(_test_env: ServiceRegistry) -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

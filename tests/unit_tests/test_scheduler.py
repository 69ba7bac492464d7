"""Tests for the day-availability orchestrator."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from padel_finder.orchestrator.fetcher import DayFetcher
from padel_finder.orchestrator.records import DayState, RunSnapshot
from padel_finder.orchestrator.scheduler import DayOrchestrator
from tests.mocks.proxy import ONE_COURT, Block, ScriptedProxy

TODAY = date(2025, 1, 30)
DAYS = ["2025-01-30", "2025-01-31", "2025-02-01"]


def _orchestrator(
    proxy: ScriptedProxy,
    *,
    days: int = 3,
    inter_day_delay: float = 0.0,
) -> DayOrchestrator:
    fetcher = DayFetcher("http://proxy.test", retry_delay=0.0, transport=proxy.transport())
    return DayOrchestrator(
        fetcher,
        inter_day_delay=inter_day_delay,
        limit_days_for=lambda _venue_id: days,
        today=lambda: TODAY,
    )


async def _until(predicate, timeout: float = 1.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached")
        await asyncio.sleep(0.001)


def _states(orchestrator: DayOrchestrator) -> list[DayState]:
    return [r.state for r in orchestrator.get_records()]


class TestRunLifecycle:
    async def test_materializes_idle_records_in_order(self):
        orchestrator = _orchestrator(ScriptedProxy())
        orchestrator.start("1476")

        records = orchestrator.get_records()
        assert [r.date for r in records] == DAYS
        assert all(r.state is DayState.IDLE for r in records)
        assert orchestrator.is_running is True

        await orchestrator.wait()
        assert orchestrator.is_running is False

    async def test_uses_venue_limit(self):
        fetcher = DayFetcher("http://proxy.test", transport=ScriptedProxy().transport())
        orchestrator = DayOrchestrator(fetcher, inter_day_delay=0.0, today=lambda: TODAY)

        orchestrator.start("981")
        records = orchestrator.get_records()
        orchestrator.cancel()
        await orchestrator.wait()

        assert len(records) == 8
        assert records[0].date == "2025-01-30"
        assert records[-1].date == "2025-02-06"

    async def test_unknown_venue_uses_default_limit(self):
        fetcher = DayFetcher("http://proxy.test", transport=ScriptedProxy().transport())
        orchestrator = DayOrchestrator(fetcher, inter_day_delay=0.0, today=lambda: TODAY)

        orchestrator.start("unknown")
        assert len(orchestrator.get_records()) == 30
        orchestrator.cancel()
        await orchestrator.wait()

    async def test_resolves_success_empty_and_error(self):
        proxy = ScriptedProxy(
            {
                DAYS[0]: [(200, ONE_COURT)],
                DAYS[1]: [(200, {"courts": []})],
                DAYS[2]: [(404, {})],
            }
        )
        orchestrator = _orchestrator(proxy)
        orchestrator.start("1476")
        await orchestrator.wait()

        records = orchestrator.get_records()
        assert _states(orchestrator) == [DayState.SUCCESS, DayState.EMPTY, DayState.ERROR]
        assert records[0].courts[0].court == "Court A"
        assert records[1].courts == ()
        assert records[2].courts is None

    async def test_visits_dates_strictly_in_order(self):
        proxy = ScriptedProxy({DAYS[0]: [(503, {}), (200, ONE_COURT)]})
        orchestrator = _orchestrator(proxy)
        orchestrator.start("1476")
        await orchestrator.wait()

        assert proxy.calls == [DAYS[0], DAYS[0], DAYS[1], DAYS[2]]

    async def test_429_then_success_is_not_an_error(self):
        proxy = ScriptedProxy({DAYS[0]: [(429, {}), (200, ONE_COURT)]})
        orchestrator = _orchestrator(proxy, days=1)
        orchestrator.start("1476")
        await orchestrator.wait()

        assert _states(orchestrator) == [DayState.SUCCESS]
        assert proxy.calls_for(DAYS[0]) == 2

    async def test_failure_does_not_stop_the_run(self):
        proxy = ScriptedProxy(
            {
                DAYS[0]: [(500, {}), (500, {})],
                DAYS[1]: [(200, ONE_COURT)],
            }
        )
        orchestrator = _orchestrator(proxy)
        orchestrator.start("1476")
        await orchestrator.wait()

        assert _states(orchestrator) == [DayState.ERROR, DayState.SUCCESS, DayState.EMPTY]
        assert proxy.calls_for(DAYS[0]) == 2

    @pytest.mark.parametrize("venue_id", ["", "   ", None])
    async def test_empty_venue_is_a_noop(self, venue_id):
        proxy = ScriptedProxy()
        orchestrator = _orchestrator(proxy)

        orchestrator.start(venue_id)

        assert orchestrator.get_records() == []
        assert orchestrator.is_running is False
        await orchestrator.wait()
        assert proxy.calls == []


class TestCancellation:
    async def test_cancel_without_run_is_safe(self):
        orchestrator = _orchestrator(ScriptedProxy())
        orchestrator.cancel()
        orchestrator.cancel()
        assert orchestrator.is_running is False

    async def test_cancel_mid_fetch(self):
        block = Block()
        proxy = ScriptedProxy({DAYS[0]: [(200, ONE_COURT)], DAYS[1]: [block]})
        orchestrator = _orchestrator(proxy)

        orchestrator.start("1476")
        await _until(lambda: orchestrator.get_records()[1].state is DayState.LOADING)

        orchestrator.cancel()
        assert orchestrator.is_running is False

        await asyncio.wait_for(orchestrator.wait(), timeout=1)
        assert _states(orchestrator) == [DayState.SUCCESS, DayState.LOADING, DayState.IDLE]
        assert proxy.calls_for(DAYS[2]) == 0

    async def test_cancel_during_inter_day_delay_is_prompt(self):
        proxy = ScriptedProxy({DAYS[0]: [(200, ONE_COURT)]})
        orchestrator = _orchestrator(proxy, inter_day_delay=60)

        orchestrator.start("1476")
        await _until(lambda: orchestrator.get_records()[0].state is DayState.SUCCESS)
        orchestrator.cancel()

        await asyncio.wait_for(orchestrator.wait(), timeout=1)
        assert _states(orchestrator) == [DayState.SUCCESS, DayState.IDLE, DayState.IDLE]
        assert proxy.calls == [DAYS[0]]

    async def test_cancel_during_retry_delay(self):
        proxy = ScriptedProxy({DAYS[0]: [(429, {}), (200, ONE_COURT)]})
        fetcher = DayFetcher("http://proxy.test", retry_delay=60, transport=proxy.transport())
        orchestrator = DayOrchestrator(
            fetcher, inter_day_delay=0.0, limit_days_for=lambda _: 3, today=lambda: TODAY
        )

        orchestrator.start("1476")
        await _until(lambda: proxy.calls_for(DAYS[0]) == 1)
        orchestrator.cancel()

        await asyncio.wait_for(orchestrator.wait(), timeout=1)
        assert proxy.calls_for(DAYS[0]) == 1
        assert _states(orchestrator)[1:] == [DayState.IDLE, DayState.IDLE]

    async def test_new_run_supersedes_previous(self):
        block = Block()
        proxy = ScriptedProxy({DAYS[0]: [block, (200, ONE_COURT)]})
        orchestrator = _orchestrator(proxy)

        orchestrator.start("1476")
        await _until(lambda: proxy.calls_for(DAYS[0]) == 1)
        first_snapshot = orchestrator.snapshot()

        orchestrator.start("903")
        assert orchestrator.snapshot().venue_id == "903"
        assert _states(orchestrator) == [DayState.IDLE] * 3

        await orchestrator.wait()
        assert first_snapshot.venue_id == "1476"
        assert _states(orchestrator) == [DayState.SUCCESS, DayState.EMPTY, DayState.EMPTY]
        assert orchestrator.is_running is False


class TestObservation:
    async def test_listener_sees_every_change_in_order(self):
        proxy = ScriptedProxy({DAYS[0]: [(200, ONE_COURT)]})
        orchestrator = _orchestrator(proxy)
        seen: list[RunSnapshot] = []
        orchestrator.add_listener(seen.append)

        orchestrator.start("1476")
        await orchestrator.wait()

        versions = [s.version for s in seen]
        assert versions == sorted(versions)
        assert len(set(versions)) == len(versions)
        assert seen[0].running is True
        assert all(r.state is DayState.IDLE for r in seen[0].records)
        assert seen[-1].running is False
        assert seen[-1].progressed_count == 3
        assert seen[-1].available_count == 1
        # start, then loading + resolved per day, then finished
        assert len(seen) == 1 + 2 * 3 + 1
        assert orchestrator.version == seen[-1].version

    async def test_failing_listener_does_not_break_the_run(self):
        orchestrator = _orchestrator(ScriptedProxy())

        def broken(_snapshot):
            raise RuntimeError("listener bug")

        orchestrator.add_listener(broken)
        orchestrator.start("1476")
        await orchestrator.wait()
        assert _states(orchestrator) == [DayState.EMPTY] * 3

    async def test_records_are_snapshots(self):
        orchestrator = _orchestrator(ScriptedProxy())
        orchestrator.start("1476")
        before = orchestrator.get_records()
        await orchestrator.wait()

        assert all(r.state is DayState.IDLE for r in before)
        assert all(r.state is DayState.EMPTY for r in orchestrator.get_records())

"""
Day-availability orchestrator.

Walks the next ``limit_days`` dates of a venue one at a time:

1.  Materializes one ``idle`` DayRecord per date up front.
2.  For each date in order: ``loading``, one fetch (plus at most one
    retry on 429 / 5xx), then ``success``, ``empty`` or ``error``.
3.  Waits a fixed inter-day delay before the next date.

Only one fetch is ever in flight; the spacing keeps the rate-sensitive
upstream from answering 429.  Every wait point is cancellable, and
starting a new run cancels the previous one.  Observers read a versioned
RunSnapshot at any time or subscribe with ``add_listener``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from padel_finder import venues
from padel_finder.config import INTER_DAY_DELAY_SECONDS
from padel_finder.errors import Cancelled, FetchFailed
from padel_finder.models import CourtTimes
from padel_finder.orchestrator.cancellation import CancelToken
from padel_finder.orchestrator.dates import next_n_days
from padel_finder.orchestrator.fetcher import DayFetcher
from padel_finder.orchestrator.records import DayRecord, DayState, RunSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[RunSnapshot], None]


@dataclass
class _Run:
    venue_id: str
    records: list[DayRecord]
    token: CancelToken = field(default_factory=CancelToken)
    running: bool = True
    task: asyncio.Task[None] | None = None


class DayOrchestrator:
    """
    Sequential, cancellable day-by-day availability scanner.

    Usage::

        fetcher = DayFetcher("http://127.0.0.1:8000")
        orchestrator = DayOrchestrator(fetcher)
        orchestrator.start("1476")
        await orchestrator.wait()
        records = orchestrator.get_records()
    """

    def __init__(
        self,
        fetcher: DayFetcher,
        *,
        inter_day_delay: float = INTER_DAY_DELAY_SECONDS,
        limit_days_for: Callable[[str], int] = venues.limit_days_for,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._fetcher = fetcher
        self._inter_day_delay = inter_day_delay
        self._limit_days_for = limit_days_for
        self._today = today
        self._run: _Run | None = None
        self._version = 0
        self._listeners: list[Listener] = []

    # ── Public contract ────────────────────────────────────────────────

    def start(self, venue_id: str) -> None:
        """Begin a run for *venue_id*, superseding any active run."""
        venue_id = (venue_id or "").strip()
        if not venue_id:
            logger.warning("Ignoring start request without a venue id")
            return

        self.cancel()

        limit = self._limit_days_for(venue_id)
        dates = next_n_days(limit, self._today())
        run = _Run(venue_id=venue_id, records=[DayRecord(date=d) for d in dates])
        self._run = run
        self._changed(run)

        logger.info("Run started for venue %s: %d days", venue_id, len(dates))
        run.task = asyncio.get_running_loop().create_task(
            self._drive(run), name=f"day-run-{venue_id}"
        )

    def cancel(self) -> None:
        """Request cancellation of the active run; no-op without one."""
        run = self._run
        if run is None or not run.running:
            return
        run.token.cancel()
        run.running = False
        logger.info("Run for venue %s cancelled", run.venue_id)
        self._changed(run)

    def get_records(self) -> list[DayRecord]:
        if self._run is None:
            return []
        return list(self._run.records)

    # ── Observation ────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._run is not None and self._run.running

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> RunSnapshot:
        run = self._run
        return RunSnapshot(
            version=self._version,
            venue_id=run.venue_id if run else None,
            running=self.is_running,
            records=tuple(run.records) if run else (),
        )

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    async def wait(self) -> None:
        """Wait until the current run has unwound."""
        run = self._run
        if run is not None and run.task is not None:
            await asyncio.shield(run.task)

    # ── Run loop ───────────────────────────────────────────────────────

    async def _drive(self, run: _Run) -> None:
        try:
            for index, record in enumerate(run.records):
                run.token.raise_if_cancelled()
                self._advance(run, index, DayState.LOADING)
                self._resolve(run, index, await self._fetch(run, record.date))
                await run.token.sleep(self._inter_day_delay)
        except Cancelled:
            logger.info("Run for venue %s abandoned", run.venue_id)
        else:
            available = sum(1 for r in run.records if r.state is DayState.SUCCESS)
            logger.info(
                "Run for venue %s finished: %d of %d days with availability",
                run.venue_id, available, len(run.records),
            )
        finally:
            if run.running:
                run.running = False
                self._changed(run)

    async def _fetch(self, run: _Run, date_str: str) -> list[CourtTimes] | None:
        """Courts for one day, or None when the day failed."""
        try:
            courts = await self._fetcher.fetch(run.venue_id, date_str, run.token)
        except Cancelled:
            raise
        except FetchFailed as exc:
            logger.warning("Day %s for venue %s failed: %s", date_str, run.venue_id, exc)
            courts = None
        except Exception:
            logger.exception("Unexpected error fetching %s for venue %s", date_str, run.venue_id)
            courts = None
        # A fetch that completes after cancel() must not resolve the day.
        run.token.raise_if_cancelled()
        return courts

    def _resolve(self, run: _Run, index: int, courts: list[CourtTimes] | None) -> None:
        if courts is None:
            self._advance(run, index, DayState.ERROR)
        elif courts:
            self._advance(run, index, DayState.SUCCESS, courts)
        else:
            self._advance(run, index, DayState.EMPTY, [])

    def _advance(
        self,
        run: _Run,
        index: int,
        state: DayState,
        courts: list[CourtTimes] | None = None,
    ) -> None:
        run.records[index] = run.records[index].advance(state, courts)
        self._changed(run)

    def _changed(self, run: _Run) -> None:
        # Superseded runs keep mutating their own records but stay silent.
        if run is not self._run:
            return
        self._version += 1
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Run listener failed")

"""
Cooperative cancellation for orchestration runs.

A CancelToken is shared by every suspension point of one run.  Once
cancelled, pending sleeps wake up immediately and pending fetches are
cancelled; both surface as ``Cancelled``.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from padel_finder.errors import Cancelled

T = TypeVar("T")


class CancelToken:
    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise Cancelled()

    async def sleep(self, seconds: float) -> None:
        """Sleep for *seconds* unless cancelled first."""
        self.raise_if_cancelled()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise Cancelled()

    async def run(self, aw: Awaitable[T]) -> T:
        """
        Await *aw*, racing it against cancellation.

        On cancellation the underlying task is cancelled and awaited
        before ``Cancelled`` is raised.
        """
        if self._event.is_set():
            if asyncio.iscoroutine(aw):
                aw.close()
            raise Cancelled()
        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task.done() and not task.cancelled():
            return task.result()

        await asyncio.gather(task, return_exceptions=True)
        raise Cancelled()

"""
Per-day records of an orchestration run and their state machine.

    idle -> loading -> success | empty | error

Terminal states are never left; a new run starts from fresh records.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from padel_finder.models import CourtTimes


class DayState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({DayState.SUCCESS, DayState.EMPTY, DayState.ERROR})

_ALLOWED: dict[DayState, frozenset[DayState]] = {
    DayState.IDLE: frozenset({DayState.LOADING}),
    DayState.LOADING: _TERMINAL,
    DayState.SUCCESS: frozenset(),
    DayState.EMPTY: frozenset(),
    DayState.ERROR: frozenset(),
}


class IllegalTransition(RuntimeError):
    pass


@dataclass(frozen=True)
class DayRecord:
    date: str  # "YYYY-MM-DD"
    state: DayState = DayState.IDLE
    courts: tuple[CourtTimes, ...] | None = None

    def advance(
        self,
        state: DayState,
        courts: list[CourtTimes] | None = None,
    ) -> DayRecord:
        """Return a copy in *state*; raises IllegalTransition."""
        if state not in _ALLOWED[self.state]:
            raise IllegalTransition(f"{self.date}: {self.state.value} -> {state.value}")
        return replace(
            self,
            state=state,
            courts=tuple(courts) if courts is not None else self.courts,
        )


@dataclass(frozen=True)
class RunSnapshot:
    """Immutable view of a run handed to observers."""

    version: int
    venue_id: str | None
    running: bool
    records: tuple[DayRecord, ...]

    @property
    def available_count(self) -> int:
        return sum(1 for r in self.records if r.state is DayState.SUCCESS)

    @property
    def progressed_count(self) -> int:
        return sum(1 for r in self.records if r.state.is_terminal)

    @property
    def loading(self) -> DayRecord | None:
        return next((r for r in self.records if r.state is DayState.LOADING), None)

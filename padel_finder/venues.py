"""
Static venue list.

Each venue maps an ayo.co.id venue id to a display name and to the number
of days ahead the upstream is willing to serve for it.
"""

from __future__ import annotations

from dataclasses import dataclass

from padel_finder.config import DEFAULT_LIMIT_DAYS


@dataclass(frozen=True)
class Venue:
    id: str
    name: str
    limit_days: int


VENUES: list[Venue] = [
    Venue(id="1476", name="Air Padel", limit_days=30),
    Venue(id="1167", name="Republic Padel TB Simatupang", limit_days=15),
    Venue(id="1649", name="Naya Padel", limit_days=30),
    Venue(id="1710", name="Bumi Padel Kemang", limit_days=15),
    Venue(id="981", name="Basic Padel Resereve", limit_days=8),
    Venue(id="903", name="Futton Padel Club", limit_days=59),
]

_BY_ID: dict[str, Venue] = {v.id: v for v in VENUES}


def get_venue(venue_id: str) -> Venue | None:
    return _BY_ID.get(venue_id)


def limit_days_for(venue_id: str) -> int:
    """Look-ahead for *venue_id*; unknown venues get the default."""
    venue = _BY_ID.get(venue_id)
    if venue is None:
        return DEFAULT_LIMIT_DAYS
    return venue.limit_days

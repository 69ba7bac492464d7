"""
Tolerant decoder for the ayo.co.id op-times-and-fields response.

The upstream is loosely typed: the field list sits either at the top
level or under ``data``, key names vary between venues and the
availability flag shows up as ``1``, ``"1"`` or ``true``.  Every value is
matched against an explicit set of accepted shapes; anything else is
treated as absent rather than coerced.
"""

from __future__ import annotations

import logging
from typing import Any

from padel_finder.models import CourtTimes
from padel_finder.services.ayo.config import (
    AVAILABLE_KEYS,
    COURT_NAME_KEYS,
    DEFAULT_COURT_NAME,
    SLOTS_KEYS,
    START_TIME_KEYS,
    TIME_LENGTH,
)

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _first(entry: dict, keys: tuple[str, ...], kind: type | tuple[type, ...]) -> Any:
    """First value under *keys* that is an instance of *kind*, else None."""
    for key in keys:
        value = entry.get(key)
        if isinstance(value, kind):
            return value
    return None


def _first_present(entry: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def extract_fields(body: Any) -> list:
    """Return the raw field list from ``fields`` or ``data.fields``."""
    body = _as_dict(body)
    fields = body.get("fields")
    if isinstance(fields, list):
        return fields
    nested = _as_dict(body.get("data")).get("fields")
    if isinstance(nested, list):
        return nested
    return []


def is_available(flag: Any) -> bool:
    """True for ``true``, ``"1"`` and the number 1."""
    if isinstance(flag, bool):
        return flag
    if isinstance(flag, str):
        return flag == "1"
    if isinstance(flag, (int, float)):
        return flag == 1
    return False


def parse_slot_time(slot: Any) -> str:
    """``"HH:MM"`` from the slot's start time, or ``""`` if there is none."""
    start = _first(_as_dict(slot), START_TIME_KEYS, str)
    if start is None:
        return ""
    return start[:TIME_LENGTH]


def parse_court(field: Any) -> CourtTimes:
    field = _as_dict(field)
    name = _first(field, COURT_NAME_KEYS, str)
    slots = _first(field, SLOTS_KEYS, list) or []

    times: list[str] = []
    for slot in slots:
        if not is_available(_first_present(_as_dict(slot), AVAILABLE_KEYS)):
            continue
        time_str = parse_slot_time(slot)
        if time_str:
            times.append(time_str)

    return CourtTimes(
        court=name if name is not None else DEFAULT_COURT_NAME,
        times=times,
    )


def parse_courts(body: Any) -> list[CourtTimes]:
    """
    Normalize an upstream body into courts with at least one free slot.

    Never raises: a body without a usable field list yields ``[]``.
    """
    fields = extract_fields(body)
    courts = [parse_court(f) for f in fields]
    kept = [c for c in courts if c.times]
    logger.debug("Parsed %d fields, %d with availability", len(fields), len(kept))
    return kept

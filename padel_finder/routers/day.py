"""
Day endpoint – normalized, cached availability of one venue on one day.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from padel_finder.errors import InvalidRequest, UpstreamError
from padel_finder.models import DayPayload, Error
from padel_finder.rate_limit import DAY, limiter
from padel_finder.services.registry import registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["day"])


def _text(value: Any) -> str:
    """Stringify a body value; missing or null becomes ``""``."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post(
    "/day",
    response_model=DayPayload,
    operation_id="getDay",
    summary="Courts with free slots for one venue on one day",
    responses={400: {"model": Error}, 500: {"model": Error}},
)
@limiter.limit(DAY)
async def get_day(request: Request) -> DayPayload:
    """
    Body ``{"venueId": str, "date": "YYYY-MM-DD"}``.

    Served from the in-memory cache when the same day was fetched within
    the TTL window; otherwise fetched live from the upstream.
    """
    body = await _read_body(request)
    venue_id = _text(body.get("venueId"))
    date_str = _text(body.get("date"))

    try:
        return await registry.day_service.lookup(venue_id, date_str)
    except InvalidRequest as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=Error(
                error="validation_error",
                message=exc.message,
                details=exc.details,
            ).model_dump(),
        ) from None
    except UpstreamError as exc:
        raise HTTPException(
            status_code=exc.status or status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=Error(
                error="upstream_error",
                message=exc.message,
                details={"upstream_status": exc.status},
            ).model_dump(),
        ) from None
    except Exception:
        logger.exception("Unexpected failure serving %s on %s", venue_id, date_str)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=Error(
                error="internal_error",
                message="Unexpected server error",
            ).model_dump(),
        ) from None

"""
Venue endpoints.
"""

from fastapi import APIRouter

from padel_finder.models import VenueInfo, VenueListResponse
from padel_finder.venues import VENUES

router = APIRouter(prefix="/api/venues", tags=["venues"])


@router.get(
    "",
    response_model=VenueListResponse,
    operation_id="listVenues",
    summary="List all configured venues",
)
async def list_venues() -> VenueListResponse:
    return VenueListResponse(
        items=[VenueInfo(id=v.id, name=v.name, limit_days=v.limit_days) for v in VENUES],
    )

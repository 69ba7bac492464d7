"""Pydantic models for the Padel Finder API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourtTimes(BaseModel):
    """Available start times of one court on one day."""
    court: str = Field(..., description="Court display name")
    times: List[str] = Field(default_factory=list, description="Available start times (HH:MM)")


class DayPayload(BaseModel):
    """Normalized availability of a venue on one day."""
    model_config = ConfigDict(populate_by_name=True)

    venue_id: str = Field(..., alias="venueId", description="Venue identifier")
    date: str = Field(..., description="Day (YYYY-MM-DD)")
    courts: List[CourtTimes] = Field(default_factory=list, description="Courts with at least one free slot")


class Error(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current timestamp")


class VenueInfo(BaseModel):
    """Static venue configuration."""
    id: str = Field(..., description="Venue identifier")
    name: str = Field(..., description="Venue display name")
    limit_days: int = Field(..., alias="limitDays", description="Days ahead the upstream serves")

    model_config = ConfigDict(populate_by_name=True)


class VenueListResponse(BaseModel):
    """Response containing all configured venues."""
    items: List[VenueInfo] = Field(..., description="Configured venues")

"""
Exception hierarchy shared by the proxy service and the orchestrator.
"""

from __future__ import annotations


class PadelFinderError(Exception):
    """Base class for all application errors."""


class InvalidRequest(PadelFinderError):
    """The venue id or date of a lookup is malformed."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UpstreamError(PadelFinderError):
    """The upstream gateway failed or answered with a non-success status."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class FetchFailed(PadelFinderError):
    """A day could not be fetched from the proxy (terminal for that day)."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class RetryableStatus(FetchFailed):
    """The proxy answered 429 or 5xx; worth one more attempt."""


class Cancelled(PadelFinderError):
    """A run was abandoned at a suspension point."""

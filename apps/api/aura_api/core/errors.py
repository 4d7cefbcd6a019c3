"""Domain errors surfaced to HTTP callers."""
from __future__ import annotations

from fastapi import status


class AuraError(Exception):
    """Base class for errors that map onto an HTTP failure response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuraError):
    """Raised when a required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AuraError):
    """Raised when a room id is not in the registry."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(AuraError):
    """Raised when LiveKit provisioning or token signing fails or times out."""

    status_code = status.HTTP_502_BAD_GATEWAY

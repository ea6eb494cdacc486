"""
Mapping of domain exceptions to HTTP responses.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from roadmap_tracker.core.exceptions import (
    BusinessLogicError,
    InfrastructureError,
    NotFoundError,
    ParseError,
    PermissionDeniedError,
    RoadmapTrackerError,
    ValidationError,
    WriteFailureError,
)

_STATUS_BY_ERROR: tuple[tuple[type[RoadmapTrackerError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessLogicError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ParseError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (WriteFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (InfrastructureError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: RoadmapTrackerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def roadmap_tracker_error_handler(request: Request, exc: RoadmapTrackerError) -> JSONResponse:
    """Return the actionable message of a domain error."""
    return JSONResponse(status_code=status_for(exc), content={"detail": exc.message})

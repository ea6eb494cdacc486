"""
Custom exceptions for the application.
"""

from typing import Any, Optional

from roadmap_tracker.models.enums import PermissionState


class RoadmapTrackerError(Exception):
    """Base exception for roadmap tracker."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(RoadmapTrackerError):
    """Resource not found."""

    pass


class ValidationError(RoadmapTrackerError):
    """Validation error."""

    pass


class ParseError(RoadmapTrackerError):
    """Stored document could not be parsed as JSON."""

    pass


class PermissionDeniedError(RoadmapTrackerError):
    """Directory permission was denied or the prompt was dismissed."""

    def __init__(self, message: str, state: Optional[PermissionState] = None):
        super().__init__(message, details={"state": state})
        self.state = state


class WriteFailureError(RoadmapTrackerError):
    """Document could not be saved. In-memory state is kept."""

    pass


class InfrastructureError(RoadmapTrackerError):
    """Infrastructure-related error (key-value store, file system, etc.)."""

    pass


class BusinessLogicError(RoadmapTrackerError):
    """Business logic constraint violation."""

    pass

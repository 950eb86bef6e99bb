"""
Typed failures raised by services and rendered by the API layer
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code = 400
    error_code = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailed(PlannerError):
    status_code = 422
    error_code = "VALIDATION_ERROR"


class NotFound(PlannerError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", details: Optional[Any] = None):
        super().__init__(f"{resource} not found", details)
        self.resource = resource


class Conflict(PlannerError):
    status_code = 409
    error_code = "CONFLICT"


class CapacityConflict(Conflict):
    error_code = "CAPACITY_EXCEEDED"


class Unauthorized(PlannerError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class Forbidden(PlannerError):
    status_code = 403
    error_code = "FORBIDDEN"


class RateLimited(PlannerError):
    status_code = 429
    error_code = "RATE_LIMITED"

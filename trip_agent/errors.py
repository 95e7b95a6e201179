from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    OVERLOADED = "overloaded"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_REQUEST = "invalid_request"


class PlannerError(RuntimeError):
    """Base error for trip planning failures."""

    kind: ErrorKind = ErrorKind.UPSTREAM
    status_code: int = 500
    retryable: bool = False


class ConfigurationError(PlannerError):
    """Raised when the Gemini credential is not configured."""

    kind = ErrorKind.CONFIGURATION


class UpstreamError(PlannerError):
    """Raised when Gemini fails with a non-transient error."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class ServiceOverloaded(PlannerError):
    """Raised when Gemini stays overloaded through every retry."""

    kind = ErrorKind.OVERLOADED
    status_code = 503
    retryable = True

    def __init__(self, message: str = "Gemini model is overloaded. Please try again later.") -> None:
        super().__init__(message)


class MalformedResponse(PlannerError):
    """Raised when the model reply holds no JSON object."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, message: str = "Model did not return valid JSON") -> None:
        super().__init__(message)


class InvalidRequest(PlannerError):
    """Raised when the trip request itself is unusable, e.g. a blank prompt."""

    kind = ErrorKind.INVALID_REQUEST
    status_code = 400

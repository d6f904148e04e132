"""Interface layer errors.

Maps typed domain errors onto HTTP responses. Every error body carries the
error's stable code and retryable flag so clients can tell "try again"
apart from "log in" and "this post is gone".
"""

import logfire
from fastapi import HTTPException, status

from agriforum.domain.error import (
    ConflictRetryableError,
    CounterDriftError,
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictRetryableError: status.HTTP_409_CONFLICT,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CounterDriftError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_detail(code: str, message: str, retryable: bool = False) -> dict:
    """Build the structured ``detail`` body for an error response."""
    return {"code": code, "message": message, "retryable": retryable}


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error into an HTTPException.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with a structured detail
    """
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, mapped in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            status_code = mapped
            break

    if status_code >= 500:
        logfire.error("Request failed", code=error.code, error=str(error))
    else:
        logfire.warn("Request rejected", code=error.code, error=str(error))

    headers = {"Retry-After": "1"} if error.retryable else None
    return HTTPException(
        status_code=status_code,
        detail=error_detail(error.code, str(error), error.retryable),
        headers=headers,
    )

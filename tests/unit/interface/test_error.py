"""Unit tests for domain error to HTTP mapping."""

import pytest

from agriforum.domain.error import (
    ConflictRetryableError,
    CounterDriftError,
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from agriforum.interface.error import to_http_exception


class TestToHttpException:
    """Tests for to_http_exception."""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (NotAuthenticatedError("vote"), 401),
            (NotFoundError("Post", "abc"), 404),
            (ConflictRetryableError("busy"), 409),
            (StorageUnavailableError("down"), 503),
            (ValidationError("blank"), 400),
            (CounterDriftError("abc"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        """Each error type maps to its own status code."""
        exc = to_http_exception(error)

        assert exc.status_code == status_code
        assert exc.detail["code"] == error.code
        assert exc.detail["message"] == str(error)

    @pytest.mark.parametrize(
        "error", [ConflictRetryableError("busy"), StorageUnavailableError("down")]
    )
    def test_retryable_errors_advertise_retry(self, error):
        """Retryable errors carry the flag and a Retry-After header."""
        exc = to_http_exception(error)

        assert exc.detail["retryable"] is True
        assert exc.headers == {"Retry-After": "1"}

    @pytest.mark.parametrize(
        "error",
        [
            NotAuthenticatedError("comment"),
            NotFoundError("Post", "abc"),
            CounterDriftError("abc"),
        ],
    )
    def test_terminal_errors_are_not_retryable(self, error):
        """Clients are told not to retry auth and missing-post errors."""
        exc = to_http_exception(error)

        assert exc.detail["retryable"] is False
        assert exc.headers is None

    def test_unknown_domain_error_is_bad_request(self):
        """An unmapped domain error falls back to 400."""
        exc = to_http_exception(DomainError("something odd"))

        assert exc.status_code == 400
        assert exc.detail["code"] == "domain_error"

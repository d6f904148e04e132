"""Domain layer errors.

Every error carries a stable ``code`` and a ``retryable`` flag so callers can
tell "try again" apart from "log in" or "this post was deleted".
"""


class DomainError(Exception):
    """Base domain error."""

    code: str = "domain_error"
    retryable: bool = False


class ValidationError(DomainError):
    """Domain validation error."""

    code = "validation_error"


class NotAuthenticatedError(DomainError):
    """Raised when an engagement action arrives without a caller identity."""

    code = "not_authenticated"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictRetryableError(DomainError):
    """Raised when a concurrent write invalidated the state we read.

    The whole operation (re-read, recompute, re-submit) is safe to retry.
    """

    code = "conflict_retryable"
    retryable = True

    def __init__(self, message: str, attempts: int = 1):
        self.attempts = attempts
        super().__init__(message)


class StorageUnavailableError(DomainError):
    """Raised when the backing store could not be reached.

    The unit of work was rolled back, so no partial effect is observable.
    """

    code = "storage_unavailable"
    retryable = True


class CounterDriftError(DomainError):
    """Raised when a counter update would violate its non-negative constraint.

    The cached counters already disagree with the ledger, so retrying cannot
    help. Counter reconciliation repairs the post.
    """

    code = "counter_drift"

    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Counters of post {post_id} are out of sync")

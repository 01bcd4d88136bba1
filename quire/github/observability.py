"""Error categorization for GitHub failures.

Structured log lines carry an ``error_category`` field so operators can tell
a benign conflict from a GitHub outage without reading tracebacks.
"""

from __future__ import annotations

import enum

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubConflictError,
    GitHubNotFoundError,
    GitHubResponseShapeError,
)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500


class ErrorCategory(enum.StrEnum):
    """Categories used to classify failed GitHub calls in logs."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubConflictError, ErrorCategory.CONFLICT),
    (GitHubNotFoundError, ErrorCategory.NOT_FOUND),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Return the :class:`ErrorCategory` for ``exc``.

    Chained causes are inspected so domain errors wrapping a GitHub failure
    are classified by the failure itself.
    """
    current: BaseException | None = exc
    while current is not None:
        for exc_type, category in _EXCEPTION_CATEGORY_MAP:
            if isinstance(current, exc_type):
                return category
        if isinstance(current, GitHubAPIError):
            # No status means the request never got a response.
            if (
                current.status_code is None
                or current.status_code >= _HTTP_SERVER_ERROR_THRESHOLD
            ):
                return ErrorCategory.TRANSIENT
            return ErrorCategory.CLIENT_ERROR
        current = current.__cause__
    return ErrorCategory.UNKNOWN

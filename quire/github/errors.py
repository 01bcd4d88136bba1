"""GitHub REST API errors."""

from __future__ import annotations

_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409
_HTTP_UNPROCESSABLE = 422
_ALREADY_EXISTS_MARKER = "already exists"


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns an error response or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(
        cls, method: str, path: str, status_code: int, detail: str | None = None
    ) -> GitHubAPIError:
        """Return the error matching a non-2xx HTTP response."""
        message = f"GitHub REST {method} {path} returned HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        if status_code == _HTTP_NOT_FOUND:
            return GitHubNotFoundError(message, status_code=status_code)
        if _is_conflict(status_code, detail):
            return GitHubConflictError(message, status_code=status_code)
        return cls(message, status_code=status_code)

    @classmethod
    def transport(cls, method: str, path: str, exc: BaseException) -> GitHubAPIError:
        """Return an error for a request that never produced a response."""
        return cls(f"GitHub REST {method} {path} failed: {exc}")


class GitHubNotFoundError(GitHubAPIError):
    """Raised when the requested repository, ref or file does not exist."""


class GitHubConflictError(GitHubAPIError):
    """Raised when GitHub rejects a write because the target already exists."""


def _is_conflict(status_code: int, detail: str | None) -> bool:
    """Return whether a response reports that the write target already exists.

    GitHub answers 422 for every validation failure, so a 422 only counts as
    a conflict when its message says the ref or pull request already exists.
    """
    if status_code == _HTTP_CONFLICT:
        return True
    if status_code != _HTTP_UNPROCESSABLE or detail is None:
        return False
    return _ALREADY_EXISTS_MARKER in detail.lower()


class GitHubResponseShapeError(RuntimeError):
    """Raised when GitHub REST responses are missing expected fields."""

    @classmethod
    def missing(cls, field: str) -> GitHubResponseShapeError:
        """Return an error for a missing response field."""
        return cls(f"GitHub REST response missing expected field: {field}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("QUIRE_GITHUB_TOKEN is required for the GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_timeout(cls, raw: str) -> GitHubConfigError:
        """Return an error for an unparsable or non-positive timeout."""
        return cls(f"QUIRE_GITHUB_TIMEOUT_S must be a positive number, got: {raw!r}")

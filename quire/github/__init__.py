"""GitHub REST client and error primitives."""

from __future__ import annotations

from .client import GitHubRepositoryClient, GitHubRESTClient, GitHubRESTConfig
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubConflictError,
    GitHubNotFoundError,
    GitHubResponseShapeError,
)
from .models import FileContent, RepositoryMetadata, RepositoryRef
from .observability import ErrorCategory, categorize_error

__all__ = [
    "ErrorCategory",
    "FileContent",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubConflictError",
    "GitHubNotFoundError",
    "GitHubRESTClient",
    "GitHubRESTConfig",
    "GitHubRepositoryClient",
    "GitHubResponseShapeError",
    "RepositoryMetadata",
    "RepositoryRef",
    "categorize_error",
]

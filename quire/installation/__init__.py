"""Installation webhook payload normalization."""

from __future__ import annotations

from .errors import InstallationError, NoRepositoriesFoundError, OwnerUnresolvedError
from .models import (
    InstallationPayload,
    MalformedEntry,
    RepositoriesAdded,
    RepositoryEntry,
    RepositoryList,
    SingleRepository,
    classify_installation_payload,
)
from .normalizer import (
    NormalizedInstallation,
    SkippedRepository,
    normalize_installation,
    normalize_payload,
)

__all__ = [
    "InstallationError",
    "InstallationPayload",
    "MalformedEntry",
    "NoRepositoriesFoundError",
    "NormalizedInstallation",
    "OwnerUnresolvedError",
    "RepositoriesAdded",
    "RepositoryEntry",
    "RepositoryList",
    "SingleRepository",
    "SkippedRepository",
    "classify_installation_payload",
    "normalize_installation",
    "normalize_payload",
]

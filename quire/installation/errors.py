"""Errors raised while normalizing installation webhook payloads."""

from __future__ import annotations

from quire.errors import QuireError


class InstallationError(QuireError):
    """Base class for installation payload errors."""


class NoRepositoriesFoundError(InstallationError):
    """Raised when an installation payload names no repositories."""

    @classmethod
    def no_shape(cls) -> NoRepositoriesFoundError:
        """Return an error for payloads matching none of the known shapes."""
        return cls("Installation payload carries no repositories")

    @classmethod
    def empty(cls, shape: str) -> NoRepositoriesFoundError:
        """Return an error for a recognised shape with an empty list."""
        return cls(f"Installation payload {shape} list is empty")


class OwnerUnresolvedError(InstallationError):
    """Raised when neither a repository nor its installation names an owner."""

    def __init__(self, repository: str) -> None:
        """Initialise with the repository name whose owner is unknown."""
        self.repository = repository
        super().__init__(f"Cannot resolve owner for repository {repository!r}")

"""Typed values exchanged with the GitHub collaborator."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Identify a remote repository by owner and name."""

    owner: str
    name: str

    @property
    def slug(self) -> str:
        """Return the GitHub-style ``owner/name`` identifier."""
        return f"{self.owner}/{self.name}"


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """Repository attributes needed to bootstrap a branch."""

    default_branch: str


@dataclasses.dataclass(frozen=True, slots=True)
class FileContent:
    """File content as stored by GitHub: base64 text plus the blob SHA."""

    content: str
    sha: str
    encoding: str = "base64"

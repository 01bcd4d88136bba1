"""Normalize installation payloads into the repositories to bootstrap.

Each payload variant has its own owner precedence:

- ``repositories_added`` entries belong to the installation account.
- ``repositories`` and ``repository`` entries use their own owner and fall
  back to the installation account.

An entry whose owner cannot be resolved, or that failed to parse, is
recorded as skipped; the remaining entries are still returned.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from quire.github.models import RepositoryRef

from .errors import InstallationError, OwnerUnresolvedError
from .models import (
    MalformedEntry,
    RepositoriesAdded,
    RepositoryEntry,
    RepositoryList,
    SingleRepository,
    classify_installation_payload,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import InstallationPayload


@dataclasses.dataclass(frozen=True, slots=True)
class SkippedRepository:
    """An entry excluded from the bootstrap batch and why."""

    name: str
    reason: str
    error: InstallationError | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedInstallation:
    """Ordered repositories resolved from one installation payload."""

    shape: str
    account: str | None
    repositories: tuple[RepositoryRef, ...]
    skipped: tuple[SkippedRepository, ...] = ()


def _resolve(
    entries: cabc.Iterable[RepositoryEntry | MalformedEntry],
    owner_for: cabc.Callable[[RepositoryEntry], str | None],
) -> tuple[tuple[RepositoryRef, ...], tuple[SkippedRepository, ...]]:
    resolved: list[RepositoryRef] = []
    skipped: list[SkippedRepository] = []
    for entry in entries:
        if isinstance(entry, MalformedEntry):
            skipped.append(
                SkippedRepository(
                    name=f"<entry {entry.index}>",
                    reason=f"malformed entry: {entry.reason}",
                )
            )
            continue
        owner = owner_for(entry)
        if owner is None:
            error = OwnerUnresolvedError(entry.name)
            skipped.append(
                SkippedRepository(name=entry.name, reason=str(error), error=error)
            )
            continue
        resolved.append(RepositoryRef(owner=owner, name=entry.name))
    return tuple(resolved), tuple(skipped)


def _normalize_added(payload: RepositoriesAdded) -> NormalizedInstallation:
    repositories, skipped = _resolve(
        payload.repositories_added,
        lambda entry: payload.account or entry.owner,
    )
    return NormalizedInstallation(
        shape=payload.kind,
        account=payload.account,
        repositories=repositories,
        skipped=skipped,
    )


def _normalize_list(payload: RepositoryList) -> NormalizedInstallation:
    repositories, skipped = _resolve(
        payload.repositories,
        lambda entry: entry.owner or payload.account,
    )
    return NormalizedInstallation(
        shape=payload.kind,
        account=payload.account,
        repositories=repositories,
        skipped=skipped,
    )


def _normalize_single(payload: SingleRepository) -> NormalizedInstallation:
    repositories, skipped = _resolve(
        (payload.repository,),
        lambda entry: entry.owner or payload.account,
    )
    return NormalizedInstallation(
        shape=payload.kind,
        account=payload.account,
        repositories=repositories,
        skipped=skipped,
    )


def normalize_payload(payload: InstallationPayload) -> NormalizedInstallation:
    """Resolve an already classified installation payload."""
    match payload:
        case RepositoriesAdded():
            return _normalize_added(payload)
        case RepositoryList():
            return _normalize_list(payload)
        case SingleRepository():
            return _normalize_single(payload)
        case _:
            typ.assert_never(payload)


def normalize_installation(payload: dict[str, typ.Any]) -> NormalizedInstallation:
    """Classify and resolve a raw installation webhook payload.

    Raises
    ------
    NoRepositoriesFoundError
        If the payload names no repositories.
    PayloadError
        If the payload envelope is malformed.

    """
    return normalize_payload(classify_installation_payload(payload))

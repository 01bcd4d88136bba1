"""Installation payload shapes.

GitHub describes the repositories an installation covers in three ways:

- ``installation_repositories.added`` sends ``repositories_added`` entries
  that omit the owner; the installation account supplies it.
- ``installation.created`` sends a ``repositories`` list.
- Some deliveries carry a single ``repository`` object.

:func:`classify_installation_payload` picks exactly one of these shapes and
returns it as a variant of :data:`InstallationPayload`.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

from quire.errors import PayloadError

from .errors import NoRepositoriesFoundError


class _Account(msgspec.Struct):
    login: str | None = None


class _RepositoryEntry(msgspec.Struct):
    name: str
    full_name: str | None = None
    owner: _Account | str | None = None


class _Installation(msgspec.Struct):
    account: _Account | None = None


class _InstallationEnvelope(msgspec.Struct):
    installation: _Installation | None = None
    repositories_added: list[typ.Any] | None = None
    repositories: list[typ.Any] | None = None
    repository: dict[str, typ.Any] | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryEntry:
    """One repository as described by the payload, owner possibly unknown."""

    name: str
    owner: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class MalformedEntry:
    """A repository entry that could not be parsed."""

    index: int
    reason: str


@dataclasses.dataclass(frozen=True, slots=True)
class SingleRepository:
    """Payload naming one repository in a ``repository`` object."""

    repository: RepositoryEntry | MalformedEntry
    account: str | None = None
    kind: typ.ClassVar[str] = "repository"


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryList:
    """Payload listing repositories under ``repositories``."""

    repositories: tuple[RepositoryEntry | MalformedEntry, ...]
    account: str | None = None
    kind: typ.ClassVar[str] = "repositories"


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoriesAdded:
    """Payload listing repositories under ``repositories_added``."""

    repositories_added: tuple[RepositoryEntry | MalformedEntry, ...]
    account: str | None = None
    kind: typ.ClassVar[str] = "repositories_added"


type InstallationPayload = SingleRepository | RepositoryList | RepositoriesAdded


def _owner_login(owner: _Account | str | None) -> str | None:
    if isinstance(owner, _Account):
        login = owner.login
    else:
        login = owner
    if login is None or not login.strip():
        return None
    return login.strip()


def _owner_from_full_name(full_name: str | None) -> str | None:
    if not full_name or full_name.count("/") != 1:
        return None
    owner, _ = full_name.split("/")
    return owner or None


def _parse_entry(index: int, raw: object) -> RepositoryEntry | MalformedEntry:
    try:
        entry = msgspec.convert(raw, type=_RepositoryEntry)
    except msgspec.ValidationError as exc:
        return MalformedEntry(index=index, reason=str(exc))
    owner = _owner_login(entry.owner) or _owner_from_full_name(entry.full_name)
    return RepositoryEntry(name=entry.name, owner=owner)


def _parse_entries(
    raw_entries: list[typ.Any], *, shape: str
) -> tuple[RepositoryEntry | MalformedEntry, ...]:
    if not raw_entries:
        raise NoRepositoriesFoundError.empty(shape)
    return tuple(_parse_entry(index, raw) for index, raw in enumerate(raw_entries))


def classify_installation_payload(payload: dict[str, typ.Any]) -> InstallationPayload:
    """Return the single installation shape ``payload`` carries.

    Shapes are checked in precedence order ``repositories_added``,
    ``repositories``, ``repository``; the first present one wins and the
    others are ignored.

    Raises
    ------
    NoRepositoriesFoundError
        If no shape is present or the chosen list is empty.
    PayloadError
        If the envelope itself has the wrong types.

    """
    try:
        envelope = msgspec.convert(payload, type=_InstallationEnvelope)
    except msgspec.ValidationError as exc:
        raise PayloadError("installation", str(exc)) from exc

    installation = envelope.installation
    account = (
        _owner_login(installation.account)
        if installation is not None and installation.account is not None
        else None
    )

    if envelope.repositories_added is not None:
        return RepositoriesAdded(
            repositories_added=_parse_entries(
                envelope.repositories_added, shape=RepositoriesAdded.kind
            ),
            account=account,
        )
    if envelope.repositories is not None:
        return RepositoryList(
            repositories=_parse_entries(
                envelope.repositories, shape=RepositoryList.kind
            ),
            account=account,
        )
    if envelope.repository is not None:
        return SingleRepository(
            repository=_parse_entry(0, envelope.repository),
            account=account,
        )
    raise NoRepositoriesFoundError.no_shape()

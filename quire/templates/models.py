"""Pull-request event and outcome structures."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

import msgspec

from quire.errors import PayloadError
from quire.github.models import RepositoryRef


class _Account(msgspec.Struct):
    login: str


class _Repository(msgspec.Struct):
    name: str
    owner: _Account


class _PullRequest(msgspec.Struct):
    number: int
    title: str


class _PullRequestPayload(msgspec.Struct):
    pull_request: _PullRequest
    repository: _Repository


@dataclasses.dataclass(frozen=True, slots=True)
class PullRequestOpenedEvent:
    """The parts of a ``pull_request.opened`` delivery Quire acts on."""

    title: str
    repository: RepositoryRef
    number: int

    @classmethod
    def from_payload(cls, payload: dict[str, typ.Any]) -> PullRequestOpenedEvent:
        """Build the event from a decoded webhook payload.

        Raises
        ------
        PayloadError
            If the payload lacks the pull request or repository fields.

        """
        try:
            parsed = msgspec.convert(payload, type=_PullRequestPayload)
        except msgspec.ValidationError as exc:
            raise PayloadError("pull_request", str(exc)) from exc
        return cls(
            title=parsed.pull_request.title,
            repository=RepositoryRef(
                owner=parsed.repository.owner.login,
                name=parsed.repository.name,
            ),
            number=parsed.pull_request.number,
        )


class TemplateApplyStatus(enum.StrEnum):
    """How handling a ``pull_request.opened`` event ended."""

    APPLIED = "applied"
    NO_PREFIX = "no_prefix"
    UNSAFE_PREFIX = "unsafe_prefix"
    FETCH_FAILED = "fetch_failed"
    UPDATE_FAILED = "update_failed"


@dataclasses.dataclass(frozen=True, slots=True)
class TemplateApplyOutcome:
    """Result of applying a template to one pull request."""

    repo_slug: str
    number: int
    status: TemplateApplyStatus
    prefix: str | None = None
    template_path: str | None = None
    reason: str | None = None

    @property
    def applied(self) -> bool:
        """Return True when the pull request body was replaced."""
        return self.status is TemplateApplyStatus.APPLIED

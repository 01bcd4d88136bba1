"""Apply a pull-request template when a pull request is opened.

The handler chains three steps: extract the title prefix, resolve the
matching template, overwrite the body. Each failure ends the chain with a
logged outcome; none of them escapes to the webhook caller.
"""

from __future__ import annotations

import typing as typ

from .errors import (
    NoPrefixFoundError,
    TemplateFetchFailedError,
    UnsafePrefixError,
    UpdateFailedError,
)
from .models import TemplateApplyOutcome, TemplateApplyStatus
from .observability import TemplateEventLogger, TemplateEventType
from .prefix import extract_prefix, validate_prefix
from .resolver import TemplateResolver, template_path
from .updater import PullRequestBodyUpdater

if typ.TYPE_CHECKING:
    from quire.github.client import GitHubRepositoryClient

    from .models import PullRequestOpenedEvent


class PullRequestTemplateService:
    """Replace new pull-request bodies with prefix-keyed templates."""

    def __init__(
        self,
        client: GitHubRepositoryClient,
        *,
        event_logger: TemplateEventLogger | None = None,
    ) -> None:
        """Wire the resolver and updater to ``client``."""
        self._resolver = TemplateResolver(client)
        self._updater = PullRequestBodyUpdater(client)
        self._events = event_logger or TemplateEventLogger()

    async def handle_opened(
        self, event: PullRequestOpenedEvent
    ) -> TemplateApplyOutcome:
        """Apply the template named by ``event``'s title prefix."""
        repo = event.repository
        try:
            prefix = validate_prefix(extract_prefix(event.title))
        except NoPrefixFoundError:
            self._events.log_prefix_missing(repo.slug, event.number, event.title)
            return TemplateApplyOutcome(
                repo_slug=repo.slug,
                number=event.number,
                status=TemplateApplyStatus.NO_PREFIX,
            )
        except UnsafePrefixError as exc:
            self._events.log_prefix_rejected(repo.slug, event.number, exc.prefix)
            return TemplateApplyOutcome(
                repo_slug=repo.slug,
                number=event.number,
                status=TemplateApplyStatus.UNSAFE_PREFIX,
                prefix=exc.prefix,
                reason=str(exc),
            )

        path = template_path(prefix)
        try:
            body = await self._resolver.resolve(repo, prefix)
        except TemplateFetchFailedError as exc:
            outcome = TemplateApplyOutcome(
                repo_slug=repo.slug,
                number=event.number,
                status=TemplateApplyStatus.FETCH_FAILED,
                prefix=prefix,
                template_path=path,
                reason=exc.reason,
            )
            self._events.log_failed(TemplateEventType.FETCH_FAILED, outcome, exc)
            return outcome

        try:
            await self._updater.update(repo, event.number, body)
        except UpdateFailedError as exc:
            outcome = TemplateApplyOutcome(
                repo_slug=repo.slug,
                number=event.number,
                status=TemplateApplyStatus.UPDATE_FAILED,
                prefix=prefix,
                template_path=path,
                reason=exc.reason,
            )
            self._events.log_failed(TemplateEventType.UPDATE_FAILED, outcome, exc)
            return outcome

        outcome = TemplateApplyOutcome(
            repo_slug=repo.slug,
            number=event.number,
            status=TemplateApplyStatus.APPLIED,
            prefix=prefix,
            template_path=path,
        )
        self._events.log_applied(outcome)
        return outcome

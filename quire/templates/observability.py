"""Structured log events for pull-request template handling.

Usage
-----
>>> event_logger = TemplateEventLogger()
>>> event_logger.log_applied(outcome)

"""

from __future__ import annotations

import enum
import typing as typ

from quire.github.observability import categorize_error
from quire.logging import get_logger, log_error, log_info, log_warning

if typ.TYPE_CHECKING:
    from .models import TemplateApplyOutcome

logger = get_logger(__name__)


class TemplateEventType(enum.StrEnum):
    """Structured log event types for template handling."""

    APPLIED = "templates.applied"
    PREFIX_MISSING = "templates.prefix.missing"
    PREFIX_REJECTED = "templates.prefix.rejected"
    FETCH_FAILED = "templates.fetch.failed"
    UPDATE_FAILED = "templates.update.failed"


class TemplateEventLogger:
    """Emit structured template events via femtologging."""

    def log_applied(self, outcome: TemplateApplyOutcome) -> None:
        """Log a pull request body replaced by a template."""
        log_info(
            logger,
            "[%s] repo_slug=%s number=%d prefix=%s template_path=%s",
            TemplateEventType.APPLIED,
            outcome.repo_slug,
            outcome.number,
            outcome.prefix,
            outcome.template_path,
        )

    def log_prefix_missing(self, repo_slug: str, number: int, title: str) -> None:
        """Log a title without a bracketed prefix."""
        log_info(
            logger,
            "[%s] repo_slug=%s number=%d title=%r",
            TemplateEventType.PREFIX_MISSING,
            repo_slug,
            number,
            title,
        )

    def log_prefix_rejected(self, repo_slug: str, number: int, prefix: str) -> None:
        """Log a prefix that cannot be used as a template file name."""
        log_warning(
            logger,
            "[%s] repo_slug=%s number=%d prefix=%r",
            TemplateEventType.PREFIX_REJECTED,
            repo_slug,
            number,
            prefix,
        )

    def log_failed(
        self,
        event_type: TemplateEventType,
        outcome: TemplateApplyOutcome,
        error: BaseException,
    ) -> None:
        """Log a failed template fetch or body update."""
        log_error(
            logger,
            "[%s] repo_slug=%s number=%d template_path=%s "
            "error_type=%s error_category=%s error_message=%s",
            event_type,
            outcome.repo_slug,
            outcome.number,
            outcome.template_path,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

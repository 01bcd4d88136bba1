"""Structured log events for repository bootstrap.

Every step of a bootstrap run emits one ``[bootstrap.*]`` line carrying the
repository slug, so a single repository's progress can be followed by
filtering on ``repo_slug``.
"""

from __future__ import annotations

import enum
import typing as typ

from quire.github.observability import categorize_error
from quire.logging import get_logger, log_error, log_exception, log_info, log_warning

if typ.TYPE_CHECKING:
    from .models import BootstrapOutcome, InstallationOutcome

logger = get_logger(__name__)


class BootstrapEventType(enum.StrEnum):
    """Structured log event types for bootstrap runs."""

    INSTALLATION_RECEIVED = "bootstrap.installation.received"
    INSTALLATION_EMPTY = "bootstrap.installation.empty"
    INSTALLATION_COMPLETED = "bootstrap.installation.completed"
    ENTRY_SKIPPED = "bootstrap.entry.skipped"
    DEFAULT_BRANCH_FAILED = "bootstrap.default_branch.failed"
    BRANCH_CREATED = "bootstrap.branch.created"
    BRANCH_EXISTS = "bootstrap.branch.exists"
    BRANCH_FAILED = "bootstrap.branch.failed"
    SEED_FAILED = "bootstrap.seed.failed"
    FILE_SEEDED = "bootstrap.file.seeded"
    FILE_FAILED = "bootstrap.file.failed"
    PULL_REQUEST_CREATED = "bootstrap.pull_request.created"
    PULL_REQUEST_EXISTS = "bootstrap.pull_request.exists"
    PULL_REQUEST_FAILED = "bootstrap.pull_request.failed"
    REPOSITORY_COMPLETED = "bootstrap.repository.completed"
    REPOSITORY_CRASHED = "bootstrap.repository.crashed"


class BootstrapEventLogger:
    """Emit structured bootstrap events via femtologging."""

    def log_installation_received(self, shape: str, repo_count: int) -> None:
        """Log the repositories resolved from an installation event."""
        log_info(
            logger,
            "[%s] shape=%s repositories=%d",
            BootstrapEventType.INSTALLATION_RECEIVED,
            shape,
            repo_count,
        )

    def log_installation_empty(self, error: BaseException) -> None:
        """Log an installation event that named no repositories."""
        log_warning(
            logger,
            "[%s] reason=%s",
            BootstrapEventType.INSTALLATION_EMPTY,
            str(error),
        )

    def log_entry_skipped(self, name: str, reason: str) -> None:
        """Log a payload entry excluded from the batch."""
        log_warning(
            logger,
            "[%s] repository=%s reason=%s",
            BootstrapEventType.ENTRY_SKIPPED,
            name,
            reason,
        )

    def log_installation_completed(self, outcome: InstallationOutcome) -> None:
        """Log the batch summary once every repository has been attempted."""
        completed = sum(1 for result in outcome.outcomes if result.completed)
        log_info(
            logger,
            "[%s] shape=%s repositories=%d completed=%d skipped=%d",
            BootstrapEventType.INSTALLATION_COMPLETED,
            outcome.shape,
            len(outcome.outcomes),
            completed,
            len(outcome.skipped),
        )

    def log_step_failed(
        self,
        event_type: BootstrapEventType,
        repo_slug: str,
        error: BaseException,
        *,
        path: str | None = None,
    ) -> None:
        """Log a failed bootstrap step with its error category."""
        log_error(
            logger,
            "[%s] repo_slug=%s path=%s error_type=%s error_category=%s "
            "error_message=%s",
            event_type,
            repo_slug,
            path,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

    def log_branch_created(self, repo_slug: str, branch: str, sha: str) -> None:
        """Log the working branch being created."""
        log_info(
            logger,
            "[%s] repo_slug=%s branch=%s sha=%s",
            BootstrapEventType.BRANCH_CREATED,
            repo_slug,
            branch,
            sha,
        )

    def log_branch_exists(self, repo_slug: str, branch: str) -> None:
        """Log the working branch already existing."""
        log_info(
            logger,
            "[%s] repo_slug=%s branch=%s",
            BootstrapEventType.BRANCH_EXISTS,
            repo_slug,
            branch,
        )

    def log_file_seeded(self, repo_slug: str, path: str) -> None:
        """Log one seed file committed to the working branch."""
        log_info(
            logger,
            "[%s] repo_slug=%s path=%s",
            BootstrapEventType.FILE_SEEDED,
            repo_slug,
            path,
        )

    def log_pull_request_created(self, repo_slug: str, url: str) -> None:
        """Log the setup pull request being opened."""
        log_info(
            logger,
            "[%s] repo_slug=%s url=%s",
            BootstrapEventType.PULL_REQUEST_CREATED,
            repo_slug,
            url,
        )

    def log_pull_request_exists(self, repo_slug: str, error: BaseException) -> None:
        """Log GitHub refusing a duplicate setup pull request."""
        log_warning(
            logger,
            "[%s] repo_slug=%s error_message=%s",
            BootstrapEventType.PULL_REQUEST_EXISTS,
            repo_slug,
            str(error),
        )

    def log_repository_completed(self, outcome: BootstrapOutcome) -> None:
        """Log the per-repository summary."""
        log_info(
            logger,
            "[%s] repo_slug=%s completed=%s branch=%s files_seeded=%d "
            "files_failed=%d pull_request=%s",
            BootstrapEventType.REPOSITORY_COMPLETED,
            outcome.repo_slug,
            outcome.completed,
            outcome.branch.status,
            len(outcome.files) - len(outcome.failed_files),
            len(outcome.failed_files),
            outcome.pull_request.status,
        )

    def log_repository_crashed(self, repo_slug: str, error: BaseException) -> None:
        """Log an unexpected exception that ended one repository's run."""
        log_exception(
            logger,
            f"[{BootstrapEventType.REPOSITORY_CRASHED}] repo_slug={repo_slug} "
            f"error_type={type(error).__name__} error_message={error}",
            error,
        )

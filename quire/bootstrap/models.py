"""Outcome records for repository bootstrap runs."""

from __future__ import annotations

import dataclasses
import enum

WORKING_BRANCH = "dynamic-pr-templates"
SEED_DESTINATION = ".github"
SETUP_PR_TITLE = "[SETUP] Add dynamic PR templates"
SETUP_PR_BODY = (
    "This pull request adds the default dynamic pull request templates under "
    "`.github/pr_templates/`.\n\n"
    "Once merged, start a pull request title with a bracketed prefix such as "
    "`[bug]` or `[feature]` and its description will be replaced with the "
    "matching template from `.github/pr_templates/<prefix>.md`."
)


def seed_destination(relative_path: str) -> str:
    """Return the repository path a seed file is committed to.

    >>> seed_destination("pr_templates/bug.md")
    '.github/pr_templates/bug.md'

    """
    return f"{SEED_DESTINATION}/{relative_path}"


class StepStatus(enum.StrEnum):
    """Result of one bootstrap step."""

    SUCCEEDED = "succeeded"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclasses.dataclass(frozen=True, slots=True)
class StepResult:
    """Status of a bootstrap step with its detail.

    ``detail`` holds the produced value on success (a branch name or pull
    request URL) and the failure reason otherwise.
    """

    status: StepStatus
    detail: str | None = None
    error_category: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the step left the repository in the wanted state."""
        return self.status in {StepStatus.SUCCEEDED, StepStatus.ALREADY_EXISTS}


SKIPPED = StepResult(status=StepStatus.SKIPPED)


@dataclasses.dataclass(frozen=True, slots=True)
class FileSeedResult:
    """Result of committing one seed file."""

    path: str
    succeeded: bool
    reason: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class BootstrapOutcome:
    """Everything that happened while bootstrapping one repository."""

    repo_slug: str
    default_branch: StepResult
    branch: StepResult = SKIPPED
    files: tuple[FileSeedResult, ...] = ()
    seed_error: str | None = None
    pull_request: StepResult = SKIPPED

    @property
    def pull_request_url(self) -> str | None:
        """Return the setup pull request URL when one was opened."""
        if self.pull_request.status is StepStatus.SUCCEEDED:
            return self.pull_request.detail
        return None

    @property
    def failed_files(self) -> tuple[FileSeedResult, ...]:
        """Return the seed files that could not be committed."""
        return tuple(result for result in self.files if not result.succeeded)

    @property
    def completed(self) -> bool:
        """Return True when every step succeeded."""
        return (
            self.default_branch.ok
            and self.branch.ok
            and self.seed_error is None
            and not self.failed_files
            and self.pull_request.ok
        )


@dataclasses.dataclass(frozen=True, slots=True)
class InstallationOutcome:
    """Per-repository outcomes for one installation event, in order."""

    shape: str | None
    outcomes: tuple[BootstrapOutcome, ...] = ()
    skipped: tuple[str, ...] = ()
    reason: str | None = None

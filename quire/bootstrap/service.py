"""Bootstrap repositories with the default pull-request templates.

For each repository the bootstrapper runs four steps in order:

1. read the default branch (a failure here ends the run for the repository);
2. create ``dynamic-pr-templates`` from the default branch head, treating an
   existing branch as success;
3. commit every seed file under ``.github/`` on that branch;
4. open the setup pull request.

Steps 2-4 are attempted regardless of earlier failures and nothing is
rolled back. Repositories in a batch are processed one after another.
"""

from __future__ import annotations

import asyncio
import dataclasses
import typing as typ

from quire.github.errors import (
    GitHubAPIError,
    GitHubConflictError,
    GitHubResponseShapeError,
)
from quire.github.observability import categorize_error
from quire.installation import NoRepositoriesFoundError, normalize_installation

from .models import (
    SETUP_PR_BODY,
    SETUP_PR_TITLE,
    WORKING_BRANCH,
    BootstrapOutcome,
    FileSeedResult,
    InstallationOutcome,
    StepResult,
    StepStatus,
    seed_destination,
)
from .observability import BootstrapEventLogger, BootstrapEventType
from .seed import LocalTemplateTree

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from quire.github.client import GitHubRepositoryClient
    from quire.github.models import RepositoryRef

    from .seed import TemplateFile

_REMOTE_ERRORS = (GitHubAPIError, GitHubResponseShapeError)


def _failed(exc: BaseException) -> StepResult:
    return StepResult(
        status=StepStatus.FAILED,
        detail=str(exc),
        error_category=categorize_error(exc),
    )


class RepositoryBootstrapper:
    """Seed one repository at a time with the packaged template files."""

    def __init__(
        self,
        client: GitHubRepositoryClient,
        *,
        tree: LocalTemplateTree | None = None,
        event_logger: BootstrapEventLogger | None = None,
    ) -> None:
        """Configure the bootstrapper.

        Parameters
        ----------
        client
            GitHub client used for every remote call.
        tree
            Source of seed files. Defaults to the packaged templates.
        event_logger
            Structured event sink. Defaults to :class:`BootstrapEventLogger`.

        """
        self._client = client
        self._tree = tree or LocalTemplateTree()
        self._events = event_logger or BootstrapEventLogger()

    async def bootstrap(self, repo: RepositoryRef) -> BootstrapOutcome:
        """Run every bootstrap step against ``repo``.

        GitHub failures are recorded in the returned outcome rather than
        raised.
        """
        try:
            metadata = await self._client.get_repository(repo.owner, repo.name)
        except _REMOTE_ERRORS as exc:
            self._events.log_step_failed(
                BootstrapEventType.DEFAULT_BRANCH_FAILED, repo.slug, exc
            )
            outcome = BootstrapOutcome(repo_slug=repo.slug, default_branch=_failed(exc))
            self._events.log_repository_completed(outcome)
            return outcome

        default_branch = metadata.default_branch
        branch = await self._create_branch(repo, default_branch)
        files, seed_error = await self._seed_files(repo)
        pull_request = await self._open_pull_request(repo, default_branch)

        outcome = BootstrapOutcome(
            repo_slug=repo.slug,
            default_branch=StepResult(
                status=StepStatus.SUCCEEDED, detail=default_branch
            ),
            branch=branch,
            files=files,
            seed_error=seed_error,
            pull_request=pull_request,
        )
        self._events.log_repository_completed(outcome)
        return outcome

    async def bootstrap_all(
        self, repos: cabc.Iterable[RepositoryRef]
    ) -> tuple[BootstrapOutcome, ...]:
        """Bootstrap ``repos`` sequentially and return outcomes in order.

        An unexpected exception while bootstrapping one repository is logged
        and recorded; the remaining repositories are still processed.
        """
        outcomes: list[BootstrapOutcome] = []
        for repo in repos:
            try:
                outcome = await self.bootstrap(repo)
            except Exception as exc:  # noqa: BLE001 - isolate repository failures
                self._events.log_repository_crashed(repo.slug, exc)
                outcome = BootstrapOutcome(
                    repo_slug=repo.slug,
                    default_branch=StepResult(
                        status=StepStatus.FAILED,
                        detail=f"{type(exc).__name__}: {exc}",
                        error_category=categorize_error(exc),
                    ),
                )
            outcomes.append(outcome)
        return tuple(outcomes)

    async def _create_branch(self, repo: RepositoryRef, base: str) -> StepResult:
        try:
            sha = await self._client.get_branch_head_commit(repo.owner, repo.name, base)
            await self._client.create_branch(repo.owner, repo.name, WORKING_BRANCH, sha)
        except GitHubConflictError:
            self._events.log_branch_exists(repo.slug, WORKING_BRANCH)
            return StepResult(status=StepStatus.ALREADY_EXISTS, detail=WORKING_BRANCH)
        except _REMOTE_ERRORS as exc:
            self._events.log_step_failed(
                BootstrapEventType.BRANCH_FAILED, repo.slug, exc
            )
            return _failed(exc)

        self._events.log_branch_created(repo.slug, WORKING_BRANCH, sha)
        return StepResult(status=StepStatus.SUCCEEDED, detail=WORKING_BRANCH)

    async def _seed_files(
        self, repo: RepositoryRef
    ) -> tuple[tuple[FileSeedResult, ...], str | None]:
        try:
            # The walk reads from disk, so keep it off the event loop.
            template_files = await asyncio.to_thread(self._tree.files)
        except OSError as exc:
            self._events.log_step_failed(BootstrapEventType.SEED_FAILED, repo.slug, exc)
            return ((), str(exc))

        results = [await self._seed_file(repo, item) for item in template_files]
        return (tuple(results), None)

    async def _seed_file(
        self, repo: RepositoryRef, item: TemplateFile
    ) -> FileSeedResult:
        path = seed_destination(item.relative_path)
        try:
            await self._client.upsert_file_content(
                repo.owner,
                repo.name,
                path,
                item.content,
                branch=WORKING_BRANCH,
                message=f"Add {path}",
            )
        except _REMOTE_ERRORS as exc:
            self._events.log_step_failed(
                BootstrapEventType.FILE_FAILED, repo.slug, exc, path=path
            )
            return FileSeedResult(path=path, succeeded=False, reason=str(exc))

        self._events.log_file_seeded(repo.slug, path)
        return FileSeedResult(path=path, succeeded=True)

    async def _open_pull_request(self, repo: RepositoryRef, base: str) -> StepResult:
        try:
            url = await self._client.create_pull_request(
                repo.owner,
                repo.name,
                title=SETUP_PR_TITLE,
                head=WORKING_BRANCH,
                base=base,
                body=SETUP_PR_BODY,
            )
        except GitHubConflictError as exc:
            self._events.log_pull_request_exists(repo.slug, exc)
            return dataclasses.replace(_failed(exc), status=StepStatus.ALREADY_EXISTS)
        except _REMOTE_ERRORS as exc:
            self._events.log_step_failed(
                BootstrapEventType.PULL_REQUEST_FAILED, repo.slug, exc
            )
            return _failed(exc)

        self._events.log_pull_request_created(repo.slug, url)
        return StepResult(status=StepStatus.SUCCEEDED, detail=url)


class InstallationBootstrapService:
    """Turn installation webhook payloads into bootstrap runs."""

    def __init__(
        self,
        bootstrapper: RepositoryBootstrapper,
        *,
        event_logger: BootstrapEventLogger | None = None,
    ) -> None:
        """Configure the service with the bootstrapper to drive."""
        self._bootstrapper = bootstrapper
        self._events = event_logger or BootstrapEventLogger()

    async def handle(self, payload: dict[str, typ.Any]) -> InstallationOutcome:
        """Bootstrap every repository named by an installation payload.

        Raises
        ------
        PayloadError
            If the payload envelope is malformed.

        """
        try:
            normalized = normalize_installation(payload)
        except NoRepositoriesFoundError as exc:
            self._events.log_installation_empty(exc)
            return InstallationOutcome(shape=None, reason=str(exc))

        for entry in normalized.skipped:
            self._events.log_entry_skipped(entry.name, entry.reason)
        self._events.log_installation_received(
            normalized.shape, len(normalized.repositories)
        )

        outcomes = await self._bootstrapper.bootstrap_all(normalized.repositories)
        outcome = InstallationOutcome(
            shape=normalized.shape,
            outcomes=outcomes,
            skipped=tuple(entry.name for entry in normalized.skipped),
        )
        self._events.log_installation_completed(outcome)
        return outcome

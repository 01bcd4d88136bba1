"""Unit tests for RepositoryBootstrapper and InstallationBootstrapService."""

from __future__ import annotations

import threading
import typing as typ

import pytest

from quire.bootstrap import (
    SETUP_PR_TITLE,
    WORKING_BRANCH,
    InstallationBootstrapService,
    LocalTemplateTree,
    RepositoryBootstrapper,
    StepStatus,
)
from quire.github import GitHubAPIError, RepositoryRef
from tests.helpers.payloads import repositories_added

if typ.TYPE_CHECKING:
    from pathlib import Path

    from quire.bootstrap.seed import TemplateFile
    from tests.helpers.fake_github import FakeGitHubClient


@pytest.fixture
def seed_tree(tmp_path: Path) -> LocalTemplateTree:
    """Return a seed tree with two pull request templates."""
    (tmp_path / "pr_templates").mkdir()
    (tmp_path / "pr_templates" / "bug.md").write_text("## Bug Report")
    (tmp_path / "pr_templates" / "feature.md").write_text("## Feature")
    return LocalTemplateTree(tmp_path)


@pytest.fixture
def bootstrapper(
    fake_github: FakeGitHubClient, seed_tree: LocalTemplateTree
) -> RepositoryBootstrapper:
    """Return a bootstrapper wired to the fake GitHub and seed tree."""
    return RepositoryBootstrapper(fake_github, tree=seed_tree)


class TestRepositoryBootstrapper:
    """Tests for RepositoryBootstrapper.bootstrap."""

    @pytest.mark.asyncio
    async def test_fresh_repository_completes_every_step(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """Branch, seed files and setup pull request are all created."""
        state = fake_github.add_repository(widgets_repo, default_branch="trunk")
        state.branches["trunk"] = "sha-trunk"

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.completed, f"expected a complete run, got {outcome}"
        assert outcome.default_branch.detail == "trunk"
        assert outcome.branch.status is StepStatus.SUCCEEDED
        assert state.branches[WORKING_BRANCH] == "sha-trunk"
        assert state.file_text(
            ".github/pr_templates/bug.md", branch=WORKING_BRANCH
        ) == "## Bug Report"
        assert {result.path for result in outcome.files} == {
            ".github/pr_templates/bug.md",
            ".github/pr_templates/feature.md",
        }
        pull_request = state.pull_requests[0]
        assert pull_request.title == SETUP_PR_TITLE
        assert (pull_request.head, pull_request.base) == (WORKING_BRANCH, "trunk")
        assert outcome.pull_request_url == pull_request.url

    @pytest.mark.asyncio
    async def test_rerun_treats_existing_branch_and_pr_as_success(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """Bootstrapping twice leaves one branch and one pull request."""
        state = fake_github.add_repository(widgets_repo)
        await bootstrapper.bootstrap(widgets_repo)

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.branch.status is StepStatus.ALREADY_EXISTS
        assert outcome.pull_request.status is StepStatus.ALREADY_EXISTS
        assert outcome.completed
        assert outcome.pull_request_url is None
        assert len(state.pull_requests) == 1

    @pytest.mark.asyncio
    async def test_default_branch_failure_skips_remaining_steps(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """Without a default branch nothing else is attempted."""
        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.default_branch.status is StepStatus.FAILED
        assert outcome.default_branch.error_category == "not_found"
        assert outcome.branch.status is StepStatus.SKIPPED
        assert outcome.pull_request.status is StepStatus.SKIPPED
        assert fake_github.calls_to("create_branch") == []
        assert not outcome.completed

    @pytest.mark.asyncio
    async def test_file_failure_does_not_stop_other_steps(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """One failed upload is recorded; the other file and the PR proceed."""
        state = fake_github.add_repository(widgets_repo)
        fake_github.fail(
            "upsert_file_content",
            GitHubAPIError("too large", status_code=413),
            key=".github/pr_templates/bug.md",
        )

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert [result.path for result in outcome.failed_files] == [
            ".github/pr_templates/bug.md"
        ]
        assert outcome.failed_files[0].reason == "too large"
        assert state.file_text(
            ".github/pr_templates/feature.md", branch=WORKING_BRANCH
        ) == "## Feature"
        assert outcome.pull_request.status is StepStatus.SUCCEEDED
        assert not outcome.completed

    @pytest.mark.asyncio
    async def test_branch_failure_still_attempts_files_and_pr(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """Steps after a failed branch creation are still attempted."""
        fake_github.add_repository(widgets_repo)
        fake_github.fail("create_branch", GitHubAPIError("down", status_code=503))

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.branch.status is StepStatus.FAILED
        assert outcome.branch.error_category == "transient"
        assert len(fake_github.calls_to("upsert_file_content")) == 2
        assert len(fake_github.calls_to("create_pull_request")) == 1

    @pytest.mark.asyncio
    async def test_validation_rejections_are_failures_not_existing(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
        widgets_repo: RepositoryRef,
    ) -> None:
        """422 responses unrelated to existing targets leave the run incomplete."""
        fake_github.add_repository(widgets_repo)
        fake_github.fail(
            "create_branch",
            GitHubAPIError.http_error(
                "POST", "/repos/octo/widgets/git/refs", 422, "Object does not exist"
            ),
        )
        fake_github.fail(
            "create_pull_request",
            GitHubAPIError.http_error(
                "POST",
                "/repos/octo/widgets/pulls",
                422,
                f"Validation Failed; No commits between main and {WORKING_BRANCH}",
            ),
        )

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.branch.status is StepStatus.FAILED
        assert outcome.branch.error_category == "client_error"
        assert outcome.pull_request.status is StepStatus.FAILED
        assert outcome.pull_request_url is None
        assert not outcome.completed

    @pytest.mark.asyncio
    async def test_missing_seed_directory_is_recorded(
        self,
        fake_github: FakeGitHubClient,
        widgets_repo: RepositoryRef,
        tmp_path: Path,
    ) -> None:
        """An unreadable seed root is recorded and the PR is still attempted."""
        fake_github.add_repository(widgets_repo)
        bootstrapper = RepositoryBootstrapper(
            fake_github, tree=LocalTemplateTree(tmp_path / "missing")
        )

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert outcome.seed_error is not None
        assert outcome.files == ()
        assert outcome.pull_request.status is StepStatus.SUCCEEDED
        assert not outcome.completed

    @pytest.mark.asyncio
    async def test_seed_tree_is_read_off_the_event_loop(
        self,
        fake_github: FakeGitHubClient,
        widgets_repo: RepositoryRef,
        tmp_path: Path,
    ) -> None:
        """The seed directory walk runs in a worker thread."""
        loop_thread = threading.get_ident()
        walk_threads: list[int] = []

        class _RecordingTree(LocalTemplateTree):
            def files(self) -> list[TemplateFile]:
                walk_threads.append(threading.get_ident())
                return super().files()

        (tmp_path / "a.md").write_text("A")
        fake_github.add_repository(widgets_repo)
        bootstrapper = RepositoryBootstrapper(
            fake_github, tree=_RecordingTree(tmp_path)
        )

        outcome = await bootstrapper.bootstrap(widgets_repo)

        assert [result.path for result in outcome.files] == [".github/a.md"]
        assert len(walk_threads) == 1
        assert walk_threads[0] != loop_thread


class TestBootstrapAll:
    """Tests for RepositoryBootstrapper.bootstrap_all."""

    @pytest.mark.asyncio
    async def test_processes_repositories_in_order(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
    ) -> None:
        """Repositories are bootstrapped one after another in input order."""
        repos = [RepositoryRef("octo", name) for name in ("c", "a", "b")]
        for repo in repos:
            fake_github.add_repository(repo)

        outcomes = await bootstrapper.bootstrap_all(repos)

        assert [outcome.repo_slug for outcome in outcomes] == [
            "octo/c",
            "octo/a",
            "octo/b",
        ]
        started = [args[1] for args in fake_github.calls_to("get_repository")]
        assert started == ["c", "a", "b"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_isolated(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
    ) -> None:
        """A crash in one repository does not stop the next one."""
        first = RepositoryRef("octo", "first")
        second = RepositoryRef("octo", "second")
        fake_github.add_repository(first)
        fake_github.add_repository(second)
        fake_github.fail("get_repository", RuntimeError("kaboom"), key="octo/first")

        outcomes = await bootstrapper.bootstrap_all([first, second])

        assert outcomes[0].default_branch.status is StepStatus.FAILED
        assert outcomes[0].default_branch.detail == "RuntimeError: kaboom"
        assert outcomes[1].completed


class TestInstallationBootstrapService:
    """Tests for InstallationBootstrapService.handle."""

    @pytest.mark.asyncio
    async def test_added_repositories_bootstrap_under_account(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
    ) -> None:
        """Two added repositories under ``acme`` give two acme bootstraps."""
        for name in ("api", "web"):
            fake_github.add_repository(RepositoryRef("acme", name))
        service = InstallationBootstrapService(bootstrapper)

        outcome = await service.handle(repositories_added("api", "web", account="acme"))

        assert outcome.shape == "repositories_added"
        assert [result.repo_slug for result in outcome.outcomes] == [
            "acme/api",
            "acme/web",
        ]
        owners = {args[0] for args in fake_github.calls_to("get_repository")}
        assert owners == {"acme"}
        assert len(fake_github.calls_to("get_repository")) == 2

    @pytest.mark.asyncio
    async def test_empty_payload_produces_no_bootstrap(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
    ) -> None:
        """An installation naming no repositories does nothing remotely."""
        service = InstallationBootstrapService(bootstrapper)

        outcome = await service.handle({"repositories_added": []})

        assert outcome.shape is None
        assert outcome.outcomes == ()
        assert outcome.reason is not None
        assert fake_github.calls == []

    @pytest.mark.asyncio
    async def test_skipped_entries_are_reported(
        self,
        fake_github: FakeGitHubClient,
        bootstrapper: RepositoryBootstrapper,
    ) -> None:
        """Entries without an owner are listed as skipped."""
        fake_github.add_repository(RepositoryRef("octo", "api"))
        service = InstallationBootstrapService(bootstrapper)

        outcome = await service.handle(
            {"repositories": [{"name": "orphan"}, {"name": "api", "owner": "octo"}]}
        )

        assert outcome.skipped == ("orphan",)
        assert [result.repo_slug for result in outcome.outcomes] == ["octo/api"]

"""Unit tests for template resolution and pull request body updates."""

from __future__ import annotations

import base64
import typing as typ

import pytest

from quire.github import FileContent, GitHubAPIError, GitHubNotFoundError
from quire.templates import (
    PullRequestBodyUpdater,
    TemplateFetchFailedError,
    TemplateResolver,
    UpdateFailedError,
)
from quire.templates.resolver import decode_template

if typ.TYPE_CHECKING:
    from quire.github import RepositoryRef
    from tests.helpers.fake_github import FakeGitHubClient


class TestDecodeTemplate:
    """Tests for decode_template."""

    def test_decodes_base64_utf8(self) -> None:
        """Base64 content, including GitHub's line breaks, decodes to text."""
        encoded = base64.encodebytes("## Bug Report\n\nSteps: ✓\n".encode())
        text = decode_template(encoded.decode("ascii"), path="p.md")
        assert text == "## Bug Report\n\nSteps: ✓\n"

    def test_invalid_utf8_raises_fetch_failed(self) -> None:
        """Bytes that are not UTF-8 fail with the template path attached."""
        encoded = base64.b64encode(b"\xff\xfe\x00").decode("ascii")
        with pytest.raises(TemplateFetchFailedError) as excinfo:
            decode_template(encoded, path=".github/pr_templates/bug.md")
        assert excinfo.value.path == ".github/pr_templates/bug.md"
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


class TestTemplateResolver:
    """Tests for TemplateResolver.resolve."""

    @pytest.mark.asyncio
    async def test_returns_template_text(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """The template keyed by the prefix is read from the default branch."""
        fake_github.add_repository(widgets_repo)
        fake_github.add_file(
            widgets_repo, ".github/pr_templates/bug.md", "## Bug Report\n"
        )

        text = await TemplateResolver(fake_github).resolve(widgets_repo, "bug")

        assert text == "## Bug Report\n"
        assert fake_github.calls_to("get_file_content") == [
            ("octo", "widgets", ".github/pr_templates/bug.md", None)
        ]

    @pytest.mark.asyncio
    async def test_missing_template_raises_fetch_failed(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """A 404 for the template path maps to TemplateFetchFailedError."""
        fake_github.add_repository(widgets_repo)

        with pytest.raises(TemplateFetchFailedError) as excinfo:
            await TemplateResolver(fake_github).resolve(widgets_repo, "unknown")

        assert excinfo.value.reason == "template not found"
        assert excinfo.value.path == ".github/pr_templates/unknown.md"
        assert isinstance(excinfo.value.__cause__, GitHubNotFoundError)

    @pytest.mark.asyncio
    async def test_api_error_raises_fetch_failed(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """Other GitHub failures are wrapped with their message."""
        fake_github.add_repository(widgets_repo)
        fake_github.fail(
            "get_file_content", GitHubAPIError("boom", status_code=502)
        )

        with pytest.raises(TemplateFetchFailedError) as excinfo:
            await TemplateResolver(fake_github).resolve(widgets_repo, "bug")

        assert excinfo.value.reason == "boom"

    @pytest.mark.asyncio
    async def test_undecodable_content_raises_fetch_failed(
        self, widgets_repo: RepositoryRef
    ) -> None:
        """Content that is not valid base64 is reported as a fetch failure."""

        class _BrokenClient:
            async def get_file_content(
                self, owner: str, name: str, path: str, *, ref: str | None = None
            ) -> FileContent:
                del owner, name, path, ref
                return FileContent(content="!!not-base64!!", sha="abc")

        resolver = TemplateResolver(typ.cast("typ.Any", _BrokenClient()))
        with pytest.raises(TemplateFetchFailedError, match="undecodable"):
            await resolver.resolve(widgets_repo, "bug")

    @pytest.mark.asyncio
    async def test_non_base64_encoding_raises_fetch_failed(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """Files GitHub serves with ``encoding: none`` are not decoded as empty."""
        fake_github.add_repository(widgets_repo)
        fake_github.add_oversized_file(widgets_repo, ".github/pr_templates/big.md")

        with pytest.raises(TemplateFetchFailedError) as excinfo:
            await TemplateResolver(fake_github).resolve(widgets_repo, "big")

        assert excinfo.value.path == ".github/pr_templates/big.md"
        assert excinfo.value.reason == "unsupported encoding 'none'"


class TestPullRequestBodyUpdater:
    """Tests for PullRequestBodyUpdater.update."""

    @pytest.mark.asyncio
    async def test_replaces_body_verbatim(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """The body is sent exactly as given."""
        state = fake_github.add_repository(widgets_repo)
        await fake_github.create_pull_request(
            "octo", "widgets", title="t", head="h", base="main", body="old"
        )

        await PullRequestBodyUpdater(fake_github).update(
            widgets_repo, 1, "## Bug Report\n"
        )

        assert state.pull_requests[0].body == "## Bug Report\n"

    @pytest.mark.asyncio
    async def test_api_error_raises_update_failed(
        self, fake_github: FakeGitHubClient, widgets_repo: RepositoryRef
    ) -> None:
        """GitHub rejecting the update raises UpdateFailedError."""
        fake_github.add_repository(widgets_repo)
        fake_github.fail(
            "update_pull_request_body", GitHubAPIError("forbidden", status_code=403)
        )

        with pytest.raises(UpdateFailedError) as excinfo:
            await PullRequestBodyUpdater(fake_github).update(widgets_repo, 7, "x")

        assert excinfo.value.repo_slug == "octo/widgets"
        assert excinfo.value.number == 7
        assert excinfo.value.reason == "forbidden"

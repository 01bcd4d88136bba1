"""Shared fixtures for the Quire test suite."""

from __future__ import annotations

import pytest

from quire.github import RepositoryRef
from tests.helpers.fake_github import FakeGitHubClient


@pytest.fixture
def fake_github() -> FakeGitHubClient:
    """Return an empty in-memory GitHub."""
    return FakeGitHubClient()


@pytest.fixture
def widgets_repo() -> RepositoryRef:
    """Return the repository most tests operate on."""
    return RepositoryRef(owner="octo", name="widgets")


@pytest.fixture(autouse=True)
def _clear_quire_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host ``QUIRE_*`` settings from leaking into tests."""
    for name in (
        "QUIRE_GITHUB_TOKEN",
        "QUIRE_GITHUB_API_URL",
        "QUIRE_GITHUB_TIMEOUT_S",
        "QUIRE_WEBHOOK_SECRET",
        "QUIRE_SEED_TEMPLATES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

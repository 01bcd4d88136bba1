"""Overwrite a pull request's body with resolved template text."""

from __future__ import annotations

import typing as typ

from quire.github.errors import GitHubAPIError, GitHubResponseShapeError

from .errors import UpdateFailedError

if typ.TYPE_CHECKING:
    from quire.github.client import GitHubRepositoryClient
    from quire.github.models import RepositoryRef


class PullRequestBodyUpdater:
    """Replace pull-request bodies verbatim.

    Updates are last-writer-wins: two deliveries racing on the same pull
    request leave whichever body GitHub applied last.
    """

    def __init__(self, client: GitHubRepositoryClient) -> None:
        """Configure the updater with the GitHub client to write through."""
        self._client = client

    async def update(self, repo: RepositoryRef, number: int, body: str) -> None:
        """Set the body of ``repo`` pull request ``number`` to ``body``."""
        try:
            await self._client.update_pull_request_body(
                repo.owner, repo.name, number, body
            )
        except (GitHubAPIError, GitHubResponseShapeError) as exc:
            raise UpdateFailedError(repo.slug, number, str(exc)) from exc

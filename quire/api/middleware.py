"""Lifespan middleware closing the GitHub client on shutdown.

Usage
-----
::

    app = create_app(deps)
    app.add_middleware(GitHubClientLifespan(client))

"""

from __future__ import annotations

import typing as typ

from quire.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from quire.github.client import GitHubRESTClient

__all__ = ["GitHubClientLifespan"]

logger = get_logger(__name__)


class GitHubClientLifespan:
    """Falcon middleware that releases the GitHub HTTP pool at shutdown."""

    def __init__(self, client: GitHubRESTClient) -> None:
        """Initialize with the client whose resources must be released."""
        self._client = client

    async def process_shutdown(
        self, scope: dict[str, typ.Any], event: dict[str, typ.Any]
    ) -> None:
        """Close the GitHub client when the ASGI server shuts down."""
        del scope, event
        await self._client.aclose()
        log_info(logger, "Closed GitHub client")

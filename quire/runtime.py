"""Quire runtime entrypoint.

This module provides the ASGI application factory served by Granian. When
``QUIRE_GITHUB_TOKEN`` is set the app accepts webhook deliveries on
``/webhooks/github``; otherwise it starts in health-only mode.

Configuration is driven by environment variables:

- ``QUIRE_HOST``: Bind address (default ``0.0.0.0``)
- ``QUIRE_PORT``: Listen port (default ``8080``)
- ``QUIRE_LOG_LEVEL``: Log level (default ``INFO``)
- ``QUIRE_GITHUB_TOKEN``: GitHub token; enables webhook handling when set
- ``QUIRE_GITHUB_API_URL`` / ``QUIRE_GITHUB_TIMEOUT_S``: REST client settings
- ``QUIRE_WEBHOOK_SECRET``: Shared secret for signature verification
- ``QUIRE_SEED_TEMPLATES_PATH``: Override for the packaged seed templates

Run the service directly with ``python -m quire.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from quire.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid QUIRE_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment configuration.

    Returns
    -------
    falcon.asgi.App
        Health-only app when no GitHub token is configured, otherwise the
        full app with the webhook endpoint.

    """
    from quire.api.app import AppDependencies
    from quire.api.app import create_app as _create_api_app

    if not os.environ.get("QUIRE_GITHUB_TOKEN", "").strip():
        log_warning(logger, "QUIRE_GITHUB_TOKEN is not set; serving health only")
        return _create_api_app()

    from quire.api.factory import build_webhook_dependencies
    from quire.api.middleware import GitHubClientLifespan
    from quire.github import GitHubRESTClient, GitHubRESTConfig

    client = GitHubRESTClient(GitHubRESTConfig.from_env())
    webhooks = build_webhook_dependencies(client)
    if not webhooks.config.verifies_signatures:
        log_warning(
            logger,
            "QUIRE_WEBHOOK_SECRET is not set; webhook signatures are not verified",
        )

    app = _create_api_app(AppDependencies(webhooks=webhooks))
    app.add_middleware(GitHubClientLifespan(client))
    return app


def main() -> None:
    """Start the Quire runtime server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("QUIRE_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("QUIRE_PORT", "8080"))
    log_level_str = os.environ.get("QUIRE_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid QUIRE_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Quire runtime on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "quire.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()

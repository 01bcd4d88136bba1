"""Application factory for the Quire Falcon ASGI application.

Usage
-----
Create a health-only app (no GitHub credentials)::

    app = create_app()

Create a full app that accepts webhook deliveries::

    from quire.api.app import AppDependencies, create_app

    deps = AppDependencies(webhooks=webhook_dependencies)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from quire.api.errors import (
    InvalidInputError,
    InvalidSignatureError,
    handle_invalid_input,
    handle_invalid_signature,
)
from quire.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    from quire.api.webhooks import WebhookDependencies

__all__ = ["WEBHOOK_ROUTE", "AppDependencies", "create_app"]

WEBHOOK_ROUTE = "/webhooks/github"


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    webhooks
        Collaborators for the webhook endpoint. When ``None`` only the health
        endpoints are registered.

    """

    webhooks: WebhookDependencies | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None``, or when no webhook
        dependencies are given, only ``/health`` and ``/ready`` exist.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App()

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if dependencies is not None and dependencies.webhooks is not None:
        from quire.api.webhooks import GitHubWebhookResource

        app.add_route(WEBHOOK_ROUTE, GitHubWebhookResource(dependencies.webhooks))

    app.add_error_handler(InvalidSignatureError, handle_invalid_signature)
    app.add_error_handler(InvalidInputError, handle_invalid_input)

    return app

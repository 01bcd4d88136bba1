"""Webhook resource receiving GitHub App deliveries.

``POST /webhooks/github`` verifies the delivery signature, decodes the JSON
body and routes it on the ``X-GitHub-Event`` header and the payload's
``action``:

- ``pull_request`` / ``opened`` applies the prefix-keyed template;
- ``installation`` / ``created`` and ``installation_repositories`` /
  ``added`` bootstrap the covered repositories.

Other deliveries are acknowledged and ignored. Handled deliveries are
acknowledged with HTTP 202 however many remote steps failed; failures are
reported in the operator logs only.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon
import msgspec

from quire.api.errors import InvalidInputError
from quire.errors import PayloadError
from quire.logging import get_logger, log_info
from quire.templates import PullRequestOpenedEvent

from .signature import SIGNATURE_HEADER, verify_signature

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from falcon.asgi import Request, Response

    from quire.api.config import WebhookConfig
    from quire.bootstrap import InstallationBootstrapService
    from quire.templates import PullRequestTemplateService

__all__ = ["GitHubWebhookResource", "WebhookDependencies"]

logger = get_logger(__name__)

EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"

type _Handler = cabc.Callable[[dict[str, typ.Any]], cabc.Awaitable[None]]


@dc.dataclass(frozen=True, slots=True)
class WebhookDependencies:
    """Collaborators for ``GitHubWebhookResource``.

    Attributes
    ----------
    template_service
        Applies templates to newly opened pull requests.
    bootstrap_service
        Bootstraps repositories named by installation events.
    config
        Webhook settings, including the signature secret.

    """

    template_service: PullRequestTemplateService
    bootstrap_service: InstallationBootstrapService
    config: WebhookConfig


def _decode_payload(body: bytes) -> dict[str, typ.Any]:
    try:
        payload = msgspec.json.decode(body)
    except msgspec.DecodeError as exc:
        raise InvalidInputError(f"malformed JSON body: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidInputError("payload must be a JSON object")
    return payload


class GitHubWebhookResource:
    """Resource for ``POST /webhooks/github``."""

    def __init__(self, dependencies: WebhookDependencies) -> None:
        """Configure the resource and its routing table."""
        self._config = dependencies.config
        self._template_service = dependencies.template_service
        self._bootstrap_service = dependencies.bootstrap_service
        self._routes: dict[tuple[str, str], _Handler] = {
            ("pull_request", "opened"): self._on_pull_request_opened,
            ("installation", "created"): self._on_installation,
            ("installation_repositories", "added"): self._on_installation,
        }

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle one webhook delivery.

        Raises
        ------
        InvalidSignatureError
            If a secret is configured and the signature does not verify.
        InvalidInputError
            If the event header is missing or the body is not a JSON object.

        """
        body = await req.stream.read()
        if self._config.secret is not None:
            signature = req.get_header(SIGNATURE_HEADER)
            verify_signature(self._config.secret, body, signature)

        event = req.get_header(EVENT_HEADER)
        if not event:
            raise InvalidInputError("missing event header", field=EVENT_HEADER)
        delivery = req.get_header(DELIVERY_HEADER)

        payload = _decode_payload(body)
        raw_action = payload.get("action")
        action = raw_action if isinstance(raw_action, str) else ""

        handler = self._routes.get((event, action))
        if handler is None:
            log_info(
                logger,
                "Ignoring webhook delivery=%s event=%s action=%s",
                delivery,
                event,
                action,
            )
        else:
            log_info(
                logger,
                "Handling webhook delivery=%s event=%s action=%s",
                delivery,
                event,
                action,
            )
            try:
                await handler(payload)
            except PayloadError as exc:
                raise InvalidInputError(exc.reason, field=exc.event) from exc

        resp.status = falcon.HTTP_202
        resp.media = {
            "event": event,
            "action": action,
            "handled": handler is not None,
        }

    async def _on_pull_request_opened(self, payload: dict[str, typ.Any]) -> None:
        event = PullRequestOpenedEvent.from_payload(payload)
        await self._template_service.handle_opened(event)

    async def _on_installation(self, payload: dict[str, typ.Any]) -> None:
        await self._bootstrap_service.handle(payload)

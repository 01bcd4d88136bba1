"""Webhook delivery configuration.

>>> WebhookConfig().verifies_signatures
False

"""

from __future__ import annotations

import dataclasses as dc
import os


@dc.dataclass(frozen=True, slots=True)
class WebhookConfig:
    """Settings for the ``/webhooks/github`` endpoint.

    Attributes
    ----------
    secret
        Shared secret configured on the GitHub App. When ``None``, deliveries
        are accepted without signature verification.

    """

    secret: str | None = None

    @property
    def verifies_signatures(self) -> bool:
        """Return True when deliveries must carry a valid signature."""
        return self.secret is not None

    @classmethod
    def from_env(cls) -> WebhookConfig:
        """Read ``QUIRE_WEBHOOK_SECRET``; blank values disable verification."""
        raw = os.environ.get("QUIRE_WEBHOOK_SECRET", "")
        return cls(secret=raw.strip() or None)

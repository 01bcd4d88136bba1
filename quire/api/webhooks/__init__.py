"""GitHub webhook delivery endpoint."""

from __future__ import annotations

from .resources import GitHubWebhookResource, WebhookDependencies
from .signature import SIGNATURE_HEADER, compute_signature, verify_signature

__all__ = [
    "SIGNATURE_HEADER",
    "GitHubWebhookResource",
    "WebhookDependencies",
    "compute_signature",
    "verify_signature",
]

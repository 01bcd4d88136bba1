"""Verify GitHub webhook signatures.

GitHub signs each delivery body with HMAC-SHA256 using the App's webhook
secret and sends the hex digest as ``X-Hub-Signature-256: sha256=<digest>``.
"""

from __future__ import annotations

import hashlib
import hmac

from quire.api.errors import InvalidSignatureError

SIGNATURE_HEADER = "X-Hub-Signature-256"
_SIGNATURE_PREFIX = "sha256="


def compute_signature(secret: str, body: bytes) -> str:
    """Return the ``sha256=<hexdigest>`` header value for ``body``."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{_SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str, body: bytes, header: str | None) -> None:
    """Check ``header`` against the signature of ``body``.

    Raises
    ------
    InvalidSignatureError
        If the header is missing, malformed or does not match.

    """
    if not header:
        raise InvalidSignatureError(f"missing {SIGNATURE_HEADER} header")
    if not header.startswith(_SIGNATURE_PREFIX):
        raise InvalidSignatureError("signature must use sha256")
    expected = compute_signature(secret, body).encode("ascii")
    # Headers may carry non-ASCII text, which compare_digest rejects on str.
    if not hmac.compare_digest(expected, header.encode("utf-8")):
        raise InvalidSignatureError("signature does not match payload")

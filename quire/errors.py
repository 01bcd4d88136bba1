"""Base exception shared by every Quire error family."""

from __future__ import annotations


class QuireError(Exception):
    """Base class for domain errors raised by Quire.

    Transport errors raised by :mod:`quire.github` stay separate so that
    callers can tell a remote failure from a rejected input.
    """


class PayloadError(QuireError):
    """Raised when a webhook payload lacks the fields an event requires."""

    def __init__(self, event: str, reason: str) -> None:
        """Initialise with the event name and the validation failure."""
        self.event = event
        self.reason = reason
        super().__init__(f"Invalid {event} payload: {reason}")

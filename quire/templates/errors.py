"""Errors raised while applying a pull-request template."""

from __future__ import annotations

from quire.errors import QuireError


class TemplateError(QuireError):
    """Base class for pull-request template errors."""


class NoPrefixFoundError(TemplateError):
    """Raised when a pull-request title has no ``[prefix]`` span."""

    def __init__(self, title: str) -> None:
        """Initialise with the title that lacked a prefix."""
        self.title = title
        super().__init__(f"No [prefix] found in pull request title: {title!r}")


class UnsafePrefixError(TemplateError):
    """Raised when a prefix could escape the template directory."""

    def __init__(self, prefix: str) -> None:
        """Initialise with the rejected prefix."""
        self.prefix = prefix
        super().__init__(f"Refusing unsafe template prefix: {prefix!r}")


class TemplateFetchFailedError(TemplateError):
    """Raised when a template cannot be fetched or decoded.

    The underlying cause is chained via ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialise with the template path and a short reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to fetch template {path}: {reason}")


class UpdateFailedError(TemplateError):
    """Raised when GitHub rejects a pull-request body update."""

    def __init__(self, repo_slug: str, number: int, reason: str) -> None:
        """Initialise with the pull request location and a short reason."""
        self.repo_slug = repo_slug
        self.number = number
        self.reason = reason
        super().__init__(f"Failed to update {repo_slug}#{number}: {reason}")

"""Resolve a title prefix to template text stored in the repository."""

from __future__ import annotations

import base64
import binascii
import typing as typ

from quire.github.errors import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubResponseShapeError,
)

from .errors import TemplateFetchFailedError

if typ.TYPE_CHECKING:
    from quire.github.client import GitHubRepositoryClient
    from quire.github.models import RepositoryRef

TEMPLATE_DIRECTORY = ".github/pr_templates"
TEMPLATE_SUFFIX = ".md"
BASE64_ENCODING = "base64"


def template_path(prefix: str) -> str:
    """Return the repository path of the template keyed by ``prefix``.

    >>> template_path("bug")
    '.github/pr_templates/bug.md'

    """
    return f"{TEMPLATE_DIRECTORY}/{prefix}{TEMPLATE_SUFFIX}"


def decode_template(content: str, *, path: str) -> str:
    """Decode base64 file content from GitHub into UTF-8 text."""
    try:
        raw = base64.b64decode(content)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise TemplateFetchFailedError(path, f"undecodable content ({exc})") from exc


class TemplateResolver:
    """Fetch and decode pull-request templates from a repository."""

    def __init__(self, client: GitHubRepositoryClient) -> None:
        """Configure the resolver with the GitHub client to read through."""
        self._client = client

    async def resolve(self, repo: RepositoryRef, prefix: str) -> str:
        """Return the text of the template keyed by ``prefix`` in ``repo``.

        Raises
        ------
        TemplateFetchFailedError
            If the file is missing, cannot be decoded, or GitHub fails.
            GitHub omits the content of files over 1 MB and reports
            ``encoding: none``; such files are refused rather than applied
            as an empty body.

        """
        path = template_path(prefix)
        try:
            stored = await self._client.get_file_content(repo.owner, repo.name, path)
        except GitHubNotFoundError as exc:
            raise TemplateFetchFailedError(path, "template not found") from exc
        except (GitHubAPIError, GitHubResponseShapeError) as exc:
            raise TemplateFetchFailedError(path, str(exc)) from exc

        if stored.encoding != BASE64_ENCODING:
            raise TemplateFetchFailedError(
                path, f"unsupported encoding {stored.encoding!r}"
            )
        return decode_template(stored.content, path=path)

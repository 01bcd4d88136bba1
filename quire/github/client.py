"""GitHub REST client used by the template and bootstrap services."""

from __future__ import annotations

import base64
import dataclasses
import os
import typing as typ
from urllib.parse import quote

import httpx

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubNotFoundError,
    GitHubResponseShapeError,
)
from .models import FileContent, RepositoryMetadata

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_API_VERSION = "2022-11-28"


class GitHubRepositoryClient(typ.Protocol):
    """Remote operations Quire needs from GitHub."""

    async def get_repository(self, owner: str, name: str) -> RepositoryMetadata:
        """Return repository metadata, including the default branch."""
        ...

    async def get_branch_head_commit(self, owner: str, name: str, branch: str) -> str:
        """Return the commit SHA that ``branch`` points at."""
        ...

    async def create_branch(
        self, owner: str, name: str, branch: str, from_sha: str
    ) -> None:
        """Create ``refs/heads/<branch>`` at ``from_sha``.

        Raises :class:`~quire.github.errors.GitHubConflictError` when the
        branch already exists. Other rejections, such as an unknown SHA,
        raise a plain :class:`~quire.github.errors.GitHubAPIError`.
        """
        ...

    async def get_file_content(
        self, owner: str, name: str, path: str, *, ref: str | None = None
    ) -> FileContent:
        """Return the stored content of ``path``.

        Raises :class:`~quire.github.errors.GitHubNotFoundError` when the
        file does not exist.
        """
        ...

    async def upsert_file_content(  # noqa: PLR0913
        self,
        owner: str,
        name: str,
        path: str,
        content: bytes,
        *,
        branch: str,
        message: str,
    ) -> None:
        """Create or update ``path`` on ``branch`` with a single commit."""
        ...

    async def create_pull_request(  # noqa: PLR0913
        self,
        owner: str,
        name: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str,
    ) -> str:
        """Open a pull request and return its HTML URL."""
        ...

    async def update_pull_request_body(
        self, owner: str, name: str, number: int, body: str
    ) -> None:
        """Replace the body of pull request ``number``."""
        ...


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise GitHubConfigError.invalid_timeout(raw) from exc
    if value <= 0:
        raise GitHubConfigError.invalid_timeout(raw)
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRESTConfig:
    """Configuration for the GitHub REST API client."""

    token: str
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = "quire/0.1"

    @classmethod
    def from_env(cls) -> GitHubRESTConfig:
        """Build configuration from ``QUIRE_GITHUB_*`` environment variables.

        ``QUIRE_GITHUB_TOKEN`` is required. ``QUIRE_GITHUB_API_URL`` points the
        client at GitHub Enterprise, and ``QUIRE_GITHUB_TIMEOUT_S`` sets the
        per-request timeout in seconds.
        """
        token = os.environ.get("QUIRE_GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()

        api_url = (
            os.environ.get("QUIRE_GITHUB_API_URL", "").strip() or _DEFAULT_API_URL
        )
        raw_timeout = os.environ.get("QUIRE_GITHUB_TIMEOUT_S", "").strip()
        timeout_s = _parse_timeout(raw_timeout) if raw_timeout else _DEFAULT_TIMEOUT_S
        return cls(token=token, api_url=api_url.rstrip("/"), timeout_s=timeout_s)


def _repo_path(owner: str, name: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}"


def _contents_path(owner: str, name: str, path: str) -> str:
    return f"{_repo_path(owner, name)}/contents/{quote(path, safe='/')}"


def _require_str(payload: dict[str, typ.Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str):
        raise GitHubResponseShapeError.missing(field)
    return value


def _error_detail(response: httpx.Response) -> str | None:
    """Join ``message`` and every ``errors[].message`` from an error body.

    Validation failures carry the useful text in ``errors``, for example
    ``"A pull request already exists for octo:branch."`` under a top-level
    ``"Validation Failed"``.
    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    parts: list[str] = []
    message = payload.get("message")
    if isinstance(message, str):
        parts.append(message)
    errors = payload.get("errors")
    if isinstance(errors, list):
        parts.extend(
            item["message"]
            for item in errors
            if isinstance(item, dict) and isinstance(item.get("message"), str)
        )
    return "; ".join(parts) or None


class GitHubRESTClient:
    """GitHub REST v3 implementation of :class:`GitHubRepositoryClient`."""

    def __init__(
        self,
        config: GitHubRESTConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": _API_VERSION,
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def get_repository(self, owner: str, name: str) -> RepositoryMetadata:
        """Return repository metadata, including the default branch."""
        payload = await self._request("GET", _repo_path(owner, name))
        default_branch = _require_str(payload, "default_branch")
        return RepositoryMetadata(default_branch=default_branch)

    async def get_branch_head_commit(self, owner: str, name: str, branch: str) -> str:
        """Return the commit SHA at the tip of ``branch``."""
        path = f"{_repo_path(owner, name)}/git/ref/heads/{quote(branch, safe='/')}"
        payload = await self._request("GET", path)
        target = payload.get("object")
        if not isinstance(target, dict):
            raise GitHubResponseShapeError.missing("object")
        return _require_str(target, "sha")

    async def create_branch(
        self, owner: str, name: str, branch: str, from_sha: str
    ) -> None:
        """Create ``refs/heads/<branch>`` pointing at ``from_sha``."""
        await self._request(
            "POST",
            f"{_repo_path(owner, name)}/git/refs",
            json={"ref": f"refs/heads/{branch}", "sha": from_sha},
        )

    async def get_file_content(
        self, owner: str, name: str, path: str, *, ref: str | None = None
    ) -> FileContent:
        """Return the base64 content and blob SHA stored at ``path``."""
        params = {"ref": ref} if ref is not None else None
        payload = await self._request(
            "GET", _contents_path(owner, name, path), params=params
        )
        encoding = payload.get("encoding")
        return FileContent(
            content=_require_str(payload, "content"),
            sha=_require_str(payload, "sha"),
            encoding=encoding if isinstance(encoding, str) else "base64",
        )

    async def upsert_file_content(  # noqa: PLR0913
        self,
        owner: str,
        name: str,
        path: str,
        content: bytes,
        *,
        branch: str,
        message: str,
    ) -> None:
        """Create ``path`` on ``branch`` or update it when it already exists.

        GitHub requires the current blob SHA to update a file, so the
        existing file is looked up on the same branch first.
        """
        body: dict[str, typ.Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        try:
            existing = await self.get_file_content(owner, name, path, ref=branch)
        except GitHubNotFoundError:
            existing = None
        if existing is not None:
            body["sha"] = existing.sha

        await self._request("PUT", _contents_path(owner, name, path), json=body)

    async def create_pull_request(  # noqa: PLR0913
        self,
        owner: str,
        name: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str,
    ) -> str:
        """Open a pull request and return its HTML URL."""
        payload = await self._request(
            "POST",
            f"{_repo_path(owner, name)}/pulls",
            json={"title": title, "head": head, "base": base, "body": body},
        )
        return _require_str(payload, "html_url")

    async def update_pull_request_body(
        self, owner: str, name: str, number: int, body: str
    ) -> None:
        """Replace the body of pull request ``number``."""
        await self._request(
            "PATCH",
            f"{_repo_path(owner, name)}/pulls/{number}",
            json={"body": body},
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, typ.Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, typ.Any]:
        """Send a request and return the decoded JSON object."""
        url = f"{self._config.api_url}{path}"
        try:
            response = await self._client.request(
                method, url, json=json, params=params
            )
        except httpx.HTTPError as exc:
            raise GitHubAPIError.transport(method, path, exc) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(
                method, path, response.status_code, _error_detail(response)
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise GitHubResponseShapeError.missing("response") from exc
        if not isinstance(payload, dict):
            raise GitHubResponseShapeError.missing("response")
        return payload

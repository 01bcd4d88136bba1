"""Build webhook dependencies from environment configuration.

Usage
-----
::

    from quire.api.factory import build_webhook_dependencies

    deps = build_webhook_dependencies(GitHubRESTClient(GitHubRESTConfig.from_env()))

"""

from __future__ import annotations

import typing as typ

from quire.api.config import WebhookConfig
from quire.api.webhooks import WebhookDependencies
from quire.bootstrap import (
    BootstrapConfig,
    InstallationBootstrapService,
    LocalTemplateTree,
    RepositoryBootstrapper,
)
from quire.templates import PullRequestTemplateService

if typ.TYPE_CHECKING:
    from quire.github.client import GitHubRepositoryClient

__all__ = ["build_webhook_dependencies"]


def build_webhook_dependencies(
    client: GitHubRepositoryClient,
    *,
    webhook_config: WebhookConfig | None = None,
    bootstrap_config: BootstrapConfig | None = None,
) -> WebhookDependencies:
    """Wire the template and bootstrap services around ``client``.

    Configuration not passed explicitly is read from the environment.
    """
    bootstrap_config = bootstrap_config or BootstrapConfig.from_env()
    bootstrapper = RepositoryBootstrapper(
        client,
        tree=LocalTemplateTree(bootstrap_config.seed_root),
    )
    return WebhookDependencies(
        template_service=PullRequestTemplateService(client),
        bootstrap_service=InstallationBootstrapService(bootstrapper),
        config=webhook_config or WebhookConfig.from_env(),
    )

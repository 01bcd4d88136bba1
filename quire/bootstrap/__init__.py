"""Repository bootstrap: seed new installations with template files."""

from __future__ import annotations

from .config import BootstrapConfig
from .models import (
    SETUP_PR_TITLE,
    WORKING_BRANCH,
    BootstrapOutcome,
    FileSeedResult,
    InstallationOutcome,
    StepResult,
    StepStatus,
    seed_destination,
)
from .observability import BootstrapEventLogger, BootstrapEventType
from .seed import DEFAULT_SEED_ROOT, LocalTemplateTree, TemplateFile
from .service import InstallationBootstrapService, RepositoryBootstrapper

__all__ = [
    "DEFAULT_SEED_ROOT",
    "SETUP_PR_TITLE",
    "WORKING_BRANCH",
    "BootstrapConfig",
    "BootstrapEventLogger",
    "BootstrapEventType",
    "BootstrapOutcome",
    "FileSeedResult",
    "InstallationBootstrapService",
    "InstallationOutcome",
    "LocalTemplateTree",
    "RepositoryBootstrapper",
    "StepResult",
    "StepStatus",
    "TemplateFile",
    "seed_destination",
]

"""Prefix-keyed pull-request templates."""

from __future__ import annotations

from .errors import (
    NoPrefixFoundError,
    TemplateError,
    TemplateFetchFailedError,
    UnsafePrefixError,
    UpdateFailedError,
)
from .models import PullRequestOpenedEvent, TemplateApplyOutcome, TemplateApplyStatus
from .observability import TemplateEventLogger, TemplateEventType
from .prefix import extract_prefix, validate_prefix
from .resolver import TemplateResolver, template_path
from .service import PullRequestTemplateService
from .updater import PullRequestBodyUpdater

__all__ = [
    "NoPrefixFoundError",
    "PullRequestBodyUpdater",
    "PullRequestOpenedEvent",
    "PullRequestTemplateService",
    "TemplateApplyOutcome",
    "TemplateApplyStatus",
    "TemplateError",
    "TemplateEventLogger",
    "TemplateEventType",
    "TemplateFetchFailedError",
    "TemplateResolver",
    "UnsafePrefixError",
    "UpdateFailedError",
    "extract_prefix",
    "template_path",
    "validate_prefix",
]

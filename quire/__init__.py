"""Quire: prefix-keyed pull request templates for GitHub repositories."""

from __future__ import annotations

__version__ = "0.1.0"

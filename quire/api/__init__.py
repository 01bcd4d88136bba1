"""Quire HTTP API layer.

This package provides the Falcon ASGI application serving the health probes
and the GitHub webhook endpoint.

Usage
-----
Create and run the application::

    from quire.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # accepts webhook deliveries
"""

from quire.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]

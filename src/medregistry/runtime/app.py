from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api import create_api_app
from ..core.config import Settings
from ..core.registry import InMemoryRegistry
from .web import mount_frontend

_LOGGER = logging.getLogger(__name__)


def create_app(registry: InMemoryRegistry | None = None, *, settings: Settings | None = None) -> FastAPI:
    """Create the full app: API + login front-end."""

    app = create_api_app(registry, settings=settings)

    # API-only still works when the package was installed without its static files.
    try:
        mount_frontend(app)
    except FileNotFoundError as e:
        _LOGGER.warning("serving API only: %s", e)

    return app

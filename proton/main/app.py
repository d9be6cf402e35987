"""
Composition root - Main Layer

Builds a configured ``Application`` from settings. The ASGI factory can be
served directly:

    uvicorn --factory proton.main.app:create_asgi_app
"""

from typing import Optional

from proton.main.application import Application
from proton.main.config import AppSettings, get_settings
from proton.presentation.asgi import ASGIAdapter
from proton.shared import get_logger, update_logging_from_settings

logger = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> Application:
    """
    Create and configure the application kernel.

    Returns:
        Application: kernel with config seeded from ``settings``
    """
    settings = settings or get_settings()

    update_logging_from_settings(settings)

    application = Application(debug=settings.kernel.debug)
    application.set_config("title", settings.kernel.title)
    application.set_config("environment", settings.environment.value)

    logger.info(
        "kernel.created",
        title=settings.kernel.title,
        environment=settings.environment.value,
        debug=settings.kernel.debug,
    )
    return application


def create_asgi_app(settings: Optional[AppSettings] = None) -> ASGIAdapter:
    return ASGIAdapter(create_app(settings))

"""
Main entrypoint for the Survey API.

``create_app`` builds and configures the FastAPI application: logging,
the record store, error handlers and the resource routers.  An
instance is created at import time as ``app`` so ASGI servers can
discover it, e.g.::

    uvicorn survey_api.app.main:app --reload

Tests and embedding applications call ``create_app`` with an explicit
``Settings`` instance instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.error_handlers import register_error_handlers
from .api.router import build_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Apply migrations on start-up."""
    app.state.db.init()
    logger.info("%s started (database %s)", app.title, app.state.db.path)
    yield
    logger.info("%s shutting down", app.title)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment at import time.

    Returns
    -------
    FastAPI
        A configured application.  The database schema is created when
        the application starts.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)

    register_error_handlers(app)
    app.include_router(build_router(settings), prefix="/api")
    return app


app = create_app()

"""
Web front end application factory.

Server-rendered pages over the same user store as the JSON API, with a
signed-cookie session for the logged-in user and flash messages.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware
from starlette.templating import Jinja2Templates

from shared.config import get_settings
from shared.database import close_connection_pool

from .middleware import client_ip_middleware
from .routes import router

logger = logging.getLogger(__name__)

TEMPLATES_DIR = (Path(__file__).parent / "templates").resolve()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Starting web front end on %s:%d", settings.host, settings.web_port)
    yield
    close_connection_pool()


def create_web_app() -> FastAPI:
    """
    Create and configure the web front end.

    Returns:
        Configured FastAPI instance serving HTML
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} Web",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    templates_dir = settings.templates_dir or str(TEMPLATES_DIR)
    app.state.templates = Jinja2Templates(directory=templates_dir)

    # Last added runs first: the session must be loaded before the IP middleware
    # and routes see the request.
    app.middleware("http")(client_ip_middleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=not settings.debug,
    )

    app.include_router(router)
    return app


# Application instance for uvicorn
app = create_web_app()

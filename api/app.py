"""
FastAPI application factory.

Creates and configures the JSON API application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.database import close_connection_pool
from modules.auth.routes import router as auth_router
from modules.users.routes import router as users_router

from .models.errors import ValidationErrorResponse
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%d", settings.app_name, settings.host, settings.api_port)
    yield
    # Shutdown
    close_connection_pool()
    logger.info("Shutting down %s", settings.app_name)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed requests as 400 rather than FastAPI's default 422.

    Covers bad path ids, undecodable JSON and bodies with unknown fields.
    """
    body = ValidationErrorResponse(detail=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="User management API with JWT authentication",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, tags=["auth"])
    app.include_router(users_router, prefix="/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()

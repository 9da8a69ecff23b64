"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CVBuilderError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from shared.logging_config import configure_logging, safe_context

from .dependencies import ServiceContainer
from .middleware.context import RequestContextMiddleware
from .middleware.csrf import enforce_csrf
from .models.errors import ErrorResponse
from .routes import health, seo
from modules.agency.routes import router as agency_router
from modules.billing.routes import router as billing_router, webhook_router
from modules.cv.routes import public_router as public_cv_router, router as cv_router
from modules.feedback.routes import router as feedback_router
from modules.profiles.routes import page_router as profile_pages, router as profile_router
from modules.security.routes import router as security_router

logger = logging.getLogger(__name__)

# Most specific first
STATUS_BY_ERROR: list[tuple[type[CVBuilderError], int]] = [
    (ExternalServiceError, 500),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
    (NotFoundError, 404),
]

GENERIC_ERROR = "Internal server error"


def status_for(exc: CVBuilderError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def handle_app_error(request: Request, exc: CVBuilderError) -> JSONResponse:
    """Map the exception hierarchy to ``{success: false, error}`` bodies."""
    status_code = status_for(exc)
    context = getattr(request.state, "context", None)
    request_id = context.request_id if context else "-"

    if status_code >= 500:
        logger.error(
            "[%s] %s %s failed: %s",
            request_id,
            request.method,
            request.url.path,
            safe_context(code=exc.code, message=exc.message, details=exc.details),
        )
    else:
        logger.info("[%s] %s %s -> %d (%s)", request_id, request.method, request.url.path, status_code, exc.code)

    # Backend text never reaches the client
    message = GENERIC_ERROR if isinstance(exc, ExternalServiceError) else exc.message
    body = ErrorResponse(error=message, reason=exc.details.get("reason") if status_code == 401 else None)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()]
    message = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(ErrorResponse(error=message).model_dump(exclude_none=True), status_code=400)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = app.state.container.settings
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    app.state.container.close()


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Services to use; a default one is built from settings

    Returns:
        Configured FastAPI instance
    """
    container = container or ServiceContainer(get_settings())
    settings = container.settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="CV builder backend: sessions, CSRF, profiles and CV data",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    app.add_exception_handler(CVBuilderError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.add_middleware(RequestContextMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    csrf = [Depends(enforce_csrf)]

    # Public and browser/provider-originated routes: no CSRF
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(seo.router, tags=["seo"])
    app.include_router(security_router, prefix="/api", tags=["security"])
    app.include_router(webhook_router, prefix="/api/stripe", tags=["billing"])
    app.include_router(public_cv_router, prefix="/api/cv", tags=["cv"])

    # Application data
    app.include_router(profile_pages, tags=["profile"], dependencies=csrf)
    app.include_router(profile_router, prefix="/api", tags=["profile"], dependencies=csrf)
    app.include_router(cv_router, prefix="/api/content-editor", tags=["cv"], dependencies=csrf)
    app.include_router(agency_router, prefix="/api/agency", tags=["agency"], dependencies=csrf)
    app.include_router(billing_router, prefix="/api/stripe", tags=["billing"], dependencies=csrf)
    app.include_router(feedback_router, prefix="/api", tags=["feedback"], dependencies=csrf)

    return app

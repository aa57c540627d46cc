"""FastAPI application factory and ASGI entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from employee_api import __version__
from employee_api.config import Settings, get_settings
from employee_api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from employee_api.routers import employees
from employee_api.security.rate_limit import limiter
from employee_api.utils.secure_logging import configure_logging

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# Applied unless the route set its own; employee records carry personal data
DEFAULT_RESPONSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store, max-age=0",
    "Vary": "Accept, Authorization, Origin",
}

HSTS_HEADER = "max-age=31536000; includeSubDomains"
RATE_LIMIT_RETRY_AFTER_SECONDS = 60


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        for name, value in DEFAULT_RESPONSE_HEADERS.items():
            response.headers.setdefault(name, value)
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = HSTS_HEADER
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and release pooled connections on shutdown."""
    logger.info(f"{app.title} {app.version} starting")
    yield
    from employee_api.database import engine

    await engine.dispose()
    logger.info(f"{app.title} stopped")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with RFC 7807 problem details and a Retry-After header."""
    logger.warning(f"Rate limit exceeded on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "type": "https://datatracker.ietf.org/doc/html/rfc6585#section-4",
            "title": "Too many requests",
            "status": 429,
            "detail": "Rate limit exceeded",
            "instance": request.url.path,
        },
        headers={
            "Content-Type": "application/problem+json",
            "Retry-After": str(RATE_LIMIT_RETRY_AFTER_SECONDS),
        },
    )


def _allowed_origins(settings: Settings) -> list[str]:
    """CORS origins from settings.

    Raises:
        ValueError: If a wildcard is configured, which credentialed CORS forbids
    """
    if "*" in settings.cors_origins_list:
        raise ValueError("CORS_ORIGINS must list explicit origins; '*' is not allowed.")
    return [
        origin
        for origin in settings.cors_origins_list
        if origin.startswith(("http://", "https://"))
    ]


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Create, read, update and deactivate employee records",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Added last so it runs first on incoming requests
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
    )

    app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "healthy"}

    return app


app = create_app()

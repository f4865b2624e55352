from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from jarvis_api.core.config import Settings, get_settings
from jarvis_api.core.errors import error_response, validation_response
from jarvis_api.core.log import configure_logging
from jarvis_api.core.rate_limiter import RateLimiter, rate_limit_api
from jarvis_api.db.connection import ConnectionMonitor, ConnectionState
from jarvis_api.db.create_tables import create_all
from jarvis_api.db.session import get_engine
from jarvis_api.repositories.entity_repository import (
    contact_repository,
    faq_repository,
    product_repository,
)
from jarvis_api.repositories.sql_repository import SQLRepository
from jarvis_api.routers import contact as contact_router
from jarvis_api.routers import faqs as faqs_router
from jarvis_api.routers import health as health_router
from jarvis_api.routers import pages as pages_router
from jarvis_api.routers import products as products_router
from jarvis_api.routers import seed as seed_router
from jarvis_api.services.seed_service import SeedService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
            "font-src 'self' https://fonts.gstatic.com; "
            "img-src 'self' data: https: blob:; "
            "script-src 'self' 'unsafe-inline'; "
            "connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Request log for non-production runs: method, path, status and duration."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


def _install_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and request.url.path.startswith("/api"):
            message = "API endpoint not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
            details.append(f'"{loc}" {err.get("msg", "is invalid")}')
        return validation_response(details)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response("Internal server error", settings, exc=exc)


def create_app(
    settings: Settings | None = None,
    *,
    store: SQLRepository | None = None,
    connection_state: ConnectionState | None = None,
    start_monitor: bool = True,
) -> FastAPI:
    """Build the API application.

    ``start_monitor`` controls whether the lifespan opens the database
    connection (with retries) and creates the tables; tests that prepare their
    own database pass False.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    state = connection_state or ConnectionState()
    store = store or SQLRepository()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        monitor = None
        if start_monitor:
            monitor = ConnectionMonitor(
                get_engine(),
                state,
                retry_delay=settings.db_retry_delay_seconds,
                on_connect=create_all,
            )
            monitor.start()
        logger.info("Server starting (environment: %s)", settings.app_env)
        try:
            yield
        finally:
            logger.info("Shutting down gracefully...")
            if monitor is not None:
                monitor.stop()
                get_engine().dispose()
                logger.info("Database connection closed.")

    app = FastAPI(title="J.A.R.V.I.S Showcase API", lifespan=lifespan)
    app.state.settings = settings
    app.state.connection_state = state
    app.state.rate_limiter = RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_seconds)
    app.state.products_repository = product_repository(store)
    app.state.faqs_repository = faq_repository(store)
    app.state.contacts_repository = contact_repository(store)
    app.state.seed_service = SeedService(
        store=store,
        products=app.state.products_repository,
        faqs=app.state.faqs_repository,
    )

    if settings.cors_allow_all or settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*" if settings.cors_allow_all else None,
            allow_origins=[] if settings.cors_allow_all else sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_production)
    if not settings.is_production:
        app.add_middleware(RequestLogMiddleware)
    _install_error_handlers(app, settings)

    api = APIRouter(prefix="/api", dependencies=[Depends(rate_limit_api)])
    api.include_router(health_router.router)
    api.include_router(products_router.router)
    api.include_router(faqs_router.router)
    api.include_router(contact_router.router)
    api.include_router(seed_router.router)
    app.include_router(api)
    app.include_router(pages_router.router)
    return app

import hmac
import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes.assets import router as assets_router
from app.api.routes.departments import router as departments_router
from app.api.routes.employees import router as employees_router
from app.api.routes.health import router as health_router
from app.api.routes.maintenance_records import router as maintenance_records_router
from app.api.routes.transactions import router as transactions_router
from app.core.config import settings
from app.core.db import reset_async_engine
from app.core.errors import AssetApiError, ValidationError, get_status_code
from app.core.observability import (
    ObservabilityMiddleware,
    configure_structured_logging,
    get_request_id,
    get_user_id,
    metrics_endpoint,
)
from app.core.security import close_async_http_client
from app.core.validators import field_alias, field_label

# Configure structured logging before creating logger
if settings.observability_structured_logs:
    configure_structured_logging(settings.app_log_level)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# Location segments FastAPI prepends to request validation errors
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


_SENSITIVE_PATTERNS = [
    r"[/\\][\w/-]+\.py",  # File paths
    r"SELECT.*FROM",  # SQL queries
    r"INSERT INTO.*VALUES",
    r"UPDATE.*SET",
    r"DELETE FROM",
    r"table\s*[:=]\s*\w+",  # Table references
]


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        if any(re.search(pattern, value, re.IGNORECASE) for pattern in _SENSITIVE_PATTERNS):
            return "[REDACTED]"
        return value
    if isinstance(value, dict):
        return {key: _sanitize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_sanitize_value(item) for item in value]
    return value


def _sanitize_error_details(details: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize error details to prevent information leakage in production.

    Removes file paths, SQL fragments and table references. Outside
    production the details are returned unchanged.
    """
    if settings.app_env != "prod":
        return details
    return _sanitize_value(details)


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": get_request_id(),
        "user_id": get_user_id() or "anonymous",
    }


def _validation_details(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """
    Group pydantic errors by field.

    Keys are the wire (camelCase) names; messages raised by our validators are
    used verbatim.
    """
    details: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        if not loc or error.get("type") == "json_invalid":
            field = "body"
        else:
            field = field_alias(loc[0])

        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        elif error.get("type") == "missing":
            message = f"{field_label(field)} is required."
        else:
            message = error.get("msg", "Invalid value.")

        details.setdefault(field, []).append(message)
    return details


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the database pool and the JWKS HTTP client on shutdown."""
    yield
    await reset_async_engine()
    await close_async_http_client()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Sets up:
    - Structured logging with correlation IDs
    - CORS middleware
    - Observability middleware (metrics, request tracking)
    - Exception handlers for domain errors
    - API routers
    - Metrics endpoint for Prometheus scraping
    """
    app = FastAPI(
        title="Asset Management API",
        description="Departments, employees, assets and their transactions and maintenance",
        version="0.1.0",
        lifespan=lifespan,
    )

    # ============================================================================
    # Middleware
    # ============================================================================

    if settings.observability_enabled:
        app.add_middleware(ObservabilityMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )

    # ============================================================================
    # Exception Handlers
    # ============================================================================

    @app.exception_handler(AssetApiError)
    async def asset_api_error_handler(request: Request, exc: AssetApiError) -> JSONResponse:
        """Map domain exceptions to the error envelope and their HTTP status."""
        status_code = get_status_code(exc)
        context = {"details": exc.details, **_request_context(request)}

        if status_code == status.HTTP_401_UNAUTHORIZED:
            logger.warning(
                f"Authentication failed: {exc.message}",
                extra={"security_event": True, "event_type": "AUTH_FAILURE", **context},
            )
        elif status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}", extra=context)
        else:
            logger.warning(f"{exc.__class__.__name__}: {exc.message}", extra=context)

        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.__class__.__name__,
                "message": exc.message,
                "details": _sanitize_error_details(exc.details),
            },
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report body, query and path validation failures as a 400 field map."""
        error = ValidationError.for_fields(_validation_details(list(exc.errors())))
        logger.warning(
            f"Request validation failed: {sorted(error.details)}",
            extra={"details": error.details, **_request_context(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "ValidationError",
                "message": error.message,
                "details": error.details,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Consistent envelope for framework HTTP errors (unknown route, wrong method)."""
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code}: {exc.detail}", extra=_request_context(request))

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTPException",
                "message": exc.detail,
                "details": {},
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Catch-all handler for unexpected exceptions.

        The response is opaque except in the local environment, where the
        exception type and message are included for debugging.
        """
        logger.error(f"Unhandled exception: {exc}", exc_info=True, extra=_request_context(request))

        details: dict[str, Any] = {}
        if settings.app_env == "local":
            details = {"exception": type(exc).__name__, "message": str(exc)}

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
                "details": details,
            },
        )

    # ============================================================================
    # Router Registration
    # ============================================================================

    app.include_router(health_router)
    app.include_router(departments_router, prefix=API_PREFIX)
    app.include_router(employees_router, prefix=API_PREFIX)
    app.include_router(assets_router, prefix=API_PREFIX)
    app.include_router(transactions_router, prefix=API_PREFIX)
    app.include_router(maintenance_records_router, prefix=API_PREFIX)

    # ============================================================================
    # Metrics Endpoint (Prometheus) - Token Protected
    # ============================================================================

    async def protected_metrics(request: Request) -> Response:
        """
        Protected Prometheus metrics endpoint.

        Always requires the X-Metrics-Token header to match METRICS_TOKEN.
        """
        expected_token = settings.metrics_token
        if not expected_token:
            logger.error(
                "Metrics endpoint accessed but METRICS_TOKEN not configured",
                extra={"security_event": True, "event_type": "METRICS_NOT_CONFIGURED"},
            )
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Metrics token not configured. Set METRICS_TOKEN environment variable.",
            )

        # Constant-time comparison
        supplied = request.headers.get("X-Metrics-Token")
        if not hmac.compare_digest(supplied or "", expected_token):
            logger.warning(
                "Unauthorized metrics access attempt",
                extra={
                    "security_event": True,
                    "event_type": "METRICS_ACCESS_DENIED",
                    "client_ip": request.client.host if request.client else "unknown",
                },
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid metrics token",
            )

        return metrics_endpoint()

    if settings.observability_enabled:
        app.add_route("/metrics", protected_metrics)

    return app


app = create_app()

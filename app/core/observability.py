"""
Observability module for the Asset Management API.

Provides:
- Structured logging with JSON format and correlation IDs
- Request correlation ID (request_id) generation and propagation
- Prometheus metrics collection (HTTP, DB, resource operations)
- Request tracking middleware for latency and status codes

Usage:
    from app.core.observability import (
        get_request_id,
        set_correlation_id,
        metrics,
    )
"""

import json
import logging
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime

from fastapi import Request, Response
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

# ============================================================================
# Context Variables for Request Tracking
# ============================================================================

# Correlation ID - links all logs for a single request
_request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

# Subject of the verified bearer token
_user_id_ctx: ContextVar[str] = ContextVar("user_id", default="")


def generate_request_id() -> str:
    """Generate a unique request ID for correlation."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Get the current request ID from context."""
    return _request_id_ctx.get()


def set_correlation_id(request_id: str) -> None:
    """Set the correlation ID for the current request context."""
    _request_id_ctx.set(request_id)


def get_user_id() -> str:
    """Get the current user ID from context."""
    return _user_id_ctx.get()


def set_user_id(user_id: str) -> None:
    """Set the user ID for the current request context."""
    _user_id_ctx.set(user_id)


# ============================================================================
# Structured Logging Configuration
# ============================================================================

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level, logger, message
    - request_id: Correlation ID (if available)
    - user_id: Authenticated user (if available)
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_entry["request_id"] = request_id

        user_id = get_user_id()
        if user_id:
            log_entry["user_id"] = user_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["file"] = record.pathname
        log_entry["line"] = record.lineno
        log_entry["function"] = record.funcName

        # Fields passed via logger.info("msg", extra={"key": "value"})
        extra_keys = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS}
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_structured_logging(level: str = "INFO") -> None:
    """
    Configure root logger with structured JSON formatting.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)


# ============================================================================
# Prometheus Metrics
# ============================================================================

# Use a custom registry to avoid conflicts with other Prometheus metrics
_registry = CollectorRegistry()


class Metrics:
    """
    Centralized metrics collection for the application.

    Metrics groups:
    - HTTP: Request rate, errors, latency
    - Database: Query timing and outcome
    - Resources: CRUD operation outcomes per resource
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

        # -------------------------------------------------------------------
        # HTTP Metrics
        # -------------------------------------------------------------------

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "route", "status_code"],
            registry=self.registry,
        )

        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request latency in seconds",
            ["method", "route"],
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
            registry=self.registry,
        )

        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=self.registry,
        )

        self.http_errors_total = Counter(
            "http_errors_total",
            "Total HTTP errors",
            ["error_type", "method", "route"],
            registry=self.registry,
        )

        # -------------------------------------------------------------------
        # Database Metrics
        # -------------------------------------------------------------------

        self.db_query_duration_seconds = Histogram(
            "db_query_duration_seconds",
            "Database query duration in seconds",
            ["operation"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
            registry=self.registry,
        )

        self.db_queries_total = Counter(
            "db_queries_total",
            "Total database queries",
            ["operation", "status"],
            registry=self.registry,
        )

        # -------------------------------------------------------------------
        # Resource Metrics
        # -------------------------------------------------------------------

        # outcome: ok, not_found, invalid
        self.resource_operations_total = Counter(
            "resource_operations_total",
            "CRUD operations handled per resource",
            ["resource", "operation", "outcome"],
            registry=self.registry,
        )


# Global metrics instance
metrics = Metrics(_registry)


# ============================================================================
# Middleware
# ============================================================================


def _route_pattern(request: Request) -> str:
    # FastAPI stores the matched route in the scope; unmatched paths share one label
    route = request.scope.get("route")
    return getattr(route, "path", None) or "__unmatched__"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds observability to all requests.

    Features:
    - Generates and propagates request_id (correlation ID)
    - Logs all requests with structured fields
    - Tracks request latency
    - Records Prometheus metrics
    - Adds request_id to response headers
    """

    def __init__(
        self,
        app: ASGIApp,
        metrics_instance: Metrics | None = None,
        skip_paths: list[str] | None = None,
    ) -> None:
        """
        Initialize observability middleware.

        Args:
            app: ASGI application
            metrics_instance: Metrics instance (uses global if None)
            skip_paths: Paths to skip detailed logging (e.g., health checks)
        """
        super().__init__(app)
        self.metrics = metrics_instance or metrics
        self.skip_paths = set(skip_paths or ["/health", "/readyz", "/metrics"])

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_correlation_id(request_id)
        set_user_id("")

        method = request.method
        self.metrics.http_requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            route_pattern = _route_pattern(request)
            error_type = type(e).__name__

            self.metrics.http_requests_total.labels(
                method=method, route=route_pattern, status_code=500
            ).inc()
            self.metrics.http_errors_total.labels(
                error_type=error_type, method=method, route=route_pattern
            ).inc()
            self.metrics.http_request_duration_seconds.labels(
                method=method, route=route_pattern
            ).observe(latency_ms / 1000)

            logging.getLogger("app.request").error(
                f"{method} {route_pattern} - {error_type}: {e}",
                extra={
                    "method": method,
                    "route": route_pattern,
                    "status_code": 500,
                    "latency_ms": round(latency_ms, 2),
                    "error_type": error_type,
                },
                exc_info=True,
            )
            raise
        finally:
            self.metrics.http_requests_in_progress.labels(method=method).dec()

        latency_ms = (time.perf_counter() - start_time) * 1000
        route_pattern = _route_pattern(request)

        self.metrics.http_requests_total.labels(
            method=method, route=route_pattern, status_code=response.status_code
        ).inc()
        self.metrics.http_request_duration_seconds.labels(
            method=method, route=route_pattern
        ).observe(latency_ms / 1000)

        # Returned to the client for correlation
        response.headers["X-Request-ID"] = request_id

        if not any(route_pattern.startswith(path) for path in self.skip_paths):
            logging.getLogger("app.request").info(
                f"{method} {route_pattern}",
                extra={
                    "method": method,
                    "route": route_pattern,
                    "status_code": response.status_code,
                    "latency_ms": round(latency_ms, 2),
                },
            )

        return response


# ============================================================================
# Database Metrics Helper
# ============================================================================


class DBMetricsWrapper:
    """
    Wrapper to track database query metrics.

    Usage in repos:
        with db_metrics.track("departments.list"):
            result = await db.execute(stmt)
    """

    def __init__(self, metrics_instance: Metrics | None = None) -> None:
        self.metrics = metrics_instance or metrics

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """
        Context manager to track database operation metrics.

        Args:
            operation: Name of the operation (e.g., "assets.create")
        """
        start = time.perf_counter()
        status = "success"
        try:
            yield
        except Exception:
            status = "error"
            raise
        finally:
            self.metrics.db_query_duration_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )
            self.metrics.db_queries_total.labels(operation=operation, status=status).inc()


# Global DB metrics wrapper
db_metrics = DBMetricsWrapper()


# ============================================================================
# Metrics Endpoint
# ============================================================================


def metrics_endpoint() -> Response:
    """Prometheus metrics in text format for scraping."""
    return Response(
        content=generate_latest(_registry),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )

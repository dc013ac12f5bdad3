from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.errors import NotFoundError, UnauthorizedError, ValidationError
from app.main import create_app


class TestExceptionHandlers:
    @pytest.mark.anyio
    async def test_domain_error_handler(self):
        app = create_app()
        client = TestClient(app)

        # Add a test route that raises a domain error
        @app.get("/test-error")
        def test_error():
            raise NotFoundError("Test not found", details={"id": "abc"})

        response = client.get("/test-error")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "NotFoundError"
        assert data["message"] == "Test not found"
        assert data["details"]["id"] == "abc"

    @pytest.mark.anyio
    async def test_validation_error_handler(self):
        app = create_app()
        client = TestClient(app)

        @app.get("/test-invalid")
        def test_invalid():
            raise ValidationError.for_fields({"name": ["Name is required."]})

        response = client.get("/test-invalid")
        assert response.status_code == 400
        assert response.json()["details"] == {"name": ["Name is required."]}

    @pytest.mark.anyio
    async def test_unauthorized_error_handler(self):
        app = create_app()
        client = TestClient(app)

        @app.get("/test-unauthorized")
        def test_unauthorized():
            raise UnauthorizedError("Invalid or expired token")

        response = client.get("/test-unauthorized")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"] == "UnauthorizedError"

    @pytest.mark.anyio
    async def test_http_exception_handler(self):
        app = create_app()
        client = TestClient(app)

        @app.get("/test-http")
        def test_http():
            raise HTTPException(status_code=409, detail="Conflict")

        response = client.get("/test-http")
        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "HTTPException"
        assert data["message"] == "Conflict"

    @pytest.mark.anyio
    async def test_unknown_route_uses_error_envelope(self):
        client = TestClient(create_app())

        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": "HTTPException", "message": "Not Found", "details": {}}

    @pytest.mark.anyio
    async def test_general_exception_handler(self):
        app = create_app()
        client = TestClient(app, raise_server_exceptions=False)

        @app.get("/test-general")
        def test_general():
            raise RuntimeError("Unexpected error")

        response = client.get("/test-general")
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "InternalServerError"
        assert data["message"] == "An unexpected error occurred"
        assert data["details"] == {}

    @pytest.mark.anyio
    async def test_general_exception_details_in_local_environment(self, monkeypatch):
        monkeypatch.setattr(settings, "app_env", "local")
        app = create_app()
        client = TestClient(app, raise_server_exceptions=False)

        @app.get("/test-general")
        def test_general():
            raise RuntimeError("Unexpected error")

        data = client.get("/test-general").json()
        assert data["details"] == {"exception": "RuntimeError", "message": "Unexpected error"}


class TestAppCreation:
    @pytest.mark.anyio
    async def test_create_app_registers_routers(self):
        app = create_app()

        routes = [route.path for route in app.routes]
        assert "/health" in routes
        assert "/readyz" in routes
        assert "/api/departments" in routes
        assert "/api/employees/{employee_id}" in routes
        assert "/api/assets" in routes
        assert "/api/transactions" in routes
        assert "/api/maintenance-records/{record_id}" in routes

    @pytest.mark.anyio
    async def test_app_has_cors_middleware(self):
        app = create_app()

        cors_middleware = None
        for middleware in app.user_middleware:
            if hasattr(middleware, "cls") and "CORSMiddleware" in str(middleware.cls):
                cors_middleware = middleware
                break

        assert cors_middleware is not None

    @pytest.mark.anyio
    async def test_app_metadata(self):
        app = create_app()

        assert app.title == "Asset Management API"
        assert app.version == "0.1.0"

    @pytest.mark.anyio
    async def test_shutdown_releases_engine_and_http_client(self):
        reset_engine = AsyncMock()
        close_client = AsyncMock()

        with (
            patch("app.main.reset_async_engine", new=reset_engine),
            patch("app.main.close_async_http_client", new=close_client),
        ):
            with TestClient(create_app()) as client:
                assert client.get("/health").status_code == 200
                reset_engine.assert_not_awaited()

        reset_engine.assert_awaited_once()
        close_client.assert_awaited_once()

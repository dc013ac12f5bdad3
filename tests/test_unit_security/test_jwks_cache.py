"""
Tests for JWKS cache functionality.
"""

from unittest.mock import patch

import httpx
import pytest

from app.core.errors import UnauthorizedError
from app.core.security.jwks_cache import JWKSCache

JWKS_URL = "http://keycloak.test/realms/assets/protocol/openid-connect/certs"
JWKS = {"keys": [{"kid": "test", "kty": "RSA"}]}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestJWKSCache:
    @pytest.mark.anyio
    async def test_get_jwks_caches_response(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(200, json=JWKS)

        cache = JWKSCache(jwks_url=JWKS_URL, ttl_seconds=3600)
        with patch(
            "app.core.security.jwks_cache.get_async_http_client", return_value=_client(handler)
        ):
            assert await cache.get_jwks() == JWKS
            assert await cache.get_jwks() == JWKS

        assert len(calls) == 1
        assert str(calls[0]) == JWKS_URL

    @pytest.mark.anyio
    async def test_force_refresh_ignores_ttl(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(200, json=JWKS)

        cache = JWKSCache(jwks_url=JWKS_URL, ttl_seconds=3600)
        with patch(
            "app.core.security.jwks_cache.get_async_http_client", return_value=_client(handler)
        ):
            await cache.get_jwks()
            await cache.get_jwks(force_refresh=True)

        assert len(calls) == 2

    @pytest.mark.anyio
    async def test_get_jwks_fallback_to_stale_cache_on_error(self):
        responses = iter([httpx.Response(200, json=JWKS), httpx.Response(503)])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)

        cache = JWKSCache(jwks_url=JWKS_URL, ttl_seconds=0)
        with patch(
            "app.core.security.jwks_cache.get_async_http_client", return_value=_client(handler)
        ):
            await cache.get_jwks()
            result = await cache.get_jwks()

        assert result == JWKS

    @pytest.mark.anyio
    async def test_get_jwks_without_cache_raises_unauthorized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Network error", request=request)

        cache = JWKSCache(jwks_url=JWKS_URL)
        with patch(
            "app.core.security.jwks_cache.get_async_http_client", return_value=_client(handler)
        ):
            with pytest.raises(UnauthorizedError):
                await cache.get_jwks()

    @pytest.mark.anyio
    async def test_clear_cache(self):
        cache = JWKSCache()
        cache._cache = {"test": "data"}
        cache.clear()
        assert cache._cache is None

    @pytest.mark.anyio
    async def test_default_url_points_at_realm_certs(self):
        assert JWKSCache()._jwks_url == JWKS_URL

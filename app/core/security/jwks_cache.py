"""
JWKS cache with TTL support for Keycloak token verification.

Caches the realm's signing keys to avoid fetching them on every token
verification. Keys are refreshed when the cache expires (default 1 hour) or
when a token names a key id the cached set does not contain.
"""

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

_async_http: httpx.AsyncClient | None = None


def get_async_http_client() -> httpx.AsyncClient:
    """Get or create the async HTTP client singleton."""
    global _async_http
    if _async_http is None:
        _async_http = httpx.AsyncClient(timeout=httpx.Timeout(10.0))
    return _async_http


async def close_async_http_client() -> None:
    """Close the async HTTP client (for graceful shutdown)."""
    global _async_http
    if _async_http is not None:
        await _async_http.aclose()
        _async_http = None


class JWKSCache:
    """
    In-memory cache for the Keycloak realm JWKS with time-to-live (TTL) support.

    When a refresh fails and an older key set is available, the stale set is
    served instead of failing every request.
    """

    def __init__(self, jwks_url: str | None = None, ttl_seconds: int = 3600):
        """
        Initialize the JWKS cache.

        Args:
            jwks_url: Certificate endpoint (defaults to the configured realm)
            ttl_seconds: Time-to-live for cached keys in seconds (default 1 hour)
        """
        self._cache: dict[str, Any] | None = None
        self._cache_time: datetime | None = None
        self._ttl_seconds = ttl_seconds
        self._jwks_url = jwks_url or settings.keycloak_jwks_url
        self._lock = asyncio.Lock()

    def _is_cache_valid(self, now: datetime) -> bool:
        return (
            self._cache is not None
            and self._cache_time is not None
            and now - self._cache_time < timedelta(seconds=self._ttl_seconds)
        )

    async def get_jwks(self, force_refresh: bool = False) -> dict[str, Any]:
        """
        Get JWKS from cache or fetch from Keycloak.

        Args:
            force_refresh: Ignore the TTL and fetch now (key rotation)

        Returns:
            JWKS dictionary containing signing keys

        Raises:
            UnauthorizedError: If the fetch fails and nothing is cached
        """
        now = datetime.now(UTC)

        async with self._lock:
            if not force_refresh and self._is_cache_valid(now):
                logger.debug("Using cached JWKS")
                return self._cache

            try:
                logger.info(f"Fetching JWKS from {self._jwks_url}")
                response = await get_async_http_client().get(self._jwks_url)
                response.raise_for_status()
                self._cache = response.json()
                self._cache_time = now
                return self._cache

            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch JWKS: {e}")
                if self._cache is not None:
                    logger.warning("Using stale JWKS cache as fallback")
                    return self._cache
                raise UnauthorizedError(
                    "Unable to verify token: identity provider unavailable"
                ) from e

    def clear(self) -> None:
        """Forget cached keys (useful for testing)."""
        self._cache = None
        self._cache_time = None


_jwks_cache = JWKSCache()


async def get_jwks(force_refresh: bool = False) -> dict[str, Any]:
    """
    Fetch the realm's JSON Web Key Set (JWKS) for token verification.

    Returns:
        JWKS dictionary containing public keys

    Raises:
        UnauthorizedError: If the JWKS endpoint is unreachable
    """
    return await _jwks_cache.get_jwks(force_refresh=force_refresh)


def clear_jwks_cache() -> None:
    """Clear the JWKS cache; keys are fetched again on the next verification."""
    _jwks_cache.clear()
    logger.info("JWKS cache cleared")

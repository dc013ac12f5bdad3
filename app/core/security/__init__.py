"""
Security module - Keycloak JWT token verification and authentication utilities.

Submodules:

- jwks_cache.py: JWKS cache with TTL support
- jwt_verification.py: JWT verification and the get_current_user dependency
- utils.py: Claim helpers
"""

from .jwks_cache import (
    JWKSCache,
    clear_jwks_cache,
    close_async_http_client,
    get_async_http_client,
    get_jwks,
)
from .jwt_verification import (
    INVALID_OR_EXPIRED_TOKEN_MSG,
    get_current_user,
    get_signing_key,
    verify_token,
)
from .utils import get_user_sub, get_username

__all__ = [
    "INVALID_OR_EXPIRED_TOKEN_MSG",
    "JWKSCache",
    "clear_jwks_cache",
    "close_async_http_client",
    "get_async_http_client",
    "get_current_user",
    "get_jwks",
    "get_signing_key",
    "get_user_sub",
    "get_username",
    "verify_token",
]

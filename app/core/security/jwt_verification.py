"""
JWT token verification for Keycloak authentication.

Extracts the signing key from the realm JWKS, decodes the bearer token and
exposes the result as a FastAPI dependency.
"""

import logging
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from app.core.config import settings
from app.core.errors import UnauthorizedError
from app.core.observability import set_user_id

from .jwks_cache import get_jwks
from .utils import get_user_sub, get_username

logger = logging.getLogger(__name__)

# Authorization header is optional so bypass mode and our own 401 envelope both work
_optional_security = HTTPBearer(auto_error=False)

INVALID_OR_EXPIRED_TOKEN_MSG = "Invalid or expired token"


def _find_key(jwks: dict[str, Any], kid: str) -> dict[str, Any] | None:
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key
    return None


async def get_signing_key(token: str) -> dict[str, Any]:
    """
    Find the JWK that signed the given token.

    Reads the token's 'kid' header and matches it against the realm JWKS.
    An unknown kid triggers one forced refresh to pick up rotated keys.

    Raises:
        UnauthorizedError: If the header is malformed or no key matches
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        logger.warning("Invalid JWT header: %s", e)
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e

    kid = unverified_header.get("kid")
    if not kid:
        logger.warning("JWT header has no kid")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG)

    key = _find_key(await get_jwks(), kid)
    if key is None:
        key = _find_key(await get_jwks(force_refresh=True), kid)
    if key is None:
        logger.error("Unable to find matching key for kid: %s", kid)
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG)
    return key


async def verify_token(token: str) -> dict[str, Any]:
    """
    Verify a JWT issued by the configured Keycloak realm.

    Performs:
    - Signature verification using the realm public key
    - Issuer validation (must match KEYCLOAK_URL/realms/KEYCLOAK_REALM)
    - Audience validation when KEYCLOAK_AUDIENCE is set
    - Expiration check

    Returns:
        Decoded token payload

    Raises:
        UnauthorizedError: If verification fails for any reason
    """
    key = await get_signing_key(token)
    audience = settings.keycloak_audience

    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=settings.keycloak_algorithms_list,
            audience=audience,
            issuer=settings.keycloak_issuer,
            options={"verify_aud": audience is not None},
        )
    except ExpiredSignatureError as e:
        logger.warning("Token has expired")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e
    except JWTClaimsError as e:
        logger.warning(f"Invalid token claims: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e

    logger.debug(f"Token verified for subject: {payload.get('sub')}")
    return payload


def _create_bypass_user() -> dict[str, Any]:
    """
    Mock user for local development when JWT validation is bypassed.

    ONLY used when SECURITY_SKIP_JWT_VALIDATION=true and APP_ENV=local.
    """
    return {
        "sub": "local-dev-user",
        "preferred_username": "local-dev",
        "iss": settings.keycloak_issuer,
        "realm_access": {"roles": ["asset-admin"]},
        "exp": 9999999999,
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_optional_security),
) -> dict[str, Any]:
    """
    FastAPI dependency: verify the bearer token and return its claims.

    Raises:
        UnauthorizedError: If the token is missing or invalid
    """
    # Enforced local-only in config.py
    if settings.skip_jwt_validation:
        logger.debug("JWT validation bypassed - returning local development user")
        user = _create_bypass_user()
    else:
        if credentials is None:
            logger.warning("Missing Authorization header")
            raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG)
        user = await verify_token(credentials.credentials)

    set_user_id(get_user_sub(user))
    logger.debug(f"Authenticated request for {get_username(user)}")
    return user

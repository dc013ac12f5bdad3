"""Helpers for reading identity claims from a verified Keycloak token."""

import logging
from typing import Any

from app.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def get_user_sub(payload: dict[str, Any]) -> str:
    """
    Extract the subject (user ID) from the JWT payload.

    Raises:
        UnauthorizedError: If 'sub' claim is missing
    """
    sub = payload.get("sub")
    if not sub:
        logger.error("JWT payload missing 'sub' claim")
        raise UnauthorizedError("Invalid token - missing user identifier")
    return str(sub)


def get_username(payload: dict[str, Any]) -> str:
    """Display name for logs: ``preferred_username`` if present, else the subject."""
    return str(payload.get("preferred_username") or get_user_sub(payload))

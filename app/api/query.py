"""
Query-string normalization for paginated list endpoints.

Malformed pagination parameters never fail a request. A value that breaks
its rule is discarded and the repository falls back to its default.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Annotated, Any

from fastapi import Depends, Query

from app.core.config import settings

logger = logging.getLogger(__name__)

PAGE_NUMBER_ERROR = "QERR0001"
PAGE_SIZE_ERROR = "QERR0002"

MAX_PAGE_NUMBER = 2_147_483_647


@dataclass(frozen=True)
class QueryObject:
    """Normalized paging and filter parameters for a list request."""

    page_number: int | None = None
    page_size: int | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    def with_filters(self, **filters: Any) -> "QueryObject":
        """Return a copy carrying the given equality filters; None values are dropped."""
        merged = {**self.filters, **{k: v for k, v in filters.items() if v is not None}}
        return replace(self, filters=merged)


def _parse_positive_int(raw: str | None, upper: int) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    if value < 1 or value > upper:
        return None
    return value


def normalize_query(
    page_number: str | None,
    page_size: str | None,
    max_page_size: int | None = None,
) -> QueryObject:
    """
    Build a QueryObject from raw ``pageNumber`` / ``pageSize`` strings.

    Rules:
        QERR0001: pageNumber must be a positive integer
        QERR0002: pageSize must be a positive integer no larger than the maximum

    Args:
        page_number: Raw pageNumber query value, or None if absent
        page_size: Raw pageSize query value, or None if absent
        max_page_size: Upper bound for pageSize (defaults to configured maximum)

    Returns:
        QueryObject with failing values set to None
    """
    limit = max_page_size if max_page_size is not None else settings.pagination_max_page_size

    number = _parse_positive_int(page_number, MAX_PAGE_NUMBER)
    if page_number is not None and number is None:
        logger.debug(
            "Discarding invalid pageNumber",
            extra={"error_code": PAGE_NUMBER_ERROR, "value": page_number},
        )

    size = _parse_positive_int(page_size, limit)
    if page_size is not None and size is None:
        logger.debug(
            "Discarding invalid pageSize",
            extra={"error_code": PAGE_SIZE_ERROR, "value": page_size},
        )

    return QueryObject(page_number=number, page_size=size)


def get_query_object(
    page_number: Annotated[str | None, Query(alias="pageNumber")] = None,
    page_size: Annotated[str | None, Query(alias="pageSize")] = None,
) -> QueryObject:
    """FastAPI dependency: normalize pagination query parameters."""
    return normalize_query(page_number, page_size)


PageQuery = Annotated[QueryObject, Depends(get_query_object)]

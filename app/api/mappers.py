"""
Conversions between ORM entities and API schemas.

All functions are pure: they never touch the database session.
"""

from collections.abc import Sequence
from typing import Any

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.api.schemas.pagination import PagedResponse
from app.db.models import TimestampedEntity


def to_response[ResponseT: ResponseSchema](
    entity: TimestampedEntity, schema: type[ResponseT]
) -> ResponseT:
    """Map an ORM entity onto its response schema."""
    return schema.model_validate(entity)


def to_paged_response[ResponseT: ResponseSchema](
    *,
    page_number: int,
    page_size: int,
    item_count: int,
    data: Sequence[TimestampedEntity],
    schema: type[ResponseT],
) -> PagedResponse[ResponseT]:
    """Build the list envelope from one page of entities."""
    return PagedResponse[schema](
        page_number=page_number,
        page_size=page_size,
        item_count=item_count,
        data=[to_response(entity, schema) for entity in data],
    )


def to_field_values(dto: RequestSchema, *, partial: bool) -> dict[str, Any]:
    """
    Column assignments for a request body.

    A create body drops null optionals so column defaults apply. A partial
    update keeps exactly the fields the client sent, nulls included, so an
    optional reference can be cleared.
    """
    if partial:
        return dto.model_dump(exclude_unset=True)
    return dto.model_dump(exclude_none=True)


def trim_request[RequestT: RequestSchema](dto: RequestT) -> RequestT:
    """Strip surrounding whitespace from the body's display strings."""
    return dto.trimmed()

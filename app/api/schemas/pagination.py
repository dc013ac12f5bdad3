"""Page-number pagination schemas."""

from pydantic import Field

from app.api.schemas.base import ApiSchema


class PagedResponse[T](ApiSchema):
    """Response envelope for paginated list endpoints."""

    page_number: int = Field(..., ge=1, description="Page actually served")
    page_size: int = Field(..., ge=1, description="Page size actually applied")
    item_count: int = Field(..., ge=0, description="Total rows matching the query")
    data: list[T]

"""
Pydantic schemas for Department API operations.

These schemas define the request/response structure for the Department CRUD endpoints.
"""

from pydantic import Field, ValidationInfo, field_validator

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.core.validators import require_text


class DepartmentCreate(RequestSchema):
    """Schema for creating a new Department."""

    trimmed_fields = ("name",)

    name: str = Field(
        ...,
        max_length=255,
        description="Department name",
        examples=["Finance"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info)


class DepartmentUpdate(RequestSchema):
    """
    Schema for updating an existing Department.

    Omitted fields remain unchanged.
    """

    trimmed_fields = ("name",)

    name: str | None = Field(default=None, max_length=255, description="Department name")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str | None, info: ValidationInfo) -> str | None:
        return require_text(v, info)


class DepartmentResponse(ResponseSchema):
    """Department as exposed to clients."""

    name: str

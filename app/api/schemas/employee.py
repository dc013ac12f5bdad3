"""Pydantic schemas for Employee API operations."""

from pydantic import Field, ValidationInfo, field_validator

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.core.validators import require_text


class EmployeeCreate(RequestSchema):
    """Schema for creating a new Employee."""

    trimmed_fields = ("last_name", "first_name", "middle_name")

    last_name: str = Field(..., max_length=100, examples=["Dela Cruz"])
    first_name: str = Field(..., max_length=100, examples=["Juan"])
    middle_name: str | None = Field(default=None, max_length=100, examples=["Santos"])
    department_id: str | None = Field(
        default=None, description="Identifier of the Department the employee belongs to"
    )

    @field_validator("last_name", "first_name", mode="before")
    @classmethod
    def validate_names(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info)


class EmployeeUpdate(RequestSchema):
    """Schema for updating an existing Employee (partial)."""

    trimmed_fields = ("last_name", "first_name", "middle_name")

    last_name: str | None = Field(default=None, max_length=100)
    first_name: str | None = Field(default=None, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    department_id: str | None = None

    @field_validator("last_name", "first_name", mode="before")
    @classmethod
    def validate_names(cls, v: str | None, info: ValidationInfo) -> str | None:
        return require_text(v, info)


class EmployeeResponse(ResponseSchema):
    """Employee as exposed to clients."""

    last_name: str
    first_name: str
    middle_name: str | None = None
    department_id: str | None = None

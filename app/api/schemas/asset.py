"""
Pydantic schemas for Asset API operations.

An asset refers to its owning Department (``proprietor_id``) and to the
Employee holding it (``custodian_id``) by identifier only.
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.core.validators import reject_null, require_text


class AssetCreate(RequestSchema):
    """Schema for creating a new Asset."""

    trimmed_fields = ("name", "type")

    name: str = Field(..., max_length=255, examples=["ThinkPad X1 Carbon"])
    type: str | None = Field(default=None, max_length=100, examples=["Laptop"])
    info: dict[str, Any] | None = Field(
        default=None,
        description="Free-form asset attributes (serial number, specs, ...)",
        examples=[{"serial": "PF-3K2L9", "ram_gb": 16}],
    )
    proprietor_id: str | None = Field(default=None, description="Owning Department id")
    custodian_id: str | None = Field(default=None, description="Custodian Employee id")
    is_active: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info)


class AssetUpdate(RequestSchema):
    """Schema for updating an existing Asset (partial)."""

    trimmed_fields = ("name", "type")

    name: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    info: dict[str, Any] | None = None
    proprietor_id: str | None = None
    custodian_id: str | None = None
    is_active: bool | None = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str | None, info: ValidationInfo) -> str | None:
        return require_text(v, info)

    @field_validator("is_active", mode="before")
    @classmethod
    def validate_is_active(cls, v: bool | None, info: ValidationInfo) -> bool | None:
        return reject_null(v, info)


class AssetResponse(ResponseSchema):
    """Asset as exposed to clients; relations appear as identifiers only."""

    type: str | None = None
    name: str
    info: dict[str, Any] | None = None
    proprietor_id: str | None = None
    custodian_id: str | None = None
    is_active: bool

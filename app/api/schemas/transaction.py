"""Pydantic schemas for asset Transaction API operations."""

from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.core.validators import reject_null, require_text
from app.domain.enums import TransactionType


class TransactionCreate(RequestSchema):
    """
    Schema for recording a Transaction against an Asset.

    ``occurred_at`` defaults to the time of creation when omitted.
    """

    trimmed_fields = ("remarks",)

    asset_id: str = Field(..., description="Asset the transaction applies to")
    type: TransactionType = Field(..., examples=[TransactionType.ISSUE])
    employee_id: str | None = Field(default=None, description="Employee receiving or returning")
    department_id: str | None = Field(default=None, description="Department involved")
    remarks: str | None = Field(default=None, max_length=1000)
    occurred_at: datetime | None = None

    @field_validator("asset_id", mode="before")
    @classmethod
    def validate_asset_id(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info)


class TransactionUpdate(RequestSchema):
    """Schema for amending a recorded Transaction (partial)."""

    trimmed_fields = ("remarks",)

    asset_id: str | None = None
    type: TransactionType | None = None
    employee_id: str | None = None
    department_id: str | None = None
    remarks: str | None = Field(default=None, max_length=1000)
    occurred_at: datetime | None = None

    @field_validator("asset_id", mode="before")
    @classmethod
    def validate_asset_id(cls, v: str | None, info: ValidationInfo) -> str | None:
        return require_text(v, info)

    @field_validator("type", "occurred_at", mode="before")
    @classmethod
    def validate_not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info)


class TransactionResponse(ResponseSchema):
    """Transaction as exposed to clients."""

    asset_id: str
    type: TransactionType
    employee_id: str | None = None
    department_id: str | None = None
    remarks: str | None = None
    occurred_at: datetime

"""
Pydantic schemas for MaintenanceRecord API operations.

A record is open while ``completed_at`` is null. Once set, ``completed_at``
must not precede ``started_at``.
"""

from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from app.api.schemas.base import RequestSchema, ResponseSchema
from app.core.validators import reject_null, require_text


def _check_completion(completed_at: datetime | None, info: ValidationInfo) -> datetime | None:
    started_at = info.data.get("started_at")
    if completed_at is None or started_at is None:
        return completed_at
    # Mixed naive/aware values cannot be compared; the repository re-checks after defaults apply.
    if (completed_at.tzinfo is None) != (started_at.tzinfo is None):
        return completed_at
    if completed_at < started_at:
        raise ValueError("Completed at must not be earlier than started at.")
    return completed_at


class MaintenanceRecordCreate(RequestSchema):
    """Schema for opening a MaintenanceRecord on an Asset."""

    trimmed_fields = ("reason", "comment")

    asset_id: str = Field(..., description="Asset under maintenance")
    reason: str = Field(..., max_length=500, examples=["Battery replacement"])
    comment: str | None = Field(default=None, max_length=2000)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("asset_id", "reason", mode="before")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info)

    @field_validator("completed_at")
    @classmethod
    def validate_completed_at(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        return _check_completion(v, info)


class MaintenanceRecordUpdate(RequestSchema):
    """Schema for updating a MaintenanceRecord (partial); send ``completedAt`` to close it."""

    trimmed_fields = ("reason", "comment")

    asset_id: str | None = None
    reason: str | None = Field(default=None, max_length=500)
    comment: str | None = Field(default=None, max_length=2000)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("asset_id", "reason", mode="before")
    @classmethod
    def validate_required(cls, v: str | None, info: ValidationInfo) -> str | None:
        return require_text(v, info)

    @field_validator("started_at", mode="before")
    @classmethod
    def validate_started_at(cls, v, info: ValidationInfo):
        return reject_null(v, info)

    @field_validator("completed_at")
    @classmethod
    def validate_completed_at(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        return _check_completion(v, info)


class MaintenanceRecordResponse(ResponseSchema):
    """MaintenanceRecord as exposed to clients."""

    asset_id: str
    reason: str
    comment: str | None = None
    started_at: datetime
    completed_at: datetime | None = None

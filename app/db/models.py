"""
SQLAlchemy 2.x ORM models for the Asset Management API.

Models use the Mapped[] type annotation syntax and mapped_column.

Relations between entities are stored as foreign-key identifier columns only.
There are no relationship() attributes: repositories resolve a reference with
an explicit lookup, so loading one entity never drags a graph of others along.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.domain.enums import TransactionType


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class TimestampedEntity(Base):
    """
    Columns shared by every resource table.

    ``id`` is generated by the server on insert and never changes afterwards.
    ``created_at`` together with ``id`` gives list endpoints a stable order.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class Department(TimestampedEntity):
    """Organizational unit that can own (be proprietor of) assets."""

    __tablename__ = "departments"
    __table_args__ = (Index("ix_departments_created_at_id", "created_at", "id"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name={self.name})>"


class Employee(TimestampedEntity):
    """Person who can hold assets as custodian."""

    __tablename__ = "employees"
    __table_args__ = (Index("ix_employees_created_at_id", "created_at", "id"),)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, last_name={self.last_name})>"


class Asset(TimestampedEntity):
    """
    Tracked organizational asset.

    ``proprietor_id`` names the owning Department, ``custodian_id`` the
    Employee currently holding it. ``info`` holds free-form attributes.
    """

    __tablename__ = "assets"
    __table_args__ = (Index("ix_assets_created_at_id", "created_at", "id"),)

    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    info: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    proprietor_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    custodian_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("employees.id", ondelete="SET NULL"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, name={self.name}, is_active={self.is_active})>"


class Transaction(TimestampedEntity):
    """Movement of an asset: issue to, return from, transfer between holders, disposal."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_created_at_id", "created_at", "id"),
        Index("ix_transactions_asset_id", "asset_id"),
    )

    asset_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, create_constraint=True, name="transaction_type"), nullable=False
    )
    employee_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("employees.id", ondelete="SET NULL"), nullable=True
    )
    department_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, asset_id={self.asset_id}, type={self.type})>"


class MaintenanceRecord(TimestampedEntity):
    """Service performed on an asset."""

    __tablename__ = "maintenance_records"
    __table_args__ = (
        Index("ix_maintenance_records_created_at_id", "created_at", "id"),
        Index("ix_maintenance_records_asset_id", "asset_id"),
        CheckConstraint(
            "completed_at IS NULL OR completed_at >= started_at",
            name="chk_maintenance_records_completed_after_start",
        ),
    )

    asset_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<MaintenanceRecord(id={self.id}, asset_id={self.asset_id})>"

"""
FastAPI dependency injection utilities.

Provides reusable dependencies for database sessions, authentication and the
per-request resource handlers used by the route modules.
"""

from collections.abc import AsyncGenerator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.asset import AssetResponse
from app.api.schemas.department import DepartmentResponse
from app.api.schemas.employee import EmployeeResponse
from app.api.schemas.maintenance_record import MaintenanceRecordResponse
from app.api.schemas.transaction import TransactionResponse
from app.core.db import get_async_sessionmaker
from app.core.security import get_current_user as _get_current_user
from app.repos.asset_repo import AssetRepository
from app.repos.department_repo import DepartmentRepository
from app.repos.employee_repo import EmployeeRepository
from app.repos.maintenance_record_repo import MaintenanceRecordRepository
from app.repos.transaction_repo import TransactionRepository
from app.services.resource_handler import ResourceHandler

# ============================================================================
# Database Dependencies
# ============================================================================


async def get_async_db_session() -> AsyncGenerator[AsyncSession]:
    """
    Async database session dependency for FastAPI endpoints.

    The session is closed on every exit path, including errors.

    Usage:
        @router.get("/departments")
        async def list_departments(db: AsyncDbSession):
            ...

    Yields:
        Async SQLAlchemy database session
    """
    session_maker = get_async_sessionmaker()
    async with session_maker() as session:
        yield session


# Type alias for async database session dependency
AsyncDbSession = Annotated[AsyncSession, Depends(get_async_db_session)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


def get_current_user(user: dict[str, Any] = Depends(_get_current_user)) -> dict[str, Any]:
    """
    Re-export of get_current_user from security module.

    Tests override this dependency to authenticate without a real token.

    Returns:
        Decoded JWT payload containing user information
    """
    return user


# Type alias for authenticated user dependency
CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]


# ============================================================================
# Resource Handlers
# ============================================================================


def get_department_handler(db: AsyncDbSession) -> ResourceHandler:
    return ResourceHandler(DepartmentRepository(db), DepartmentResponse)


def get_employee_handler(db: AsyncDbSession) -> ResourceHandler:
    return ResourceHandler(EmployeeRepository(db), EmployeeResponse)


def get_asset_handler(db: AsyncDbSession) -> ResourceHandler:
    return ResourceHandler(AssetRepository(db), AssetResponse)


def get_transaction_handler(db: AsyncDbSession) -> ResourceHandler:
    return ResourceHandler(TransactionRepository(db), TransactionResponse)


def get_maintenance_record_handler(db: AsyncDbSession) -> ResourceHandler:
    return ResourceHandler(MaintenanceRecordRepository(db), MaintenanceRecordResponse)


DepartmentHandler = Annotated[ResourceHandler, Depends(get_department_handler)]
EmployeeHandler = Annotated[ResourceHandler, Depends(get_employee_handler)]
AssetHandler = Annotated[ResourceHandler, Depends(get_asset_handler)]
TransactionHandler = Annotated[ResourceHandler, Depends(get_transaction_handler)]
MaintenanceRecordHandler = Annotated[ResourceHandler, Depends(get_maintenance_record_handler)]

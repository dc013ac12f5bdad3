"""
Pydantic schemas for API request/response validation.

This package contains schema definitions for different domain entities
used in API endpoints.
"""

# Re-export schemas for convenient imports.
from .asset import AssetCreate as AssetCreate
from .asset import AssetResponse as AssetResponse
from .asset import AssetUpdate as AssetUpdate
from .department import DepartmentCreate as DepartmentCreate
from .department import DepartmentResponse as DepartmentResponse
from .department import DepartmentUpdate as DepartmentUpdate
from .employee import EmployeeCreate as EmployeeCreate
from .employee import EmployeeResponse as EmployeeResponse
from .employee import EmployeeUpdate as EmployeeUpdate
from .maintenance_record import MaintenanceRecordCreate as MaintenanceRecordCreate
from .maintenance_record import MaintenanceRecordResponse as MaintenanceRecordResponse
from .maintenance_record import MaintenanceRecordUpdate as MaintenanceRecordUpdate
from .pagination import PagedResponse as PagedResponse
from .transaction import TransactionCreate as TransactionCreate
from .transaction import TransactionResponse as TransactionResponse
from .transaction import TransactionUpdate as TransactionUpdate

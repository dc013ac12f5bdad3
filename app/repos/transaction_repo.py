"""Repository for asset Transaction data access."""

from app.api.schemas.transaction import TransactionCreate, TransactionUpdate
from app.db.models import Asset, Department, Employee, Transaction
from app.repos.base import CrudRepository


class TransactionRepository(CrudRepository[Transaction, TransactionCreate, TransactionUpdate]):
    model = Transaction
    resource = "transactions"
    filterable = frozenset({"asset_id", "employee_id", "department_id", "type"})
    references = {"asset_id": Asset, "employee_id": Employee, "department_id": Department}

"""Repository for Employee data access."""

from app.api.schemas.employee import EmployeeCreate, EmployeeUpdate
from app.db.models import Department, Employee
from app.repos.base import CrudRepository


class EmployeeRepository(CrudRepository[Employee, EmployeeCreate, EmployeeUpdate]):
    """Employees optionally belong to a Department."""

    model = Employee
    resource = "employees"
    filterable = frozenset({"department_id"})
    references = {"department_id": Department}

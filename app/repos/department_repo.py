"""Repository for Department data access."""

from app.api.schemas.department import DepartmentCreate, DepartmentUpdate
from app.db.models import Department
from app.repos.base import CrudRepository


class DepartmentRepository(CrudRepository[Department, DepartmentCreate, DepartmentUpdate]):
    model = Department
    resource = "departments"

"""FastAPI routes for Employee CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from app.api.query import PageQuery
from app.api.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.api.schemas.pagination import PagedResponse
from app.core.dependencies import EmployeeHandler, get_current_user

router = APIRouter(
    prefix="/employees",
    tags=["Employees"],
    dependencies=[Depends(get_current_user)],
)

EmployeeId = Annotated[str, Path(description="Employee identifier")]


@router.get(
    "",
    response_model=PagedResponse[EmployeeResponse],
    summary="List employees",
    description="Page through employees, optionally only those of one department.",
)
async def list_employees(
    query: PageQuery,
    handler: EmployeeHandler,
    department_id: Annotated[str | None, Query(alias="departmentId")] = None,
):
    return await handler.list(query.with_filters(department_id=department_id))


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
)
async def create_employee(
    payload: EmployeeCreate,
    request: Request,
    response: Response,
    handler: EmployeeHandler,
):
    created = await handler.create(payload)
    response.headers["Location"] = request.app.url_path_for(
        "get_employee", employee_id=created.id
    )
    return created


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get an employee")
async def get_employee(employee_id: EmployeeId, handler: EmployeeHandler):
    return await handler.show(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse, summary="Update an employee")
async def update_employee(
    employee_id: EmployeeId, payload: EmployeeUpdate, handler: EmployeeHandler
):
    return await handler.update(employee_id, payload)


@router.delete("/{employee_id}", response_model=EmployeeResponse, summary="Delete an employee")
async def delete_employee(employee_id: EmployeeId, handler: EmployeeHandler):
    return await handler.delete(employee_id)

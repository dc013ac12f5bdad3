"""
FastAPI routes for Department CRUD operations.

All endpoints require a valid bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from app.api.query import PageQuery
from app.api.schemas.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from app.api.schemas.pagination import PagedResponse
from app.core.dependencies import DepartmentHandler, get_current_user

router = APIRouter(
    prefix="/departments",
    tags=["Departments"],
    dependencies=[Depends(get_current_user)],
)

DepartmentId = Annotated[str, Path(description="Department identifier")]


@router.get(
    "",
    response_model=PagedResponse[DepartmentResponse],
    summary="List departments",
    description="""
    Page through departments ordered by creation time.

    Invalid `pageNumber` / `pageSize` values are ignored and defaults apply.
    """,
)
async def list_departments(query: PageQuery, handler: DepartmentHandler):
    return await handler.list(query)


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a department",
)
async def create_department(
    payload: DepartmentCreate,
    request: Request,
    response: Response,
    handler: DepartmentHandler,
):
    created = await handler.create(payload)
    response.headers["Location"] = request.app.url_path_for(
        "get_department", department_id=created.id
    )
    return created


@router.get("/{department_id}", response_model=DepartmentResponse, summary="Get a department")
async def get_department(department_id: DepartmentId, handler: DepartmentHandler):
    return await handler.show(department_id)


@router.put(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Update a department",
    description="Partial update: omitted fields remain unchanged.",
)
async def update_department(
    department_id: DepartmentId, payload: DepartmentUpdate, handler: DepartmentHandler
):
    return await handler.update(department_id, payload)


@router.delete(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Delete a department",
    description="""
    Delete a department and return its final state.

    Employees and assets referring to it keep existing with the reference cleared.
    """,
)
async def delete_department(department_id: DepartmentId, handler: DepartmentHandler):
    return await handler.delete(department_id)
